"""Snake representation and movement logic."""

from __future__ import annotations

import enum

from canvas_snake.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, matching canvas coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.dx != 0

    def is_perpendicular_to(self, other: Direction) -> bool:
        """True when the two directions lie on different axes."""
        return self.is_horizontal != other.is_horizontal


class Snake:
    """An immutable head-first sequence of body cells.

    The head is ``body[0]``; the tail is ``body[-1]``. Movement returns a
    new :class:`Snake` rather than mutating this one.
    """

    __slots__ = ("body",)

    def __init__(self, body: tuple[Cell, ...] | list[Cell]) -> None:
        if len(body) < 1:
            raise ValueError("Snake length must be at least 1.")
        self.body: tuple[Cell, ...] = tuple(Cell(*c) for c in body)

    @classmethod
    def at(cls, start: Cell) -> Snake:
        """Create a single-cell snake."""
        return cls((start,))

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self):
        return iter(self.body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return self.body == other.body

    def __repr__(self) -> str:
        return f"Snake({list(self.body)!r})"

    def next_head(self, direction: Direction) -> Cell:
        """Compute the next head position without moving."""
        return self.head.offset(direction.dx, direction.dy)

    def advanced(self, new_head: Cell, grow: bool = False) -> Snake:
        """Return the snake after moving its head to *new_head*.

        The tail is kept when *grow* is set, otherwise dropped.
        """
        body = (new_head,) + (self.body if grow else self.body[:-1])
        return Snake(body)

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def is_contiguous(self) -> bool:
        """Check that consecutive segments are unit-adjacent."""
        return all(
            abs(a.x - b.x) + abs(a.y - b.y) == 1
            for a, b in zip(self.body, self.body[1:])
        )

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}
