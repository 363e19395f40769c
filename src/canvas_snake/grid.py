"""Square grid model for the snake game."""

from __future__ import annotations

from typing import NamedTuple


class Cell(NamedTuple):
    """Immutable grid coordinate in (column, row) order."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)


class Grid:
    """Fixed-size square grid of ``cells`` x ``cells`` coordinates.

    The grid holds no game state; snake and food positions are owned by
    the engine and only checked against the grid's bounds.
    """

    def __init__(self, cells: int = 30) -> None:
        if cells < 4:
            raise ValueError("Grid must be at least 4 cells wide.")
        self.cells = cells

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= cell.x < self.cells and 0 <= cell.y < self.cells

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"cells": self.cells}
