"""Wall and self collision checks."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from canvas_snake.grid import Cell, Grid
    from canvas_snake.snake import Snake


class Collision(enum.Enum):
    """Outcome of moving the head onto a new cell."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"


def check_collision(snake: Snake, new_head: Cell, grid: Grid) -> Collision:
    """Classify a prospective head move.

    The body is checked before the tail is dropped, so stepping into the
    cell the tail is about to vacate still counts as a self collision.
    """
    if not grid.in_bounds(new_head):
        return Collision.WALL
    if new_head in snake.body[1:]:
        return Collision.SELF
    return Collision.NONE
