"""Frame rendering as a list of backend-neutral draw commands."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from canvas_snake.grid import Cell
from canvas_snake.theme import Palette, Theme, palette_for

FOOD_RADIUS = 4
BODY_RADIUS = 4
HEAD_RADIUS = 6
GRID_LINE_WIDTH = 1
GAME_OVER_TEXT = "Game Over - Press Restart"
GAME_OVER_FONT = "bold 24px system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial"


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str

    op = "fill_rect"

    def to_dict(self) -> dict:
        return {"op": self.op, **asdict(self)}


@dataclass(frozen=True)
class StrokeLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = GRID_LINE_WIDTH

    op = "stroke_line"

    def to_dict(self) -> dict:
        return {"op": self.op, **asdict(self)}


@dataclass(frozen=True)
class FillRoundedRect:
    x: float
    y: float
    width: float
    height: float
    radius: float
    color: str

    op = "fill_rounded_rect"

    def to_dict(self) -> dict:
        return {"op": self.op, **asdict(self)}


@dataclass(frozen=True)
class FillText:
    text: str
    x: float
    y: float
    color: str
    font: str = GAME_OVER_FONT
    align: str = "center"

    op = "fill_text"

    def to_dict(self) -> dict:
        return {"op": self.op, **asdict(self)}


DrawCommand = FillRect | StrokeLine | FillRoundedRect | FillText


def render_frame(
    snake: Sequence[Cell],
    foods: Sequence[Cell],
    palette: Palette,
    game_over: bool,
    grid_cells: int,
    cell_size: int,
) -> list[DrawCommand]:
    """Describe one frame of the board.

    Pure function of its arguments: identical inputs always produce an
    identical command list.
    """
    size = grid_cells * cell_size
    commands: list[DrawCommand] = [FillRect(0, 0, size, size, palette.background)]

    # Offset by half a pixel so 1px lines land on pixel centres.
    for i in range(grid_cells + 1):
        p = i * cell_size + 0.5
        commands.append(StrokeLine(p, 0, p, size, palette.grid))
        commands.append(StrokeLine(0, p, size, p, palette.grid))

    for food in foods:
        commands.append(_cell_square(food, cell_size, FOOD_RADIUS, palette.food))

    for index, segment in enumerate(snake):
        radius = HEAD_RADIUS if index == 0 else BODY_RADIUS
        commands.append(_cell_square(segment, cell_size, radius, palette.snake))

    if game_over:
        commands.append(FillRect(0, 0, size, size, palette.game_over_overlay))
        commands.append(
            FillText(GAME_OVER_TEXT, size / 2, size / 2, palette.game_over_text),
        )

    return commands


def _cell_square(cell: Cell, cell_size: int, radius: int, color: str) -> FillRoundedRect:
    return FillRoundedRect(
        cell.x * cell_size, cell.y * cell_size, cell_size, cell_size, radius, color,
    )


class Renderer:
    """Holds the presentation settings and renders engine snapshots."""

    def __init__(
        self,
        grid_cells: int,
        cell_size: int = 20,
        theme: Theme = Theme.DARK,
    ) -> None:
        if cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        self.grid_cells = grid_cells
        self.cell_size = cell_size
        self.theme = theme

    @property
    def canvas_size(self) -> int:
        return self.grid_cells * self.cell_size

    @property
    def palette(self) -> Palette:
        return palette_for(self.theme)

    def toggle_theme(self) -> Theme:
        self.theme = self.theme.toggled()
        return self.theme

    def render(
        self,
        snake: Sequence[Cell],
        foods: Sequence[Cell],
        game_over: bool,
    ) -> list[DrawCommand]:
        return render_frame(
            snake, foods, self.palette, game_over, self.grid_cells, self.cell_size,
        )

    def render_dicts(
        self,
        snake: Sequence[Cell],
        foods: Sequence[Cell],
        game_over: bool,
    ) -> list[dict]:
        """Render and serialize in one go, for JSON transports."""
        return [c.to_dict() for c in self.render(snake, foods, game_over)]
