"""Canvas Snake: single-player grid snake with a frame-driven core."""

from canvas_snake.collision import Collision, check_collision
from canvas_snake.config import GameConfig, ServerConfig
from canvas_snake.engine import FrameOutcome, GameEngine, GameStatus
from canvas_snake.food import FoodSpawner
from canvas_snake.grid import Cell, Grid
from canvas_snake.render import Renderer, render_frame
from canvas_snake.snake import Direction, Snake
from canvas_snake.speed import SpeedController, SpeedMode
from canvas_snake.theme import Theme

__all__ = [
    "Cell",
    "Collision",
    "Direction",
    "FoodSpawner",
    "FrameOutcome",
    "GameConfig",
    "GameEngine",
    "GameStatus",
    "Grid",
    "Renderer",
    "ServerConfig",
    "Snake",
    "SpeedController",
    "SpeedMode",
    "Theme",
    "check_collision",
    "render_frame",
]
