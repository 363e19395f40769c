"""Time-gated game engine composing grid, snake, food and speed logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from canvas_snake.collision import Collision, check_collision
from canvas_snake.config import GameConfig
from canvas_snake.food import FoodSpawner
from canvas_snake.grid import Cell, Grid
from canvas_snake.snake import Direction, Snake
from canvas_snake.speed import SpeedController, SpeedMode

logger = logging.getLogger(__name__)

INITIAL_DIRECTION = Direction.RIGHT


class GameStatus(enum.Enum):
    """Lifecycle states of a single game."""

    RUNNING = "running"
    GAME_OVER = "game_over"


class FrameOutcome(enum.Enum):
    """What a frame evaluation did to the game state."""

    IDLE = "idle"
    TICKED = "ticked"
    FOOD_SPAWNED = "food_spawned"
    GAME_OVER = "game_over"

    @property
    def needs_render(self) -> bool:
        return self is not FrameOutcome.IDLE


@dataclass
class GameState:
    """Everything that changes during one game, owned by the engine."""

    snake: Snake
    direction: Direction = INITIAL_DIRECTION
    pending_direction: Direction = INITIAL_DIRECTION
    foods: list[Cell] = field(default_factory=list)
    score: int = 0
    tick: int = 0
    status: GameStatus = GameStatus.RUNNING
    collision: Collision = Collision.NONE
    last_tick_ms: float = 0.0
    respawn_due_ms: float | None = None

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER


class GameEngine:
    """Single-snake engine driven by per-frame clock readings.

    Call :meth:`frame` on every animation frame with the current time in
    milliseconds; the engine only advances when the speed interval has
    elapsed since the previous tick. Input only ever touches the pending
    direction through :meth:`set_direction`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_cells)
        self.start_cell = Cell(*self.config.start_cell)
        if not self.grid.in_bounds(self.start_cell):
            raise ValueError(
                f"Start cell {tuple(self.start_cell)} is outside the grid.",
            )
        if self.config.food_count < 1:
            raise ValueError("food_count must be at least 1.")
        if self.config.respawn_delay_ms < 0:
            raise ValueError("respawn_delay_ms must be >= 0.")

        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.spawner = FoodSpawner(
            self.grid,
            rng=self.rng,
            history_size=self.config.recent_food_capacity,
            log_size=self.config.event_log_capacity,
        )
        self.speed = SpeedController(
            base_speed_ms=self.config.base_speed_ms,
            min_speed_ms=self.config.min_speed_ms,
            step_ms=self.config.speed_step_ms,
            mode=SpeedMode(self.config.initial_mode),
        )
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        self.spawner.reset()
        self.speed.reset()
        state = GameState(snake=Snake.at(self.start_cell))
        self._fill_food(state)
        return state

    def restart(self) -> None:
        """Discard the current game and start a fresh one."""
        self.state = self._new_state()
        logger.info("Game restarted.")

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def snake(self) -> Snake:
        return self.state.snake

    @property
    def foods(self) -> list[Cell]:
        return self.state.foods

    def set_direction(self, direction: Direction) -> bool:
        """Request a turn for the next tick.

        Only turns onto the axis perpendicular to the committed direction
        are accepted; same-axis requests, reversal included, are ignored.
        Returns whether the request was accepted.
        """
        if self.state.game_over:
            return False
        if not direction.is_perpendicular_to(self.state.direction):
            return False
        self.state.pending_direction = direction
        return True

    def cycle_speed_mode(self) -> SpeedMode:
        """Switch to the next speed mode; applies on the next frame."""
        mode = self.speed.cycle_mode()
        logger.info("Speed mode set to %s.", mode.label)
        return mode

    def current_interval(self) -> int:
        return self.speed.current_interval()

    def frame(self, now_ms: float) -> FrameOutcome:
        """Evaluate one animation frame at time *now_ms*."""
        state = self.state
        if state.game_over:
            return FrameOutcome.IDLE

        respawned = self._run_due_respawn(now_ms)
        if now_ms - state.last_tick_ms < self.speed.current_interval():
            return FrameOutcome.FOOD_SPAWNED if respawned else FrameOutcome.IDLE

        state.last_tick_ms = now_ms
        return self.step(now_ms)

    def step(self, now_ms: float | None = None) -> FrameOutcome:
        """Advance the game by exactly one tick, ignoring the interval.

        When *now_ms* is given, a deferred respawn that has come due is
        applied before the snake moves.
        """
        state = self.state
        if state.game_over:
            return FrameOutcome.IDLE
        if now_ms is None:
            now_ms = state.last_tick_ms
        else:
            self._run_due_respawn(now_ms)

        state.direction = state.pending_direction
        new_head = state.snake.next_head(state.direction)

        collision = check_collision(state.snake, new_head, self.grid)
        if collision is not Collision.NONE:
            self._end_game(collision)
            return FrameOutcome.GAME_OVER

        ate = new_head in state.foods
        state.snake = state.snake.advanced(new_head, grow=ate)
        if ate:
            state.score += 1
            state.foods.remove(new_head)
            self.speed.on_food_eaten()
            if self.config.respawn_delay_ms > 0:
                self._schedule_respawn(now_ms)
            else:
                self._fill_food(state)

        state.tick += 1
        return FrameOutcome.TICKED

    def _end_game(self, collision: Collision) -> None:
        state = self.state
        state.status = GameStatus.GAME_OVER
        state.collision = collision
        state.respawn_due_ms = None
        logger.info(
            "Game over (%s collision) at tick %d with score %d.",
            collision.value, state.tick, state.score,
        )

    def _fill_food(self, state: GameState) -> None:
        while len(state.foods) < self.config.food_count:
            state.foods.append(
                self.spawner.spawn(state.snake.body, excluded=state.foods),
            )

    def _schedule_respawn(self, now_ms: float) -> None:
        # At most one pending respawn; when it fires it refills every slot.
        if self.state.respawn_due_ms is None:
            self.state.respawn_due_ms = now_ms + self.config.respawn_delay_ms

    def _run_due_respawn(self, now_ms: float) -> bool:
        state = self.state
        due = state.respawn_due_ms
        if due is None or now_ms < due or state.game_over:
            return False
        state.respawn_due_ms = None
        self._fill_food(state)
        return True

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.state
        return {
            "tick": state.tick,
            "score": state.score,
            "status": state.status.value,
            "game_over": state.game_over,
            "collision": state.collision.value,
            "grid": self.grid.to_dict(),
            "snake": state.snake.to_dict(),
            "direction": state.direction.name.lower(),
            "pending_direction": state.pending_direction.name.lower(),
            "foods": [list(f) for f in state.foods],
            "respawn_scheduled": state.respawn_due_ms is not None,
            "speed": self.speed.to_dict(),
        }
