"""Keyboard and touch input mapped onto snake directions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from canvas_snake.snake import Direction

if TYPE_CHECKING:
    from canvas_snake.engine import GameEngine

logger = logging.getLogger(__name__)

SWIPE_DEAD_ZONE = 10

_KEY_MAP: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "w": Direction.UP,
    "arrowdown": Direction.DOWN,
    "s": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "a": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "d": Direction.RIGHT,
}

_NAME_MAP: dict[str, Direction] = {d.name.lower(): d for d in Direction}


def key_to_direction(key: str) -> Direction | None:
    """Map a key name (arrows or WASD, any case) to a direction."""
    return _KEY_MAP.get(key.lower())


def parse_direction(name: str) -> Direction | None:
    """Map ``"up"``/``"down"``/``"left"``/``"right"`` to a direction."""
    return _NAME_MAP.get(name.lower())


def swipe_direction(dx: float, dy: float) -> Direction | None:
    """Direction of a swipe delta along its dominant axis.

    Returns ``None`` while the combined movement is inside the dead zone.
    Ties go to the vertical axis.
    """
    if abs(dx) + abs(dy) < SWIPE_DEAD_ZONE:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class SwipeGesture:
    """Tracks a single-touch gesture and yields at most one direction."""

    def __init__(self) -> None:
        self._origin: tuple[float, float] | None = None

    @property
    def active(self) -> bool:
        return self._origin is not None

    def start(self, x: float, y: float) -> None:
        self._origin = (x, y)

    def move(self, x: float, y: float) -> Direction | None:
        """Feed a touch-move position.

        The first move that leaves the dead zone ends the gesture and
        returns its direction; later moves are ignored until the next
        :meth:`start`.
        """
        if self._origin is None:
            return None
        ox, oy = self._origin
        direction = swipe_direction(x - ox, y - oy)
        if direction is not None:
            self._origin = None
        return direction

    def end(self) -> None:
        self._origin = None


class InputHandler:
    """Routes raw key and touch events into an engine's pending direction."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.gesture = SwipeGesture()

    def on_key(self, key: str) -> bool:
        direction = key_to_direction(key)
        if direction is None:
            return False
        return self.engine.set_direction(direction)

    def on_touch(self, phase: str, x: float = 0.0, y: float = 0.0) -> bool:
        """Handle a ``start``/``move``/``end`` touch event."""
        if phase == "start":
            self.gesture.start(x, y)
        elif phase == "move":
            direction = self.gesture.move(x, y)
            if direction is not None:
                return self.engine.set_direction(direction)
        elif phase == "end":
            self.gesture.end()
        else:
            logger.debug("Ignoring unknown touch phase %r.", phase)
        return False
