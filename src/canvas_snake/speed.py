"""Tick interval control: score acceleration and speed modes."""

from __future__ import annotations

import enum
import math


class SpeedMode(enum.Enum):
    """User-selectable pace, cycled Slow -> Normal -> Fast -> Slow."""

    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"

    @property
    def multiplier(self) -> float:
        return _MULTIPLIERS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def next(self) -> SpeedMode:
        """Return the mode that follows this one in the cycle."""
        modes = list(SpeedMode)
        return modes[(modes.index(self) + 1) % len(modes)]


_MULTIPLIERS: dict[SpeedMode, float] = {
    SpeedMode.SLOW: 1.25,
    SpeedMode.NORMAL: 1.0,
    SpeedMode.FAST: 0.75,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(math.floor(value + 0.5))


class SpeedController:
    """Derives the tick interval from food eaten and the speed mode.

    Every piece of food shortens the base interval by ``step_ms`` until it
    reaches ``min_speed_ms``. The mode multiplier is applied on top and
    the result is floored at ``min_speed_ms`` again.
    """

    def __init__(
        self,
        base_speed_ms: int = 120,
        min_speed_ms: int = 60,
        step_ms: int = 2,
        mode: SpeedMode = SpeedMode.NORMAL,
    ) -> None:
        if min_speed_ms < 1:
            raise ValueError("min_speed_ms must be at least 1.")
        if base_speed_ms < min_speed_ms:
            raise ValueError("base_speed_ms must be >= min_speed_ms.")
        if step_ms < 0:
            raise ValueError("step_ms must be >= 0.")
        self.base_speed_ms = base_speed_ms
        self.min_speed_ms = min_speed_ms
        self.step_ms = step_ms
        self.mode = mode
        self.dynamic_ms = base_speed_ms

    def on_food_eaten(self) -> None:
        self.dynamic_ms = max(self.min_speed_ms, self.dynamic_ms - self.step_ms)

    def cycle_mode(self) -> SpeedMode:
        """Advance to the next speed mode and return it."""
        self.mode = self.mode.next()
        return self.mode

    def reset(self) -> None:
        """Return the dynamic interval to its base value.

        The selected mode is a user preference and survives restarts.
        """
        self.dynamic_ms = self.base_speed_ms

    def current_interval(self, mode: SpeedMode | None = None) -> int:
        """Milliseconds that must elapse between two ticks."""
        mode = mode if mode is not None else self.mode
        scaled = round_half_up(self.dynamic_ms * mode.multiplier)
        return max(self.min_speed_ms, scaled)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "dynamic_ms": self.dynamic_ms,
            "interval_ms": self.current_interval(),
        }
