"""Food spawning logic."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from canvas_snake.grid import Cell

if TYPE_CHECKING:
    from canvas_snake.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnEvent:
    """A single food placement, kept for inspection and debugging."""

    timestamp: float
    cell: Cell

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "cell": list(self.cell)}


class FoodSpawner:
    """Places food on random free cells by rejection sampling.

    Candidates are drawn uniformly (with replacement) from a seeded NumPy
    generator until one avoids the occupied cells, the caller's excluded
    cells, and the last ``history_size`` spawned positions. There is no
    retry cap: the grid is expected to stay mostly empty.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        history_size: int = 5,
        log_size: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if history_size < 0:
            raise ValueError("history_size must be >= 0.")
        if log_size < 1:
            raise ValueError("log_size must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.recent: deque[Cell] = deque(maxlen=history_size)
        self.events: deque[SpawnEvent] = deque(maxlen=log_size)
        self._clock = clock

    def spawn(
        self,
        occupied: Iterable[Cell],
        excluded: Iterable[Cell] = (),
    ) -> Cell:
        """Pick a free cell for a new piece of food and record it."""
        blocked = set(occupied) | set(excluded) | set(self.recent)
        while True:
            x, y = self.rng.integers(0, self.grid.cells, size=2).tolist()
            candidate = Cell(x, y)
            if candidate not in blocked:
                break

        self.recent.append(candidate)
        self.events.append(SpawnEvent(self._clock(), candidate))
        logger.debug("Spawned food at (%d, %d).", candidate.x, candidate.y)
        return candidate

    def reset(self) -> None:
        """Forget spawn history at the start of a new session."""
        self.recent.clear()
        self.events.clear()

    def to_dict(self) -> dict:
        """Serialize spawner history to a dictionary."""
        return {
            "recent": [list(c) for c in self.recent],
            "events": [e.to_dict() for e in self.events],
        }
