"""Cooperative per-frame scheduler driving a :class:`GameEngine`."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from canvas_snake.engine import FrameOutcome, GameEngine

logger = logging.getLogger(__name__)

RenderCallback = Callable[[FrameOutcome], Awaitable[None]]

DEFAULT_FPS = 60.0


class FrameLoop:
    """Evaluates the engine once per frame on an asyncio task.

    The loop yields to the event loop between frames and never blocks.
    It renders after every tick, once more on game over, and then stops
    scheduling frames until :meth:`restart` is called.
    """

    def __init__(
        self,
        engine: GameEngine,
        on_render: RenderCallback | None = None,
        fps: float = DEFAULT_FPS,
        clock: Callable[[], float] = time.monotonic,
        lock: asyncio.Lock | None = None,
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive.")
        self.engine = engine
        self.on_render = on_render
        self.frame_interval = 1.0 / fps
        self._clock = clock
        self._lock = lock
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def now_ms(self) -> float:
        return self._clock() * 1000.0

    def start(self) -> None:
        """Begin scheduling frames; a no-op if already running."""
        if self.running or self.engine.game_over:
            return
        self._task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        """Cancel the pending frame without waiting for it."""
        if self.running:
            assert self._task is not None  # noqa: S101
            self._task.cancel()

    async def stop(self) -> None:
        """Cancel the pending frame and wait for the task to finish."""
        task = self._task
        self.cancel()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        self._task = None

    async def restart(self, resume: bool = True) -> None:
        """Reset the engine and draw the fresh board.

        The loop is started again only when *resume* is true.
        """
        await self.stop()
        self.engine.restart()
        await self._render(FrameOutcome.TICKED)
        if resume:
            self.start()

    async def _render(self, outcome: FrameOutcome) -> None:
        if self.on_render is not None:
            await self.on_render(outcome)

    async def _evaluate(self) -> FrameOutcome:
        if self._lock is None:
            return self.engine.frame(self.now_ms())
        async with self._lock:
            return self.engine.frame(self.now_ms())

    async def _run(self) -> None:
        try:
            while not self.engine.game_over:
                outcome = await self._evaluate()
                if outcome.needs_render:
                    await self._render(outcome)
                if outcome is FrameOutcome.GAME_OVER:
                    break
                await asyncio.sleep(self.frame_interval)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled.")
        except Exception:
            logger.exception("Frame loop error.")
