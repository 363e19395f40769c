"""In-memory session registry, lifecycle management, and frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from canvas_snake.config import GameConfig
from canvas_snake.controls import InputHandler
from canvas_snake.engine import FrameOutcome, GameEngine
from canvas_snake.loop import FrameLoop
from canvas_snake.render import Renderer
from canvas_snake.server.models import SessionSummary
from canvas_snake.speed import SpeedMode
from canvas_snake.theme import Theme

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """One player's game, its presentation settings and its sockets."""

    session_id: str
    engine: GameEngine
    renderer: Renderer
    loop: FrameLoop | None = None
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    last_active: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def __post_init__(self) -> None:
        if self.loop is None:
            self.loop = FrameLoop(
                self.engine, on_render=self._on_frame, lock=self.lock,
            )

    def touch(self) -> None:
        self.last_active = time.monotonic()

    def input_handler(self) -> InputHandler:
        return InputHandler(self.engine)

    def snapshot(self) -> dict:
        """State plus the draw commands for the current frame."""
        engine = self.engine
        return {
            "session_id": self.session_id,
            "theme": self.renderer.theme.value,
            "canvas_size": self.renderer.canvas_size,
            "state": engine.get_state(),
            "draw": self.renderer.render_dicts(
                engine.snake.body, engine.foods, engine.game_over,
            ),
        }

    def summary(self) -> SessionSummary:
        engine = self.engine
        return SessionSummary(
            session_id=self.session_id,
            status=engine.state.status.value,
            score=engine.score,
            tick=engine.state.tick,
            mode=engine.speed.mode.value,
            theme=self.renderer.theme.value,
            interval_ms=engine.current_interval(),
            grid_cells=engine.grid.cells,
            running=self.loop is not None and self.loop.running,
            connections=len(self.sockets),
        )

    async def _on_frame(self, outcome: FrameOutcome) -> None:
        await self.broadcast()

    async def broadcast(self) -> None:
        """Send the current frame to every connected socket."""
        if not self.sockets:
            return
        payload = json.dumps(self.snapshot(), separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(self.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in self.sockets:
                self.sockets.remove(ws)


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self,
        base_config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.base_config = base_config if base_config is not None else GameConfig()
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions
        self._closing: set[asyncio.Task] = set()

    def create_session(
        self,
        grid_cells: int | None = None,
        seed: int | None = None,
        theme: str | None = None,
        mode: str | None = None,
        food_count: int | None = None,
        respawn_delay_ms: int | None = None,
        autostart: bool = True,
    ) -> GameSession:
        """Create a new session and, if requested, start its frame loop."""
        config = self.base_config.with_overrides(
            grid_cells=grid_cells,
            seed=seed,
            theme=theme,
            initial_mode=mode,
            food_count=food_count,
            respawn_delay_ms=respawn_delay_ms,
        )
        if grid_cells is not None:
            # Keep the start cell on the board for resized grids.
            config = config.with_overrides(
                start_cell=(grid_cells // 2, grid_cells // 2),
            )

        engine = GameEngine(config)
        renderer = Renderer(
            config.grid_cells, cell_size=config.cell_size, theme=Theme(config.theme),
        )
        session = GameSession(
            session_id=uuid.uuid4().hex[:12],
            engine=engine,
            renderer=renderer,
        )
        self._sessions[session.session_id] = session
        self._prune_sessions(keep=session.session_id)
        if autostart:
            session.loop.start()
        logger.info(
            "Session %s created (grid=%d, mode=%s).",
            session.session_id, config.grid_cells, engine.speed.mode.value,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def restart(self, session_id: str) -> GameSession:
        """Start a fresh game; the loop resumes only while someone watches."""
        session = self.require_session(session_id)
        async with session.lock:
            session.touch()
            await session.loop.restart(resume=bool(session.sockets))
        return session

    async def cycle_speed(self, session_id: str) -> SpeedMode:
        session = self.require_session(session_id)
        async with session.lock:
            session.touch()
            mode = session.engine.cycle_speed_mode()
        await session.broadcast()
        return mode

    async def toggle_theme(self, session_id: str) -> Theme:
        session = self.require_session(session_id)
        async with session.lock:
            session.touch()
            theme = session.renderer.toggle_theme()
        await session.broadcast()
        return theme

    async def remove_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._close_session(session)
        logger.info("Session %s removed.", session_id)

    async def _close_session(self, session: GameSession) -> None:
        await session.loop.stop()
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    def _prune_sessions(self, keep: str | None = None) -> None:
        """Bound the registry, dropping unwatched finished games first.

        Sessions with connected players go last, and any that must go
        have their sockets closed on a background task.
        """
        overflow = len(self._sessions) - self._max_sessions
        if overflow <= 0:
            return

        candidates = sorted(
            (s for s in self._sessions.values() if s.session_id != keep),
            key=lambda s: (bool(s.sockets), not s.engine.game_over, s.last_active),
        )
        for stale in candidates[:overflow]:
            self._sessions.pop(stale.session_id, None)
            if stale.sockets:
                task = asyncio.create_task(self._close_session(stale))
                self._closing.add(task)
                task.add_done_callback(self._closing.discard)
            else:
                stale.loop.cancel()
        logger.info(
            "Pruned %d sessions (retaining up to %d).",
            overflow, self._max_sessions,
        )

    async def cleanup(self) -> None:
        """Close every session and wait for pending socket closes."""
        for session in list(self._sessions.values()):
            await self._close_session(session)
        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
