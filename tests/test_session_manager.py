"""Tests for the in-memory session registry."""

from __future__ import annotations

import asyncio

import pytest
from starlette.websockets import WebSocketState

from canvas_snake.config import GameConfig
from canvas_snake.server.session_manager import SessionManager


class FakeSocket:
    """Stands in for a connected player's WebSocket."""

    def __init__(self) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.sent: list[str] = []
        self.close_code: int | None = None

    async def send_text(self, data: str) -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.close_code = code
        self.client_state = WebSocketState.DISCONNECTED


@pytest.fixture()
async def manager():
    mgr = SessionManager(GameConfig(seed=0), max_sessions=2)
    yield mgr
    await mgr.cleanup()


class TestSessionManager:
    def test_invalid_max_sessions(self):
        with pytest.raises(ValueError, match="max_sessions"):
            SessionManager(max_sessions=0)

    @pytest.mark.asyncio
    async def test_resized_grid_recentres_start(self, manager):
        session = manager.create_session(grid_cells=12, autostart=False)
        assert list(session.engine.snake) == [(6, 6)]
        assert session.renderer.canvas_size == 240

    @pytest.mark.asyncio
    async def test_prunes_finished_sessions_first(self, manager):
        finished = manager.create_session(autostart=False)
        live = manager.create_session(autostart=False)
        finished.engine.state.foods = []
        for _ in range(15):
            finished.engine.step()
        assert finished.engine.game_over

        newest = manager.create_session(autostart=False)
        assert manager.get_session(finished.session_id) is None
        assert manager.get_session(live.session_id) is live
        assert manager.get_session(newest.session_id) is newest

    @pytest.mark.asyncio
    async def test_prunes_least_recently_active(self, manager):
        old = manager.create_session(autostart=False)
        recent = manager.create_session(autostart=False)
        recent.touch()
        manager.create_session(autostart=False)
        assert manager.get_session(old.session_id) is None
        assert manager.get_session(recent.session_id) is recent

    @pytest.mark.asyncio
    async def test_restart_unknown(self, manager):
        with pytest.raises(KeyError):
            await manager.restart("missing")

    @pytest.mark.asyncio
    async def test_snapshot_without_sockets(self, manager):
        session = manager.create_session(autostart=False)
        await session.broadcast()
        snap = session.snapshot()
        assert snap["theme"] == "dark"
        assert snap["state"]["tick"] == 0
        assert len(snap["draw"]) == 1 + 2 * 31 + 1 + 1

    @pytest.mark.asyncio
    async def test_cleanup_stops_loops(self, manager):
        session = manager.create_session()
        assert session.loop.running
        await manager.cleanup()
        assert not session.loop.running

    @pytest.mark.asyncio
    async def test_prunes_unwatched_sessions_before_connected(self, manager):
        watched = manager.create_session(autostart=False)
        watched.sockets.append(FakeSocket())
        idle = manager.create_session(autostart=False)
        idle.touch()

        manager.create_session(autostart=False)
        assert manager.get_session(watched.session_id) is watched
        assert manager.get_session(idle.session_id) is None

    @pytest.mark.asyncio
    async def test_pruned_connected_session_closes_sockets(self):
        mgr = SessionManager(GameConfig(seed=0), max_sessions=1)
        first = mgr.create_session()
        ws = FakeSocket()
        first.sockets.append(ws)

        second = mgr.create_session(autostart=False)
        assert mgr.get_session(first.session_id) is None
        assert mgr.get_session(second.session_id) is second

        await mgr.cleanup()
        assert ws.close_code == 1000
        assert first.sockets == []
        assert not first.loop.running

    @pytest.mark.asyncio
    async def test_restart_without_players_stays_paused(self, manager):
        session = manager.create_session()
        assert session.loop.running
        await manager.restart(session.session_id)
        assert session.engine.state.tick == 0
        assert not session.loop.running

    @pytest.mark.asyncio
    async def test_restart_with_player_resumes(self, manager):
        session = manager.create_session(autostart=False)
        ws = FakeSocket()
        session.sockets.append(ws)
        await manager.restart(session.session_id)
        assert session.loop.running
        # The fresh board is pushed before the loop resumes.
        assert ws.sent

    @pytest.mark.asyncio
    async def test_input_under_lock_holds_frames(self, manager):
        session = manager.create_session(autostart=False)
        session.engine.state.last_tick_ms = float("-inf")
        async with session.lock:
            session.loop.start()
            await asyncio.sleep(0.05)
            assert session.engine.state.tick == 0
        await session.loop.stop()
