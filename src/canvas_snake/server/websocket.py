"""WebSocket handler for real-time browser play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from canvas_snake.server.session_manager import GameSession, SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


async def _send_frame(websocket: WebSocket, session: GameSession) -> None:
    await websocket.send_text(
        json.dumps(session.snapshot(), separators=(",", ":")),
    )


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send input and controls, receive frames."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    handler = session.input_handler()
    logger.info("Player connected to session %s.", session_id)

    # Immediate frame so the client can size and paint its canvas.
    await _send_frame(websocket, session)
    session.loop.start()

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            kind = msg.get("type")
            if kind == "key" and isinstance(msg.get("key"), str):
                async with session.lock:
                    session.touch()
                    handler.on_key(msg["key"])
            elif kind == "touch" and isinstance(msg.get("phase"), str):
                x, y = msg.get("x", 0), msg.get("y", 0)
                if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
                    continue
                async with session.lock:
                    session.touch()
                    handler.on_touch(msg["phase"], float(x), float(y))
            elif kind == "restart":
                await manager.restart(session_id)
            elif kind == "speed":
                await manager.cycle_speed(session_id)
            elif kind == "theme":
                await manager.toggle_theme(session_id)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    except KeyError:
        # Session removed while the socket was open.
        logger.info("Session %s closed under a connected player.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
        # Nobody is watching: pause until the next player connects.
        if not session.sockets:
            await session.loop.stop()
