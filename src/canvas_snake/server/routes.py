"""REST API route handlers for session lifecycle and controls."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from canvas_snake.controls import parse_direction
from canvas_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)
from canvas_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new game session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            grid_cells=body.grid_cells,
            seed=body.seed,
            theme=body.theme,
            mode=body.mode,
            food_count=body.food_count,
            respawn_delay_ms=body.respawn_delay_ms,
            autostart=body.autostart,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get the session summary, full state and current draw commands."""
    session = _get_session(request, session_id)
    result: dict = session.summary().model_dump()
    result.update(session.snapshot())
    return result


@router.post("/{session_id}/restart")
async def restart_session(session_id: str, request: Request) -> SessionSummary:
    """Start a fresh game in the session."""
    try:
        session = await _get_manager(request).restart(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return session.summary()


@router.post("/{session_id}/speed")
async def cycle_speed(session_id: str, request: Request) -> SessionSummary:
    """Advance to the next speed mode."""
    manager = _get_manager(request)
    try:
        await manager.cycle_speed(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return manager.require_session(session_id).summary()


@router.post("/{session_id}/theme")
async def toggle_theme(session_id: str, request: Request) -> SessionSummary:
    """Switch between the dark and light themes."""
    manager = _get_manager(request)
    try:
        await manager.toggle_theme(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return manager.require_session(session_id).summary()


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Request a turn for the next tick."""
    session = _get_session(request, session_id)
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction {body.direction!r}.",
        )
    async with session.lock:
        session.touch()
        accepted = session.engine.set_direction(direction)
    return DirectionResponse(
        accepted=accepted,
        pending_direction=session.engine.state.pending_direction.name.lower(),
    )


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop the session's loop and forget it."""
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
