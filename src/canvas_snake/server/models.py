"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions. Unset fields use server defaults."""

    grid_cells: int | None = Field(default=None, ge=10, le=60)
    seed: int | None = None
    theme: str | None = None
    mode: str | None = None
    food_count: int | None = Field(default=None, ge=1, le=5)
    respawn_delay_ms: int | None = Field(default=None, ge=0, le=5000)
    autostart: bool = True


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str


class DirectionResponse(BaseModel):
    accepted: bool
    pending_direction: str


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: str
    score: int
    tick: int
    mode: str
    theme: str
    interval_ms: int
    grid_cells: int
    running: bool
    connections: int
