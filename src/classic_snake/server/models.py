"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Engine states as seen by API clients."""

    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int | None = Field(default=None, ge=4, le=100)
    tick_ms: int | None = Field(default=None, ge=50, le=2000)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    grid_size: int
    tick_ms: int
    score: int


class LeaderboardEntry(BaseModel):
    """One ranked row of the score history."""

    rank: int
    score: int
    played_at: int
    player_name: str
    initials: str
    avatar_hue: float
    leader: bool


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
