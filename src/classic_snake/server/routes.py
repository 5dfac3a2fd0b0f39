"""REST API route handlers for session lifecycle and the leaderboard."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from classic_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    LeaderboardEntry,
    SessionSummary,
)
from classic_snake.server.session_manager import SessionManager

router = APIRouter(tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Start a new single-player game."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            grid_size=body.grid_size, tick_ms=body.tick_ms, seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Session metadata with the full current state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.state.to_dict()
    return result


@router.post("/sessions/{session_id}/direction")
async def queue_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Queue a turn; reversals and unknown names leave the state unchanged."""
    manager = _get_manager(request)
    try:
        state = await manager.queue_direction(session_id, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return state.to_dict()


@router.post("/sessions/{session_id}/pause")
async def toggle_pause(session_id: str, request: Request) -> dict:
    manager = _get_manager(request)
    try:
        state = await manager.toggle_pause(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    await manager.broadcast(manager.get_session(session_id), state)
    return state.to_dict()


@router.post("/sessions/{session_id}/restart")
async def restart(session_id: str, request: Request) -> dict:
    manager = _get_manager(request)
    try:
        state = await manager.restart(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    await manager.broadcast(manager.get_session(session_id), state)
    return state.to_dict()


@router.get("/leaderboard", tags=["scores"])
async def leaderboard(request: Request) -> list[LeaderboardEntry]:
    """Recent final scores, highest first."""
    rows = _get_manager(request).history.leaderboard()
    return [LeaderboardEntry(**row) for row in rows]
