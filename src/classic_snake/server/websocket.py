"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from classic_snake.controls import Command
from classic_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send directions, keys, or actions; receive the state every tick.

    Accepted messages: ``{"direction": "up"}``, ``{"key": "ArrowUp"}``,
    ``{"action": "pause"}`` and ``{"action": "restart"}``. Anything else
    is ignored.
    """
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot goes out before the socket joins the broadcast list.
    await websocket.send_text(
        json.dumps(session.state.to_dict(), separators=(",", ":")),
    )
    session.sockets.append(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            direction = msg.get("direction")
            key = msg.get("key")
            action = msg.get("action")
            if isinstance(direction, str):
                await manager.queue_direction(session_id, direction)
            elif isinstance(key, str):
                state = await manager.press_key(session_id, key)
                await manager.broadcast(session, state)
            elif action == Command.PAUSE.value:
                state = await manager.toggle_pause(session_id)
                await manager.broadcast(session, state)
            elif action == Command.RESTART.value:
                state = await manager.restart(session_id)
                await manager.broadcast(session, state)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    except KeyError:
        logger.info("Session %s was pruned while connected.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
