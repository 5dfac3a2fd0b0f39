"""In-memory session registry and the per-session asyncio clock."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from classic_snake import engine
from classic_snake.config import GameConfig
from classic_snake.controls import apply_key
from classic_snake.engine import GameState
from classic_snake.food import RandomSource, seeded_random_source
from classic_snake.scores import ScoreHistory
from classic_snake.server.models import SessionStatus, SessionSummary
from classic_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100
_MAX_SESSIONS = 500
_PAUSED_TTL = 600.0  # seconds a paused session may sit idle


@dataclass
class Session:
    """One player's game: the current snapshot plus its clock."""

    session_id: str
    tick_ms: int
    random_source: RandomSource
    state: GameState
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    paused_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> SessionStatus:
        return SessionStatus(self.state.status)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            grid_size=self.state.grid_size,
            tick_ms=self.tick_ms,
            score=self.state.score,
        )

    def touch(self) -> None:
        """Refresh the idle markers after the state was replaced."""
        if not self.state.paused:
            self.paused_at = None
        elif self.paused_at is None:
            self.paused_at = time.monotonic()
        if not self.state.game_over:
            self.finished_at = None


class SessionManager:
    """Central registry owning every session's current state.

    All state replacement for a session happens under its lock, so clock
    ticks and player input form a single ordered stream.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        history: ScoreHistory | None = None,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        max_sessions: int = _MAX_SESSIONS,
        paused_ttl: float = _PAUSED_TTL,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        if paused_ttl <= 0:
            raise ValueError("paused_ttl must be positive.")
        self.config = config or GameConfig()
        self.history = history or ScoreHistory(
            self.config.scores_path,
            key=self.config.leaderboard_key,
            limit=self.config.leaderboard_limit,
        )
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions
        self._max_sessions = max_sessions
        self._paused_ttl = paused_ttl

    def create_session(
        self,
        grid_size: int | None = None,
        tick_ms: int | None = None,
        seed: int | None = None,
        start_clock: bool = True,
    ) -> Session:
        """Create a running session and, by default, start its clock."""
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")
        size = grid_size if grid_size is not None else self.config.grid_size
        random_source = seeded_random_source(seed)
        state = engine.create_initial_state(size, random_source)

        session = Session(
            session_id=uuid.uuid4().hex[:12],
            tick_ms=tick_ms if tick_ms is not None else self.config.tick_ms,
            random_source=random_source,
            state=state,
        )
        self._sessions[session.session_id] = session
        if start_clock:
            session._task = asyncio.create_task(self._tick_loop(session))
        logger.info(
            "Session %s created (grid=%d, tick=%dms).",
            session.session_id, size, session.tick_ms,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def tick(self, session_id: str) -> GameState:
        """Advance one session by a single step, recording a final score."""
        session = self._require(session_id)
        async with session.lock:
            was_over = session.state.game_over
            session.state = engine.step(session.state, session.random_source)
            ended = not was_over and session.state.game_over
            if ended:
                session.finished_at = time.monotonic()
                await asyncio.to_thread(self.history.record, session.state.score)
                logger.info(
                    "Session %s ended with score %d.",
                    session_id, session.state.score,
                )
            state = session.state
        if ended:
            await self._prune_finished_sessions()
        return state

    async def queue_direction(
        self, session_id: str, direction: Direction | str,
    ) -> GameState:
        session = self._require(session_id)
        async with session.lock:
            session.state = engine.set_queued_direction(session.state, direction)
            return session.state

    async def toggle_pause(self, session_id: str) -> GameState:
        session = self._require(session_id)
        async with session.lock:
            session.state = engine.toggle_pause(session.state)
            session.touch()
            return session.state

    async def restart(self, session_id: str) -> GameState:
        session = self._require(session_id)
        async with session.lock:
            session.state = engine.restart(session.state, session.random_source)
            session.touch()
            return session.state

    async def press_key(self, session_id: str, key: str) -> GameState:
        """Apply a raw key press to the session."""
        session = self._require(session_id)
        async with session.lock:
            session.state = apply_key(session.state, key, session.random_source)
            session.touch()
            return session.state

    async def _tick_loop(self, session: Session) -> None:
        """Step the session at a fixed cadence, broadcasting each result.

        A session left paused for longer than the paused TTL is retired.
        """
        interval = session.tick_ms / 1000.0
        try:
            while session.session_id in self._sessions:
                await asyncio.sleep(interval)
                if session.paused_at is not None:
                    if time.monotonic() - session.paused_at >= self._paused_ttl:
                        logger.info(
                            "Session %s idle while paused; retiring.",
                            session.session_id,
                        )
                        await self._retire(session)
                        return
                    continue
                if session.state.game_over:
                    continue
                state = await self.tick(session.session_id)
                await self.broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Clock cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Clock error in session %s.", session.session_id)

    async def _retire(self, session: Session) -> None:
        """Close a session's sockets, drop it, and stop its clock."""
        await self._close_connections(session)
        self._sessions.pop(session.session_id, None)
        task = session._task
        if task and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _close_connections(self, session: Session) -> None:
        sockets = list(session.sockets)
        session.sockets.clear()
        for ws in sockets:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )

    async def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values() if s.finished_at is not None
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(key=lambda s: s.finished_at)
        for stale in finished[:overflow]:
            await self._retire(stale)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def broadcast(self, session: Session, state: GameState) -> None:
        """Send a state snapshot to every connected socket."""
        payload = json.dumps(state.to_dict(), separators=(",", ":"))
        dead: list[WebSocket] = []
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel every running clock."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
