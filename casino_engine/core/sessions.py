"""
Server-held state for multi-step games (blackjack, mines, hi-lo).

The client only ever sees an opaque game id; the deck, mine grid and streak
stay here, so a client cannot replay or edit them between requests.
"""

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from casino_engine.config import settings
from casino_engine.core.exceptions import GameSessionError
from casino_engine.core.logger import get_logger

logger = get_logger("sessions")


@dataclass
class GameSession:
    game_id: str
    user_id: str
    game_type: str
    bet_amount: float
    state: dict
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


class SessionStore:
    """Thread-safe in-memory store of in-progress games."""

    def __init__(self, timeout_seconds: Optional[int] = None):
        self.timeout_seconds = timeout_seconds or settings.sessions.timeout_seconds
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def open(self, user_id: str, game_type: str, bet_amount: float, state: dict) -> GameSession:
        session = GameSession(
            game_id=uuid.uuid4().hex,
            user_id=user_id,
            game_type=game_type,
            bet_amount=bet_amount,
            state=state,
        )
        with self._lock:
            self._sessions[session.game_id] = session
        logger.debug(f"Opened {game_type} session {session.game_id} for user {user_id}")
        return session

    def checkout(self, game_id: str, user_id: str, game_type: str) -> GameSession:
        """
        Remove and return a session so that only one request can act on it.
        The caller must `save` it back if the game is still in progress.
        """
        if not game_id or not isinstance(game_id, str):
            raise GameSessionError("Game ID required")

        with self._lock:
            session = self._sessions.get(game_id)
            if session is None or self._is_expired(session):
                raise GameSessionError("Game not found or expired")
            if session.user_id != user_id:
                raise GameSessionError("This is not your game")
            if session.game_type != game_type:
                raise GameSessionError(f"Game {game_id} is not a {game_type} game")
            del self._sessions[game_id]

        return session

    def save(self, session: GameSession, state: Optional[dict] = None) -> GameSession:
        if state is not None:
            session.state = state
        session.updated_at = time.time()
        with self._lock:
            self._sessions[session.game_id] = session
        return session

    def restore(self, session: GameSession):
        """Put a checked-out session back untouched (the action was rejected)."""
        with self._lock:
            self._sessions[session.game_id] = session

    def discard(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.pop(game_id, None)

    def _is_expired(self, session: GameSession, now: Optional[float] = None) -> bool:
        return (now or time.time()) - session.updated_at > self.timeout_seconds

    def expire(self) -> List[GameSession]:
        """Drop and return sessions idle for longer than the timeout."""
        now = time.time()
        with self._lock:
            expired = [s for s in self._sessions.values() if self._is_expired(s, now)]
            for session in expired:
                del self._sessions[session.game_id]

        if expired:
            logger.info(f"Expired {len(expired)} idle game session(s)")
        return expired

    def active_count(self, user_id: Optional[str] = None) -> int:
        with self._lock:
            if user_id is None:
                return len(self._sessions)
            return sum(1 for s in self._sessions.values() if s.user_id == user_id)
