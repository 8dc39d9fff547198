"""In-memory game session store"""

import logging
import secrets
import threading
from dataclasses import replace
from typing import Dict, Optional

from scoreguard.core.clock import Clock, SystemClock
from scoreguard.domain.entities.game_session import GameSessionEntity
from scoreguard.domain.exceptions import SessionExpiredError, SessionNotFoundError
from scoreguard.domain.interfaces.session_store import SessionStoreInterface

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 16  # 128 bits


class InMemorySessionStore(SessionStoreInterface):
    """Lock-guarded dict of sessions, owned by a single process

    Callers only ever see copies; every state transition happens under
    the lock, so consume/take_validated are linearizable per id.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or SystemClock()
        self._sessions: Dict[str, GameSessionEntity] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> GameSessionEntity:
        """Create a new session"""
        session = GameSessionEntity(
            id=secrets.token_hex(SESSION_ID_BYTES),
            started_at=self.clock.now(),
        )
        with self._lock:
            self._sessions[session.id] = session
            return replace(session)

    def get(self, session_id: str) -> Optional[GameSessionEntity]:
        with self._lock:
            session = self._sessions.get(session_id)
            return replace(session) if session else None

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def consume(self, session_id: str, max_age: float) -> GameSessionEntity:
        """Atomically flip `consumed` and return the session snapshot"""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)

            if session.is_expired(self.clock.now(), max_age):
                del self._sessions[session_id]
                raise SessionExpiredError(session_id)

            session.consume()
            return replace(session)

    def record_result(self, session_id: str, score: int, elapsed_seconds: float) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.accept(score, elapsed_seconds)

    def record_rejection(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.reject()

    def take_validated(self, session_id: str, max_age: float) -> Optional[GameSessionEntity]:
        """Pop an accepted session so its result can be reconciled exactly once"""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None

            if session.is_expired(self.clock.now(), max_age):
                del self._sessions[session_id]
                return None

            if not session.is_validated:
                return None

            del self._sessions[session_id]
            return session

    def restore(self, session: GameSessionEntity) -> None:
        with self._lock:
            self._sessions.setdefault(session.id, session)

    def sweep_expired(self, max_age: float) -> int:
        """Remove every session older than max_age seconds"""
        now = self.clock.now()
        with self._lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if session.is_expired(now, max_age)
            ]
            for session_id in expired:
                del self._sessions[session_id]

        if expired:
            logger.info(f"Swept {len(expired)} expired game sessions")
        return len(expired)
