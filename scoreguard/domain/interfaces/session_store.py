"""Session store interface"""

from abc import ABC, abstractmethod
from typing import Optional

from scoreguard.domain.entities.game_session import GameSessionEntity


class SessionStoreInterface(ABC):
    """Interface for the ephemeral game session store

    Implementations must make `consume` and `take_validated` atomic: two
    concurrent callers for the same id never both succeed.
    """

    @abstractmethod
    def create(self) -> GameSessionEntity:
        """Create a new session with a fresh random id"""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[GameSessionEntity]:
        """Get a snapshot of a session"""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Delete session"""
        pass

    @abstractmethod
    def consume(self, session_id: str, max_age: float) -> GameSessionEntity:
        """Mark a session as evaluated and return its snapshot

        Raises SessionNotFoundError, SessionExpiredError or
        SessionAlreadyConsumedError.
        """
        pass

    @abstractmethod
    def record_result(self, session_id: str, score: int, elapsed_seconds: float) -> None:
        """Store the accepted result of a consumed session"""
        pass

    @abstractmethod
    def record_rejection(self, session_id: str) -> None:
        """Keep a consumed session as rejected until it expires"""
        pass

    @abstractmethod
    def take_validated(self, session_id: str, max_age: float) -> Optional[GameSessionEntity]:
        """Remove and return an accepted, unexpired session"""
        pass

    @abstractmethod
    def restore(self, session: GameSessionEntity) -> None:
        """Put back a session removed by take_validated"""
        pass

    @abstractmethod
    def sweep_expired(self, max_age: float) -> int:
        """Remove sessions older than max_age seconds"""
        pass
