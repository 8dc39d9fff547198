"""Game session domain entity"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from scoreguard.domain.exceptions import SessionAlreadyConsumedError


class SessionStatus(Enum):
    """Game session status"""

    ACTIVE = "active"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class GameSessionEntity:
    """One attempt at a game round, bound to a server-side start time"""

    id: str
    started_at: float
    consumed: bool = False
    status: SessionStatus = SessionStatus.ACTIVE
    final_score: Optional[int] = None
    elapsed_seconds: Optional[float] = None

    def consume(self) -> None:
        """Mark the session as evaluated; allowed exactly once"""
        if self.consumed:
            raise SessionAlreadyConsumedError(self.id)
        self.consumed = True

    def accept(self, score: int, elapsed_seconds: float) -> None:
        """Record the validated result of a consumed session"""
        if not self.consumed or self.status != SessionStatus.ACTIVE:
            raise ValueError("Session result can only be recorded once, after consumption")

        self.final_score = score
        self.elapsed_seconds = elapsed_seconds
        self.status = SessionStatus.ACCEPTED

    def reject(self) -> None:
        """Close a consumed session whose result failed validation"""
        if not self.consumed or self.status != SessionStatus.ACTIVE:
            raise ValueError("Only a freshly consumed session can be rejected")
        self.status = SessionStatus.REJECTED

    def age(self, now: float) -> float:
        """Seconds since the session started, never negative"""
        return max(0.0, now - self.started_at)

    def is_expired(self, now: float, max_age: float) -> bool:
        return self.age(now) > max_age

    @property
    def is_validated(self) -> bool:
        """Check if the session passed validation and holds a result"""
        return self.status == SessionStatus.ACCEPTED and self.final_score is not None
