"""Typed outcomes returned by the session and score use cases"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RejectionReason(Enum):
    """Why a request against the core was refused"""

    INVALID_SESSION = "invalid_session"
    ALREADY_CONSUMED = "already_consumed"
    TOO_SHORT = "too_short"
    IMPLAUSIBLE_RATE = "implausible_rate"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_OR_UNVALIDATED_SESSION = "invalid_or_unvalidated_session"
    STORAGE_ERROR = "storage_error"

    @property
    def is_validation_failure(self) -> bool:
        """Rejected by the plausibility check rather than by session state"""
        return self in (RejectionReason.TOO_SHORT, RejectionReason.IMPLAUSIBLE_RATE)


@dataclass(frozen=True)
class Accepted:
    """A claimed score that passed validation"""

    score: int
    elapsed_seconds: float


@dataclass(frozen=True)
class Rejected:
    """A refused request and its specific reason"""

    reason: RejectionReason

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason]


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of reconciling a validated score with the stored best"""

    saved: bool
    is_new_record: bool
    rank: int
    best_score: int


EndGameResult = Union[Accepted, Rejected]
SubmitOutcome = Union[SubmitResult, Rejected]


REJECTION_MESSAGES = {
    RejectionReason.INVALID_SESSION: "Invalid session, start a new game",
    RejectionReason.ALREADY_CONSUMED: "Session already used, start a new game",
    RejectionReason.TOO_SHORT: "Game too short",
    RejectionReason.IMPLAUSIBLE_RATE: "Score too high for game duration",
    RejectionReason.UNAUTHENTICATED: "Log in or register to save your score",
    RejectionReason.INVALID_OR_UNVALIDATED_SESSION: "No validated result for this session",
    RejectionReason.STORAGE_ERROR: "Could not save the score, try again",
}
