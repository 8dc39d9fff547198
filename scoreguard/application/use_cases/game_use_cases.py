"""Game session use cases

Together these form the session lifecycle: a session is created by
StartGameUseCase, evaluated exactly once by EndGameUseCase and evicted by
ExpireOldSessionsUseCase when abandoned.
"""

import logging

from scoreguard.core.clock import Clock
from scoreguard.domain.entities.game_session import GameSessionEntity
from scoreguard.domain.exceptions import (
    SessionAlreadyConsumedError,
    SessionExpiredError,
    SessionNotFoundError,
)
from scoreguard.domain.interfaces.session_store import SessionStoreInterface
from scoreguard.domain.results import EndGameResult, Rejected, RejectionReason
from scoreguard.domain.services.score_validator import validate_result
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy

logger = logging.getLogger(__name__)


class StartGameUseCase:
    """Use case for starting a game session"""

    def __init__(self, session_store: SessionStoreInterface):
        self.session_store = session_store

    def execute(self) -> GameSessionEntity:
        session = self.session_store.create()
        logger.info(f"Game started: {session.id}")
        return session


class EndGameUseCase:
    """Use case for evaluating the reported result of a game session"""

    def __init__(
        self,
        session_store: SessionStoreInterface,
        clock: Clock,
        policy: ValidationPolicy,
        session_timeout: float,
    ):
        self.session_store = session_store
        self.clock = clock
        self.policy = policy
        self.session_timeout = session_timeout

    def execute(self, session_id: str, claimed_score: int) -> EndGameResult:
        """Consume the session and validate the claimed score

        Not idempotent: every call after the first for the same id is
        rejected, whatever the first outcome was.
        """
        try:
            session = self.session_store.consume(session_id, self.session_timeout)
        except SessionExpiredError:
            logger.info(f"Expired session: {session_id}")
            return Rejected(RejectionReason.INVALID_SESSION)
        except SessionNotFoundError:
            logger.info(f"Invalid session: {session_id}")
            return Rejected(RejectionReason.INVALID_SESSION)
        except SessionAlreadyConsumedError:
            logger.warning(f"Session replay attempt: {session_id} (score {claimed_score})")
            return Rejected(RejectionReason.ALREADY_CONSUMED)

        elapsed_seconds = session.age(self.clock.now())
        result = validate_result(elapsed_seconds, claimed_score, self.policy)

        if isinstance(result, Rejected):
            try:
                # Kept until expiry so a replay still reads as already consumed
                self.session_store.record_rejection(session_id)
            except SessionNotFoundError:
                logger.warning(f"Session {session_id} vanished before its rejection was recorded")
            logger.warning(
                f"Rejected game {session_id}: {result.reason.value}, "
                f"{claimed_score} points in {elapsed_seconds:.1f}s "
                f"(max {self.policy.max_score_for(elapsed_seconds):.0f})"
            )
            return result

        try:
            self.session_store.record_result(session_id, result.score, result.elapsed_seconds)
        except SessionNotFoundError:
            # Swept between consumption and recording; nothing left to submit
            logger.warning(f"Session {session_id} vanished before its result was recorded")

        logger.info(f"Valid game {session_id}: {result.score} points in {elapsed_seconds:.1f}s")
        return result


class ExpireOldSessionsUseCase:
    """Use case for evicting abandoned sessions (background task)"""

    def __init__(self, session_store: SessionStoreInterface, session_timeout: float):
        self.session_store = session_store
        self.session_timeout = session_timeout

    def execute(self) -> int:
        """Remove sessions older than the configured timeout"""
        return self.session_store.sweep_expired(self.session_timeout)
