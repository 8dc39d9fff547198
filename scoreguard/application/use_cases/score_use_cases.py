"""Score and leaderboard use cases"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from scoreguard.domain.entities.game_session import GameSessionEntity
from scoreguard.domain.entities.user import Identity
from scoreguard.domain.interfaces.score_repository import ScoreRepositoryInterface
from scoreguard.domain.interfaces.session_store import SessionStoreInterface
from scoreguard.domain.results import Rejected, RejectionReason, SubmitOutcome, SubmitResult

logger = logging.getLogger(__name__)

STORAGE_ATTEMPTS = 2  # first try plus one retry


@dataclass
class _ReconcileProgress:
    """Steps of a submit that already reached the store, kept across retries"""

    current_best: Optional[int] = None
    is_new_record: Optional[bool] = None


class SubmitScoreUseCase:
    """Use case for reconciling a validated session result with a player's best"""

    def __init__(
        self,
        score_repository: ScoreRepositoryInterface,
        session_store: SessionStoreInterface,
        session_timeout: float,
    ):
        self.score_repository = score_repository
        self.session_store = session_store
        self.session_timeout = session_timeout

    async def execute(self, identity: Optional[Identity], session_id: str) -> SubmitOutcome:
        """Persist the session's score if it beats the stored best and rank it

        Taking the session out of the store is what marks it submitted; it
        is put back only if the store keeps failing, so a validated score
        is never lost.
        """
        if identity is None:
            logger.info(f"Unauthenticated score submission for session {session_id}")
            return Rejected(RejectionReason.UNAUTHENTICATED)

        session = self.session_store.take_validated(session_id, self.session_timeout)
        if session is None:
            logger.warning(
                f"Score submission for missing or unvalidated session {session_id} "
                f"by user {identity.id}"
            )
            return Rejected(RejectionReason.INVALID_OR_UNVALIDATED_SESSION)

        progress = _ReconcileProgress()
        last_error: Optional[Exception] = None
        for attempt in range(1, STORAGE_ATTEMPTS + 1):
            try:
                return await self._reconcile(identity, session, progress)
            except Exception as e:
                last_error = e
                logger.error(
                    f"Score storage failed for user {identity.id} "
                    f"(attempt {attempt}/{STORAGE_ATTEMPTS}): {e}"
                )

        self.session_store.restore(session)
        logger.error(f"Giving up on session {session_id} after storage error: {last_error}")
        return Rejected(RejectionReason.STORAGE_ERROR)

    async def _reconcile(
        self, identity: Identity, session: GameSessionEntity, progress: _ReconcileProgress
    ) -> SubmitResult:
        """Read, write and rank, skipping the steps a failed attempt completed

        A retry after a committed write must not re-read the best it just
        wrote, or the new record would be reported as a tie.
        """
        final_score = session.final_score or 0
        elapsed_seconds = session.elapsed_seconds or 0.0

        if progress.current_best is None:
            record = await self.score_repository.get_best(identity.id)
            progress.current_best = record.score if record else 0
        current_best = progress.current_best

        if progress.is_new_record is None:
            written = False
            if final_score > current_best:
                written = await self.score_repository.upsert_best(
                    identity.id, final_score, elapsed_seconds
                )
            progress.is_new_record = written
        is_new_record = progress.is_new_record

        better = await self.score_repository.count_better_than(
            final_score, exclude_user_id=identity.id
        )
        rank = better + 1

        if is_new_record:
            logger.info(
                f"New record for {identity.display_name}: {final_score} "
                f"(was {current_best}), rank {rank}"
            )

        return SubmitResult(
            saved=is_new_record,
            is_new_record=is_new_record,
            rank=rank,
            best_score=final_score if is_new_record else current_best,
        )


class GetLeaderboardUseCase:
    """Use case for getting leaderboard"""

    def __init__(self, score_repository: ScoreRepositoryInterface):
        self.score_repository = score_repository

    async def execute(self, limit: int = 10) -> List[dict]:
        return await self.score_repository.get_leaderboard(limit)


class GetPlayerStandingUseCase:
    """Use case for a player's best score and current rank"""

    def __init__(self, score_repository: ScoreRepositoryInterface):
        self.score_repository = score_repository

    async def execute(self, user_id: int) -> dict:
        record = await self.score_repository.get_best(user_id)
        if record is None:
            return {"best_score": None, "rank": None}

        better = await self.score_repository.count_better_than(
            record.score, exclude_user_id=user_id
        )
        return {"best_score": record.score, "rank": better + 1}
