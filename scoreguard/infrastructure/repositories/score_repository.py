"""Score repository implementation"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from scoreguard.domain.entities.score_record import ScoreRecordEntity
from scoreguard.domain.exceptions import ScoreStorageError
from scoreguard.domain.interfaces.score_repository import ScoreRepositoryInterface
from scoreguard.infrastructure.database.models import Score, User

logger = logging.getLogger(__name__)


class ScoreRepository(ScoreRepositoryInterface):
    """Async SQLAlchemy implementation of the best-score store"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_best(self, user_id: int) -> Optional[ScoreRecordEntity]:
        """Get a player's best score record"""
        try:
            stmt = (
                select(Score)
                .where(Score.user_id == user_id)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(stmt)
            db_score = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise ScoreStorageError(f"Could not read best score for user {user_id}") from e

        return self._to_entity(db_score) if db_score else None

    async def upsert_best(self, user_id: int, score: int, elapsed_seconds: float) -> bool:
        """Raise an existing best or insert the first one

        The unique constraint on user_id turns a racing first insert into a
        second conditional update, and updates only ever raise the stored
        value.
        """
        try:
            if await self._raise_best(user_id, score, elapsed_seconds):
                return True

            self.db.add(Score(user_id=user_id, score=score, elapsed_seconds=elapsed_seconds))
            try:
                await self.db.commit()
                return True
            except IntegrityError:
                await self.db.rollback()
                logger.info(f"Concurrent first record for user {user_id}, retrying as update")

            return await self._raise_best(user_id, score, elapsed_seconds)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ScoreStorageError(f"Could not save best score for user {user_id}") from e

    async def _raise_best(self, user_id: int, score: int, elapsed_seconds: float) -> bool:
        stmt = (
            update(Score)
            .where(Score.user_id == user_id, Score.score < score)
            .values(score=score, elapsed_seconds=elapsed_seconds, updated_at=datetime.utcnow())
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return bool(result.rowcount)

    async def count_better_than(self, score: int, exclude_user_id: Optional[int] = None) -> int:
        """Count players whose best score is strictly greater"""
        stmt = select(func.count(Score.id)).where(Score.score > score)
        if exclude_user_id is not None:
            stmt = stmt.where(Score.user_id != exclude_user_id)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise ScoreStorageError("Could not count better scores") from e

        return int(result.scalar_one())

    async def get_leaderboard(self, limit: int = 10) -> List[dict]:
        """Get leaderboard data; tied scores share a rank"""
        stmt = (
            select(
                User.id,
                User.nickname,
                Score.score,
                Score.elapsed_seconds,
                Score.updated_at,
            )
            .join(Score, User.id == Score.user_id)
            .order_by(desc(Score.score), Score.updated_at, Score.id)
            .limit(limit)
        )

        try:
            result = await self.db.execute(stmt)
            rows = result.fetchall()
        except SQLAlchemyError as e:
            raise ScoreStorageError("Could not read the leaderboard") from e

        leaderboard = []
        rank = 0
        previous_score = None
        for position, row in enumerate(rows, start=1):
            if row.score != previous_score:
                rank = position
                previous_score = row.score
            leaderboard.append(
                {
                    "rank": rank,
                    "user_id": row.id,
                    "nickname": row.nickname,
                    "score": row.score,
                    "elapsed_seconds": round(row.elapsed_seconds, 1),
                    "achieved_at": row.updated_at,
                }
            )
        return leaderboard

    def _to_entity(self, db_score: Score) -> ScoreRecordEntity:
        """Convert database model to domain entity"""
        return ScoreRecordEntity(
            id=db_score.id,
            user_id=db_score.user_id,
            score=db_score.score,
            elapsed_seconds=db_score.elapsed_seconds,
            created_at=db_score.created_at,
            updated_at=db_score.updated_at,
        )
