"""Score repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from scoreguard.domain.entities.score_record import ScoreRecordEntity


class ScoreRepositoryInterface(ABC):
    """Interface for the persistent best-score store (one row per player)"""

    @abstractmethod
    async def get_best(self, user_id: int) -> Optional[ScoreRecordEntity]:
        """Get a player's best score record"""
        pass

    @abstractmethod
    async def upsert_best(self, user_id: int, score: int, elapsed_seconds: float) -> bool:
        """Insert or raise a player's best; returns False if not higher than stored"""
        pass

    @abstractmethod
    async def count_better_than(self, score: int, exclude_user_id: Optional[int] = None) -> int:
        """Count players whose best score is strictly greater"""
        pass

    @abstractmethod
    async def get_leaderboard(self, limit: int = 10) -> List[dict]:
        """Get leaderboard data"""
        pass
