"""Leaderboard API endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scoreguard.application.use_cases.score_use_cases import GetLeaderboardUseCase
from scoreguard.core.config import settings
from scoreguard.infrastructure.database.connection import get_async_db
from scoreguard.infrastructure.repositories.score_repository import ScoreRepository
from scoreguard.presentation.schemas.score_schemas import LeaderboardEntry, LeaderboardResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=LeaderboardResponse,
    summary="Get leaderboard",
    description="Get top players ranked by best score; tied scores share a rank",
)
async def get_leaderboard(
    limit: int = Query(
        default=settings.leaderboard_top_count,
        ge=1,
        le=100,
        description="Number of top players to return (1-100)",
    ),
    db: AsyncSession = Depends(get_async_db),
) -> LeaderboardResponse:
    """Get leaderboard with top players"""
    try:
        leaderboard_use_case = GetLeaderboardUseCase(ScoreRepository(db))
        leaderboard_data = await leaderboard_use_case.execute(limit)
    except Exception as e:
        logger.error(f"Error fetching leaderboard: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching leaderboard",
        )

    entries = [LeaderboardEntry(**entry) for entry in leaderboard_data]
    return LeaderboardResponse(leaderboard=entries, total_entries=len(entries))
