"""Score submission API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scoreguard.application.use_cases.score_use_cases import SubmitScoreUseCase
from scoreguard.core.config import settings
from scoreguard.core.dependencies import get_optional_identity, get_session_store
from scoreguard.domain.entities.user import Identity
from scoreguard.domain.interfaces.session_store import SessionStoreInterface
from scoreguard.domain.results import Rejected
from scoreguard.infrastructure.database.connection import get_async_db
from scoreguard.infrastructure.repositories.score_repository import ScoreRepository
from scoreguard.presentation.api.rejections import rejection_to_http
from scoreguard.presentation.schemas.common_schemas import RejectionDetail
from scoreguard.presentation.schemas.score_schemas import SubmitScoreRequest, SubmitScoreResponse

router = APIRouter()


@router.post(
    "",
    response_model=SubmitScoreResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": RejectionDetail},
        status.HTTP_401_UNAUTHORIZED: {"model": RejectionDetail},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": RejectionDetail},
    },
    summary="Save score",
    description="Save a validated game result as the player's best if it beats the stored one",
)
async def submit_score(
    request: SubmitScoreRequest,
    identity: Optional[Identity] = Depends(get_optional_identity),
    session_store: SessionStoreInterface = Depends(get_session_store),
    db: AsyncSession = Depends(get_async_db),
) -> SubmitScoreResponse:
    """Reconcile a validated session result with the player's best score"""
    submit_use_case = SubmitScoreUseCase(
        ScoreRepository(db), session_store, settings.session_timeout_seconds
    )

    result = await submit_use_case.execute(identity, request.session_id)
    if isinstance(result, Rejected):
        raise rejection_to_http(result)

    return SubmitScoreResponse(
        saved=result.saved,
        is_new_record=result.is_new_record,
        rank=result.rank,
        best_score=result.best_score,
    )
