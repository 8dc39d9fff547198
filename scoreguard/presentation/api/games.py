"""Game session API endpoints"""

import logging

from fastapi import APIRouter, Depends, status

from scoreguard.application.use_cases.game_use_cases import EndGameUseCase, StartGameUseCase
from scoreguard.core.clock import Clock
from scoreguard.core.config import settings
from scoreguard.core.dependencies import get_clock, get_session_store, get_validation_policy
from scoreguard.domain.interfaces.session_store import SessionStoreInterface
from scoreguard.domain.results import Rejected
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy
from scoreguard.presentation.api.rejections import rejection_to_http
from scoreguard.presentation.schemas.common_schemas import RejectionDetail
from scoreguard.presentation.schemas.game_schemas import (
    EndGameRequest,
    EndGameResponse,
    StartGameResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/start",
    response_model=StartGameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start new game session",
    description="Open a single-use session; the server starts timing the game now.",
)
async def start_game(
    session_store: SessionStoreInterface = Depends(get_session_store),
    policy: ValidationPolicy = Depends(get_validation_policy),
) -> StartGameResponse:
    """Start a new game session"""
    session = StartGameUseCase(session_store).execute()

    return StartGameResponse(session_id=session.id, min_game_time=policy.min_game_time)


@router.post(
    "/end",
    response_model=EndGameResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": RejectionDetail}},
    summary="End game session",
    description="Report the final score; the server validates it against elapsed time",
)
async def end_game(
    request: EndGameRequest,
    session_store: SessionStoreInterface = Depends(get_session_store),
    clock: Clock = Depends(get_clock),
    policy: ValidationPolicy = Depends(get_validation_policy),
) -> EndGameResponse:
    """Validate the reported score and consume the session"""
    end_game_use_case = EndGameUseCase(
        session_store, clock, policy, settings.session_timeout_seconds
    )

    result = end_game_use_case.execute(request.session_id, request.score)
    if isinstance(result, Rejected):
        raise rejection_to_http(result)

    return EndGameResponse(
        session_id=request.session_id,
        score=result.score,
        elapsed_seconds=round(result.elapsed_seconds, 1),
    )
