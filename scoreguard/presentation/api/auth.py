"""Authentication API endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scoreguard.application.use_cases.auth_use_cases import (
    CheckNicknameUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from scoreguard.application.use_cases.score_use_cases import GetPlayerStandingUseCase
from scoreguard.core.dependencies import get_current_user
from scoreguard.domain.entities.user import UserEntity
from scoreguard.infrastructure.database.connection import get_async_db
from scoreguard.infrastructure.repositories.score_repository import ScoreRepository
from scoreguard.infrastructure.repositories.user_repository import UserRepository
from scoreguard.presentation.schemas.auth_schemas import (
    LoginResponse,
    NicknameCheckRequest,
    NicknameCheckResponse,
    ProfileResponse,
    UserLoginRequest,
    UserRegisterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/check-nickname",
    response_model=NicknameCheckResponse,
    summary="Check nickname",
    description="Tell whether a nickname is free, so the client can offer register or login",
)
async def check_nickname(
    request: NicknameCheckRequest, db: AsyncSession = Depends(get_async_db)
) -> NicknameCheckResponse:
    available = await CheckNicknameUseCase(UserRepository(db)).execute(request.nickname)
    return NicknameCheckResponse(nickname=request.nickname.strip(), available=available)


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new player",
    description="Create a player account and receive a JWT access token",
)
async def register(
    user_data: UserRegisterRequest, db: AsyncSession = Depends(get_async_db)
) -> LoginResponse:
    """Register a new player"""
    try:
        register_use_case = RegisterUserUseCase(UserRepository(db))
        result = await register_use_case.execute(
            nickname=user_data.nickname, password=user_data.password
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid registration data: {e}",
        )

    logger.info(f"Registered player {result['user']['nickname']}")
    return LoginResponse(**result)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Player login",
    description="Authenticate player and receive JWT access token",
)
async def login(
    credentials: UserLoginRequest, db: AsyncSession = Depends(get_async_db)
) -> LoginResponse:
    """Authenticate player and return access token"""
    try:
        login_use_case = LoginUserUseCase(UserRepository(db))
        result = await login_use_case.execute(
            nickname=credentials.nickname, password=credentials.password
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return LoginResponse(**result)


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    description="Get the current player's profile, best score and rank",
)
async def get_profile(
    current_user: UserEntity = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> ProfileResponse:
    """Get current player's profile"""
    standing = await GetPlayerStandingUseCase(ScoreRepository(db)).execute(current_user.id)

    return ProfileResponse(
        id=current_user.id,
        nickname=current_user.nickname,
        created_at=current_user.created_at,
        best_score=standing["best_score"],
        rank=standing["rank"],
    )
