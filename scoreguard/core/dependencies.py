"""FastAPI dependencies for authentication, database and session state"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from scoreguard.core.clock import Clock
from scoreguard.core.security import decode_user_id
from scoreguard.domain.entities.user import Identity, UserEntity
from scoreguard.domain.interfaces.session_store import SessionStoreInterface
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy
from scoreguard.infrastructure.database.connection import get_async_db
from scoreguard.infrastructure.repositories.user_repository import UserRepository

# Missing credentials are reported by the endpoints themselves
security = HTTPBearer(auto_error=False)


async def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials], db: AsyncSession
) -> Optional[UserEntity]:
    if credentials is None:
        return None

    user_id = decode_user_id(credentials.credentials)
    if user_id is None:
        return None

    return await UserRepository(db).get_by_id(user_id)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_db),
) -> UserEntity:
    """Get current authenticated player from JWT token"""
    user = await _resolve_user(credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_db),
) -> Optional[Identity]:
    """Resolve the request's identity, or None for guests and bad tokens"""
    user = await _resolve_user(credentials, db)
    return user.to_identity() if user else None


def get_session_store(request: Request) -> SessionStoreInterface:
    return request.app.state.session_store


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_validation_policy(request: Request) -> ValidationPolicy:
    return request.app.state.validation_policy
