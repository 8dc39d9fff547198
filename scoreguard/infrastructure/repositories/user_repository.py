"""User repository implementation"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from scoreguard.domain.entities.user import UserEntity
from scoreguard.domain.interfaces.user_repository import UserRepositoryInterface
from scoreguard.infrastructure.database.models import User


class UserRepository(UserRepositoryInterface):
    """Async SQLAlchemy implementation of user repository"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Create a new user"""
        db_user = User(
            nickname=user_entity.nickname,
            password_hash=user_entity.password_hash,
        )

        try:
            self.db.add(db_user)
            await self.db.commit()
            await self.db.refresh(db_user)
        except IntegrityError:
            await self.db.rollback()
            raise ValueError("Nickname already taken")

        return self._to_entity(db_user)

    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        db_user = result.scalar_one_or_none()
        return self._to_entity(db_user) if db_user else None

    async def get_by_nickname(self, nickname: str) -> Optional[UserEntity]:
        """Get user by nickname, ignoring case"""
        stmt = select(User).where(func.lower(User.nickname) == nickname.lower())
        result = await self.db.execute(stmt)
        db_user = result.scalars().first()
        return self._to_entity(db_user) if db_user else None

    def _to_entity(self, db_user: User) -> UserEntity:
        """Convert database model to domain entity"""
        return UserEntity(
            id=db_user.id,
            nickname=db_user.nickname,
            password_hash=db_user.password_hash,
            created_at=db_user.created_at,
        )
