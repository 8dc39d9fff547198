"""User repository interface"""

from abc import ABC, abstractmethod
from typing import Optional

from scoreguard.domain.entities.user import UserEntity


class UserRepositoryInterface(ABC):
    """Interface for user repository"""

    @abstractmethod
    async def create(self, user: UserEntity) -> UserEntity:
        """Create a new user"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_nickname(self, nickname: str) -> Optional[UserEntity]:
        """Get user by nickname (case-insensitive)"""
        pass
