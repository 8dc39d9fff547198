"""Authentication use cases"""

from scoreguard.core.security import create_token_for_user, get_password_hash, verify_password
from scoreguard.domain.entities.user import MIN_PASSWORD_LENGTH, UserEntity
from scoreguard.domain.interfaces.user_repository import UserRepositoryInterface


class CheckNicknameUseCase:
    """Use case for checking whether a nickname is free"""

    def __init__(self, user_repository: UserRepositoryInterface):
        self.user_repository = user_repository

    async def execute(self, nickname: str) -> bool:
        return await self.user_repository.get_by_nickname(nickname.strip()) is None


class RegisterUserUseCase:
    """Use case for player registration"""

    def __init__(self, user_repository: UserRepositoryInterface):
        self.user_repository = user_repository

    async def execute(self, nickname: str, password: str) -> dict:
        """Register a new player and log them in"""
        user_entity = UserEntity(
            id=None,
            nickname=nickname.strip(),
            password_hash="",
        )

        if not user_entity.is_valid_nickname():
            raise ValueError("Invalid nickname format")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if await self.user_repository.get_by_nickname(user_entity.nickname):
            raise ValueError("Nickname already taken")

        user_entity.password_hash = get_password_hash(password)
        user = await self.user_repository.create(user_entity)

        return _token_response(user)


class LoginUserUseCase:
    """Use case for player login"""

    def __init__(self, user_repository: UserRepositoryInterface):
        self.user_repository = user_repository

    async def execute(self, nickname: str, password: str) -> dict:
        """Authenticate player and return token"""
        user = await self.user_repository.get_by_nickname(nickname.strip())
        if not user:
            raise ValueError("Invalid credentials")

        if not verify_password(password, user.password_hash):
            raise ValueError("Invalid credentials")

        return _token_response(user)


def _token_response(user: UserEntity) -> dict:
    return {
        "access_token": create_token_for_user(user.id, user.nickname),
        "token_type": "bearer",
        "user": {
            "id": user.id,
            "nickname": user.nickname,
            "created_at": user.created_at,
        },
    }
