"""User domain entities"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

NICKNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{2,20}$")
MIN_PASSWORD_LENGTH = 4


@dataclass
class UserEntity:
    """Registered player"""

    id: Optional[int]
    nickname: str
    password_hash: str
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.utcnow()

    def is_valid_nickname(self) -> bool:
        """Letters, digits and underscores, 2-20 characters"""
        return NICKNAME_PATTERN.match(self.nickname) is not None

    def to_identity(self) -> "Identity":
        if self.id is None:
            raise ValueError("Unsaved user has no identity")
        return Identity(id=self.id, display_name=self.nickname)


@dataclass(frozen=True)
class Identity:
    """Authenticated player reference attached to a request"""

    id: int
    display_name: str
