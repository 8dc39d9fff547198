"""Authentication schemas for request/response validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NicknameCheckRequest(BaseModel):
    """Schema for nickname availability check"""

    nickname: str = Field(..., min_length=1, max_length=50)


class NicknameCheckResponse(BaseModel):
    nickname: str
    available: bool


class UserRegisterRequest(BaseModel):
    """Schema for player registration request"""

    nickname: str = Field(
        ...,
        min_length=2,
        max_length=20,
        description="Nickname (2-20 characters, letters, digits and underscores)",
    )
    password: str = Field(..., min_length=4, max_length=72, description="Password (4-72 characters)")

    class Config:
        json_schema_extra = {"example": {"nickname": "ace_pilot", "password": "hunter2"}}


class UserLoginRequest(BaseModel):
    """Schema for player login request"""

    nickname: str = Field(..., description="Nickname")
    password: str = Field(..., description="Password")

    class Config:
        json_schema_extra = {"example": {"nickname": "ace_pilot", "password": "hunter2"}}


class UserResponse(BaseModel):
    """Schema for player data in responses"""

    id: int
    nickname: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Schema for login and registration response"""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileResponse(UserResponse):
    """Schema for the current player's profile with leaderboard standing"""

    best_score: Optional[int] = None
    rank: Optional[int] = None
