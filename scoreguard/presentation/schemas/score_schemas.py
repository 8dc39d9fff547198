"""Score and leaderboard schemas for request/response validation"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SubmitScoreRequest(BaseModel):
    """Schema for saving the validated result of a session"""

    session_id: str = Field(..., min_length=1, max_length=64, description="Game session ID")


class SubmitScoreResponse(BaseModel):
    """Schema for submit score response"""

    saved: bool
    is_new_record: bool
    rank: int
    best_score: int

    class Config:
        json_schema_extra = {
            "example": {"saved": True, "is_new_record": True, "rank": 3, "best_score": 1250}
        }


class LeaderboardEntry(BaseModel):
    """Schema for leaderboard entry"""

    rank: int
    user_id: int
    nickname: str
    score: int
    elapsed_seconds: float
    achieved_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "rank": 1,
                "user_id": 1,
                "nickname": "ace_pilot",
                "score": 9800,
                "elapsed_seconds": 183.4,
                "achieved_at": "2024-01-01T12:00:00",
            }
        }


class LeaderboardResponse(BaseModel):
    """Schema for leaderboard response"""

    leaderboard: List[LeaderboardEntry]
    total_entries: int
