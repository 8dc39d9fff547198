"""Game session schemas for request/response validation"""

from pydantic import BaseModel, Field


class StartGameResponse(BaseModel):
    """Schema for start game response"""

    session_id: str
    min_game_time: float
    message: str = "Game started! Good luck."

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "9f86d081884c7d659a2feaa0c55ad015",
                "min_game_time": 3.0,
                "message": "Game started! Good luck.",
            }
        }


class EndGameRequest(BaseModel):
    """Schema for reporting the final score of a session"""

    session_id: str = Field(..., min_length=1, max_length=64, description="Game session ID")
    score: int = Field(..., ge=0, description="Final score reported by the client")

    class Config:
        json_schema_extra = {
            "example": {"session_id": "9f86d081884c7d659a2feaa0c55ad015", "score": 1250}
        }


class EndGameResponse(BaseModel):
    """Schema for an accepted game result"""

    valid: bool = True
    session_id: str
    score: int
    elapsed_seconds: float

    class Config:
        json_schema_extra = {
            "example": {
                "valid": True,
                "session_id": "9f86d081884c7d659a2feaa0c55ad015",
                "score": 1250,
                "elapsed_seconds": 42.7,
            }
        }
