"""Common schemas for API responses"""

from pydantic import BaseModel


class RejectionDetail(BaseModel):
    """Body of `detail` for refused game and score requests"""

    valid: bool = False
    reason: str
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "valid": False,
                "reason": "already_consumed",
                "message": "Session already used, start a new game",
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response schema"""

    status: str = "healthy"
    app: str
    version: str
    timestamp: str
    active_sessions: int
