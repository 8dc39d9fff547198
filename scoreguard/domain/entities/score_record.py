"""Score record domain entity"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ScoreRecordEntity:
    """A player's single best score"""

    user_id: int
    score: int
    elapsed_seconds: float
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
