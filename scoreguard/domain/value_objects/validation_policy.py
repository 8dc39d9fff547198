"""Validation policy value object"""

from dataclasses import dataclass
from typing import Union

from scoreguard.core.config import Settings


@dataclass(frozen=True)
class ValidationPolicy:
    """Tunable limits for judging whether a reported score is plausible"""

    min_game_time: float = 3.0  # seconds
    max_score_per_second: float = 150.0

    def __post_init__(self) -> None:
        """Validate policy"""
        if self.min_game_time < 0:
            raise ValueError("Minimum game time cannot be negative")
        if self.max_score_per_second <= 0:
            raise ValueError("Maximum score rate must be positive")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationPolicy":
        """Create the policy from application settings"""
        return cls(
            min_game_time=settings.min_game_time,
            max_score_per_second=settings.max_score_per_second,
        )

    def max_score_for(self, elapsed_seconds: Union[int, float]) -> float:
        """Highest score reachable in the given time"""
        return elapsed_seconds * self.max_score_per_second

    def __str__(self) -> str:
        return f">= {self.min_game_time}s, <= {self.max_score_per_second} points/s"
