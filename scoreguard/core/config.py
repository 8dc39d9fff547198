"""Application configuration settings"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    database_url: str = Field(default="sqlite:///./scoreguard.db", env="DATABASE_URL")
    database_busy_timeout: float = Field(default=5.0, env="DATABASE_BUSY_TIMEOUT")  # seconds

    # Security
    secret_key: str = Field(default="your-secret-key-here-change-in-production", env="SECRET_KEY")
    algorithm: str = Field(default="HS256", env="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24 * 30, env="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Application
    app_name: str = Field(default="ScoreGuard", env="APP_NAME")
    debug: bool = Field(default=False, env="DEBUG")
    version: str = Field(default="0.1.0", env="VERSION")

    # Anti-cheat validation
    min_game_time: float = Field(default=3.0, env="MIN_GAME_TIME")  # seconds
    max_score_per_second: float = Field(default=150.0, env="MAX_SCORE_PER_SECOND")
    expose_rejection_reason: bool = Field(default=True, env="EXPOSE_REJECTION_REASON")

    # Game sessions
    session_timeout_minutes: int = Field(default=60, env="SESSION_TIMEOUT_MINUTES")
    session_sweep_interval_minutes: int = Field(default=10, env="SESSION_SWEEP_INTERVAL_MINUTES")

    # Leaderboard
    leaderboard_top_count: int = Field(default=10, env="LEADERBOARD_TOP_COUNT")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def session_timeout_seconds(self) -> float:
        """Maximum session age in seconds"""
        return self.session_timeout_minutes * 60.0

    @property
    def session_sweep_interval_seconds(self) -> float:
        """Seconds between background sweeps"""
        return self.session_sweep_interval_minutes * 60.0


# Global settings instance
settings = Settings()
