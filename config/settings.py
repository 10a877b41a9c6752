"""
Configuration settings for the lineup advisor scoring and recommendation core.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Rolling windows
    recent_window_weeks: int = Field(default=3, ge=1, env="RECENT_WINDOW_WEEKS")
    efficiency_window_weeks: int = Field(default=3, ge=1, env="EFFICIENCY_WINDOW_WEEKS")

    # Scoring
    volatility_clip: float = Field(default=2.0, gt=0, env="VOLATILITY_CLIP")
    score_precision: int = Field(default=3, ge=0, env="SCORE_PRECISION")
    normalized_precision: int = Field(default=3, ge=0, env="NORMALIZED_PRECISION")

    # Waiver wire
    waiver_grace_week: int = Field(default=2, ge=0, env="WAIVER_GRACE_WEEK")
    waiver_candidates_per_position: int = Field(
        default=3, ge=1, env="WAIVER_CANDIDATES_PER_POSITION"
    )

    # Persistence
    upsert_batch_size: int = Field(default=100, ge=1, env="UPSERT_BATCH_SIZE")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: Path = Field(default=Path("./logs/lineup_advisor.log"), env="LOG_FILE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
