"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Roster Match"
    app_version: str = "0.1.0"
    log_level: str = Field(default="INFO")

    # Matching thresholds (0-100 scale)
    candidate_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Minimum name score for a fuzzy candidate to be kept",
    )
    medium_threshold: int = Field(default=70, ge=0, le=100)
    high_threshold: int = Field(
        default=85,
        ge=0,
        le=100,
        description="Top score at or above which a suggestion is auto-assigned",
    )
    max_candidates: int = Field(default=5, ge=1)
    match_inactive: bool = Field(
        default=True,
        description="Whether deactivated known records are eligible for matching",
    )

    # Ingest
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    # Persistence collaborator
    persist_timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {
        "env_prefix": "ROSTER_MATCH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
