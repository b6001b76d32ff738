"""Configuration settings for the wellness scoring engine."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/wellness_engine/config.py
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Engine and service settings loaded from environment variables.

    Every variable is prefixed with ``WELLNESS_``, e.g.
    ``WELLNESS_SCORE_SCALING=12``.
    """

    # Score aggregation: points per unit of summed contribution
    score_scaling: float = 10.0
    readiness_scaling: float = 10.0

    # Contributions smaller than this are reported as neutral
    materiality_threshold: float = 0.25

    # Summed life-event adjustments are clamped to +/- this percentage
    max_life_event_adjustment_pct: float = 50.0

    # A day with at most this many hours worked counts as a rest day
    rest_day_max_hours: float = 1.0

    # Organisation batch scoring
    batch_max_workers: int = 8

    # Logging
    log_level: str = "INFO"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(
        env_prefix="WELLNESS_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
