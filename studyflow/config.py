"""
Configuration settings for the studyflow engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every field is prefixed with STUDYFLOW_ in the environment, e.g.
STUDYFLOW_BALANCE_TARGET_HOURS=3.5.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from studyflow.core import constants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STUDYFLOW_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Workload Analysis
    # ========================================
    overloaded_day_hours: float = Field(
        default=constants.OVERLOADED_DAY_HOURS,
        description="Days above this many hours are reported as overloaded",
    )
    underutilized_day_hours: float = Field(
        default=constants.UNDERUTILIZED_DAY_HOURS,
        description="Days with some work but below this many hours are underutilized",
    )
    heavy_difficulty_ratio: float = Field(
        default=constants.HEAVY_DIFFICULTY_RATIO,
        description="Difficulty-weighted / raw hours ratio that flags a heavy week",
    )
    uneven_peak_ratio: float = Field(
        default=constants.UNEVEN_PEAK_RATIO,
        description="Peak / average daily load ratio that flags an uneven week",
    )

    # ========================================
    # Conflicts & Balancing
    # ========================================
    conflict_overload_hours: float = Field(
        default=constants.CONFLICT_OVERLOAD_HOURS,
        description="Daily hours above which an overload conflict is raised",
    )
    balance_target_hours: float = Field(
        default=constants.BALANCE_TARGET_HOURS,
        description="Default per-day ceiling used by the workload balancer",
    )
    balance_lookahead_days: int = Field(
        default=constants.BALANCE_LOOKAHEAD_DAYS,
        ge=1,
        description="How many days ahead the balancer searches for room",
    )

    # ========================================
    # Difficulty Adapter
    # ========================================
    difficulty_window_size: int = Field(
        default=constants.DIFFICULTY_WINDOW_SIZE,
        ge=1,
        description="Rolling answer window used for session accuracy",
    )
    difficulty_min_samples: int = Field(
        default=constants.DIFFICULTY_MIN_SAMPLES,
        description="Answers required before any adjustment is suggested",
    )
    difficulty_up_streak: int = Field(
        default=constants.DIFFICULTY_UP_STREAK,
        description="Consecutive correct answers needed to step up",
    )
    difficulty_up_accuracy: float = Field(
        default=constants.DIFFICULTY_UP_ACCURACY,
        description="Window accuracy needed to step up",
    )
    difficulty_down_streak: int = Field(
        default=constants.DIFFICULTY_DOWN_STREAK,
        description="Consecutive wrong answers that force a step down",
    )
    difficulty_down_accuracy: float = Field(
        default=constants.DIFFICULTY_DOWN_ACCURACY,
        description="Window accuracy below which the level steps down",
    )
    difficulty_down_min_samples: int = Field(
        default=constants.DIFFICULTY_DOWN_MIN_SAMPLES,
        description="Answers required before low accuracy alone steps down",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
