"""
Configuration settings for quizdrill.

Uses Pydantic Settings for environment variable management with .env file support.
Every setting can be overridden with a QUIZDRILL_ prefixed environment variable,
e.g. QUIZDRILL_REPEAT_POLICY=fixed.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZDRILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level for the CLI sink",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    # ========================================
    # Adaptive Scheduler
    # ========================================
    min_repeat_spacing: int = Field(
        default=2,
        ge=1,
        description="Submissions that must pass before a question may be shown again",
    )
    first_pass_window: int = Field(
        default=4,
        ge=1,
        description="During the first pass, missed questions only resurface if shown within this many submissions",
    )
    repeat_policy: Literal["random", "fixed"] = Field(
        default="random",
        description="How many repeats a recovered question needs: random choice or a fixed count",
    )
    post_correct_repeat_choices: list[int] = Field(
        default=[1, 2],
        description="Repeat counts the random policy chooses from (uniformly)",
    )
    fixed_post_correct_repeats: int = Field(
        default=1,
        ge=1,
        description="Repeat count for the fixed policy (1 = two correct answers after a miss)",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for shuffling and repeat choices (unseeded when empty)",
    )

    # ========================================
    # Practice Sessions
    # ========================================
    default_question_count: int = Field(
        default=20,
        ge=1,
        description="Questions per practice session when --count is not given",
    )
    max_question_count: int = Field(
        default=100,
        ge=1,
        description="Upper bound on questions per practice session",
    )

    @field_validator("post_correct_repeat_choices")
    @classmethod
    def _validate_repeat_choices(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("post_correct_repeat_choices must not be empty")
        if any(choice < 1 for choice in value):
            raise ValueError("post_correct_repeat_choices must all be >= 1")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
