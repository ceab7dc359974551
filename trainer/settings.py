"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and
validation. Every variable is read with the TRAINER_ prefix, e.g.
TRAINER_DATA_DIR=/tmp/trainer.

Usage:
    from trainer.settings import get_settings

    settings = get_settings()
    print(settings.data_path)
"""

import logging
import pathlib
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRAINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name (DEBUG, INFO, WARNING, ERROR)",
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    data_dir: str = Field(
        default="~/.adaptive-trainer",
        description="Directory holding workouts.json, history.json and profile.json",
    )
    catalog_path: Optional[str] = Field(
        default=None,
        description="Exercise catalog YAML (bundled catalog when unset)",
    )

    # -------------------------------------------------------------------------
    # Workout Generation
    # -------------------------------------------------------------------------
    extra_exercise_probability: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Chance of adding a fourth exercise to a workout",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible exercise selection",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def data_path(self) -> pathlib.Path:
        """data_dir with ~ expanded."""
        return pathlib.Path(self.data_dir).expanduser()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
