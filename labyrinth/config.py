"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Pillar Labyrinth"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_steps: int = 600  # step/run requests per minute

    # Maze generation
    default_width: int = 31
    default_height: int = 31
    max_width: int = 201
    max_height: int = 201
    max_collapse_attempts: int = 1000

    # Sessions
    max_sessions: int = 100
    max_steps_per_request: int = 1000

    @field_validator("default_width", "default_height")
    @classmethod
    def validate_default_size(cls, v: int) -> int:
        """Mazes need odd dimensions of at least 5."""
        if v < 5 or v % 2 == 0:
            raise ValueError("Default maze dimensions must be odd and at least 5")
        return v

    @field_validator(
        "max_sessions",
        "max_steps_per_request",
        "max_collapse_attempts",
        "rate_limit_steps",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Limits must allow at least one session, step or attempt."""
        if v < 1:
            raise ValueError("Limit must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
