"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="ZENMAZE_",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Zen Maze"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage for personal bests and career totals
    store_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_sessions: int = 60  # new sessions per minute

    # Levels
    level_count: int = 500
    stable_levels: bool = True  # same maze for a level id on every play
    level_seed_salt: str = "zenmaze"

    # Sessions
    max_sessions: int = 1000

    @field_validator("level_count", "max_sessions", "rate_limit_sessions")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v

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
