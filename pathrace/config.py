"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="PATHRACE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Path Race"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080,http://127.0.0.1:5500"

    # Rate limiting
    rate_limit_requests: int = 100  # requests per minute for control endpoints
    rate_limit_ticks: int = 600  # manual tick requests per minute

    # Maze defaults
    default_grid_size: int = 75
    default_obstacle_probability: float = 0.2
    max_grid_size: int = 200
    random_seed: Optional[int] = None

    # Background ticker
    auto_tick: bool = True
    tick_interval_ms: int = 16
    steps_per_tick: int = 3

    @field_validator("default_obstacle_probability")
    @classmethod
    def validate_obstacle_probability(cls, v: float) -> float:
        """Obstacle probability must be a valid probability."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("PATHRACE_DEFAULT_OBSTACLE_PROBABILITY must be within [0, 1]")
        return v

    @field_validator("default_grid_size", "max_grid_size", "tick_interval_ms", "steps_per_tick")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sizes and intervals must be positive."""
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def tick_interval_seconds(self) -> float:
        """Ticker sleep between rounds."""
        return self.tick_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
