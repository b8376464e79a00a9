"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")

    # Defaults for simulation
    default_horizon_years: int = Field(default=25, ge=1, le=50)

    # Batch runs
    batch_max_workers: int = Field(default=4, ge=1, le=32, description="Threads used by run_batch")

    model_config = {
        "env_prefix": "ACHATLOC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
