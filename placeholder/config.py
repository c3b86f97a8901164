"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from placeholder.paths import PUBLIC_DIR


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    max_dimension: int = Field(default=2000, ge=1, alias="MAX_DIMENSION")
    recent_limit: int = Field(default=10, ge=1, alias="RECENT_LIMIT")
    top_limit: int = Field(default=10, ge=1, alias="TOP_LIMIT")
    static_dir: Path = Field(default=PUBLIC_DIR, alias="STATIC_DIR")
    background_color: str = Field(default="#cccccc", alias="IMAGE_BACKGROUND")
    foreground_color: str = Field(default="#555555", alias="IMAGE_FOREGROUND")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()  # type: ignore[call-arg]
