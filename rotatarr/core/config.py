"""Configuration management for Rotatarr."""

from functools import lru_cache
from typing import Literal

from pydantic import PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # TMDB
    tmdb_api_key: str | None = None
    # Regions checked in order for flatrate (subscription) availability
    tmdb_regions: list[str] = ["US", "GB", "CA"]
    tmdb_cache_ttl: PositiveInt = 1800  # Seconds to keep TMDB details cached

    # Database
    database_url: str = "sqlite:///./rotatarr.db"

    # Branding used in reminder messages
    app_name: str = "Rotatarr"
    app_url: str = "http://localhost:8000"

    # App settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False

    @field_validator("tmdb_regions")
    @classmethod
    def validate_regions(cls, v: list[str]) -> list[str]:
        regions = [r.strip().upper() for r in v if r.strip()]
        for region in regions:
            if len(region) != 2 or not region.isalpha():
                raise ValueError(
                    f"Region '{region}' must be a two-letter ISO 3166-1 code"
                )
        return regions

    @field_validator("app_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
