from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Settings are loaded from environment variables with optional .env file override.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects log rendering."""

    DEBUG: bool = True
    """Enable debug mode: verbose logging."""

    # Bank registry source
    BANKS_FILE: Optional[str] = None
    """Path to a banks JSON file. If None, the packaged registry is used."""

    BANKS_URL: Optional[str] = None
    """URL serving the banks JSON. Takes precedence over BANKS_FILE."""

    BANKS_HTTP_TIMEOUT: float = 10.0
    """Timeout in seconds when fetching the registry from BANKS_URL."""

    # Suggestion limits
    MAX_TIER1_RESULTS: int = 4
    """Maximum number of Tier 1 banks in a suggestion."""

    MAX_TIER2_RESULTS: int = 2
    """Maximum number of Tier 2 banks in a suggestion."""

    MINIMUM_SUGGESTIONS: int = 3
    """Backfill from non-tiered banks until this many suggestions exist."""

    MAXIMUM_SUGGESTIONS: int = 6
    """Hard cap on the number of suggestions returned."""

    # Model config
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
