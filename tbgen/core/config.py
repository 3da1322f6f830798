"""
Configuration for tbgen.

Strongly-typed settings using Pydantic v2 BaseSettings. Defaults match the
Thunderbird ESR channels covered by the add-on reports; values can be
overridden via environment variables or a .env file at the project root.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (.env supported)."""

    # Load from .env at repo root; ignore unknown variables to keep flexibility
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # -------------------------------------------------------------------------
    # Core info
    # -------------------------------------------------------------------------
    APP_NAME: str = "tbgen"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # -------------------------------------------------------------------------
    # Add-on reports
    # -------------------------------------------------------------------------
    # Thunderbird ESR channels, oldest first
    RELEASE_CHANNELS: list[str] = ["60", "68", "78", "91", "102"]
    RECENT_ACTIVITY_DAYS: int = 14
    NAME_MAX_LENGTH: int = 38
    EXPERIMENT_TOOLTIP_LIMIT: int = 14
    # Source of the alternative add-on data (fetched by the caller)
    ALTERNATIVE_DATA_URL: str = (
        "https://raw.githubusercontent.com/thundernest/extension-finder/master/data.yaml"
    )

    # -------------------------------------------------------------------------
    # Policy templates
    # -------------------------------------------------------------------------
    COMPAT_PRODUCT_NAME: str = "Thunderbird"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance (singleton-like)."""
    return Settings()
