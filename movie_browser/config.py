"""Central configuration for movie_browser."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


def _float_env(name: str, default: float) -> float:
    """Read a float from the environment, falling back on missing/invalid values."""
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _int_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    try:
        return int(raw) if raw else default
    except Exception:
        return default


@dataclass
class Settings:
    """Configuration settings for movie_browser.

    All settings are loaded from environment variables with sensible defaults.
    """

    API_URL: str
    API_TIMEOUT_S: float
    CACHE_TTL_S: float
    LIST_DEBOUNCE_S: float
    SUGGEST_DEBOUNCE_S: float
    DEFAULT_LIMIT: int
    ADMIN_KEY: str | None


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to the defaults.
    """
    api_url = (os.environ.get("MOVIE_API_URL") or DEFAULT_API_URL).rstrip("/")
    return Settings(
        API_URL=api_url,
        API_TIMEOUT_S=_float_env("MOVIE_API_TIMEOUT_S", 5.0),
        CACHE_TTL_S=_float_env("MOVIE_CACHE_TTL_S", 300.0),
        LIST_DEBOUNCE_S=_float_env("MOVIE_LIST_DEBOUNCE_S", 0.15),
        SUGGEST_DEBOUNCE_S=_float_env("MOVIE_SUGGEST_DEBOUNCE_S", 0.3),
        DEFAULT_LIMIT=_int_env("MOVIE_DEFAULT_LIMIT", 12),
        ADMIN_KEY=os.environ.get("MOVIE_ADMIN_KEY") or None,
    )


settings = _read_settings()


def validate_settings() -> None:
    """Log warnings for configuration that will make some calls fail."""
    if settings.ADMIN_KEY is None:
        logger.warning("MOVIE_ADMIN_KEY is not set; admin calls need an explicit key.")
    if settings.API_TIMEOUT_S <= 0:
        logger.warning("MOVIE_API_TIMEOUT_S is not positive; requests may never time out.")


# Exported constants
API_URL: str = settings.API_URL
API_TIMEOUT_S: float = settings.API_TIMEOUT_S
CACHE_TTL_S: float = settings.CACHE_TTL_S
LIST_DEBOUNCE_S: float = settings.LIST_DEBOUNCE_S
SUGGEST_DEBOUNCE_S: float = settings.SUGGEST_DEBOUNCE_S
DEFAULT_LIMIT: int = settings.DEFAULT_LIMIT
ADMIN_KEY: str | None = settings.ADMIN_KEY
