"""
Settings for Plazoo services.

All configuration comes from environment variables. Values are read once
and cached; call ``get_settings.cache_clear()`` after changing the
environment (tests do this through a fixture).
"""

import functools
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    DATABASE_URL: str
    REDIS_URL: str
    BACKEND_URL: str
    BACKEND_ANON_KEY: str
    HTTP_TIMEOUT: float
    SELECTION_KEY_PREFIX: str
    SELECTION_TTL_SECONDS: int | None
    LOG_LEVEL: str
    LOG_FORMAT: str


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@functools.lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Defaults are only suitable for local development.
    """
    return Settings(
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./plazoo.db"),
        REDIS_URL=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        BACKEND_URL=os.getenv("BACKEND_URL", "http://localhost:54321").rstrip("/"),
        BACKEND_ANON_KEY=os.getenv("BACKEND_ANON_KEY", ""),
        HTTP_TIMEOUT=float(os.getenv("HTTP_TIMEOUT", "10")),
        SELECTION_KEY_PREFIX=os.getenv("SELECTION_KEY_PREFIX", "plazoo:selection"),
        SELECTION_TTL_SECONDS=_optional_int(os.getenv("SELECTION_TTL_SECONDS")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FORMAT=os.getenv("LOG_FORMAT", "text").lower(),
    )
