"""
Environment-based configuration management for transcript-sync.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The synchronizer, display helpers and logging
setup read their defaults from this module.

All environment variables are prefixed with ``TS_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``TS_``-prefixed environment variables.

    Attributes:
        smooth_scroll_ms: Duration of an animated scroll to the active line.
        seek_margin_ms: Offset added to a line's start when the user taps it.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON (False = console renderer).
    """

    model_config = SettingsConfigDict(
        env_prefix="TS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Scrolling ──
    smooth_scroll_ms: int = Field(
        default=100,
        gt=0,
        description="Duration of an animated scroll to the active line.",
    )

    # ── Seeking ──
    seek_margin_ms: int = Field(
        default=1000,
        ge=0,
        description="Offset added to a line's start when the user taps it.",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Render log lines as JSON.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
