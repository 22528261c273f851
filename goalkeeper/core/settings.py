"""Configuration loaded from GOALS_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class GoalsSettings(BaseSettings):
    """Goalkeeper settings.

    All fields are read from environment variables with the ``GOALS_`` prefix.
    For example, ``GOALS_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    The layout inside a workspace (``.goals/state.json`` and friends) is a
    fixed on-disk contract and is not configurable.
    """

    model_config = SettingsConfigDict(
        env_prefix="GOALS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    data_root: Path = Path.home() / ".goals"
    """Directory holding ``workspaces.json``."""


def get_settings() -> GoalsSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> GoalsSettings:
    return GoalsSettings()
