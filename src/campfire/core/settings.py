"""Centralized settings for CampFire.

All fields can be set via ``CAMPFIRE_*`` environment variables (e.g.
``CAMPFIRE_DATABASE_URL=mysql://cfm:secret@db/cfm``) or a ``.env`` file.

Manifesto:
    One validated, cached settings object. The default collaborators of a
    record (database adapter, record cache) and the DDL generator read their
    knobs from here instead of parsing the environment themselves.

Examples:
    >>> from campfire.core.settings import get_settings
    >>> get_settings().mysql_engine
    'MyISAM'

Tags:
    campfire, configuration, settings, pydantic
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CampfireSettings(BaseSettings):
    """CampFire configuration.

    Fields
    ──────
    database_url       : Adapter URL (``sqlite:///...``, ``mysql://...``, ``memory``)
    log_level          : structlog level
    log_json           : JSON logs (None → auto-detect from TTY)
    cache_max_size     : Record cache capacity before LRU eviction
    cache_ttl_seconds  : Record cache TTL (None → entries never expire)
    mysql_engine       : Storage engine named in generated MySQL DDL
    mysql_charset      : Default charset named in generated MySQL DDL
    timestamp_format   : strftime format of the last-modified column
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPFIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    database_url: str = Field(default="sqlite:///data/campfire.db")

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(default=None)

    # ── Cache ────────────────────────────────────────────────────
    cache_max_size: int = Field(default=10_000, ge=1)
    cache_ttl_seconds: int | None = Field(default=None, ge=1)

    # ── Schema ───────────────────────────────────────────────────
    mysql_engine: str = Field(default="MyISAM")
    mysql_charset: str = Field(default="utf8")
    timestamp_format: str = Field(default="%Y-%m-%d %H:%M:%S")


@lru_cache(maxsize=1)
def get_settings() -> CampfireSettings:
    """Retrieve a cached instance of the settings to avoid repeated env parsing."""
    return CampfireSettings()


__all__ = ["CampfireSettings", "get_settings"]
