"""
Centralized settings for regen.

Manifesto:
    One validated, cached settings object decides where fingerprints are
    kept and whether a run is incremental at all. The engine itself never
    reads the environment; the facade and the CLI hand it plain values
    taken from here.

All fields can be set via ``REGEN_*`` environment variables (e.g.
``REGEN_INCREMENTAL=true``) or through a ``.env`` file.

Tags:
    regen, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from regen.core.errors import InvalidConfigError

from .components import CacheBackendKind, LogFormat

#: Key under which the whole path → fingerprint mapping is persisted.
DEFAULT_CACHE_KEY = "regen:regenerator:metadata"


class RegenSettings(BaseSettings):
    """Regen centralized configuration.

    Fields
    ──────
    incremental    : Persist fingerprints at end of run (off by default)
    cache_backend  : Where fingerprints live between runs
    cache_dir      : Directory for the ``file`` backend
    cache_key      : Key of the fingerprint mapping inside the backend
    redis_url      : Connection URL for the ``redis`` backend
    log_level      : Structlog log level
    log_format     : ``console`` or ``json``
    """

    model_config = SettingsConfigDict(
        env_prefix="REGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Incremental mode ─────────────────────────────────────────
    incremental: bool = Field(default=False)

    # ── Fingerprint cache ────────────────────────────────────────
    cache_backend: CacheBackendKind = Field(default=CacheBackendKind.FILE)
    cache_dir: Path = Field(
        default=Path(".regen-cache"),
        description="Directory holding the file-backed fingerprint cache",
    )
    cache_key: str = Field(default=DEFAULT_CACHE_KEY)

    # ── Redis ────────────────────────────────────────────────────
    redis_url: str = Field(default="redis://localhost:6379/0")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: LogFormat = Field(default=LogFormat.CONSOLE)

    @field_validator("cache_key")
    @classmethod
    def _cache_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("cache_key must not be blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, RegenSettings] = {}


def get_settings(*, _force_reload: bool = False) -> RegenSettings:
    """Load, validate, and cache a :class:`RegenSettings` instance.

    Parameters
    ----------
    _force_reload:
        Bypass cache and reload from the environment.

    Raises
    ------
    InvalidConfigError
        If a ``REGEN_*`` variable (or ``.env`` entry) fails validation.
        The first failing field is reported.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    try:
        settings = RegenSettings()
    except ValidationError as exc:
        error = exc.errors()[0]
        key = ".".join(str(part) for part in error["loc"]) or "settings"
        raise InvalidConfigError(
            key,
            error.get("input"),
            f"Invalid value for '{key}': {error.get('input')!r} ({error['msg']})",
        ) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
