"""Centralized configuration for regen.

Quick start::

    from regen.core.config import create_cache_backend, get_settings

    settings = get_settings()
    cache = create_cache_backend(settings)

Architecture::

    settings.py       RegenSettings (Pydantic) + get_settings() cache
    components.py     Backend / log-format enums
    factory.py        create_cache_backend()
"""

from .components import CacheBackendKind, LogFormat
from .factory import create_cache_backend
from .settings import (
    DEFAULT_CACHE_KEY,
    RegenSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CacheBackendKind",
    "LogFormat",
    "DEFAULT_CACHE_KEY",
    "RegenSettings",
    "clear_settings_cache",
    "create_cache_backend",
    "get_settings",
]
