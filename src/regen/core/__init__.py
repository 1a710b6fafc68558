"""
Regen core primitives.

Ambient building blocks shared by the incremental engine and the CLI:

- :mod:`regen.core.cache`       — CacheBackend protocol + memory/file/redis backends
- :mod:`regen.core.config`      — RegenSettings and the backend factory
- :mod:`regen.core.errors`      — typed error hierarchy
- :mod:`regen.core.filesystem`  — FileSystem protocol + LocalFileSystem
- :mod:`regen.core.logging`     — structlog configuration
"""

from regen.core.cache import CacheBackend, FileCache, InMemoryCache, RedisCache
from regen.core.errors import (
    BackendUnavailableError,
    CacheCorruptError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    RegenError,
    StorageError,
)
from regen.core.filesystem import FileSystem, LocalFileSystem

__all__ = [
    "CacheBackend",
    "FileCache",
    "InMemoryCache",
    "RedisCache",
    "BackendUnavailableError",
    "CacheCorruptError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "RegenError",
    "StorageError",
    "FileSystem",
    "LocalFileSystem",
]
