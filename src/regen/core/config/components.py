"""
Component backend enumerations.

Each enum represents a pluggable dimension of a regen run. Settings
fields are typed with these enums so an unknown value fails validation
at startup instead of deep inside a build.

Example::

    from regen.core.config.components import CacheBackendKind

    CacheBackendKind("file")    # CacheBackendKind.FILE
"""

from __future__ import annotations

from enum import Enum


class CacheBackendKind(str, Enum):
    """Supported fingerprint cache backends."""

    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"


class LogFormat(str, Enum):
    """Supported log renderers."""

    CONSOLE = "console"
    JSON = "json"
