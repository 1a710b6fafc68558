"""
Factory functions that create component instances from settings.

Manifesto:
    The factory uses lazy imports so that the optional ``redis``
    dependency is only loaded when the corresponding backend is actually
    selected.

Tags:
    regen, configuration, factory-pattern, lazy-imports, redis

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .components import CacheBackendKind

if TYPE_CHECKING:
    from regen.core.cache import CacheBackend

    from .settings import RegenSettings


def create_cache_backend(settings: RegenSettings) -> CacheBackend:
    """Create the fingerprint cache backend selected by *settings.cache_backend*.

    Raises:
        BackendUnavailableError: ``redis`` selected but not installed.
    """
    match settings.cache_backend:
        case CacheBackendKind.MEMORY:
            from regen.core.cache import InMemoryCache

            return InMemoryCache()
        case CacheBackendKind.FILE:
            from regen.core.cache import FileCache

            return FileCache(settings.cache_dir)
        case CacheBackendKind.REDIS:
            from regen.core.cache import RedisCache

            return RedisCache(settings.redis_url)
