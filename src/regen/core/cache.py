"""
Caching abstraction with multiple backend implementations.

Provides a unified ``CacheBackend`` protocol with in-memory, on-disk and
Redis implementations. The fingerprint store keeps its whole
path → record mapping under a single key in one of these backends, so
the mapping survives from one build run to the next.

Manifesto:
    Incremental builds are only as good as the memory they keep between
    runs. Where that memory lives (a directory next to the site, a shared
    Redis for CI runners, plain process memory in tests) is a deployment
    decision, not an engine decision.

    - **Protocol-based:** CacheBackend defines the contract
    - **Durable by default:** FileCache survives process restarts
    - **Zero config:** InMemoryCache works out of the box for tests

Architecture:
    ::

        CacheBackend (Protocol)
        ├── InMemoryCache  — single-process dict
        ├── FileCache      — one JSON document per key on disk
        └── RedisCache     — distributed, persistent (optional extra)

        API: get(key) → value | None
             set(key, value)
             delete(key)
             exists(key) → bool
             clear()

Examples:
    >>> from regen.core.cache import FileCache
    >>> cache = FileCache(".regen-cache")
    >>> cache.set("regen:regenerator:metadata", {"index.md": {...}})
    >>> cache.exists("regen:regenerator:metadata")
    True

Guardrails:
    ❌ DON'T: Use InMemoryCache when builds must be incremental across runs
    ✅ DO: Use FileCache (local) or RedisCache (shared CI runners)

    ❌ DON'T: Store non-JSON values (sets, datetimes) directly
    ✅ DO: Serialize to plain dicts/lists first

Tags:
    cache, caching, redis, file, in-memory, regen, protocol

Doc-Types:
    - API Reference
    - Infrastructure Guide
"""

from __future__ import annotations

import hashlib
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Protocol

from regen.core.errors import BackendUnavailableError, CacheCorruptError, StorageError


class CacheBackend(Protocol):
    """Protocol for cache backend implementations.

    Keys are strings, values are JSON-serializable.

    Implementations:
        - :class:`InMemoryCache` — single-process dict
        - :class:`FileCache` — directory of JSON documents
        - :class:`RedisCache` — distributed, Redis-backed cache
    """

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key.

        Returns:
            Cached value (deserialized), or ``None`` if not found.

        Raises:
            CacheCorruptError: If a stored payload cannot be decoded.
            StorageError: If the backend cannot be read.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. No-op if the key does not exist."""
        ...

    def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ...

    def clear(self) -> None:
        """Remove all keys from the cache."""
        ...


# ------------------------------------------------------------------ #
# In-Memory Cache
# ------------------------------------------------------------------ #


class InMemoryCache:
    """Process-local cache.

    Values are stored by reference, so a mapping handed to :meth:`set` and
    later mutated is mutated in the cache too.

    Example:
        cache = InMemoryCache()
        cache.set("regen:regenerator:metadata", {})
    """

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        self._store[key] = value

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        self._store.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._store

    def clear(self) -> None:
        """Remove all keys."""
        self._store.clear()

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)


# ------------------------------------------------------------------ #
# File Cache
# ------------------------------------------------------------------ #


class FileCache:
    """Directory-backed cache, one JSON document per key.

    File names are the SHA-256 of the key, so arbitrary keys (including
    ``:`` and ``/``) are safe on every filesystem. Each document is an
    envelope ``{"key": ..., "value": ...}`` written via a temp file and
    ``os.replace`` so a crashed write never leaves a half-written document
    behind.

    Example:
        cache = FileCache(Path(".regen-cache"))
        cache.set("regen:regenerator:metadata", {"about.md": {...}})
    """

    suffix = ".json"

    def __init__(self, directory: str | os.PathLike[str]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Return the document path backing *key*."""
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}{self.suffix}"

    def _read(self, key: str) -> dict[str, Any] | None:
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read cache document {path}", cause=exc).with_context(
                backend="file", cache_key=key
            ) from exc

        try:
            envelope = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CacheCorruptError(f"Cache document {path} is not valid JSON", cause=exc).with_context(
                backend="file", cache_key=key
            ) from exc

        if not isinstance(envelope, dict) or "value" not in envelope:
            raise CacheCorruptError(f"Cache document {path} has no value envelope").with_context(
                backend="file", cache_key=key
            )
        return envelope

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        envelope = self._read(key)
        return None if envelope is None else envelope["value"]

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        envelope = {"key": key, "value": value}
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(envelope, handle, sort_keys=True)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write cache document {path}", cause=exc).with_context(
                backend="file", cache_key=key
            ) from exc

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        self.path_for(key).unlink(missing_ok=True)

    def exists(self, key: str) -> bool:
        """Check if a document exists for key, readable or not."""
        return self.path_for(key).is_file()

    def clear(self) -> None:
        """Remove the whole cache directory."""
        shutil.rmtree(self.directory, ignore_errors=True)


# ------------------------------------------------------------------ #
# Redis Cache (optional)
# ------------------------------------------------------------------ #


class RedisCache:
    """Redis-backed distributed cache.

    Requires ``redis`` package (install via ``pip install regen-core[redis]``).
    Lets several CI runners share one fingerprint mapping. Client failures
    (``redis.RedisError``, connection errors included) surface as
    :class:`StorageError`.

    Raises:
        BackendUnavailableError: If ``redis`` package is not installed.
    """

    def __init__(self, url: str = "redis://localhost:6379/0"):
        try:
            import redis
        except ImportError as exc:
            raise BackendUnavailableError("redis", "redis") from exc

        self._client = redis.from_url(url, decode_responses=False)
        self._client_error: type[Exception] = redis.RedisError

    def _storage_error(self, action: str, key: str | None, exc: Exception) -> StorageError:
        return StorageError(f"Redis {action} failed: {exc}", cause=exc).with_context(
            backend="redis", cache_key=key
        )

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        try:
            raw = self._client.get(key)
        except self._client_error as exc:
            raise self._storage_error("get", key, exc) from exc
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CacheCorruptError(f"Redis value for {key!r} is not valid JSON", cause=exc).with_context(
                backend="redis", cache_key=key
            ) from exc

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        serialized = json.dumps(value)
        try:
            self._client.set(key, serialized)
        except self._client_error as exc:
            raise self._storage_error("set", key, exc) from exc

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        try:
            self._client.delete(key)
        except self._client_error as exc:
            raise self._storage_error("delete", key, exc) from exc

    def exists(self, key: str) -> bool:
        try:
            return bool(self._client.exists(key))
        except self._client_error as exc:
            raise self._storage_error("exists", key, exc) from exc

    def clear(self) -> None:
        """Remove all keys from the current Redis database.

        Warning: This flushes the entire Redis DB — use with caution!
        """
        try:
            self._client.flushdb()
        except self._client_error as exc:
            raise self._storage_error("flushdb", None, exc) from exc


__all__ = [
    "CacheBackend",
    "InMemoryCache",
    "FileCache",
    "RedisCache",
]
