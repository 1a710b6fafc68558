"""
Fingerprint store: the path → record mapping and its persistence lifecycle.

Manifesto:
    The store is the engine's memory between runs. It must tolerate a
    cold start (no cache, or a corrupt one), never alter an existing
    record behind the evaluator's back, and write back exactly once per
    run, and only when the run is incremental.

    - **Lazy load:** The persisted mapping is fetched on first access
      and memoized for the lifetime of the store
    - **Create once:** ``get_or_create`` never touches an existing record
    - **Batched write:** ``flush`` writes the whole mapping in one call
    - **Cold-start tolerant:** Corrupt payloads are logged and ignored

Architecture:
    ::

        FingerprintStore
        ├── cache: CacheBackend        (InMemory / File / Redis)
        ├── cache_key                  (one key for the whole mapping)
        ├── filesystem: FileSystem     (exists / mtime)
        ├── clock                      (mtime stand-in for absent files)
        └── incremental: bool          (gates flush)

        load()  ──► cache.get(cache_key) ──► load_records() ──► {path: record}
        flush() ──► dump_records()       ──► cache.set(cache_key, ...)
        clear() ──► cache.delete(cache_key) ──► load() (empty)

Examples:
    >>> from regen.core.cache import InMemoryCache
    >>> store = FingerprintStore(InMemoryCache(), incremental=True)
    >>> store.add_dependency("index.md", "_layouts/default.html")
    >>> store.get("index.md").dependencies
    {'_layouts/default.html'}
    >>> store.flush()
    True

Guardrails:
    ❌ DON'T: Share one store between threads without external locking
    ✅ DO: Build one store per run and pass it to every collaborator

Tags:
    fingerprint, store, cache, persistence, incremental, regen

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

from regen.core.cache import CacheBackend
from regen.core.config.settings import DEFAULT_CACHE_KEY
from regen.core.errors import CacheCorruptError
from regen.core.filesystem import FileSystem, LocalFileSystem
from regen.core.logging import get_logger
from regen.incremental.records import FingerprintRecord, dump_records, load_records

logger = get_logger(__name__)


class FingerprintStore:
    """Mapping of artifact path to :class:`FingerprintRecord`, backed by a cache."""

    def __init__(
        self,
        cache: CacheBackend,
        *,
        incremental: bool = True,
        cache_key: str = DEFAULT_CACHE_KEY,
        filesystem: FileSystem | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the store.

        Args:
            cache: Persistent backend holding the mapping between runs.
            incremental: Whether this run is incremental; ``flush`` is a
                no-op when False.
            cache_key: Key of the whole mapping inside *cache*.
            filesystem: Source of file existence and modification times.
            clock: Current time in epoch seconds.
        """
        self.cache = cache
        self.incremental = incremental
        self.cache_key = cache_key
        self.filesystem = filesystem or LocalFileSystem()
        self.clock = clock
        self._records: dict[str, FingerprintRecord] | None = None

    # ------------------------------------------------------------------ #
    # Filesystem
    # ------------------------------------------------------------------ #

    def file_exists(self, path: str) -> bool:
        return self.filesystem.exists(path)

    def file_mtime(self, path: str) -> float:
        """Modification time of *path*, or the current time if it has no file."""
        if not self.filesystem.exists(path):
            return self.clock()
        try:
            return self.filesystem.mtime(path)
        except FileNotFoundError:
            # removed between the exists() and stat() calls
            return self.clock()

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def load(self) -> dict[str, FingerprintRecord]:
        """Return the in-memory mapping, fetching it from the cache once.

        A missing entry yields an empty mapping. A corrupt entry is logged
        and also yields an empty mapping, so the run starts cold.
        """
        if self._records is not None:
            return self._records

        try:
            payload = self.cache.get(self.cache_key)
            records = {} if payload is None else load_records(payload)
        except CacheCorruptError as exc:
            logger.warning(
                "fingerprint_cache_corrupt",
                cache_key=self.cache_key,
                error=exc.message,
            )
            records = {}

        logger.info("fingerprints_loaded", cache_key=self.cache_key, count=len(records))
        self._records = records
        return records

    @property
    def records(self) -> dict[str, FingerprintRecord]:
        return self.load()

    def flush(self) -> bool:
        """Persist the mapping. Returns False without writing when not incremental.

        Raises:
            StorageError: If the backend cannot write the mapping.
        """
        if not self.incremental:
            logger.debug("fingerprints_flush_skipped", reason="incremental_disabled")
            return False

        records = self.load()
        self.cache.set(self.cache_key, dump_records(records))
        logger.info("fingerprints_flushed", cache_key=self.cache_key, count=len(records))
        return True

    def clear(self) -> dict[str, FingerprintRecord]:
        """Drop every record, in memory and in the cache, and reload (empty)."""
        self._records = None
        self.cache.delete(self.cache_key)
        logger.info("fingerprints_cleared", cache_key=self.cache_key)
        return self.load()

    # ------------------------------------------------------------------ #
    # Records
    # ------------------------------------------------------------------ #

    def get(self, path: str) -> FingerprintRecord | None:
        return self.load().get(path)

    def get_or_create(self, path: str, forced: bool = False) -> FingerprintRecord:
        """Return the record for *path*, creating it if it does not exist.

        An existing record is returned untouched: *forced* only applies to
        a record created by this call.
        """
        records = self.load()
        record = records.get(path)
        if record is not None:
            return record

        exists = self.file_exists(path)
        record = FingerprintRecord(
            path=path,
            last_modified=self.file_mtime(path),
            dynamic=not exists,
            seen_before=False,
            forced=forced,
        )
        records[path] = record
        logger.debug("fingerprint_created", path=path, dynamic=record.dynamic, forced=forced)
        return record

    def add_dependency(self, path: str, dependency: str) -> None:
        """Register that *path* depends on *dependency*."""
        self.get_or_create(path).add_dependency(dependency)

    def force_override(self, path: str) -> FingerprintRecord:
        """Mark *path* as always stale (sticky across runs once flushed)."""
        record = self.get_or_create(path)
        record.forced = True
        return record

    def __contains__(self, path: object) -> bool:
        return path in self.load()

    def __len__(self) -> int:
        return len(self.load())

    def __iter__(self) -> Iterator[str]:
        return iter(self.load())


__all__ = ["FingerprintStore"]
