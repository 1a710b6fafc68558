"""
Regenerator: the host-facing facade over store and evaluator.

A host pipeline holds one :class:`Regenerator` per build run and calls it
explicitly: no base class is patched. The facade owns the run lifecycle
(load at start, flush at the end of a successful run) and exposes the five
operations a host needs.

Examples:
    >>> regenerator = Regenerator.from_settings()
    >>> with regenerator.run():
    ...     for page in site.pages:
    ...         if regenerator.should_rebuild(page):
    ...             render(page)  # calls regenerator.add_dependency(...)

Tags:
    facade, incremental, lifecycle, regen
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from regen.core.config import RegenSettings, create_cache_backend, get_settings
from regen.core.filesystem import FileSystem
from regen.core.logging import LogContext, get_logger
from regen.incremental.evaluator import StalenessEvaluator
from regen.incremental.protocols import Artifact
from regen.incremental.records import FingerprintRecord
from regen.incremental.store import FingerprintStore

logger = get_logger(__name__)


class Regenerator:
    """Decides what to rebuild and remembers it between runs."""

    def __init__(self, store: FingerprintStore, evaluator: StalenessEvaluator | None = None):
        self.store = store
        self.evaluator = evaluator or StalenessEvaluator(store)

    @classmethod
    def from_settings(
        cls,
        settings: RegenSettings | None = None,
        *,
        filesystem: FileSystem | None = None,
    ) -> Regenerator:
        """Build a regenerator whose backend and incremental flag come from settings."""
        settings = settings or get_settings()
        store = FingerprintStore(
            create_cache_backend(settings),
            incremental=settings.incremental,
            cache_key=settings.cache_key,
            filesystem=filesystem,
        )
        return cls(store)

    @property
    def incremental(self) -> bool:
        return self.store.incremental

    def should_rebuild(self, artifact: Artifact) -> bool:
        return self.evaluator.should_rebuild(artifact)

    regenerate_page = should_rebuild
    regenerate_document = should_rebuild
    regenerate_doc = should_rebuild

    def is_stale(self, path: str) -> bool:
        return self.evaluator.is_stale(path)

    def add_dependency(self, path: str, dependency: str) -> None:
        self.store.add_dependency(path, dependency)

    def force_override(self, path: str) -> FingerprintRecord:
        return self.store.force_override(path)

    def flush(self) -> bool:
        return self.store.flush()

    def clear(self) -> None:
        self.store.clear()

    @contextmanager
    def run(self, run_id: str | None = None) -> Iterator[Regenerator]:
        """Scope one build pass.

        Loads the fingerprint mapping up front and flushes it when the
        block exits normally. If the block raises, nothing is persisted.
        """
        run_id = run_id or uuid.uuid4().hex[:12]
        with LogContext(run_id=run_id):
            self.store.load()
            try:
                yield self
            except BaseException:
                logger.warning("run_aborted", persisted=False)
                raise
            self.flush()


__all__ = ["Regenerator"]
