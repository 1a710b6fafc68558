"""
Staleness evaluation: should an artifact be rebuilt in this run?

Manifesto:
    Over-building is slow, under-building is wrong. The evaluator errs on
    the side of rebuilding whenever its cached knowledge cannot be trusted
    yet, and only skips an artifact when its own timestamp and every
    dependency say it is unchanged.

Architecture:
    ::

        should_rebuild(artifact)
        │
        ├─ not artifact.writes_output()        → False
        ├─ is_forced_by_data(artifact.data)    → True
        ├─ artifact.is_asset()                 → True
        └─ is_stale(artifact.path)
             │
             ├─ record.forced                          → True
             ├─ record, not dynamic, seen_before       → mtime > last_modified
             ├─ record, not seen_before                → seen_before = True; True
             ├─ record (dynamic)                       → any(is_stale(dep))
             └─ no record                              → create; seen_before = True; True

    The ``seen_before`` flag exists because hosts register dependency
    edges while rendering, which creates the depending artifact's record
    before that artifact is ever evaluated. Such a record's timestamp is
    not trusted on its first evaluation; it is trusted from the second
    one on.

    Dependency graphs are not required to be acyclic. A path reached again
    while it is still being evaluated contributes ``False`` to the
    dependency OR, and a ``dependency_cycle_detected`` warning is logged.

Examples:
    >>> evaluator = StalenessEvaluator(store)
    >>> evaluator.should_rebuild(SourceArtifact("index.md"))   # never seen
    True
    >>> evaluator.should_rebuild(SourceArtifact("index.md"))   # unchanged
    False

Tags:
    staleness, incremental, evaluator, dependencies, mtime, regen

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from regen.core.logging import get_logger
from regen.incremental.overrides import is_forced_by_data
from regen.incremental.protocols import Artifact
from regen.incremental.store import FingerprintStore

logger = get_logger(__name__)


class StalenessEvaluator:
    """Decides staleness of artifacts against a :class:`FingerprintStore`."""

    def __init__(
        self,
        store: FingerprintStore,
        *,
        forced_by_data: Callable[[Mapping[str, Any]], bool] = is_forced_by_data,
    ):
        self.store = store
        self.forced_by_data = forced_by_data

    def should_rebuild(self, artifact: Artifact) -> bool:
        """Return True if *artifact* must be rebuilt in this run."""
        if not artifact.writes_output():
            return False
        if self.forced_by_data(artifact.data):
            logger.debug("staleness_decided", path=artifact.path, stale=True, reason="forced_by_data")
            return True
        if artifact.is_asset():
            logger.debug("staleness_decided", path=artifact.path, stale=True, reason="asset")
            return True
        return self.is_stale(artifact.path)

    def is_stale(self, path: str) -> bool:
        """Return True if *path* or, for dynamic paths, any dependency changed."""
        return self._is_stale(path, [])

    def _is_stale(self, path: str, visiting: list[str]) -> bool:
        record = self.store.get(path)

        if record is None:
            record = self.store.get_or_create(path)
            record.seen_before = True
            return self._decided(path, True, "first_seen")

        if record.forced:
            return self._decided(path, True, "forced")

        if not record.dynamic and record.seen_before:
            modified = self.store.file_mtime(path) > record.last_modified
            return self._decided(path, modified, "modified" if modified else "unchanged")

        if not record.seen_before:
            record.seen_before = True
            return self._decided(path, True, "untrusted")

        if path in visiting:
            logger.warning("dependency_cycle_detected", path=path, chain=[*visiting, path])
            return False

        visiting.append(path)
        try:
            # every dependency is visited so each gets its seen_before flag this run
            results = [self._is_stale(dep, visiting) for dep in sorted(record.dependencies)]
        finally:
            visiting.pop()
        return self._decided(path, any(results), "dependencies")

    @staticmethod
    def _decided(path: str, stale: bool, reason: str) -> bool:
        logger.debug("staleness_decided", path=path, stale=stale, reason=reason)
        return stale


__all__ = ["StalenessEvaluator"]
