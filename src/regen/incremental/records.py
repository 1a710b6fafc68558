"""
Fingerprint records: cached metadata about one artifact.

A record remembers when an artifact was last trusted as fresh, whether it
is backed by a real file, whether it has survived a full evaluation cycle,
whether it is forced stale, and which other artifacts it depends on. The
dependency set doubles as the dependency index: there is no separate
edge table.

Architecture:
    ::

        FingerprintRecord
        ├── path           — opaque artifact identifier
        ├── last_modified  — epoch seconds, fixed at creation
        ├── dynamic        — no backing file; judged by dependencies only
        ├── seen_before    — survived one cycle; timestamp is trusted
        ├── forced         — sticky "always stale"
        └── dependencies   — set[str] of paths

    Serialized (JSON) form, keyed by path in the persisted mapping:
        {"last_modified": 1718000000.0, "dynamic": false,
         "seen_before": true, "forced": false,
         "dependencies": ["_layouts/default.html"]}

Tags:
    fingerprint, record, dependency-index, serialization, regen
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from regen.core.errors import CacheCorruptError


@dataclass
class FingerprintRecord:
    """Cached fingerprint of one artifact path."""

    path: str
    last_modified: float
    dynamic: bool = False
    seen_before: bool = False
    forced: bool = False
    dependencies: set[str] = field(default_factory=set)

    def add_dependency(self, dependency: str) -> None:
        """Record that this artifact depends on *dependency* (idempotent)."""
        self.dependencies.add(dependency)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe mapping (path is the outer key)."""
        return {
            "last_modified": self.last_modified,
            "dynamic": self.dynamic,
            "seen_before": self.seen_before,
            "forced": self.forced,
            "dependencies": sorted(self.dependencies),
        }

    @classmethod
    def from_dict(cls, path: str, data: Any) -> FingerprintRecord:
        """Rebuild a record from its serialized form.

        Flags must be JSON booleans and ``last_modified`` a number; nothing
        is coerced, so ``"false"`` is rejected rather than read as true.

        Raises:
            CacheCorruptError: If *data* does not have the serialized shape.
        """
        try:
            last_modified = data["last_modified"]
            if isinstance(last_modified, bool) or not isinstance(last_modified, (int, float)):
                raise TypeError("last_modified must be a number")
            flags = {name: data[name] for name in ("dynamic", "seen_before", "forced")}
            for name, value in flags.items():
                if not isinstance(value, bool):
                    raise TypeError(f"{name} must be a boolean")
            dependencies = data["dependencies"]
            if isinstance(dependencies, str) or not all(isinstance(d, str) for d in dependencies):
                raise TypeError("dependencies must be a list of paths")
            return cls(
                path=path,
                last_modified=float(last_modified),
                dependencies=set(dependencies),
                **flags,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CacheCorruptError(f"Malformed fingerprint record for {path!r}", cause=exc).with_context(
                artifact_path=path
            ) from exc


def dump_records(records: dict[str, FingerprintRecord]) -> dict[str, dict[str, Any]]:
    """Serialize a whole path → record mapping."""
    return {path: record.to_dict() for path, record in records.items()}


def load_records(payload: Any) -> dict[str, FingerprintRecord]:
    """Deserialize a persisted mapping.

    Raises:
        CacheCorruptError: If the payload or any record in it is malformed.
    """
    if not isinstance(payload, dict):
        raise CacheCorruptError(
            f"Fingerprint payload must be a mapping, got {type(payload).__name__}"
        )
    return {str(path): FingerprintRecord.from_dict(str(path), data) for path, data in payload.items()}


__all__ = ["FingerprintRecord", "dump_records", "load_records"]
