"""
Incremental rebuild engine.

- :class:`FingerprintRecord`  — cached metadata for one artifact path
- :class:`FingerprintStore`   — path → record mapping over a CacheBackend
- :class:`StalenessEvaluator` — forced / asset / mtime / dependency decision
- :class:`Regenerator`        — host-facing facade and run lifecycle
- :func:`is_forced_by_data`   — force-rebuild keys in artifact data
"""

from regen.incremental.evaluator import StalenessEvaluator
from regen.incremental.overrides import FORCE_KEYS, is_forced_by_data
from regen.incremental.protocols import Artifact, SourceArtifact
from regen.incremental.records import FingerprintRecord, dump_records, load_records
from regen.incremental.regenerator import Regenerator
from regen.incremental.store import FingerprintStore

__all__ = [
    "Artifact",
    "FORCE_KEYS",
    "FingerprintRecord",
    "FingerprintStore",
    "Regenerator",
    "SourceArtifact",
    "StalenessEvaluator",
    "dump_records",
    "is_forced_by_data",
    "load_records",
]
