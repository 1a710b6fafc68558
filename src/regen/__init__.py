"""
Regen - incremental rebuild decisions for content-build pipelines.

Decides, per artifact and per run, whether the artifact must be rebuilt,
from force-rebuild data keys, asset classification, recorded modification
times and declared dependencies.
"""

__version__ = "0.1.0"

from regen.incremental import (  # noqa: E402
    FORCE_KEYS,
    Artifact,
    FingerprintRecord,
    FingerprintStore,
    Regenerator,
    SourceArtifact,
    StalenessEvaluator,
    is_forced_by_data,
)

__all__ = [
    "__version__",
    "Artifact",
    "FORCE_KEYS",
    "FingerprintRecord",
    "FingerprintStore",
    "Regenerator",
    "SourceArtifact",
    "StalenessEvaluator",
    "is_forced_by_data",
]
