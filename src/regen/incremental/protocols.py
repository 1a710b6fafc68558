"""
Artifact protocol: the narrow view of a host artifact the engine needs.

The engine never parses, renders or writes anything. It only needs to know
an artifact's path, whether the host will write it as output, whether the
host classifies it as an asset, and the artifact's own key-value data
(for force-rebuild keys). Any host type with that shape satisfies
:class:`Artifact`; no inheritance is required.

Examples:
    >>> from regen.incremental.protocols import SourceArtifact
    >>> page = SourceArtifact("about.md", data={"title": "About"})
    >>> isinstance(page, Artifact)
    True

Tags:
    protocol, artifact, contracts, regen
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Artifact(Protocol):
    """Anything the host pipeline may or may not rebuild."""

    @property
    def path(self) -> str:
        """Identifier of the artifact, usually its source path."""
        ...

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only artifact data (e.g. parsed frontmatter)."""
        ...

    def writes_output(self) -> bool:
        """Return True if the host writes this artifact to the destination."""
        ...

    def is_asset(self) -> bool:
        """Return True if the host classifies this artifact as an asset."""
        ...


@dataclass(frozen=True)
class SourceArtifact:
    """Plain :class:`Artifact` for a source file.

    Used by the CLI to evaluate bare paths and by hosts that have no
    artifact type of their own.
    """

    path: str
    data: Mapping[str, Any] = field(default_factory=dict)
    write: bool = True
    asset: bool = False

    def writes_output(self) -> bool:
        return self.write

    def is_asset(self) -> bool:
        return self.asset


__all__ = ["Artifact", "SourceArtifact"]
