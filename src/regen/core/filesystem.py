"""
Filesystem capability consumed by the fingerprint store.

The engine only ever asks two questions of the filesystem: does a file
exist at this path, and when was it last modified. Keeping that behind a
protocol lets tests drive modification times explicitly instead of
sleeping and touching files.

Tags:
    filesystem, protocol, mtime, regen
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Minimal read-only filesystem interface."""

    def exists(self, path: str) -> bool:
        """Return True if a regular file exists at *path*."""
        ...

    def mtime(self, path: str) -> float:
        """Return the modification time of *path* in epoch seconds.

        Raises:
            OSError: If the file cannot be stat'ed.
        """
        ...


class LocalFileSystem:
    """:class:`FileSystem` over the real disk, relative to ``root``."""

    def __init__(self, root: str | os.PathLike[str] | None = None):
        self.root = os.fspath(root) if root is not None else None

    def _resolve(self, path: str) -> str:
        if self.root is None:
            return path
        return os.path.join(self.root, path)

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._resolve(path))

    def mtime(self, path: str) -> float:
        return os.stat(self._resolve(path)).st_mtime


__all__ = ["FileSystem", "LocalFileSystem"]
