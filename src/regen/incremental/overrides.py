"""Detection of force-rebuild keys in an artifact's own data."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

#: Data keys that, set to ``true``, force an artifact to be rebuilt.
FORCE_KEYS: tuple[str, ...] = ("regenerate", "force", "force_regenerate", "regen")


def is_forced_by_data(data: Mapping[str, Any] | None) -> bool:
    """Return True if any recognised force key maps to the boolean ``True``.

    Only the literal boolean counts: ``"true"``, ``1`` or ``"yes"`` coming
    out of a loosely-typed frontmatter parser are not overrides. Absent
    keys are simply absent.

    >>> is_forced_by_data({"title": "Home", "regen": True})
    True
    >>> is_forced_by_data({"force": "true"})
    False
    """
    if not data:
        return False
    return any(data.get(key) is True for key in FORCE_KEYS)


__all__ = ["FORCE_KEYS", "is_forced_by_data"]
