"""
Structured error types for regen.

Provides a small hierarchy of typed errors with metadata for categorization,
logging, and root cause analysis through error chaining.

Staleness evaluation itself never raises: a missing file is data, and a
missing or corrupt fingerprint cache means "start cold". The errors below
cover the edges of the engine, namely persistence backends and configuration.

Manifesto:
    - **Typed Error Hierarchy:** Storage and config failures are distinct
    - **Rich Context:** Errors carry the artifact path, cache key and backend
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────┐
        │                       RegenError                         │
        │           (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────┤
        │                                                          │
        │  StorageError            ConfigError                     │
        │  (STORAGE)               (CONFIG)                        │
        │       │                       │                          │
        │  CacheCorruptError       InvalidConfigError              │
        │                          BackendUnavailableError         │
        └─────────────────────────────────────────────────────────┘

Examples:
    >>> error = CacheCorruptError("Unreadable payload")
    >>> error.with_context(cache_key="regen:regenerator:metadata")
    CacheCorruptError('Unreadable payload', category=STORAGE)
    >>> error.context.cache_key
    'regen:regenerator:metadata'

Tags:
    errors, exception, error-hierarchy, error-context, regen

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        STORAGE: Disk, Redis, or other cache backend failures
        CONFIG: Missing or invalid settings, unavailable backends
        INTERNAL: Bugs, unexpected state
    """

    STORAGE = "STORAGE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only non-None fields are emitted by :meth:`to_dict`, so logging an
    error never produces a wall of ``null`` values.

    Attributes:
        artifact_path: Path of the artifact being evaluated
        cache_key: Key of the persisted fingerprint mapping
        backend: Name of the cache backend (``file``, ``redis``, ...)
        metadata: Additional key-value pairs
    """

    artifact_path: str | None = None
    cache_key: str | None = None
    backend: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["artifact_path", "cache_key", "backend"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RegenError(Exception):
    """
    Base exception for all regen errors.

    Subclasses set ``default_category`` so callers can route on
    ``error.category`` without isinstance ladders.

    Examples:
        >>> error = RegenError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise OSError("disk full")
        ... except OSError as e:
        ...     error = StorageError("flush failed", cause=e)
        >>> error.cause
        OSError('disk full')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RegenError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("Write failed").with_context(
                backend="file",
                cache_key="regen:regenerator:metadata",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(RegenError):
    """A cache backend could not read or write a value."""

    default_category = ErrorCategory.STORAGE


class CacheCorruptError(StorageError):
    """
    A persisted payload exists but cannot be decoded.

    Raised by backends (undecodable JSON) and by record deserialization
    (wrong shape). The fingerprint store treats it as an empty cache.
    """


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RegenError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        msg = message or f"Invalid value for '{key}': {value!r}"
        super().__init__(msg)
        self.key = key
        self.value = value


class BackendUnavailableError(ConfigError):
    """A configured cache backend needs a package that is not installed."""

    def __init__(self, backend: str, package: str):
        super().__init__(
            f"The '{backend}' cache backend requires the '{package}' package. "
            f"Install it with: pip install regen-core[{package}]"
        )
        self.backend = backend
        self.package = package
        self.context.backend = backend


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RegenError",
    "StorageError",
    "CacheCorruptError",
    "ConfigError",
    "InvalidConfigError",
    "BackendUnavailableError",
]
