"""
Shared pytest fixtures and configuration for regen tests.

This module provides:
- A fake filesystem whose modification times tests set explicitly
- A controllable clock (stand-in mtime for files that do not exist)
- Store / evaluator / regenerator fixtures over an in-memory cache
- Settings cache cleanup for test isolation
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from regen.core.cache import InMemoryCache
from regen.core.config import clear_settings_cache
from regen.incremental.evaluator import StalenessEvaluator
from regen.incremental.regenerator import Regenerator
from regen.incremental.store import FingerprintStore


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Fakes
# =============================================================================


class FakeFileSystem:
    """In-memory :class:`~regen.core.filesystem.FileSystem`.

    ``files`` maps path → modification time. Paths not in the mapping do
    not exist.
    """

    def __init__(self, files: dict[str, float] | None = None):
        self.files: dict[str, float] = dict(files or {})

    def exists(self, path: str) -> bool:
        return path in self.files

    def mtime(self, path: str) -> float:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def touch(self, path: str, mtime: float) -> None:
        self.files[path] = mtime

    def remove(self, path: str) -> None:
        self.files.pop(path, None)


class FakeClock:
    """Callable clock returning a settable epoch time."""

    def __init__(self, now: float = 5_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from REGEN_* variables and the cached settings object."""
    import os

    for key in list(os.environ):
        if key.startswith("REGEN_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fs() -> FakeFileSystem:
    return FakeFileSystem(
        {
            "index.md": 1_000.0,
            "about.md": 1_000.0,
            "_layouts/default.html": 900.0,
            "_includes/nav.html": 900.0,
        }
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def store(cache: InMemoryCache, fs: FakeFileSystem, clock: FakeClock) -> FingerprintStore:
    return FingerprintStore(cache, incremental=True, filesystem=fs, clock=clock)


@pytest.fixture
def evaluator(store: FingerprintStore) -> StalenessEvaluator:
    return StalenessEvaluator(store)


@pytest.fixture
def regenerator(store: FingerprintStore) -> Regenerator:
    return Regenerator(store)


@pytest.fixture
def site_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small on-disk site; the working directory is moved into it."""
    (tmp_path / "index.md").write_text("# Home\n", encoding="utf-8")
    (tmp_path / "about.md").write_text("# About\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
