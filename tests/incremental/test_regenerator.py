"""Tests for regen.incremental.regenerator (host facade + run lifecycle)."""

import pytest
import structlog

from regen.core.cache import FileCache, InMemoryCache
from regen.core.config import DEFAULT_CACHE_KEY, CacheBackendKind, RegenSettings
from regen.incremental.protocols import Artifact, SourceArtifact
from regen.incremental.regenerator import Regenerator


class TestFacade:
    def test_host_operations(self, regenerator, store):
        regenerator.add_dependency("feed.xml", "index.md")
        assert regenerator.is_stale("feed.xml") is True
        assert store.get("feed.xml").seen_before is True

        regenerator.force_override("about.md")
        assert regenerator.should_rebuild(SourceArtifact("about.md")) is True

    def test_aliases(self, regenerator):
        page = SourceArtifact("index.md")
        assert regenerator.regenerate_page(page) is True
        assert regenerator.regenerate_document(page) is False
        assert regenerator.regenerate_doc(SourceArtifact("about.md")) is True
        assert regenerator.regenerate_doc(page) is False

    def test_flush_and_clear(self, regenerator, cache):
        regenerator.is_stale("index.md")
        assert regenerator.flush() is True
        assert cache.exists(DEFAULT_CACHE_KEY)

        regenerator.clear()
        assert not cache.exists(DEFAULT_CACHE_KEY)
        assert len(regenerator.store) == 0

    def test_source_artifact_satisfies_protocol(self):
        assert isinstance(SourceArtifact("index.md"), Artifact)


class TestFromSettings:
    def test_memory_backend(self):
        settings = RegenSettings(cache_backend=CacheBackendKind.MEMORY, incremental=True)
        regenerator = Regenerator.from_settings(settings)
        assert isinstance(regenerator.store.cache, InMemoryCache)
        assert regenerator.incremental is True

    def test_file_backend_uses_cache_dir(self, tmp_path):
        settings = RegenSettings(cache_dir=tmp_path / "fp", cache_key="site")
        regenerator = Regenerator.from_settings(settings)
        assert isinstance(regenerator.store.cache, FileCache)
        assert regenerator.store.cache.directory == tmp_path / "fp"
        assert regenerator.store.cache_key == "site"
        assert regenerator.incremental is False

    def test_defaults_to_cached_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REGEN_CACHE_BACKEND", "memory")
        monkeypatch.setenv("REGEN_INCREMENTAL", "true")
        regenerator = Regenerator.from_settings()
        assert isinstance(regenerator.store.cache, InMemoryCache)
        assert regenerator.incremental is True

    def test_filesystem_is_passed_through(self, fs):
        settings = RegenSettings(cache_backend=CacheBackendKind.MEMORY)
        assert Regenerator.from_settings(settings, filesystem=fs).store.filesystem is fs


class TestRun:
    def test_run_flushes_on_success(self, regenerator, cache):
        with regenerator.run() as active:
            assert active is regenerator
            active.should_rebuild(SourceArtifact("index.md"))
        assert "index.md" in cache.get(DEFAULT_CACHE_KEY)

    def test_run_does_not_flush_on_error(self, regenerator, cache):
        with pytest.raises(RuntimeError, match="render failed"):
            with regenerator.run():
                regenerator.should_rebuild(SourceArtifact("index.md"))
                raise RuntimeError("render failed")
        assert not cache.exists(DEFAULT_CACHE_KEY)

    def test_run_binds_and_releases_run_id(self, regenerator):
        with regenerator.run(run_id="run-42"):
            assert structlog.contextvars.get_contextvars()["run_id"] == "run-42"
        assert "run_id" not in structlog.contextvars.get_contextvars()

    def test_consecutive_runs_are_incremental(self, cache, fs, clock):
        from regen.incremental.store import FingerprintStore

        def build(paths):
            regenerator = Regenerator(FingerprintStore(cache, filesystem=fs, clock=clock))
            with regenerator.run():
                return {p: regenerator.should_rebuild(SourceArtifact(p)) for p in paths}

        assert build(["index.md", "about.md"]) == {"index.md": True, "about.md": True}
        assert build(["index.md", "about.md"]) == {"index.md": False, "about.md": False}
        fs.touch("about.md", 1_100.0)
        assert build(["index.md", "about.md"]) == {"index.md": False, "about.md": True}

    def test_non_incremental_runs_never_persist(self, cache, fs, clock):
        from regen.incremental.store import FingerprintStore

        for _ in range(2):
            regenerator = Regenerator(
                FingerprintStore(cache, incremental=False, filesystem=fs, clock=clock)
            )
            with regenerator.run():
                assert regenerator.should_rebuild(SourceArtifact("index.md")) is True
        assert not cache.exists(DEFAULT_CACHE_KEY)
