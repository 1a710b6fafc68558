"""
Tests for regen.core.cache module.

Covers:
- InMemoryCache: get/set/delete/exists/clear
- FileCache: persistence across instances, corrupt documents
- RedisCache: behaviour against a mocked client (requires redis extra)
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from regen.core.cache import FileCache, InMemoryCache
from regen.core.errors import BackendUnavailableError, CacheCorruptError, StorageError


class TestInMemoryCache:
    """Test InMemoryCache backend."""

    def test_basic_get_set(self):
        cache = InMemoryCache()
        cache.set("key1", {"data": [1, 2, 3]})
        assert cache.get("key1") == {"data": [1, 2, 3]}

    def test_get_missing_key(self):
        assert InMemoryCache().get("missing") is None

    def test_delete(self):
        cache = InMemoryCache()
        cache.set("key1", "value1")
        cache.delete("key1")
        cache.delete("key1")
        assert not cache.exists("key1")
        assert cache.get("key1") is None

    def test_clear(self):
        cache = InMemoryCache()
        cache.set("k1", 1)
        cache.set("k2", 2)
        assert cache.size() == 2
        cache.clear()
        assert cache.size() == 0

    def test_overwrite(self):
        cache = InMemoryCache()
        cache.set("k1", 1)
        cache.set("k1", 10)
        assert cache.get("k1") == 10
        assert cache.size() == 1


class TestFileCache:
    """Test FileCache backend."""

    def test_get_set_across_instances(self, tmp_path):
        FileCache(tmp_path / "c").set("regen:regenerator:metadata", {"index.md": {"forced": True}})
        assert FileCache(tmp_path / "c").get("regen:regenerator:metadata") == {"index.md": {"forced": True}}

    def test_missing_key_and_directory(self, tmp_path):
        cache = FileCache(tmp_path / "does-not-exist")
        assert cache.get("anything") is None
        assert not cache.exists("anything")

    def test_key_is_hashed_into_directory(self, tmp_path):
        cache = FileCache(tmp_path)
        path = cache.path_for("a:b/c")
        assert path.parent == tmp_path
        assert path.suffix == ".json"
        assert ":" not in path.name and "/" not in path.name

    def test_document_is_an_envelope(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.set("k", [1, 2])
        envelope = json.loads(cache.path_for("k").read_text(encoding="utf-8"))
        assert envelope == {"key": "k", "value": [1, 2]}

    def test_no_temp_files_left_behind(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.set("k", 1)
        cache.set("k", 2)
        assert [p.suffix for p in tmp_path.iterdir()] == [".json"]

    def test_delete(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.set("k", 1)
        cache.delete("k")
        cache.delete("k")
        assert cache.get("k") is None

    def test_clear_removes_directory(self, tmp_path):
        cache = FileCache(tmp_path / "c")
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.clear()
        assert not (tmp_path / "c").exists()
        assert cache.get("k1") is None

    def test_invalid_json_raises_corrupt(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.path_for("k").write_text("{oops", encoding="utf-8")
        with pytest.raises(CacheCorruptError) as exc_info:
            cache.get("k")
        assert exc_info.value.context.backend == "file"
        assert exc_info.value.context.cache_key == "k"
        assert cache.exists("k")

    def test_missing_envelope_raises_corrupt(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.path_for("k").write_text('{"index.md": {}}', encoding="utf-8")
        with pytest.raises(CacheCorruptError):
            cache.get("k")

    def test_non_utf8_document_raises_corrupt(self, tmp_path):
        cache = FileCache(tmp_path)
        cache.path_for("k").write_bytes(b'{"value": "\xff\xfe"}')
        with pytest.raises(CacheCorruptError) as exc_info:
            cache.get("k")
        assert exc_info.value.context.backend == "file"


class TestRedisCache:
    """Test RedisCache against a mocked client."""

    @pytest.fixture
    def client(self):
        pytest.importorskip("redis")
        mock_client = MagicMock()
        with patch("redis.from_url", return_value=mock_client):
            yield mock_client

    def test_get_decodes_json(self, client):
        from regen.core.cache import RedisCache

        client.get.return_value = b'{"index.md": {"forced": false}}'
        assert RedisCache().get("k") == {"index.md": {"forced": False}}

    def test_get_missing(self, client):
        from regen.core.cache import RedisCache

        client.get.return_value = None
        assert RedisCache().get("k") is None

    def test_get_corrupt(self, client):
        from regen.core.cache import RedisCache

        client.get.return_value = b"\xff not json"
        with pytest.raises(CacheCorruptError):
            RedisCache().get("k")

    def test_set_serializes_json(self, client):
        from regen.core.cache import RedisCache

        RedisCache().set("k", {"a": 1})
        client.set.assert_called_once_with("k", '{"a": 1}')

    def test_delete_and_exists(self, client):
        from regen.core.cache import RedisCache

        client.exists.return_value = 1
        cache = RedisCache()
        assert cache.exists("k") is True
        cache.delete("k")
        client.delete.assert_called_once_with("k")

    def test_connection_failure_raises_storage_error(self, client):
        import redis

        from regen.core.cache import RedisCache

        client.set.side_effect = redis.ConnectionError("Connection refused")
        with pytest.raises(StorageError) as exc_info:
            RedisCache().set("regen:regenerator:metadata", {})
        assert exc_info.value.context.backend == "redis"
        assert exc_info.value.context.cache_key == "regen:regenerator:metadata"
        assert isinstance(exc_info.value.__cause__, redis.ConnectionError)

    def test_read_failure_raises_storage_error(self, client):
        import redis

        from regen.core.cache import RedisCache

        client.get.side_effect = redis.TimeoutError("timed out")
        with pytest.raises(StorageError):
            RedisCache().get("k")


def test_redis_cache_without_package(monkeypatch):
    import sys

    from regen.core.cache import RedisCache

    monkeypatch.setitem(sys.modules, "redis", None)
    with pytest.raises(BackendUnavailableError) as exc_info:
        RedisCache()
    assert exc_info.value.backend == "redis"
