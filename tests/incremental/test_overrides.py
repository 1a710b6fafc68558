"""Tests for regen.incremental.overrides (force-rebuild data keys)."""

import pytest

from regen.incremental.overrides import FORCE_KEYS, is_forced_by_data


class TestIsForcedByData:
    def test_recognised_keys(self):
        assert FORCE_KEYS == ("regenerate", "force", "force_regenerate", "regen")

    @pytest.mark.parametrize("key", FORCE_KEYS)
    def test_each_key_forces(self, key):
        assert is_forced_by_data({"title": "Home", key: True}) is True

    @pytest.mark.parametrize("value", [False, None, "true", 1, "yes"])
    def test_only_boolean_true_counts(self, value):
        assert is_forced_by_data({"regenerate": value}) is False

    def test_unrecognised_keys_ignored(self):
        assert is_forced_by_data({"rebuild": True, "forced": True}) is False

    def test_empty_and_missing_data(self):
        assert is_forced_by_data({}) is False
        assert is_forced_by_data(None) is False

    def test_any_true_key_wins(self):
        assert is_forced_by_data({"force": False, "regen": True}) is True
