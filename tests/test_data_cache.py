"""
Tests for DataCache component.

Tests cover:
- Equivalence classes: fresh hit, stale miss, absent key
- Boundary value analysis: TTL boundary at 30 seconds
- Full decision path coverage: lazy eviction, purge, periodic sweep, clear
"""

import pytest

from airsniffer.data_cache import DataCache


class TestDataCache:
    """Test suite for DataCache."""

    @pytest.fixture
    def cache(self, clock):
        """Fixture providing a DataCache with a 30 s TTL on a fake clock."""
        return DataCache(ttl_seconds=30, sweep_interval_seconds=300, clock=clock)

    # ==================== Equivalence Classes ====================

    def test_absent_key_is_miss(self, cache):
        assert cache.get("indoor_latest") is None

    def test_fresh_entry_is_hit(self, cache):
        cache.set("outdoor_current", {"us_aqi": 42})
        assert cache.get("outdoor_current") == {"us_aqi": 42}

    # ==================== Boundary Value Analysis ====================

    def test_hit_at_29_seconds(self, cache, clock):
        """Boundary: entry still served 29 s after being set."""
        payload = [1, 2, 3]
        cache.set("history_24", payload)
        clock.advance(29)
        assert cache.get("history_24") is payload

    def test_miss_at_31_seconds(self, cache, clock):
        """Boundary: entry gone 31 s after being set."""
        cache.set("history_24", [1, 2, 3])
        clock.advance(31)
        assert cache.get("history_24") is None

    def test_stale_entry_is_evicted_on_read(self, cache, clock):
        """Lazy eviction removes the stale entry."""
        cache.set("indoor_latest", "reading")
        clock.advance(31)
        cache.get("indoor_latest")
        assert len(cache) == 0

    def test_set_refreshes_timestamp(self, cache, clock):
        """Re-setting a key restarts its TTL."""
        cache.set("indoor_latest", "old")
        clock.advance(20)
        cache.set("indoor_latest", "new")
        clock.advance(20)
        assert cache.get("indoor_latest") == "new"

    # ==================== Purge & Sweep ====================

    def test_purge_expired_only_removes_stale(self, cache, clock):
        cache.set("a", 1)
        clock.advance(25)
        cache.set("b", 2)
        clock.advance(10)
        assert cache.purge_expired() == 1
        assert "a" not in cache
        assert cache.get("b") == 2

    def test_sweep_not_due(self, cache, clock):
        cache.set("a", 1)
        clock.advance(299)
        assert cache.sweep_if_due() is False

    def test_sweep_clears_everything(self, cache, clock):
        """Periodic sweep drops every entry, fresh or not."""
        clock.advance(290)
        cache.set("fresh", 1)
        clock.advance(10)
        assert cache.sweep_if_due() is True
        assert len(cache) == 0

    def test_sweep_interval_restarts(self, cache, clock):
        clock.advance(300)
        assert cache.sweep_if_due() is True
        clock.advance(100)
        assert cache.sweep_if_due() is False

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
