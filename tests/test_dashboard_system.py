"""
Tests for DashboardSystem orchestrator component.

Tests cover:
- Equivalence classes: all panels succeed, single panel fails, all fail
- Cache behavior: hits within the TTL, refetch after expiry, per-window
  history keys, failures never cached, periodic sweep
- Error scenarios: timeouts and unexpected exceptions degrade one panel only
- Full decision path coverage: outdoor level feeding the synthetic trend
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from airsniffer.api_client import FetchError, IndoorSensorClient, OpenMeteoClient
from airsniffer.config import DashboardConfig
from airsniffer.dashboard_state import HISTORY, INDOOR, OUTDOOR
from airsniffer.dashboard_system import DashboardSystem
from airsniffer.data_cache import DataCache
from airsniffer.outdoor_sample import OutdoorSample
from airsniffer.sensor_reading import Reading


LATEST = Reading(
    co2_ppm=700, tvoc_ppb=400, temperature=23.1, humidity=51.0,
    created_at=datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc),
)
OUTDOOR_SAMPLE = OutdoorSample(temperature=17.0, humidity=80.0, weather_code=61, pm25=20.0, us_aqi=120)


class TestDashboardSystem:
    """Test suite for DashboardSystem orchestrator."""

    @pytest.fixture
    def indoor_client(self, make_readings):
        """Fixture providing a mocked IndoorSensorClient."""
        client = Mock(spec=IndoorSensorClient)
        client.fetch_latest.return_value = LATEST
        client.fetch_history.return_value = make_readings(200)
        return client

    @pytest.fixture
    def outdoor_client(self):
        """Fixture providing a mocked OpenMeteoClient."""
        client = Mock(spec=OpenMeteoClient)
        client.fetch_current.return_value = OUTDOOR_SAMPLE
        return client

    @pytest.fixture
    def system(self, indoor_client, outdoor_client, clock):
        """Fixture providing a DashboardSystem wired to mocks and a fake clock."""
        config = DashboardConfig(timezone="UTC")
        cache = DataCache(ttl_seconds=30, sweep_interval_seconds=300, clock=clock)
        return DashboardSystem(config, indoor_client, outdoor_client, cache=cache)

    # ==================== Equivalence Classes ====================

    def test_all_panels_available(self, system):
        """Equivalence class: every fetch succeeds."""
        state = system.refresh(24, seed=1)

        assert state.errors == {}
        assert state.is_connected()
        assert state.indoor == LATEST
        # co2 700 → 2, tvoc 400 → 2 → overall 2
        assert state.indoor_result.level == 2
        assert state.indoor_result.label == "GOOD"
        assert state.indoor_breakdown.co2_level == 2
        # us_aqi 120 → 3
        assert state.outdoor_result.level == 3
        assert state.outdoor_result.gauge_percent == 60
        assert state.weather_condition == "Slight rain"
        assert len(state.history) == 144
        assert len(state.history.outdoor_series) == 144
        assert state.metrics.avg_temperature == pytest.approx(22.0)

    def test_partial_failure_indoor_timeout(self, system, indoor_client):
        """Indoor fetch times out; outdoor and history still render."""
        indoor_client.fetch_latest.side_effect = FetchError("Timed out after 8s")

        state = system.refresh(24, seed=1)

        assert not state.is_available(INDOOR)
        assert state.errors[INDOOR] == "Indoor data unavailable"
        assert state.indoor is None
        assert state.indoor_result is None
        assert state.is_available(OUTDOOR)
        assert state.outdoor_result.level == 3
        assert state.is_available(HISTORY)
        assert len(state.history) == 144

    def test_outdoor_failure_no_synthetic_trend(self, system, outdoor_client):
        """Outdoor failure: outdoor panel degraded and no trend line fabricated."""
        outdoor_client.fetch_current.side_effect = FetchError("both calls failed")

        state = system.refresh(24)

        assert state.errors == {OUTDOOR: "Outdoor data unavailable"}
        assert state.history.outdoor_series == []
        assert state.indoor_result is not None

    def test_unexpected_error_degrades_panel(self, system, indoor_client):
        """Error scenario: an unexpected exception is logged, not raised."""
        indoor_client.fetch_history.side_effect = RuntimeError("boom")

        state = system.refresh(24)

        assert state.errors == {HISTORY: "History unavailable"}
        assert state.history is None
        assert state.metrics is None

    def test_everything_down(self, system, indoor_client, outdoor_client):
        """Error scenario: all fetches fail → offline state, no exception."""
        indoor_client.fetch_latest.side_effect = FetchError("x")
        indoor_client.fetch_history.side_effect = FetchError("x")
        outdoor_client.fetch_current.side_effect = FetchError("x")

        state = system.refresh(24)

        assert set(state.errors) == {INDOOR, OUTDOOR, HISTORY}
        assert not state.is_connected()

    # ==================== Cache Behavior ====================

    def test_second_refresh_served_from_cache(self, system, indoor_client, outdoor_client, clock):
        """Within the TTL nothing is refetched."""
        system.refresh(24)
        clock.advance(29)
        state = system.refresh(24)

        assert indoor_client.fetch_latest.call_count == 1
        assert indoor_client.fetch_history.call_count == 1
        assert outdoor_client.fetch_current.call_count == 1
        assert set(state.cache_hits) == {"indoor_latest", "history_24", "outdoor_current"}

    def test_refetch_after_ttl(self, system, indoor_client, clock):
        """After the TTL entries are refetched."""
        system.refresh(24)
        clock.advance(31)
        state = system.refresh(24)

        assert indoor_client.fetch_latest.call_count == 2
        assert state.cache_hits == []

    def test_history_cached_per_window(self, system, indoor_client):
        """Each window has its own history cache key."""
        system.refresh(24)
        system.refresh(6)

        hours = [call.args[0] for call in indoor_client.fetch_history.call_args_list]
        assert hours == [24, 6]

    def test_expired_entries_purged_on_refresh(self, system, clock):
        """Stale entries for windows no longer viewed are dropped."""
        system.refresh(24)
        system.refresh(6)
        assert len(system.cache) == 4

        clock.advance(31)
        system.refresh(6)

        # history_24 is gone; only the three refetched entries remain
        assert len(system.cache) == 3

    def test_failures_are_not_cached(self, system, outdoor_client):
        """A failed fetch is retried on the next refresh."""
        outdoor_client.fetch_current.side_effect = [FetchError("x"), OUTDOOR_SAMPLE]

        first = system.refresh(24)
        second = system.refresh(24)

        assert OUTDOOR in first.errors
        assert second.is_available(OUTDOOR)
        assert outdoor_client.fetch_current.call_count == 2

    def test_sweep_forces_refetch(self, system, indoor_client, clock):
        """The periodic sweep empties the cache."""
        system.refresh(24)
        clock.advance(300)
        system.cache.ttl_seconds = 1000  # keep entries fresh so only the sweep evicts
        system.refresh(24)

        assert indoor_client.fetch_latest.call_count == 2

    def test_clear_cache(self, system, indoor_client):
        system.refresh(24)
        system.clear_cache()
        system.refresh(24)
        assert indoor_client.fetch_latest.call_count == 2

    # ==================== Defaults & Serialization ====================

    def test_default_window_from_config(self, system, indoor_client):
        state = system.refresh()
        assert state.window_hours == 24
        indoor_client.fetch_history.assert_called_once_with(24)

    def test_state_to_dict(self, system):
        snapshot = system.refresh(24, seed=1).to_dict()

        assert snapshot["window_hours"] == 24
        assert snapshot["indoor"]["result"]["label"] == "GOOD"
        assert snapshot["outdoor"]["sample"]["us_aqi"] == 120
        assert snapshot["history"]["points"] == 144
        assert snapshot["history"]["outdoor_is_synthetic"] is True
        assert snapshot["errors"] == {}
