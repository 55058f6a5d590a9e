"""
Dashboard system module for the AirSniffer dashboard.

This module contains the DashboardSystem class, the orchestrator of one
refresh cycle. It reads each upstream query through the cache, fetches the
misses concurrently, isolates failures per panel, classifies the results and
prepares the history chart, returning an explicit DashboardState for the
rendering layer.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Any, Callable, Optional

from . import presentation_mapper
from .api_client import FetchError, IndoorSensorClient, OpenMeteoClient
from .aqi_aggregator import AQIAggregator
from .config import DashboardConfig
from .dashboard_state import HISTORY, INDOOR, OUTDOOR, DashboardState
from .data_cache import DataCache
from .history_sampler import HistorySampler
from .weather_codes import weather_condition

_LOGGER = logging.getLogger(__name__)

UNAVAILABLE_MESSAGES = {
    INDOOR: "Indoor data unavailable",
    OUTDOOR: "Outdoor data unavailable",
    HISTORY: "History unavailable",
}

INDOOR_LATEST_KEY = "indoor_latest"
OUTDOOR_CURRENT_KEY = "outdoor_current"


def history_key(hours: int) -> str:
    return f"history_{hours}"


class DashboardSystem:
    """
    Orchestrates a dashboard refresh.

    The three fetches (latest indoor reading, history for the selected
    window, current outdoor conditions) are cache-fronted and the misses are
    run concurrently. A failing fetch only degrades its own panel; refresh()
    never raises for upstream failures.

    Cache reads and writes happen on the calling thread, before and after
    the worker fan-out. Overlapping refreshes are not serialized: fetches
    are idempotent, so a re-entrant refresh only costs redundant requests.
    """

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        indoor_client: Optional[IndoorSensorClient] = None,
        outdoor_client: Optional[OpenMeteoClient] = None,
        cache: Optional[DataCache] = None,
        aggregator: Optional[AQIAggregator] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        self.indoor_client = indoor_client or IndoorSensorClient(
            self.config.api_base, timeout=self.config.request_timeout
        )
        self.outdoor_client = outdoor_client or OpenMeteoClient(
            self.config.latitude,
            self.config.longitude,
            timezone=self.config.timezone,
            timeout=self.config.request_timeout,
        )
        self.cache = cache or DataCache(
            ttl_seconds=self.config.cache_ttl,
            sweep_interval_seconds=self.config.cache_sweep_interval,
        )
        self.aggregator = aggregator or AQIAggregator()
        self.sampler = HistorySampler(self.aggregator, display_tz=self.config.display_tz())

    def clear_cache(self) -> None:
        """Clear the cache to force fresh fetches on the next refresh."""
        self.cache.clear()

    def _fetch_all(
        self, jobs: dict[str, tuple[str, Callable[[], Any]]]
    ) -> tuple[dict[str, Any], dict[str, str], list[str]]:
        """
        Resolves each job from the cache or by running it.

        Args:
            jobs: Cache key -> (panel, fetch callable)

        Returns:
            (results by panel, error messages by panel, cache keys hit)
        """
        results: dict[str, Any] = {}
        errors: dict[str, str] = {}
        hits: list[str] = []
        pending: dict[str, tuple[str, Callable[[], Any]]] = {}

        for key, (panel, fetch) in jobs.items():
            cached = self.cache.get(key)
            if cached is not None:
                results[panel] = cached
                hits.append(key)
                _LOGGER.debug("Cache hit: %s", key)
            else:
                pending[key] = (panel, fetch)

        if not pending:
            return results, errors, hits

        with ThreadPoolExecutor(max_workers=len(pending)) as pool:
            futures = {pool.submit(fetch): key for key, (_, fetch) in pending.items()}
            for future in as_completed(futures):
                key = futures[future]
                panel = pending[key][0]
                try:
                    value = future.result()
                except FetchError as e:
                    _LOGGER.warning("Fetching %s failed: %s", key, e)
                    errors[panel] = UNAVAILABLE_MESSAGES[panel]
                    continue
                except Exception:
                    _LOGGER.exception("Unexpected error fetching %s", key)
                    errors[panel] = UNAVAILABLE_MESSAGES[panel]
                    continue

                results[panel] = value
                self.cache.set(key, value)

        return results, errors, hits

    def refresh(self, window_hours: Optional[int] = None, seed: Optional[int] = None) -> DashboardState:
        """
        Runs one refresh cycle.

        Args:
            window_hours: History window; defaults to the configured window
            seed: Seed for the synthetic outdoor trend line

        Returns:
            DashboardState with every panel either populated or marked
            unavailable
        """
        hours = int(window_hours or self.config.default_window)

        if self.cache.sweep_if_due():
            _LOGGER.info("Cache swept")
        else:
            # History for windows no longer viewed would otherwise linger
            purged = self.cache.purge_expired()
            if purged:
                _LOGGER.debug("Purged %d expired cache entries", purged)

        jobs = {
            INDOOR_LATEST_KEY: (INDOOR, self.indoor_client.fetch_latest),
            history_key(hours): (HISTORY, lambda: self.indoor_client.fetch_history(hours)),
            OUTDOOR_CURRENT_KEY: (OUTDOOR, self.outdoor_client.fetch_current),
        }
        results, errors, hits = self._fetch_all(jobs)

        state = DashboardState(
            refreshed_at=datetime.now(),
            window_hours=hours,
            errors=errors,
            cache_hits=hits,
        )

        indoor = results.get(INDOOR)
        if indoor is not None:
            breakdown = self.aggregator.log_breakdown(indoor)
            state.indoor = indoor
            state.indoor_breakdown = breakdown
            state.indoor_result = presentation_mapper.classify(breakdown.overall_level)

        outdoor = results.get(OUTDOOR)
        outdoor_level = None
        if outdoor is not None:
            outdoor_level = self.aggregator.outdoor_aqi(outdoor)
            state.outdoor = outdoor
            state.outdoor_result = presentation_mapper.classify(outdoor_level)
            state.weather_condition = weather_condition(outdoor.weather_code)
            _LOGGER.debug(
                "Outdoor AQI: us_aqi=%s, pm25=%s -> level %d",
                outdoor.us_aqi, outdoor.pm25, outdoor_level,
            )

        history = results.get(HISTORY)
        if history is not None:
            state.history = self.sampler.sample(history, hours, outdoor_level, seed)
            state.metrics = self.sampler.quick_metrics(state.history.readings)

        _LOGGER.info(
            "Refresh complete: window=%sh, failed=%s, cache_hits=%s",
            hours,
            sorted(errors) or "none",
            hits or "none",
        )
        return state
