"""
Dashboard state module for the AirSniffer dashboard.

This module defines the DashboardState dataclass: everything one refresh
cycle produced for the rendering layer. It replaces page-level globals with
an explicit object the UI owns, and records which panels are degraded so
each widget can show its own "data unavailable" state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .aqi_aggregator import PollutantBreakdown
from .classification_result import ClassificationResult
from .history_sampler import HistorySeries, QuickMetrics
from .outdoor_sample import OutdoorSample
from .sensor_reading import Reading

INDOOR = "indoor"
OUTDOOR = "outdoor"
HISTORY = "history"
PANELS = (INDOOR, OUTDOOR, HISTORY)


@dataclass
class DashboardState:
    """
    Result of one refresh cycle.

    Attributes:
        refreshed_at: When the refresh completed
        window_hours: History window that was requested
        indoor: Latest indoor reading, or None if unavailable
        indoor_result: Renderable classification of the indoor reading
        indoor_breakdown: Per-pollutant levels behind the indoor level
        outdoor: Current outdoor sample, or None if unavailable
        outdoor_result: Renderable classification of the outdoor sample
        weather_condition: Text for the outdoor weather code
        history: Chart series for the window, or None if unavailable
        metrics: Quick metrics for the window, or None if unavailable
        errors: User-facing message per failed panel
        cache_hits: Cache keys served without a request
    """

    refreshed_at: datetime
    window_hours: int
    indoor: Optional[Reading] = None
    indoor_result: Optional[ClassificationResult] = None
    indoor_breakdown: Optional[PollutantBreakdown] = None
    outdoor: Optional[OutdoorSample] = None
    outdoor_result: Optional[ClassificationResult] = None
    weather_condition: Optional[str] = None
    history: Optional[HistorySeries] = None
    metrics: Optional[QuickMetrics] = None
    errors: dict[str, str] = field(default_factory=dict)
    cache_hits: list[str] = field(default_factory=list)

    def is_available(self, panel: str) -> bool:
        return panel not in self.errors

    def is_connected(self) -> bool:
        """True if at least one panel has data."""
        return any(self.is_available(panel) for panel in PANELS)

    def to_dict(self) -> dict[str, object]:
        """
        Converts the state to a serializable dictionary.

        Used for the refresh details view and for debugging.
        """
        return {
            "refreshed_at": self.refreshed_at.isoformat(),
            "window_hours": self.window_hours,
            "indoor": {
                "reading": self.indoor.to_dict() if self.indoor else None,
                "result": self.indoor_result.to_dict() if self.indoor_result else None,
                "co2_level": self.indoor_breakdown.co2_level if self.indoor_breakdown else None,
                "tvoc_level": self.indoor_breakdown.tvoc_level if self.indoor_breakdown else None,
            },
            "outdoor": {
                "sample": self.outdoor.to_dict() if self.outdoor else None,
                "result": self.outdoor_result.to_dict() if self.outdoor_result else None,
                "weather_condition": self.weather_condition,
            },
            "history": {
                "points": len(self.history) if self.history is not None else 0,
                "outdoor_is_synthetic": (
                    self.history.outdoor_is_synthetic if self.history is not None else None
                ),
                "metrics": self.metrics.to_dict() if self.metrics else None,
            },
            "errors": dict(self.errors),
            "cache_hits": list(self.cache_hits),
        }
