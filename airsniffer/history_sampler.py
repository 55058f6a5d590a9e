"""
History sampler module for the AirSniffer dashboard.

This module prepares the indoor reading history for the time-series chart:
it restores chronological order, bounds the number of points per window,
derives sparse tick labels, computes the indoor AQI series and the quick
metrics shown under the chart.

There is no outdoor history endpoint. The outdoor line on the chart is a
synthetic trend built around the single live outdoor level; it is flagged
as synthetic on the returned series and must never be shown as measured
history.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .aqi_aggregator import AQIAggregator
from .pollutant_classifier import MAX_LEVEL, MIN_LEVEL, clamp_level
from .sensor_reading import Reading

_LOGGER = logging.getLogger(__name__)

# Chart points per history window (hours)
MAX_POINTS_BY_WINDOW = {6: 36, 12: 72, 24: 144, 168: 168}
DEFAULT_MAX_POINTS = 144

# Synthetic outdoor trend shape
TREND_FREQUENCY = 0.3
TREND_AMPLITUDE = 0.4
TREND_JITTER = 0.15


@dataclass
class HistorySeries:
    """
    Chart-ready history for one window.

    Attributes:
        labels: Tick label per point; "" for points without a tick
        indoor_series: Overall indoor AQI level per point
        outdoor_series: Synthetic outdoor trend, same length as indoor_series,
                        or empty when no outdoor level is known
        readings: The sampled readings, oldest first
        window_hours: Requested window
        outdoor_is_synthetic: True when outdoor_series is a fabricated trend
    """

    labels: list[str]
    indoor_series: list[int]
    outdoor_series: list[int]
    readings: list[Reading] = field(default_factory=list)
    window_hours: int = 24
    outdoor_is_synthetic: bool = True

    def __len__(self) -> int:
        return len(self.indoor_series)


@dataclass(frozen=True)
class QuickMetrics:
    """
    Summary of a sampled window. None means "unavailable", never zero.
    """

    avg_temperature: Optional[float]
    avg_humidity: Optional[float]
    peak_aqi: Optional[int]
    mean_aqi: Optional[float]
    air_quality: Optional[str]

    def to_dict(self) -> dict[str, object]:
        return {
            "avg_temperature": self.avg_temperature,
            "avg_humidity": self.avg_humidity,
            "peak_aqi": self.peak_aqi,
            "mean_aqi": self.mean_aqi,
            "air_quality": self.air_quality,
        }


def max_points_for_window(window_hours) -> int:
    """Maximum number of chart points for a window; 144 for unknown windows."""
    try:
        return MAX_POINTS_BY_WINDOW.get(int(window_hours), DEFAULT_MAX_POINTS)
    except (TypeError, ValueError):
        return DEFAULT_MAX_POINTS


def sort_chronologically(readings: Sequence[Reading]) -> list[Reading]:
    """
    Returns readings oldest first.

    The history endpoint may answer in either order. Sorting is stable, and
    readings without a timestamp are kept at the front in their original
    relative order.
    """
    if not readings:
        return []

    stamps = pd.to_datetime([r.created_at for r in readings], utc=True)
    frame = pd.DataFrame({"created_at": stamps})
    order = frame.sort_values("created_at", kind="stable", na_position="first").index
    return [readings[i] for i in order]


def to_display_time(ts: datetime, display_tz: Optional[tzinfo]) -> datetime:
    """Converts an aware timestamp to display time; naive ones are already local."""
    if display_tz is None or ts.tzinfo is None:
        return ts
    return ts.astimezone(display_tz)


def make_time_labels(
    readings: Sequence[Reading],
    window_hours: int,
    display_tz: Optional[tzinfo] = None,
) -> list[str]:
    """
    Builds sparse tick labels for the chart.

    - windows up to 6 h: "HH:MM" on every point when there are at most 8,
      otherwise every ceil(N/6)-th point plus the last
    - windows up to 24 h: "HHh" every ceil(N/8)-th point plus the last
    - longer windows: "dd/mm HHh" every ceil(N/7)-th point plus the last

    Unlabelled points get "" so the chart still draws them.
    """
    total = len(readings)
    labels = []

    for index, reading in enumerate(readings):
        ts = reading.created_at
        is_last = index == total - 1
        label = ""

        if ts is not None:
            local = to_display_time(ts, display_tz)
            if window_hours <= 6:
                if total <= 8 or index % math.ceil(total / 6) == 0 or is_last:
                    label = local.strftime("%H:%M")
            elif window_hours <= 24:
                if index % math.ceil(total / 8) == 0 or is_last:
                    label = local.strftime("%Hh")
            else:
                if index % math.ceil(total / 7) == 0 or is_last:
                    label = local.strftime("%d/%m %Hh")

        labels.append(label)

    return labels


def synthesize_outdoor_series(
    current_level: int,
    length: int,
    seed: Optional[int] = None,
) -> list[int]:
    """
    Fabricates an outdoor trend line around the current outdoor level.

    value_i = level + sin(i * 0.3) * 0.4 + U(-0.15, 0.15), rounded half-up
    and clamped to [1, 5]. This is a display placeholder, not measured
    history. Pass a seed for a reproducible line.
    """
    if length <= 0:
        return []

    level = clamp_level(current_level)
    rng = np.random.default_rng(seed)
    steps = np.arange(length)

    values = (
        level
        + np.sin(steps * TREND_FREQUENCY) * TREND_AMPLITUDE
        + rng.uniform(-TREND_JITTER, TREND_JITTER, size=length)
    )
    rounded = np.clip(np.floor(values + 0.5), MIN_LEVEL, MAX_LEVEL)
    return [int(v) for v in rounded]


def _air_quality_label(mean_aqi: float) -> str:
    if mean_aqi <= 2:
        return "Good"
    if mean_aqi <= 3:
        return "Moderate"
    return "Poor"


def _mean_or_none(values: Sequence[Optional[float]]) -> Optional[float]:
    series = pd.Series(values, dtype="float64")
    mean = series.mean(skipna=True)
    return None if pd.isna(mean) else float(mean)


class HistorySampler:
    """
    Down-samples reading history into chart series and quick metrics.
    """

    def __init__(
        self,
        aggregator: Optional[AQIAggregator] = None,
        display_tz: Optional[tzinfo] = None,
    ) -> None:
        self.aggregator = aggregator or AQIAggregator()
        self.display_tz = display_tz

    def sample(
        self,
        readings: Sequence[Reading],
        window_hours: int,
        outdoor_level: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> HistorySeries:
        """
        Prepares one window of history for the chart.

        Readings are put in chronological order and truncated to the most
        recent N points for the window. The indoor series is the overall
        indoor AQI per point. When an outdoor level is known, a synthetic
        outdoor trend of the same length is attached.

        Args:
            readings: Readings from the history endpoint, in any order
            window_hours: History window (6, 12, 24 or 168)
            outdoor_level: Current outdoor AQI level, or None if unknown
            seed: Seed for the synthetic outdoor trend

        Returns:
            HistorySeries with labels, indoor and outdoor series
        """
        bound = max_points_for_window(window_hours)
        ordered = sort_chronologically(readings)
        sliced = ordered[-bound:] if len(ordered) > bound else ordered

        indoor = [self.aggregator.overall_indoor_aqi(r) for r in sliced]

        if outdoor_level is not None:
            outdoor = synthesize_outdoor_series(outdoor_level, len(sliced), seed)
        else:
            outdoor = []

        _LOGGER.debug(
            "Sampled %d of %d readings for %sh window", len(sliced), len(readings), window_hours
        )

        return HistorySeries(
            labels=make_time_labels(sliced, window_hours, self.display_tz),
            indoor_series=indoor,
            outdoor_series=outdoor,
            readings=list(sliced),
            window_hours=window_hours,
            outdoor_is_synthetic=True,
        )

    def quick_metrics(self, readings: Sequence[Reading]) -> QuickMetrics:
        """
        Summarizes a sampled window.

        Averages temperature and humidity over non-null values, takes the
        peak and mean overall indoor AQI and labels the mean as "Good"
        (<= 2), "Moderate" (<= 3) or "Poor".
        """
        if not readings:
            return QuickMetrics(None, None, None, None, None)

        aqis = [self.aggregator.overall_indoor_aqi(r) for r in readings]
        mean_aqi = float(np.mean(aqis))

        return QuickMetrics(
            avg_temperature=_mean_or_none([r.temperature for r in readings]),
            avg_humidity=_mean_or_none([r.humidity for r in readings]),
            peak_aqi=max(aqis),
            mean_aqi=mean_aqi,
            air_quality=_air_quality_label(mean_aqi),
        )
