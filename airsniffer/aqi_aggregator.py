"""
AQI aggregator module for the AirSniffer dashboard.

This module contains the AQIAggregator class which combines the per-pollutant
levels of an indoor reading into one overall indoor level, and picks the
outdoor level from whichever outdoor signal is available.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .outdoor_sample import OutdoorSample
from .pollutant_classifier import DEFAULT_LEVEL, PollutantClassifier, clamp_level
from .sensor_reading import Reading

_LOGGER = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PollutantBreakdown:
    """Per-pollutant levels behind one overall indoor level."""

    co2_level: int
    tvoc_level: int
    overall_level: int


class AQIAggregator:
    """
    Combines pollutant classifications into a single indoor AQI level.

    CO2 is weighted more heavily than TVOC because it is the more
    safety-critical indoor signal. The weights are fixed policy constants.
    """

    CO2_WEIGHT = 0.6
    TVOC_WEIGHT = 0.4

    def __init__(self, classifier: Optional[PollutantClassifier] = None) -> None:
        self.classifier = classifier or PollutantClassifier()

    def pollutant_breakdown(self, reading: Optional[Reading]) -> PollutantBreakdown:
        """
        Classifies each pollutant of a reading and the weighted overall level.

        A missing reading yields moderate (3) for every level.
        """
        if reading is None:
            return PollutantBreakdown(DEFAULT_LEVEL, DEFAULT_LEVEL, DEFAULT_LEVEL)

        co2_level = self.classifier.classify_by_co2(reading.co2_ppm)
        tvoc_level = self.classifier.classify_by_tvoc(reading.tvoc_ppb)

        weighted = co2_level * self.CO2_WEIGHT + tvoc_level * self.TVOC_WEIGHT
        overall = clamp_level(round_half_up(weighted))

        return PollutantBreakdown(co2_level, tvoc_level, overall)

    def overall_indoor_aqi(self, reading: Optional[Reading]) -> int:
        """
        Computes the overall indoor AQI level for one reading.

        overall = round(co2_level * 0.6 + tvoc_level * 0.4), clamped to
        [1, 5]. Never raises: a missing reading is moderate (3).

        Args:
            reading: Indoor sensor reading, or None if unavailable

        Returns:
            Overall indoor AQI level in [1, 5]
        """
        return self.pollutant_breakdown(reading).overall_level

    def outdoor_aqi(self, sample: Optional[OutdoorSample]) -> int:
        """Outdoor AQI level, preferring US AQI over PM2.5."""
        return self.classifier.classify_outdoor(sample)

    def log_breakdown(self, reading: Optional[Reading]) -> PollutantBreakdown:
        breakdown = self.pollutant_breakdown(reading)
        _LOGGER.debug(
            "Indoor AQI: co2=%s ppm (level %d), tvoc=%s ppb (level %d) -> overall %d",
            reading.co2_ppm if reading else None,
            breakdown.co2_level,
            reading.tvoc_ppb if reading else None,
            breakdown.tvoc_level,
            breakdown.overall_level,
        )
        return breakdown
