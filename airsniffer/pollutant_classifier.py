"""
Pollutant classifier module for the AirSniffer dashboard.

This module contains the PollutantClassifier class which maps single raw
measurements (TVOC, CO2, outdoor US AQI or PM2.5) onto the dashboard's 1-5
air quality scale. It is a pure classifier: it holds no state and never
raises for missing or out-of-range values.
"""

import math
from typing import Optional

from .outdoor_sample import OutdoorSample

MIN_LEVEL = 1
MAX_LEVEL = 5
DEFAULT_LEVEL = 3


def clamp_level(level: int) -> int:
    """Clamps an AQI level into the closed range [1, 5]."""
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def _usable(value: Optional[float]) -> bool:
    # NaN and infinities carry no signal
    return value is not None and math.isfinite(value)


def _tier(value: float, upper_bounds: tuple[float, ...]) -> int:
    # Upper bounds are inclusive; anything above the last bound is level 5.
    for level, bound in enumerate(upper_bounds, start=MIN_LEVEL):
        if value <= bound:
            return level
    return MAX_LEVEL


class PollutantClassifier:
    """
    Pure classifier mapping pollutant readings to AQI levels 1-5.

    Level meanings: 1 excellent, 2 good, 3 moderate, 4 poor, 5 very poor.
    A missing value always classifies as moderate (3), which is the safe
    default for a reading the sensor did not report.
    """

    # Inclusive upper bounds for levels 1-4
    TVOC_BOUNDS_PPB = (220, 660, 2200, 5500)
    CO2_BOUNDS_PPM = (600, 800, 1000, 1500)
    US_AQI_BOUNDS = (50, 100, 150, 200)
    PM25_BOUNDS_UG_M3 = (12, 35.5, 55.5, 150.5)

    def classify_by_tvoc(self, tvoc_ppb: Optional[float]) -> int:
        """
        Classifies a TVOC concentration.

        Tiers: <=220 ppb excellent, <=660 good, <=2200 moderate,
        <=5500 poor, above that very poor.

        Args:
            tvoc_ppb: TVOC concentration in ppb, or None if not reported

        Returns:
            AQI level in [1, 5]; 3 when the value is missing or not finite
        """
        if not _usable(tvoc_ppb):
            return DEFAULT_LEVEL
        return clamp_level(_tier(tvoc_ppb, self.TVOC_BOUNDS_PPB))

    def classify_by_co2(self, co2_ppm: Optional[float]) -> int:
        """
        Classifies a CO2 concentration.

        Tiers: <=600 ppm excellent, <=800 good, <=1000 moderate,
        <=1500 poor, above that very poor.

        Args:
            co2_ppm: CO2 concentration in ppm, or None if not reported

        Returns:
            AQI level in [1, 5]; 3 when the value is missing or not finite
        """
        if not _usable(co2_ppm):
            return DEFAULT_LEVEL
        return clamp_level(_tier(co2_ppm, self.CO2_BOUNDS_PPM))

    def classify_outdoor(self, sample: Optional[OutdoorSample]) -> int:
        """
        Classifies current outdoor air from the best available signal.

        The US AQI value is preferred and bucketed with EPA-style
        breakpoints (50/100/150/200). Without it, PM2.5 is bucketed at
        12/35.5/55.5/150.5 µg/m³. With neither, the level is moderate.

        Args:
            sample: Current outdoor sample, or None if the fetch failed

        Returns:
            AQI level in [1, 5]
        """
        if sample is None:
            return DEFAULT_LEVEL

        if _usable(sample.us_aqi):
            level = _tier(sample.us_aqi, self.US_AQI_BOUNDS)
        elif _usable(sample.pm25):
            level = _tier(sample.pm25, self.PM25_BOUNDS_UG_M3)
        else:
            level = DEFAULT_LEVEL

        return clamp_level(level)
