"""
Classification result module for the AirSniffer dashboard.

This module defines the ClassificationResult dataclass which bundles an AQI
level with everything the rendering layer needs to draw it: the label text,
the color token and the gauge fill percentage. Results are recomputed on
every refresh and never stored.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationResult:
    """
    Renderable classification of one AQI level.

    Attributes:
        level: AQI level in [1, 5]
        label: Canonical label (EXCELLENT, GOOD, MODERATE, POOR, VERY POOR)
        color: Hex color token for the level
        gauge_percent: Gauge fill in percent (20, 40, 60, 80 or 100)
    """

    level: int
    label: str
    color: str
    gauge_percent: int

    def is_within_scale(self) -> bool:
        """
        Checks that the result respects the dashboard's scale.

        Returns:
            True if level is in [1, 5] and gauge_percent in [10, 100]
        """
        return 1 <= self.level <= 5 and 10 <= self.gauge_percent <= 100

    def to_dict(self) -> dict[str, object]:
        return {
            "level": self.level,
            "label": self.label,
            "color": self.color,
            "gauge_percent": self.gauge_percent,
        }
