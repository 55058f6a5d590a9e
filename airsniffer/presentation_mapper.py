"""
Presentation mapper module for the AirSniffer dashboard.

Turns AQI levels into display primitives: label text, color token, gauge
percentage and card status. Unknown levels fall back to the moderate
presentation rather than failing.
"""

from typing import Optional

from .classification_result import ClassificationResult
from .pollutant_classifier import DEFAULT_LEVEL, MAX_LEVEL, MIN_LEVEL, clamp_level

LABELS = {
    1: "EXCELLENT",
    2: "GOOD",
    3: "MODERATE",
    4: "POOR",
    5: "VERY POOR",
}

COLORS = {
    1: "#00c853",  # green
    2: "#64dd17",  # light green
    3: "#ffd600",  # yellow
    4: "#ff9100",  # orange
    5: "#ff3d00",  # red
}

STATUS_NAMES = {
    1: "excellent",
    2: "good",
    3: "moderate",
    4: "poor",
    5: "poor",
}

# Floor for the gauge fill; unreachable for valid levels but kept as a bound.
MIN_GAUGE_PERCENT = 10


def _known_level(level: Optional[int]) -> int:
    if level is None:
        return DEFAULT_LEVEL
    try:
        level = int(level)
    except (TypeError, ValueError):
        return DEFAULT_LEVEL
    return level if MIN_LEVEL <= level <= MAX_LEVEL else DEFAULT_LEVEL


def level_to_percent(level: Optional[int]) -> int:
    """
    Gauge fill for a level: max(10, level * 20).

    The level is clamped to [1, 5] first, so the result is always between
    10 and 100. A missing level renders as moderate.
    """
    try:
        level = clamp_level(level) if level is not None else DEFAULT_LEVEL
    except (TypeError, ValueError):
        level = DEFAULT_LEVEL
    return max(MIN_GAUGE_PERCENT, level * 20)


def level_to_label(level: Optional[int]) -> str:
    return LABELS[_known_level(level)]


def level_to_color(level: Optional[int]) -> str:
    return COLORS[_known_level(level)]


def status_name(level: Optional[int]) -> str:
    """Status token shown on the indoor and outdoor cards; levels 4 and 5 share "poor"."""
    return STATUS_NAMES[_known_level(level)]


def classify(level: Optional[int]) -> ClassificationResult:
    """
    Builds the full renderable result for a level.

    Unknown or missing levels are presented as moderate (level 3).
    """
    known = _known_level(level)
    return ClassificationResult(
        level=known,
        label=level_to_label(known),
        color=level_to_color(known),
        gauge_percent=level_to_percent(known),
    )
