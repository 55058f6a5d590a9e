"""
Tests for the presentation mapper and ClassificationResult.

Tests cover:
- Equivalence classes: every level 1-5
- Boundary value analysis: gauge percent floor and ceiling
- Error scenarios: None, out-of-range and non-numeric levels
"""

import pytest

from airsniffer import presentation_mapper as mapper
from airsniffer.classification_result import ClassificationResult


class TestLevelToPercent:
    """Test suite for level_to_percent."""

    def test_exact_percentages(self):
        """Equivalence class: levels 1-5 map to 20..100 in steps of 20."""
        assert [mapper.level_to_percent(level) for level in range(1, 6)] == [20, 40, 60, 80, 100]

    @pytest.mark.parametrize("level", [-10, 0, 1, 3, 5, 6, 99, None, "bad"])
    def test_always_between_10_and_100(self, level):
        """Boundary: any input stays within the gauge bounds."""
        assert 10 <= mapper.level_to_percent(level) <= 100

    def test_missing_level_renders_moderate(self):
        """Error scenario: None → moderate gauge (60%)."""
        assert mapper.level_to_percent(None) == 60


class TestLabelsAndColors:
    """Test suite for level_to_label, level_to_color and status_name."""

    @pytest.mark.parametrize("level,label", [
        (1, "EXCELLENT"),
        (2, "GOOD"),
        (3, "MODERATE"),
        (4, "POOR"),
        (5, "VERY POOR"),
    ])
    def test_canonical_labels(self, level, label):
        """Equivalence class: one canonical label per level."""
        assert mapper.level_to_label(level) == label

    def test_colors_are_distinct_hex(self):
        """Colors: five distinct hex tokens."""
        colors = [mapper.level_to_color(level) for level in range(1, 6)]
        assert len(set(colors)) == 5
        assert all(c.startswith("#") and len(c) == 7 for c in colors)

    def test_color_progression(self):
        """Colors: green for level 1, red for level 5."""
        assert mapper.level_to_color(1) == "#00c853"
        assert mapper.level_to_color(5) == "#ff3d00"

    @pytest.mark.parametrize("level", [None, 0, 6, 9, "x"])
    def test_unknown_level_falls_back_to_moderate(self, level):
        """Error scenario: unknown level → moderate label and color."""
        assert mapper.level_to_label(level) == "MODERATE"
        assert mapper.level_to_color(level) == "#ffd600"
        assert mapper.status_name(level) == "moderate"

    def test_status_names(self):
        """Card status tokens: levels 4 and 5 share the poor tint."""
        assert [mapper.status_name(level) for level in range(1, 6)] == [
            "excellent", "good", "moderate", "poor", "poor",
        ]


class TestClassify:
    """Test suite for classify and ClassificationResult."""

    def test_classify_builds_full_result(self):
        """classify bundles level, label, color and percent."""
        result = mapper.classify(4)
        assert result == ClassificationResult(level=4, label="POOR", color="#ff9100", gauge_percent=80)
        assert result.is_within_scale()

    def test_classify_unknown_level(self):
        """Error scenario: unknown level → moderate result."""
        result = mapper.classify(None)
        assert result.level == 3
        assert result.label == "MODERATE"
        assert result.gauge_percent == 60

    def test_out_of_scale_result_detected(self):
        """is_within_scale rejects hand-built invalid results."""
        assert not ClassificationResult(level=7, label="?", color="#000000", gauge_percent=140).is_within_scale()

    def test_to_dict(self):
        assert mapper.classify(1).to_dict() == {
            "level": 1,
            "label": "EXCELLENT",
            "color": "#00c853",
            "gauge_percent": 20,
        }
