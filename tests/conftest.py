"""
Pytest configuration for AirSniffer dashboard tests.

Provides shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from airsniffer.sensor_reading import Reading


class FakeClock:
    """Manually advanced clock for cache timing tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Fixture providing a FakeClock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def make_readings():
    """
    Fixture providing a factory for evenly spaced readings, oldest first.

    Readings are 10 minutes apart, ending at 2024-05-10 12:00 UTC.
    """
    def _make(count, co2_ppm=500, tvoc_ppb=100, temperature=22.0, humidity=55.0, step_minutes=10):
        end = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
        return [
            Reading(
                co2_ppm=co2_ppm,
                tvoc_ppb=tvoc_ppb,
                temperature=temperature,
                humidity=humidity,
                created_at=end - timedelta(minutes=step_minutes * (count - 1 - i)),
            )
            for i in range(count)
        ]
    return _make
