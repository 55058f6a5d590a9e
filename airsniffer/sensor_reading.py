"""
Sensor reading module for the AirSniffer dashboard.

This module defines the Reading dataclass which represents a single sample
from the indoor air-quality sensor API: CO2, TVOC, temperature, humidity and
the time the sample was taken. It provides parsing from the API's JSON rows
and validation of physically plausible ranges.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

_LOGGER = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # NaN and infinities count as malformed
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(round(number)) if number is not None else None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parses an ISO 8601 timestamp as sent by the sensor API.

    Accepts a trailing "Z" for UTC. Returns None for missing or unparseable
    values instead of raising, so one bad row never spoils a whole history.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        _LOGGER.debug("Unparseable created_at value: %r", value)
        return None


@dataclass(frozen=True)
class Reading:
    """
    Represents one indoor sensor sample.

    Every field is optional because the upstream API may omit any of them;
    the classifiers treat a missing pollutant as moderate (level 3).

    Attributes:
        co2_ppm: Carbon dioxide concentration in ppm
        tvoc_ppb: Total volatile organic compounds in ppb
        temperature: Temperature in Celsius
        humidity: Relative humidity in percent
        created_at: When the sensor took the sample
    """

    co2_ppm: Optional[int] = None
    tvoc_ppb: Optional[int] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, row: dict[str, Any]) -> "Reading":
        """
        Builds a Reading from one JSON row of /sensores or /historico.

        Fields that are absent or cannot be coerced to numbers become None.
        """
        return cls(
            co2_ppm=_to_int(row.get("co2_ppm")),
            tvoc_ppb=_to_int(row.get("tvoc_ppb")),
            temperature=_to_float(row.get("temperature")),
            humidity=_to_float(row.get("humidity")),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates present fields against physically plausible ranges.

        Checks:
        - co2_ppm must be non-negative
        - tvoc_ppb must be non-negative
        - temperature must be between -40 and 85 degrees Celsius
        - humidity must be between 0 and 100 percent

        Missing fields are not validation errors.

        Returns:
            A tuple containing:
            - bool: True if all present fields are plausible, False otherwise
            - Optional[str]: None if valid, or a descriptive error message
        """
        if self.co2_ppm is not None and self.co2_ppm < 0:
            return (False, "co2_ppm must be >= 0")

        if self.tvoc_ppb is not None and self.tvoc_ppb < 0:
            return (False, "tvoc_ppb must be >= 0")

        if self.temperature is not None and not -40 <= self.temperature <= 85:
            return (False, "temperature must be between -40 and 85")

        if self.humidity is not None and not 0 <= self.humidity <= 100:
            return (False, "humidity must be between 0 and 100")

        return (True, None)

    def to_dict(self) -> dict[str, object]:
        return {
            "co2_ppm": self.co2_ppm,
            "tvoc_ppb": self.tvoc_ppb,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
