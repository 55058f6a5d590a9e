"""
Outdoor sample module for the AirSniffer dashboard.

Defines the OutdoorSample dataclass which merges the "current" blocks of the
Open-Meteo forecast and air-quality responses. The two APIs can fail
independently, so every field is nullable.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional


def _current(payload: Optional[dict[str, Any]]) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    current = payload.get("current")
    return current if isinstance(current, dict) else {}


def _number(block: dict[str, Any], key: str) -> Optional[float]:
    value = block.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class OutdoorSample:
    """
    Current outdoor conditions at the configured coordinates.

    Attributes:
        temperature: Air temperature at 2 m in Celsius
        humidity: Relative humidity at 2 m in percent
        pressure: Surface pressure in hPa
        wind_speed: Wind speed at 10 m in km/h
        weather_code: WMO weather interpretation code
        pm25: PM2.5 concentration in µg/m³
        pm10: PM10 concentration in µg/m³
        us_aqi: US EPA air quality index (0-500)
    """

    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    wind_speed: Optional[float] = None
    weather_code: Optional[int] = None
    pm25: Optional[float] = None
    pm10: Optional[float] = None
    us_aqi: Optional[float] = None

    @classmethod
    def from_open_meteo(
        cls,
        weather: Optional[dict[str, Any]],
        air_quality: Optional[dict[str, Any]],
    ) -> "OutdoorSample":
        """
        Merges the forecast and air-quality responses into one sample.

        Either response may be None (its fetch failed) or lack any field;
        the corresponding attributes are then None.
        """
        weather_now = _current(weather)
        air_now = _current(air_quality)

        code = _number(weather_now, "weather_code")

        return cls(
            temperature=_number(weather_now, "temperature_2m"),
            humidity=_number(weather_now, "relative_humidity_2m"),
            pressure=_number(weather_now, "surface_pressure"),
            wind_speed=_number(weather_now, "wind_speed_10m"),
            weather_code=int(code) if code is not None else None,
            pm25=_number(air_now, "pm2_5"),
            pm10=_number(air_now, "pm10"),
            us_aqi=_number(air_now, "us_aqi"),
        )

    def has_air_quality(self) -> bool:
        """True if at least one signal usable for the outdoor AQI is present."""
        return self.us_aqi is not None or self.pm25 is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "wind_speed": self.wind_speed,
            "weather_code": self.weather_code,
            "pm25": self.pm25,
            "pm10": self.pm10,
            "us_aqi": self.us_aqi,
        }
