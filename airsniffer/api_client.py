"""
API client module for the AirSniffer dashboard.

Thin HTTP clients for the three upstream sources: the indoor sensor API
(latest reading and history) and the Open-Meteo forecast and air-quality
APIs. Every request carries an explicit timeout. Transport errors, HTTP
error codes, undecodable bodies and empty or malformed payloads are all
raised as FetchError so callers can treat them alike.
"""

import logging
from typing import Any, Optional

import requests

from .outdoor_sample import OutdoorSample
from .sensor_reading import Reading

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 8.0


class FetchError(Exception):
    """An upstream fetch failed or returned unusable data."""


def get_json(url: str, params: Optional[dict[str, Any]] = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """
    GETs a URL and decodes the JSON body.

    Raises:
        FetchError: On timeout, connection error, HTTP error status or a
                    body that is not JSON
    """
    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.Timeout as e:
        raise FetchError(f"Timed out after {timeout}s: {url}") from e
    except requests.RequestException as e:
        raise FetchError(f"Request failed: {url}: {e}") from e
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {url}") from e


def _require_rows(payload: Any, what: str) -> list[dict[str, Any]]:
    if not isinstance(payload, list) or len(payload) == 0:
        raise FetchError(f"No {what} available")
    return [row for row in payload if isinstance(row, dict)]


class IndoorSensorClient:
    """
    Client for the indoor sensor API.

    Endpoints:
    - GET /sensores: readings, latest first
    - GET /historico?horas=<int>: readings for the window, in either order
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_latest(self) -> Reading:
        """
        Fetches the most recent indoor reading.

        Raises:
            FetchError: If the request fails or no reading is returned
        """
        rows = _require_rows(
            get_json(f"{self.base_url}/sensores", timeout=self.timeout), "indoor readings"
        )
        if not rows:
            raise FetchError("No indoor readings available")

        reading = Reading.from_api(rows[0])
        valid, reason = reading.validate()
        if not valid:
            _LOGGER.warning("Implausible indoor reading (%s): %s", reason, rows[0])
        return reading

    def fetch_history(self, hours: int) -> list[Reading]:
        """
        Fetches the readings of the last ``hours`` hours.

        Raises:
            FetchError: If the request fails or the history is empty
        """
        payload = get_json(
            f"{self.base_url}/historico",
            params={"horas": int(hours)},
            timeout=self.timeout,
        )
        rows = _require_rows(payload, "history")
        readings = [Reading.from_api(row) for row in rows]
        if not readings:
            raise FetchError("No history available")

        skipped = len(payload) - len(rows)
        if skipped:
            _LOGGER.warning("Skipped %d malformed history rows", skipped)
        return readings


class OpenMeteoClient:
    """
    Client for Open-Meteo current weather and air quality.

    The two calls are independent: if one fails the other's fields are still
    used. Only when both fail is the outdoor fetch a failure.
    """

    FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
    AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"

    WEATHER_FIELDS = "temperature_2m,relative_humidity_2m,surface_pressure,wind_speed_10m,weather_code"
    AIR_QUALITY_FIELDS = "pm2_5,pm10,us_aqi"

    def __init__(
        self,
        latitude: float,
        longitude: float,
        timezone: str = "America/Sao_Paulo",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.timezone = timezone
        self.timeout = timeout

    def _params(self, current: str) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "current": current,
            "timezone": self.timezone,
        }

    def fetch_current(self) -> OutdoorSample:
        """
        Fetches current weather and air quality and merges them.

        Raises:
            FetchError: If both the weather and air-quality calls fail
        """
        weather: Optional[dict[str, Any]] = None
        air_quality: Optional[dict[str, Any]] = None
        errors = []

        try:
            weather = get_json(self.FORECAST_URL, self._params(self.WEATHER_FIELDS), self.timeout)
        except FetchError as e:
            _LOGGER.warning("Weather fetch failed: %s", e)
            errors.append(str(e))

        try:
            air_quality = get_json(self.AIR_QUALITY_URL, self._params(self.AIR_QUALITY_FIELDS), self.timeout)
        except FetchError as e:
            _LOGGER.warning("Air quality fetch failed: %s", e)
            errors.append(str(e))

        if weather is None and air_quality is None:
            raise FetchError("; ".join(errors))

        return OutdoorSample.from_open_meteo(weather, air_quality)
