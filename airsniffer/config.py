"""
Configuration module for the AirSniffer dashboard.

Settings come from AIRSNIFFER_* environment variables, optionally loaded
from a .env file. Explicit keyword arguments win over the environment, and
the environment wins over the defaults.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "AIRSNIFFER_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# History windows offered in the UI (hours)
HISTORY_WINDOWS = (6, 12, 24, 168)


@dataclass
class DashboardConfig:
    """
    Runtime settings for the dashboard.

    Attributes:
        api_base: Base URL of the indoor sensor API
        latitude: Latitude for the Open-Meteo queries
        longitude: Longitude for the Open-Meteo queries
        timezone: IANA timezone for Open-Meteo and chart labels
        request_timeout: Per-request timeout in seconds
        cache_ttl: Cache time-to-live in seconds
        cache_sweep_interval: Interval between full cache sweeps in seconds
        refresh_interval: Auto-refresh period in seconds
        default_window: History window selected on first load (hours)
        log_level: Logging level name
    """

    api_base: str = "https://airsniffer-api.onrender.com"
    latitude: float = -29.1734
    longitude: float = -54.8635
    timezone: str = "America/Sao_Paulo"
    request_timeout: float = 8.0
    cache_ttl: float = 30.0
    cache_sweep_interval: float = 300.0
    refresh_interval: int = 60
    default_window: int = 24
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True, **overrides: Any) -> "DashboardConfig":
        """
        Builds a config from AIRSNIFFER_* variables.

        Values that cannot be converted to the field's type are ignored with
        a warning and the default is used instead.

        Args:
            load_env_file: Load a .env file into the environment first
            **overrides: Explicit values, taking precedence over the environment
        """
        if load_env_file:
            load_dotenv()

        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in overrides:
                values[f.name] = overrides[f.name]
                continue

            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue

            converter = type(f.default)
            try:
                values[f.name] = converter(raw.strip())
            except ValueError:
                _LOGGER.warning(
                    "Ignoring invalid %s%s=%r, using default %r",
                    ENV_PREFIX, f.name.upper(), raw, f.default,
                )

        config = cls(**values)
        config.api_base = config.api_base.rstrip("/")
        return config

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Checks that the settings are usable.

        Returns:
            (True, None) if valid, otherwise (False, reason)
        """
        if not self.api_base.startswith(("http://", "https://")):
            return (False, "api_base must be an http(s) URL")

        if not -90 <= self.latitude <= 90:
            return (False, "latitude must be between -90 and 90")

        if not -180 <= self.longitude <= 180:
            return (False, "longitude must be between -180 and 180")

        if self.request_timeout <= 0:
            return (False, "request_timeout must be > 0")

        if self.cache_ttl <= 0 or self.cache_sweep_interval <= 0:
            return (False, "cache_ttl and cache_sweep_interval must be > 0")

        if self.refresh_interval <= 0:
            return (False, "refresh_interval must be > 0")

        if self.display_tz() is None:
            return (False, f"unknown timezone: {self.timezone}")

        return (True, None)

    def display_tz(self) -> Optional[ZoneInfo]:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return None


def configure_logging(level: str = "INFO") -> None:
    """Sets up root logging with a stream handler."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
