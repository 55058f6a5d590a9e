"""
WMO weather code descriptions used on the outdoor card.
"""

from typing import Optional

CONDITIONS = {
    0: ("Clear sky", "☀️"),
    1: ("Mainly clear", "🌤️"),
    2: ("Partly cloudy", "⛅"),
    3: ("Overcast", "☁️"),
    45: ("Fog", "🌫️"),
    48: ("Depositing rime fog", "🌫️"),
    51: ("Light drizzle", "🌦️"),
    53: ("Moderate drizzle", "🌦️"),
    55: ("Dense drizzle", "🌦️"),
    61: ("Slight rain", "🌧️"),
    63: ("Moderate rain", "🌧️"),
    65: ("Heavy rain", "🌧️"),
    80: ("Slight rain showers", "🌦️"),
    81: ("Moderate rain showers", "🌦️"),
    82: ("Violent rain showers", "🌦️"),
    95: ("Thunderstorm", "⛈️"),
    96: ("Thunderstorm with hail", "⛈️"),
    99: ("Thunderstorm with heavy hail", "⛈️"),
}

UNKNOWN_CONDITION = "Unknown condition"
DEFAULT_ICON = "🌤️"


def weather_condition(code: Optional[int]) -> str:
    return CONDITIONS.get(code, (UNKNOWN_CONDITION, DEFAULT_ICON))[0]


def weather_icon(code: Optional[int]) -> str:
    return CONDITIONS.get(code, (UNKNOWN_CONDITION, DEFAULT_ICON))[1]
