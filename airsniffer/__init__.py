"""
AirSniffer dashboard core.

Classifies indoor sensor readings and Open-Meteo outdoor conditions into a
1-5 air quality index and prepares gauges, cards and chart series for the
Streamlit page in ui/web_main.py.
"""

from .aqi_aggregator import AQIAggregator
from .dashboard_state import DashboardState
from .dashboard_system import DashboardSystem
from .pollutant_classifier import PollutantClassifier

__all__ = ["AQIAggregator", "DashboardState", "DashboardSystem", "PollutantClassifier"]
