"""
Web UI module for the AirSniffer dashboard.

This module provides the Streamlit page: indoor and outdoor AQI gauges with
their detail cards, the history chart for the selected window and the quick
metrics row. The page refreshes itself every minute; any rerun (window
change, reconnect after the tab was hidden) also refreshes the data.
"""

import sys
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional

# Add project root to Python path to enable imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import plotly.graph_objects as go
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from airsniffer.classification_result import ClassificationResult
from airsniffer.config import HISTORY_WINDOWS, DashboardConfig, configure_logging
from airsniffer.dashboard_state import HISTORY, INDOOR, OUTDOOR, DashboardState
from airsniffer.dashboard_system import DashboardSystem
from airsniffer.history_sampler import HistorySeries, to_display_time
from airsniffer.presentation_mapper import LABELS, status_name
from airsniffer.weather_codes import weather_icon

PLACEHOLDER = "—"
INDOOR_LINE_COLOR = "#8b5cf6"
OUTDOOR_LINE_COLOR = "#f97316"
WINDOW_NAMES = {6: "6 hours", 12: "12 hours", 24: "24 hours", 168: "7 days"}
STATUS_ICONS = {"excellent": "🟢", "good": "🟢", "moderate": "🟡", "poor": "🔴"}


# Initialize session state: the dashboard system owns the cache across reruns
if "dashboard_system" not in st.session_state:
    config = DashboardConfig.from_env()
    configure_logging(config.log_level)
    st.session_state.dashboard_system = DashboardSystem(config)


def _fmt(value: Optional[float], unit: str = "", decimals: int = 1) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{value:.{decimals}f}{unit}"


def _fmt_time(ts: Optional[datetime], display_tz: Optional[tzinfo]) -> str:
    if ts is None:
        return PLACEHOLDER
    return to_display_time(ts, display_tz).strftime("%d/%m/%Y %H:%M")


def _status_badge(result: ClassificationResult) -> None:
    status = status_name(result.level)
    st.markdown(
        f"<span style=\"background-color:{result.color};color:#000;padding:2px 8px;"
        f"border-radius:8px\">{STATUS_ICONS[status]} {status.title()}</span>",
        unsafe_allow_html=True,
    )


def _gauge(result: ClassificationResult, title: str) -> go.Figure:
    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=result.gauge_percent,
            number={"suffix": "%", "font": {"color": result.color}},
            domain={"x": [0, 1], "y": [0, 1]},
            title={"text": f"{title}: {result.level} · {result.label}"},
            gauge={
                "axis": {"range": [0, 100]},
                "bar": {"color": result.color},
            },
        )
    )
    fig.update_layout(margin=dict(l=10, r=10, t=40, b=10), height=240)
    return fig


def _history_chart(series: HistorySeries, display_tz: Optional[tzinfo] = None) -> go.Figure:
    x = list(range(len(series)))
    tick_positions = [i for i, label in enumerate(series.labels) if label]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x,
        y=series.indoor_series,
        name="Indoor AQI",
        mode="lines+markers",
        line=dict(color=INDOOR_LINE_COLOR, width=3, shape="spline"),
        marker=dict(size=4),
        customdata=[
            [r.co2_ppm, r.tvoc_ppb, _fmt_time(r.created_at, display_tz)]
            for r in series.readings
        ],
        hovertemplate="%{customdata[2]}<br>AQI %{y} | CO₂ %{customdata[0]} ppm | TVOC %{customdata[1]} ppb<extra></extra>",
    ))
    if series.outdoor_series:
        fig.add_trace(go.Scatter(
            x=x,
            y=series.outdoor_series,
            name="Outdoor AQI (synthetic trend)",
            mode="lines",
            line=dict(color=OUTDOOR_LINE_COLOR, width=2, dash="dash", shape="spline"),
        ))
    fig.update_layout(
        height=360,
        margin=dict(l=10, r=10, t=30, b=10),
        legend=dict(orientation="h"),
        hovermode="x unified",
        xaxis=dict(
            title="Date and time",
            tickmode="array",
            tickvals=tick_positions,
            ticktext=[series.labels[i] for i in tick_positions],
        ),
        yaxis=dict(
            title="Air quality (AQI)",
            range=[0.5, 5.5],
            tickmode="array",
            tickvals=list(LABELS),
            ticktext=[label.title() for label in LABELS.values()],
        ),
    )
    return fig


def _render_indoor(state: DashboardState, display_tz: Optional[tzinfo]) -> None:
    st.subheader("Indoor")
    if not state.is_available(INDOOR) or state.indoor is None:
        st.error(state.errors.get(INDOOR, "Indoor data unavailable"))
        return

    reading = state.indoor
    st.plotly_chart(_gauge(state.indoor_result, "Indoor AQI"), use_container_width=True)
    _status_badge(state.indoor_result)

    col1, col2 = st.columns(2)
    col1.metric("Temperature", _fmt(reading.temperature, " °C"))
    col2.metric("Humidity", _fmt(reading.humidity, " %"))
    col1.metric("CO₂", f"{reading.co2_ppm} ppm" if reading.co2_ppm is not None else PLACEHOLDER)
    col2.metric("TVOC", f"{reading.tvoc_ppb} ppb" if reading.tvoc_ppb is not None else PLACEHOLDER)

    with st.expander("Indoor details", expanded=False):
        breakdown = state.indoor_breakdown
        st.write(f"- CO₂ level: {breakdown.co2_level} ({LABELS[breakdown.co2_level].title()})")
        st.write(f"- TVOC level: {breakdown.tvoc_level} ({LABELS[breakdown.tvoc_level].title()})")
        st.write(f"- Overall (60% CO₂, 40% TVOC): {breakdown.overall_level}")
        if reading.created_at:
            st.caption(f"Sensor time: {_fmt_time(reading.created_at, display_tz)}")


def _render_outdoor(state: DashboardState) -> None:
    st.subheader("Outdoor")
    if not state.is_available(OUTDOOR) or state.outdoor is None:
        st.error(state.errors.get(OUTDOOR, "Outdoor data unavailable"))
        return

    sample = state.outdoor
    st.plotly_chart(_gauge(state.outdoor_result, "Outdoor AQI"), use_container_width=True)
    _status_badge(state.outdoor_result)

    col1, col2 = st.columns(2)
    col1.metric("Temperature", _fmt(sample.temperature, " °C"))
    col2.metric("Humidity", _fmt(sample.humidity, " %", decimals=0))
    col1.metric("Wind", _fmt(sample.wind_speed, " km/h"))
    col2.metric("Pressure", _fmt(sample.pressure, " hPa", decimals=0))
    st.write(f"{weather_icon(sample.weather_code)} {state.weather_condition}")

    with st.expander("Outdoor details", expanded=False):
        st.write(f"- US AQI: {_fmt(sample.us_aqi, decimals=0)}")
        st.write(f"- PM2.5: {_fmt(sample.pm25, ' µg/m³')}")
        st.write(f"- PM10: {_fmt(sample.pm10, ' µg/m³')}")
        if not sample.has_air_quality():
            st.caption("No air quality signal; level shown as moderate.")


def _render_history(state: DashboardState, display_tz: Optional[tzinfo]) -> None:
    st.subheader(f"History ({WINDOW_NAMES.get(state.window_hours, f'{state.window_hours} hours')})")
    if not state.is_available(HISTORY) or state.history is None:
        st.error(state.errors.get(HISTORY, "History unavailable"))
        return

    st.plotly_chart(_history_chart(state.history, display_tz), use_container_width=True)
    if state.history.outdoor_series and state.history.outdoor_is_synthetic:
        st.caption(
            "The outdoor line is a synthetic trend around the current outdoor level; "
            "no outdoor history is measured."
        )

    metrics = state.metrics
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Avg temperature", _fmt(metrics.avg_temperature, " °C"))
    col2.metric("Avg humidity", _fmt(metrics.avg_humidity, " %"))
    col3.metric("Peak AQI", metrics.peak_aqi if metrics.peak_aqi is not None else PLACEHOLDER)
    col4.metric("Air quality", metrics.air_quality or PLACEHOLDER)


def main() -> None:
    """
    Main function that runs the Streamlit page.

    Sets up the layout, refreshes the dashboard state through the
    DashboardSystem and renders each panel, degrading panels individually
    when their data is unavailable.
    """
    st.set_page_config(page_title="AirSniffer Mk1", layout="wide")
    st.title("AirSniffer Mk1")

    system: DashboardSystem = st.session_state.dashboard_system
    config = system.config

    valid, reason = config.validate()
    if not valid:
        st.error(f"Invalid configuration: {reason}")
        st.stop()
    display_tz = system.sampler.display_tz

    # Periodic refresh; every rerun fetches through the cache
    st_autorefresh(interval=config.refresh_interval * 1000, limit=None, key="dashboard_refresh")

    window = st.sidebar.radio(
        "History window",
        list(HISTORY_WINDOWS),
        index=list(HISTORY_WINDOWS).index(config.default_window) if config.default_window in HISTORY_WINDOWS else 2,
        format_func=lambda hours: WINDOW_NAMES[hours],
    )

    if st.sidebar.button("Clear cache", help="Drop cached responses and fetch fresh data"):
        system.clear_cache()
        st.sidebar.success("Cache cleared")

    st.sidebar.info(f"🔄 Updates every {config.refresh_interval} seconds")

    with st.spinner("Loading air quality data..."):
        state = system.refresh(window)
    st.session_state.dashboard_state = state

    if state.is_connected():
        st.sidebar.success("✓ Connected")
    else:
        st.sidebar.error("⚠️ Offline")
    st.sidebar.caption(f"Last update: {state.refreshed_at.strftime('%H:%M:%S')}")

    left_col, right_col = st.columns(2)
    with left_col:
        _render_indoor(state, display_tz)
    with right_col:
        _render_outdoor(state)

    _render_history(state, display_tz)

    with st.expander("View refresh details"):
        st.json(state.to_dict())


if __name__ == "__main__":
    main()
