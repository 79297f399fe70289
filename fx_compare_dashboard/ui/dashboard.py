"""Streamlit dashboard for exchange rate comparison.

Views:
- Combined: both base currencies on one chart, with trend and stats panels
- Single currency: one base currency on its own
"""

import asyncio
import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from fx_compare_dashboard.config import Settings, PERIOD_OPTIONS, CURRENCY_NAMES
from fx_compare_dashboard.data import RateSource
from fx_compare_dashboard.indicators import DECIMATION_STRIDE, RateCalculator, RequestTracker
from fx_compare_dashboard.models import ComparisonResult, CurrencySummary, SingleCurrencyResult, Trend


COMBINED_VIEW = "Combined"

LINE_COLORS = ("#60a5fa", "#4ade80")

TRENDS = {
    Trend.UP: {"color": "#4ade80", "label": "Going Up", "symbol": "&#9650;", "tendency": "positive"},
    Trend.DOWN: {"color": "#f87171", "label": "Going Down", "symbol": "&#9660;", "tendency": "negative"},
    Trend.STABLE: {"color": "#9ca3af", "label": "Stable", "symbol": "&#8212;", "tendency": "neutral"},
}


def format_rate(summary: CurrencySummary) -> str:
    if summary.current_rate is None:
        return "N/A"
    return f"{summary.current_rate:.4f}"


# =============================================================================
# PANELS
# =============================================================================

def render_rate_tiles(summaries: list[CurrencySummary], settings: Settings) -> None:
    """Render current-rate tiles for each currency."""
    cols = st.columns(len(summaries))
    for col, summary, color in zip(cols, summaries, LINE_COLORS):
        with col:
            st.markdown(
                f"""<div style="background: #1f2937; border: 1px solid #374151; border-radius: 12px; padding: 0.75rem 1.25rem;">
                    <div style="color: #9ca3af; font-size: 0.7rem; text-transform: uppercase; letter-spacing: 0.1em;">
                        {settings.currency_label(summary.currency)}
                    </div>
                    <div style="color: {color}; font-size: 1.4rem; font-weight: 700; font-family: 'SF Mono', monospace;">
                        {format_rate(summary)}
                    </div>
                </div>""",
                unsafe_allow_html=True,
            )


def render_rate_chart(df: pd.DataFrame, settings: Settings, title: str) -> None:
    """Render one line per currency column."""
    if df.empty:
        st.info("No overlapping data for this period")
        return

    fig = go.Figure()
    for column, color in zip(df.columns, LINE_COLORS):
        fig.add_trace(go.Scatter(
            x=df.index, y=df[column],
            mode="lines+markers", line=dict(color=color, width=2), marker=dict(size=4),
            name=settings.currency_label(column),
            hovertemplate=f"{column}: %{{y:.4f}}<extra></extra>",
        ))

    fig.update_layout(
        height=400, margin=dict(l=0, r=0, t=30, b=0),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        legend=dict(
            orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1,
            font=dict(size=10, color="#9ca3af"), bgcolor="rgba(0,0,0,0)",
        ),
        title=dict(text=title, font=dict(size=12, color="#9ca3af"), x=0),
        xaxis=dict(showgrid=True, gridcolor="#1f2937", tickfont=dict(color="#6b7280", size=10), tickformat="%b %d"),
        yaxis=dict(showgrid=True, gridcolor="#1f2937", tickfont=dict(color="#6b7280", size=10)),
        hovermode="x unified",
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def render_prediction_panel(summary: CurrencySummary, days: int) -> None:
    """Render the trend direction for a currency."""
    trend = TRENDS[summary.trend]
    st.markdown(
        f"""<div style="background: #1f2937; border: 1px solid #374151; border-radius: 12px; padding: 1.25rem 1.5rem; margin-bottom: 1rem;">
            <div style="color: #e5e7eb; font-size: 1rem; font-weight: 600; margin-bottom: 0.75rem;">
                {summary.currency} Prediction
                <span style="font-size: 0.65rem; color: #93c5fd; border: 1px solid #3b82f6; border-radius: 999px; padding: 0.1rem 0.5rem; margin-left: 0.5rem;">Linear Trend</span>
            </div>
            <div style="display: flex; align-items: center; gap: 1rem;">
                <div style="font-size: 2rem; color: {trend['color']};">{trend['symbol']}</div>
                <div>
                    <div style="color: #9ca3af; font-size: 0.8rem;">Forecast Direction</div>
                    <div style="color: {trend['color']}; font-size: 1.4rem; font-weight: 700;">{trend['label']}</div>
                </div>
            </div>
            <div style="color: #d1d5db; font-size: 0.8rem; margin-top: 0.75rem;">
                Based on the linear trend of the last {days} days, the {summary.currency} rate shows a {trend['tendency']} tendency.
            </div>
        </div>""",
        unsafe_allow_html=True,
    )


def render_stats_panel(label: str, days: int, data_points: int, has_data: bool) -> None:
    """Render period, interval and point count."""
    status, status_color = ("Live", "#4ade80") if has_data else ("No Data", "#f87171")
    rows = [
        ("Period", f"Last {days} Days"),
        ("Interval", f"{DECIMATION_STRIDE} Days"),
        ("Data Points", str(data_points)),
    ]

    rows_html = "".join(
        f"""<div style="display: flex; justify-content: space-between; padding: 0.4rem 0; border-bottom: 1px solid #374151;">
            <span style="color: #9ca3af; font-size: 0.8rem;">{name}</span>
            <span style="color: #e5e7eb; font-family: 'SF Mono', monospace; font-size: 0.85rem;">{value}</span>
        </div>"""
        for name, value in rows
    )
    st.markdown(
        f"""<div style="background: #1f2937; border: 1px solid #374151; border-radius: 12px; padding: 1.25rem 1.5rem;">
            <div style="color: #e5e7eb; font-size: 1rem; font-weight: 600; margin-bottom: 0.5rem;">{label} Stats</div>
            {rows_html}
            <div style="display: flex; justify-content: space-between; padding-top: 0.4rem;">
                <span style="color: #e5e7eb; font-size: 0.8rem;">Status</span>
                <span style="color: {status_color}; font-size: 0.85rem;">{status}</span>
            </div>
        </div>""",
        unsafe_allow_html=True,
    )


# =============================================================================
# VIEWS
# =============================================================================

def render_comparison(result: ComparisonResult, settings: Settings) -> None:
    summaries = [result.summaries[code] for code in result.currencies]
    render_rate_tiles(summaries, settings)
    render_rate_chart(result.to_frame(), settings, "Combined Trend Analysis")

    cols = st.columns(2)
    for col, summary in zip(cols, summaries):
        with col:
            name = CURRENCY_NAMES.get(summary.currency, summary.currency)
            st.markdown(f"### {name} Analysis")
            render_prediction_panel(summary, result.period)
            render_stats_panel(
                summary.currency, result.period, result.data_points, summary.current_rate is not None
            )


def render_single(result: SingleCurrencyResult, settings: Settings) -> None:
    render_rate_tiles([result.summary], settings)
    render_rate_chart(result.to_frame(), settings, f"{result.currency} Trend")

    col1, col2 = st.columns(2)
    with col1:
        render_prediction_panel(result.summary, result.period)
    with col2:
        render_stats_panel(
            result.currency, result.period, result.data_points, result.summary.current_rate is not None
        )


def load_settings() -> Settings:
    """Settings from the environment; raises ValueError if malformed."""
    settings = Settings()
    settings.validate()
    return settings


def matches_selection(
    result: ComparisonResult | SingleCurrencyResult | None, period: int, view: str
) -> bool:
    """Whether a result was computed for this period and view."""
    if result is None or result.period != period:
        return False
    if isinstance(result, ComparisonResult):
        return view == COMBINED_VIEW
    return result.currency == view


def load_result(
    tracker: RequestTracker, settings: Settings, period: int, view: str
) -> ComparisonResult | SingleCurrencyResult | None:
    """Run the pipeline for the current selection through the request tracker."""

    async def _compute() -> ComparisonResult | SingleCurrencyResult:
        async with RateSource(settings) as source:
            calc = RateCalculator(source, settings)
            if view == COMBINED_VIEW:
                return await calc.compute(period, settings.base_currencies)
            return await calc.compute_single(period, view)

    result = asyncio.run(tracker.run(_compute))
    if result is None and matches_selection(tracker.latest, period, view):
        return tracker.latest
    return result


# =============================================================================
# MAIN APP
# =============================================================================

def main() -> None:
    """Main dashboard entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    st.set_page_config(
        page_title="Exchange Rate Compare",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #111827; }
            .stMarkdown, .stText, p, span, label { color: #e5e7eb; }
            h1, h2, h3, h4 { color: #f3f4f6 !important; font-weight: 600 !important; }
            #MainMenu, footer, header { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    try:
        settings = load_settings()
    except ValueError as e:
        st.error(f"Configuration error: {e}")
        return

    st.markdown("# Exchange Rate Compare")

    col_period, col_view, col_spacer = st.columns([1, 1, 3])
    with col_period:
        days = st.selectbox(
            "Analysis Period",
            options=list(PERIOD_OPTIONS),
            index=PERIOD_OPTIONS.index(settings.default_period),
            format_func=lambda d: f"Last {d} Days",
        )
    with col_view:
        view = st.selectbox("View", options=[COMBINED_VIEW, *settings.base_currencies])

    if "tracker" not in st.session_state:
        st.session_state["tracker"] = RequestTracker()

    with st.spinner("Loading data..."):
        result = load_result(st.session_state["tracker"], settings, days, view)

    if result is None:
        st.info("Loading data...")
    elif isinstance(result, ComparisonResult):
        render_comparison(result, settings)
    else:
        render_single(result, settings)


if __name__ == "__main__":
    main()
