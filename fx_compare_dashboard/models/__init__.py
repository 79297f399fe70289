"""Data models."""

from fx_compare_dashboard.models.market_data import (
    CombinedPoint,
    ComparisonResult,
    CurrencySummary,
    RatePoint,
    Series,
    SingleCurrencyResult,
    Trend,
)

__all__ = [
    "CombinedPoint",
    "ComparisonResult",
    "CurrencySummary",
    "RatePoint",
    "Series",
    "SingleCurrencyResult",
    "Trend",
]
