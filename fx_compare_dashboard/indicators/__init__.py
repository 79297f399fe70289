"""Rate series processing and trend indicators."""

from fx_compare_dashboard.indicators.calculator import RateCalculator, RequestTracker
from fx_compare_dashboard.indicators.series import DECIMATION_STRIDE, align, decimate, merge_latest
from fx_compare_dashboard.indicators.trend import calculate_slope, classify, summarize

__all__ = [
    "RateCalculator",
    "RequestTracker",
    "DECIMATION_STRIDE",
    "align",
    "decimate",
    "merge_latest",
    "calculate_slope",
    "classify",
    "summarize",
]
