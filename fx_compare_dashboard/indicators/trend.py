"""Linear trend classification of a rate series."""

from typing import Sequence

import numpy as np

from fx_compare_dashboard.models import CurrencySummary, Series, Trend


# Slope thresholds in rate units per observation
UP_THRESHOLD = 0.001
DOWN_THRESHOLD = -0.001


def calculate_slope(rates: Sequence[float]) -> float | None:
    """
    Ordinary least-squares slope of rate against observation index.

    Uses the zero-based position, not the date, so every observation
    carries equal weight regardless of calendar gaps.

    Returns None with fewer than two observations.
    """
    n = len(rates)
    if n < 2:
        return None

    x = np.arange(n, dtype=float)
    y = np.asarray(rates, dtype=float)

    # Running sums in index order
    sum_x = sum_y = sum_xy = sum_xx = 0.0
    for xi, yi in zip(x.tolist(), y.tolist()):
        sum_x += xi
        sum_y += yi
        sum_xy += xi * yi
        sum_xx += xi * xi

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    return (n * sum_xy - sum_x * sum_y) / denominator


def classify(series: Series) -> Trend:
    """Classify a series as UP, DOWN or STABLE."""
    slope = calculate_slope([point.rate for point in series])
    if slope is None:
        return Trend.STABLE
    if slope > UP_THRESHOLD:
        return Trend.UP
    if slope < DOWN_THRESHOLD:
        return Trend.DOWN
    return Trend.STABLE


def summarize(currency: str, series: Series) -> CurrencySummary:
    """Trend and current rate from a full-resolution series."""
    return CurrencySummary(
        currency=currency,
        trend=classify(series),
        current_rate=series[-1].rate if series else None,
    )
