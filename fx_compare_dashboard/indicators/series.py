"""Series reconciliation, date alignment and decimation."""

from typing import Sequence, TypeVar

from fx_compare_dashboard.models import CombinedPoint, RatePoint, Series


T = TypeVar("T")

# Chart interval in observations; the most recent point is always kept
DECIMATION_STRIDE = 2


def merge_latest(history: Series, latest: RatePoint | None) -> Series:
    """
    Append the latest point if it is strictly newer than the last historical one.

    Returns ``history`` itself when nothing is appended.
    """
    if latest is None or not history:
        return history
    if latest.date > history[-1].date:
        return history + (latest,)
    return history


def align(series_a: Series, series_b: Series) -> tuple[CombinedPoint, ...]:
    """Inner join on date, in series_a's order."""
    b_rates = {point.date: point.rate for point in series_b}
    return tuple(
        CombinedPoint(date=point.date, rate_a=point.rate, rate_b=b_rates[point.date])
        for point in series_a
        if point.date in b_rates
    )


def decimate(seq: Sequence[T], stride: int = DECIMATION_STRIDE) -> tuple[T, ...]:
    """Keep every ``stride``-th element counting back from the last one."""
    if stride < 1:
        raise ValueError(f"Stride must be at least 1, got {stride}")

    last = len(seq) - 1
    return tuple(item for i, item in enumerate(seq) if (last - i) % stride == 0)
