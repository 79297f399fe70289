"""Data models for exchange rate data."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

import pandas as pd


@dataclass(frozen=True)
class RatePoint:
    """Rate of a base currency against the quote currency on one day."""

    date: date
    rate: float


# Ordered by date ascending, no duplicate dates
Series = tuple[RatePoint, ...]


@dataclass(frozen=True)
class CombinedPoint:
    """Rates of both tracked currencies on a day present in both series."""

    date: date
    rate_a: float
    rate_b: float


class Trend(str, Enum):
    """Direction of a series' least-squares slope."""

    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"


@dataclass(frozen=True)
class CurrencySummary:
    """Trend and most recent rate for one currency."""

    currency: str
    trend: Trend
    current_rate: float | None  # None when no data was available


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ComparisonResult:
    """Everything the dashboard needs for the two-currency view."""

    period: int
    currencies: tuple[str, str]
    combined: tuple[CombinedPoint, ...]  # decimated
    summaries: dict[str, CurrencySummary]
    generated_at: datetime = field(default_factory=_now)

    @property
    def data_points(self) -> int:
        return len(self.combined)

    def to_frame(self) -> pd.DataFrame:
        """Combined series as a DataFrame with one column per currency."""
        code_a, code_b = self.currencies
        if not self.combined:
            return pd.DataFrame(columns=[code_a, code_b])

        df = pd.DataFrame(
            {
                "date": [pd.Timestamp(p.date) for p in self.combined],
                code_a: [p.rate_a for p in self.combined],
                code_b: [p.rate_b for p in self.combined],
            }
        )
        df.set_index("date", inplace=True)
        return df


@dataclass(frozen=True)
class SingleCurrencyResult:
    """Decimated series and summary for the single-currency view."""

    period: int
    currency: str
    series: Series  # decimated
    summary: CurrencySummary
    generated_at: datetime = field(default_factory=_now)

    @property
    def data_points(self) -> int:
        return len(self.series)

    def to_frame(self) -> pd.DataFrame:
        if not self.series:
            return pd.DataFrame(columns=[self.currency])

        df = pd.DataFrame(
            {
                "date": [pd.Timestamp(p.date) for p in self.series],
                self.currency: [p.rate for p in self.series],
            }
        )
        df.set_index("date", inplace=True)
        return df
