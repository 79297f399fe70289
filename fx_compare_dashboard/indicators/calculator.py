"""Turn raw rate series into the dashboard's combined dataset and summaries."""

import asyncio
import itertools
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from fx_compare_dashboard.config import Settings, PERIOD_OPTIONS
from fx_compare_dashboard.data import RateSource
from fx_compare_dashboard.indicators.series import align, decimate, merge_latest
from fx_compare_dashboard.indicators.trend import summarize
from fx_compare_dashboard.models import ComparisonResult, Series, SingleCurrencyResult


logger = logging.getLogger(__name__)

R = TypeVar("R")


def validate_period(period: int) -> None:
    if period not in PERIOD_OPTIONS:
        raise ValueError(f"Period {period!r} not in {list(PERIOD_OPTIONS)}")


class RateCalculator:
    """Runs the fetch, merge, trend, align and decimate pipeline.

    Each call owns its intermediate series; nothing is shared between
    concurrent computations.
    """

    def __init__(self, source: RateSource | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.source = source or RateSource(self.settings)

    async def _reconciled_series(self, period: int, currency: str) -> Series:
        history, latest = await asyncio.gather(
            self.source.fetch_history(period, currency),
            self.source.fetch_latest(currency),
        )
        merged = merge_latest(history, latest)
        if len(merged) > len(history):
            logger.info(f"  {currency}: appended latest point {latest.date}")
        return merged

    async def compute(
        self, period: int, currencies: tuple[str, str] | None = None
    ) -> ComparisonResult:
        """
        Build the two-currency comparison for a period.

        Args:
            period: Analysis window in days, one of PERIOD_OPTIONS
            currencies: Pair of base currencies; the first one drives date order

        Returns:
            ComparisonResult with the decimated combined series and a summary
            per currency. A currency whose source failed reports STABLE with no
            current rate, and the combined series is empty.
        """
        validate_period(period)
        currencies = tuple(currencies or self.settings.base_currencies)
        if len(currencies) != 2 or currencies[0] == currencies[1]:
            raise ValueError(f"Exactly two distinct currencies required, got {currencies}")

        code_a, code_b = currencies
        logger.info(f"Computing {code_a}/{code_b} vs {self.source.quote} over {period} days")

        # Four independent fetches: history and latest for each currency
        series_a, series_b = await asyncio.gather(
            self._reconciled_series(period, code_a),
            self._reconciled_series(period, code_b),
        )

        # Trend and current rate come from the full-resolution series
        summaries = {
            code_a: summarize(code_a, series_a),
            code_b: summarize(code_b, series_b),
        }

        aligned = align(series_a, series_b)
        combined = decimate(aligned)
        logger.info(
            f"  {len(series_a)}/{len(series_b)} points -> {len(aligned)} aligned "
            f"-> {len(combined)} charted"
        )

        return ComparisonResult(
            period=period,
            currencies=(code_a, code_b),
            combined=combined,
            summaries=summaries,
        )

    async def compute_single(self, period: int, currency: str) -> SingleCurrencyResult:
        """Decimated series and summary for one currency."""
        validate_period(period)
        series = await self._reconciled_series(period, currency)

        return SingleCurrencyResult(
            period=period,
            currency=currency,
            series=decimate(series),
            summary=summarize(currency, series),
        )


class RequestTracker(Generic[R]):
    """Last-request-wins gate for overlapping computations.

    Every request takes a token; a result is accepted only if no newer
    request started while it was running.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0
        self._latest: R | None = None

    @property
    def latest(self) -> R | None:
        """Most recently accepted result."""
        return self._latest

    def begin(self) -> int:
        self._current = next(self._counter)
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    async def run(self, factory: Callable[[], Awaitable[R]]) -> R | None:
        """Run a computation; returns None if a newer request superseded it."""
        token = self.begin()
        result = await factory()

        if not self.is_current(token):
            logger.debug(f"Dropping stale result for request {token} (current {self._current})")
            return None

        self._latest = result
        return result
