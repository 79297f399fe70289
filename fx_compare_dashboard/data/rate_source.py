"""Rate source combining the historical and latest-rate upstreams.

Both upstreams degrade to "no data" here: a failed or hung call yields an
empty series or ``None`` and never raises past this boundary.
"""

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Callable

from fx_compare_dashboard.config import Settings
from fx_compare_dashboard.data.errors import SourceUnavailable
from fx_compare_dashboard.data.frankfurter_fetcher import FrankfurterFetcher
from fx_compare_dashboard.data.latest_fetcher import LatestRateFetcher
from fx_compare_dashboard.models import RatePoint, Series


logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class RateSource:
    """Historical series and latest point for a base currency against the quote."""

    def __init__(
        self,
        settings: Settings | None = None,
        history_fetcher: FrankfurterFetcher | None = None,
        latest_fetcher: LatestRateFetcher | None = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.settings = settings or Settings()
        self.history_fetcher = history_fetcher or FrankfurterFetcher(self.settings)
        self.latest_fetcher = latest_fetcher or LatestRateFetcher(self.settings)
        self.today = today

    @property
    def quote(self) -> str:
        return self.settings.quote_currency

    async def aclose(self) -> None:
        await self.history_fetcher.aclose()
        await self.latest_fetcher.aclose()

    async def __aenter__(self) -> "RateSource":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def fetch_history(self, period: int, base: str) -> Series:
        """
        Rates for each published day in [today - period, today].

        Returns an empty series if the upstream fails or times out.
        """
        if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
            raise ValueError(f"Period must be a positive number of days, got {period!r}")

        end = self.today()
        start = end - timedelta(days=period)

        try:
            return await asyncio.wait_for(
                self.history_fetcher.fetch_range(start, end, base, self.quote),
                timeout=self.settings.request_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"History for {base}/{self.quote} timed out after {self.settings.request_timeout}s"
            )
        except SourceUnavailable as e:
            logger.warning(f"History for {base}/{self.quote} unavailable: {e}")
        except Exception as e:
            logger.error(f"Error fetching history for {base}/{self.quote}: {e}")
        return ()

    async def fetch_latest(self, base: str) -> RatePoint | None:
        """Most recent known rate, or None if the upstream fails or times out."""
        try:
            return await asyncio.wait_for(
                self.latest_fetcher.fetch_latest(base, self.quote),
                timeout=self.settings.request_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Latest {base}/{self.quote} timed out after {self.settings.request_timeout}s"
            )
        except SourceUnavailable as e:
            logger.warning(f"Latest {base}/{self.quote} unavailable: {e}")
        except Exception as e:
            logger.error(f"Error fetching latest {base}/{self.quote}: {e}")
        return None
