"""Frankfurter API fetcher for historical exchange rates."""

import logging
import math
from datetime import date

import httpx

from fx_compare_dashboard.config import Settings
from fx_compare_dashboard.data.errors import SourceUnavailable
from fx_compare_dashboard.models import RatePoint, Series


logger = logging.getLogger(__name__)


class FrankfurterFetcher:
    """Fetches daily reference rates over a date range from Frankfurter.

    Frankfurter publishes one rate per business day, so weekends and
    holidays are simply absent from the response.
    """

    NAME = "frankfurter"

    def __init__(
        self, settings: Settings | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.base_url = self.settings.history_base_url.rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout, follow_redirects=True
            )
        return self._client

    async def aclose(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FrankfurterFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def fetch_range(self, start: date, end: date, base: str, quote: str) -> Series:
        """
        Fetch rates of base against quote for every published day in [start, end].

        Raises:
            SourceUnavailable: on HTTP failure or an unparseable payload
        """
        url = f"{self.base_url}/{start.isoformat()}..{end.isoformat()}"
        logger.info(f"Fetching {base}/{quote} history {start} to {end}...")

        try:
            response = await self.client.get(url, params={"from": base, "to": quote})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(self.NAME, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise SourceUnavailable(self.NAME, str(e) or type(e).__name__) from e

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            raise SourceUnavailable(self.NAME, "response has no 'rates' mapping")

        points = []
        for date_str, by_quote in rates.items():
            try:
                day = date.fromisoformat(date_str)
                rate = float(by_quote[quote])
            except (KeyError, TypeError, ValueError) as e:
                raise SourceUnavailable(self.NAME, f"bad entry for {date_str!r}: {e}") from e

            if not math.isfinite(rate) or rate <= 0:
                raise SourceUnavailable(self.NAME, f"invalid rate {rate} on {date_str}")
            # A range starting on a closed day is answered from the prior business day
            if start <= day <= end:
                points.append(RatePoint(date=day, rate=rate))

        points.sort(key=lambda p: p.date)
        logger.info(f"  {base}/{quote}: {len(points)} observations")
        return tuple(points)
