"""Latest-rate fetcher (open.er-api.com style endpoint)."""

import logging
import math
from datetime import datetime, timezone

import httpx

from fx_compare_dashboard.config import Settings
from fx_compare_dashboard.data.errors import SourceUnavailable
from fx_compare_dashboard.models import RatePoint


logger = logging.getLogger(__name__)


class LatestRateFetcher:
    """Fetches the most recent published rate for a base currency.

    The endpoint returns every quote for the base plus a freshness
    timestamp; the point's date is that timestamp's UTC calendar day.
    """

    NAME = "open_er_api"

    def __init__(
        self, settings: Settings | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.base_url = self.settings.latest_base_url.rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout, follow_redirects=True
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LatestRateFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def fetch_latest(self, base: str, quote: str) -> RatePoint:
        """
        Fetch the latest base/quote rate.

        Raises:
            SourceUnavailable: on HTTP failure, an API error, or a missing quote
        """
        logger.info(f"Fetching latest {base}/{quote}...")

        try:
            response = await self.client.get(f"{self.base_url}/{base}")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(self.NAME, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise SourceUnavailable(self.NAME, str(e) or type(e).__name__) from e

        if not isinstance(data, dict):
            raise SourceUnavailable(self.NAME, "unexpected response shape")

        if data.get("result") != "success":
            raise SourceUnavailable(self.NAME, f"API error: {data.get('error-type', 'unknown')}")

        try:
            rate = float(data["rates"][quote])
            updated = datetime.fromtimestamp(int(data["time_last_update_unix"]), timezone.utc)
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise SourceUnavailable(self.NAME, f"missing or bad field: {e}") from e

        if not math.isfinite(rate) or rate <= 0:
            raise SourceUnavailable(self.NAME, f"invalid rate {rate}")

        point = RatePoint(date=updated.date(), rate=rate)
        logger.info(f"  Latest {base}/{quote}: {point.rate:.4f} as of {point.date}")
        return point
