from datetime import date

import httpx
import pytest

from fx_compare_dashboard.data.errors import SourceUnavailable
from fx_compare_dashboard.data.frankfurter_fetcher import FrankfurterFetcher
from fx_compare_dashboard.data.latest_fetcher import LatestRateFetcher
from fx_compare_dashboard.models import RatePoint


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# Frankfurter
# =============================================================================

@pytest.mark.asyncio
async def test_frankfurter_parses_and_sorts_rates(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={
            "amount": 1.0,
            "base": "EUR",
            "rates": {
                "2024-03-12": {"ILS": 3.95},
                "2024-03-11": {"ILS": 3.94},
                "2024-03-13": {"ILS": 3.96},
            },
        })

    async with FrankfurterFetcher(settings, client=mock_client(handler)) as fetcher:
        series = await fetcher.fetch_range(date(2024, 3, 10), date(2024, 3, 13), "EUR", "ILS")

    assert seen["url"].path == "/2024-03-10..2024-03-13"
    assert seen["url"].params["from"] == "EUR"
    assert seen["url"].params["to"] == "ILS"
    assert series == (
        RatePoint(date(2024, 3, 11), 3.94),
        RatePoint(date(2024, 3, 12), 3.95),
        RatePoint(date(2024, 3, 13), 3.96),
    )


@pytest.mark.asyncio
async def test_frankfurter_drops_days_before_range(settings):
    def handler(request):
        # Range starting on a Sunday is answered from the Friday before
        return httpx.Response(200, json={"rates": {
            "2024-03-08": {"ILS": 3.90},
            "2024-03-11": {"ILS": 3.94},
        }})

    async with FrankfurterFetcher(settings, client=mock_client(handler)) as fetcher:
        series = await fetcher.fetch_range(date(2024, 3, 10), date(2024, 3, 11), "EUR", "ILS")

    assert series == (RatePoint(date(2024, 3, 11), 3.94),)


@pytest.mark.asyncio
async def test_frankfurter_http_error(settings):
    async with FrankfurterFetcher(
        settings, client=mock_client(lambda request: httpx.Response(503))
    ) as fetcher:
        with pytest.raises(SourceUnavailable) as exc_info:
            await fetcher.fetch_range(date(2024, 3, 1), date(2024, 3, 2), "EUR", "ILS")

    assert exc_info.value.source == "frankfurter"
    assert "503" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"message": "not found"},
    {"rates": {"2024-03-11": {"USD": 1.09}}},
    {"rates": {"not-a-date": {"ILS": 3.9}}},
    {"rates": {"2024-03-11": {"ILS": -1.0}}},
])
async def test_frankfurter_bad_payload(settings, payload):
    async with FrankfurterFetcher(
        settings, client=mock_client(lambda request: httpx.Response(200, json=payload))
    ) as fetcher:
        with pytest.raises(SourceUnavailable):
            await fetcher.fetch_range(date(2024, 3, 10), date(2024, 3, 12), "EUR", "ILS")


# =============================================================================
# Latest rate
# =============================================================================

@pytest.mark.asyncio
async def test_latest_uses_utc_day_of_update_timestamp(settings):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        return httpx.Response(200, json={
            "result": "success",
            "base_code": "USD",
            # 2024-03-15T23:30:00Z
            "time_last_update_unix": 1710545400,
            "rates": {"ILS": 3.67, "EUR": 0.91},
        })

    async with LatestRateFetcher(settings, client=mock_client(handler)) as fetcher:
        point = await fetcher.fetch_latest("USD", "ILS")

    assert seen["path"] == "/v6/latest/USD"
    assert point == RatePoint(date(2024, 3, 15), 3.67)


@pytest.mark.asyncio
async def test_latest_api_error(settings):
    def handler(request):
        return httpx.Response(200, json={"result": "error", "error-type": "unsupported-code"})

    async with LatestRateFetcher(settings, client=mock_client(handler)) as fetcher:
        with pytest.raises(SourceUnavailable, match="unsupported-code"):
            await fetcher.fetch_latest("XXX", "ILS")


@pytest.mark.asyncio
async def test_latest_missing_quote(settings):
    def handler(request):
        return httpx.Response(200, json={
            "result": "success", "time_last_update_unix": 1710545400, "rates": {"EUR": 0.91},
        })

    async with LatestRateFetcher(settings, client=mock_client(handler)) as fetcher:
        with pytest.raises(SourceUnavailable):
            await fetcher.fetch_latest("USD", "ILS")


@pytest.mark.asyncio
async def test_latest_network_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with LatestRateFetcher(settings, client=mock_client(handler)) as fetcher:
        with pytest.raises(SourceUnavailable, match="connection refused"):
            await fetcher.fetch_latest("USD", "ILS")
