"""Pytest configuration and fixtures."""
from datetime import date, timedelta

import pytest

from fx_compare_dashboard.config import Settings
from fx_compare_dashboard.models import RatePoint


TODAY = date(2024, 3, 15)


def make_series(start: date, rates: list[float], step: int = 1) -> tuple[RatePoint, ...]:
    """Consecutive points starting at ``start``, ``step`` days apart."""
    return tuple(
        RatePoint(date=start + timedelta(days=i * step), rate=rate)
        for i, rate in enumerate(rates)
    )


class FakeRateSource:
    """In-memory stand-in for RateSource keyed by base currency."""

    quote = "ILS"

    def __init__(self, histories=None, latest=None):
        self.histories = histories or {}
        self.latest = latest or {}
        self.calls = []
        self.closed = False

    async def fetch_history(self, period, base):
        self.calls.append(("history", period, base))
        return self.histories.get(base, ())

    async def fetch_latest(self, base):
        self.calls.append(("latest", base))
        return self.latest.get(base)

    async def aclose(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()


@pytest.fixture
def settings():
    return Settings(
        quote_currency="ILS",
        base_currencies=("EUR", "USD"),
        history_base_url="https://history.test",
        latest_base_url="https://latest.test/v6/latest",
        request_timeout=2.0,
        default_period=60,
    )
