"""Exchange rate data fetching."""

from fx_compare_dashboard.data.errors import SourceUnavailable
from fx_compare_dashboard.data.rate_source import RateSource

__all__ = ["RateSource", "SourceUnavailable"]
