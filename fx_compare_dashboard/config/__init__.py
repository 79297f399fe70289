"""Dashboard configuration."""

from fx_compare_dashboard.config.settings import Settings, PERIOD_OPTIONS, CURRENCY_NAMES

__all__ = ["Settings", "PERIOD_OPTIONS", "CURRENCY_NAMES"]
