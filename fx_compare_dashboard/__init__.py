"""Exchange rate comparison dashboard."""

__version__ = "0.1.0"
