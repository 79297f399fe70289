"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# Selectable analysis periods, in days
PERIOD_OPTIONS: tuple[int, ...] = (7, 14, 21, 28, 30, 60, 90, 180, 365)

# Display names for the currencies the dashboard knows about
CURRENCY_NAMES: dict[str, str] = {
    "EUR": "Euro",
    "USD": "US Dollar",
    "GBP": "British Pound",
    "CHF": "Swiss Franc",
    "JPY": "Japanese Yen",
    "ILS": "Israeli Shekel",
}


def _split_codes(raw: str) -> tuple[str, ...]:
    return tuple(code.strip().upper() for code in raw.split(",") if code.strip())


def _is_currency_code(code: str) -> bool:
    return len(code) == 3 and code.isalpha() and code.isupper()


@dataclass
class Settings:
    """Application settings."""

    quote_currency: str = field(
        default_factory=lambda: os.getenv("FX_QUOTE_CURRENCY", "ILS").strip().upper()
    )
    base_currencies: tuple[str, ...] = field(
        default_factory=lambda: _split_codes(os.getenv("FX_BASE_CURRENCIES", "EUR,USD"))
    )
    history_base_url: str = field(
        default_factory=lambda: os.getenv("FX_HISTORY_URL", "https://api.frankfurter.app")
    )
    latest_base_url: str = field(
        default_factory=lambda: os.getenv("FX_LATEST_URL", "https://open.er-api.com/v6/latest")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("FX_REQUEST_TIMEOUT", "10"))
    )
    default_period: int = field(
        default_factory=lambda: int(os.getenv("FX_DEFAULT_PERIOD", "60"))
    )

    def validate(self) -> None:
        """Validate required settings."""
        if not _is_currency_code(self.quote_currency):
            raise ValueError(f"Invalid quote currency: {self.quote_currency!r}")

        for code in self.base_currencies:
            if not _is_currency_code(code):
                raise ValueError(f"Invalid base currency: {code!r}")

        if len(set(self.base_currencies)) != 2 or len(self.base_currencies) != 2:
            raise ValueError(
                f"Exactly two distinct base currencies required, got {self.base_currencies}"
            )
        if self.quote_currency in self.base_currencies:
            raise ValueError(
                f"Quote currency {self.quote_currency} cannot also be a base currency"
            )

        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")

        if self.default_period not in PERIOD_OPTIONS:
            raise ValueError(
                f"Default period {self.default_period} not in {list(PERIOD_OPTIONS)}"
            )

    def currency_label(self, code: str) -> str:
        """Pair label such as 'EUR/ILS'."""
        return f"{code}/{self.quote_currency}"
