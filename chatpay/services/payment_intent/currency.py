"""Human-readable amount labels for the payment form."""

from collections.abc import Mapping
from decimal import Decimal


class CurrencyFormatter:
    """Render minor-unit amounts with a currency symbol or code suffix."""

    def __init__(self, symbols: Mapping[str, str]) -> None:
        self.symbols = dict(symbols)

    def label(self, amount_minor: int, currency: str) -> str:
        major = format(Decimal(amount_minor) / 100, "f")
        symbol = self.symbols.get(currency)
        if symbol is None:
            return f"{major} {currency}"
        return f"{major}{symbol}"
