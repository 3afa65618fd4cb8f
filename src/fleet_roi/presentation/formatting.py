"""Display formatting — currency symbols, grouped numbers and percentages.

Symbols only: amounts are never converted between currencies.
"""

from __future__ import annotations

from fleet_roi.models.results import EngineResult

CURRENCY_SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}


def currency_symbol(currency: str) -> str | None:
    return CURRENCY_SYMBOLS.get(currency)


def format_number(value: float, decimals: int = 0) -> str:
    """1234567.891 → '1,234,568' (decimals=0) or '1,234,567.89' (decimals=2)."""
    return f"{value:,.{decimals}f}"


def format_currency(value: float, currency: str, decimals: int = 0) -> str:
    """'€1,234' / '-$1,234.50'.  Unknown codes fall back to the raw value."""
    symbol = currency_symbol(currency)
    if symbol is None:
        return str(value)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{format_number(abs(value), decimals)}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Value on a 0–100 scale: 91.51 → '91.5%'."""
    return f"{format_number(value, decimals)}%"


def format_payback(result: EngineResult) -> str:
    """Headline payback text; never presents a missed payback as a month count."""
    if not result.payback_achieved:
        if result.mode == "full":
            return f"No payback within {result.payback_months} months"
        return "Never"
    months = result.payback_months
    label = "month" if months == 1 else "months"
    if result.mode == "full":
        return f"{months} {label}"
    return f"~{months} {label} (straight-line)"
