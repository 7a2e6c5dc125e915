"""
Currency symbols and display rules.

Single source of truth for the symbols used by format_money.
"""
from typing import Dict

DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "¥",
    "SEK": "kr",
    "NZD": "NZ$",
}

# Symbol goes before the amount ($10.00); everything else is "10.00 kr"
PREFIX_SYMBOL_CURRENCIES = frozenset({"USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CNY", "NZD"})

# No minor units
INTEGER_CURRENCIES = frozenset({"JPY"})


def get_currency_symbol(currency_code: str) -> str:
    """Return the display symbol for a currency, or the code itself if unknown."""
    return CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code)


def is_supported_currency(currency_code: str) -> bool:
    return currency_code.upper() in CURRENCY_SYMBOLS
