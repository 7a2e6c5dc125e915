"""
Money Utilities - Safe Decimal operations for monetary values.

Prices, tax and shipping are carried as Decimal end to end and only rounded
where a value leaves the engine (totals, wire payloads, display).
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Currency precision (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for currencies without minor units (JPY)
INTEGER_PRECISION = Decimal("1")

ZERO = Decimal("0")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return ZERO

    if isinstance(value, Decimal):
        return value

    try:
        # Go through str so 0.1 stays 0.1 rather than its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value to currency precision (half up).

    Args:
        value: Value to round
        to_int: If True, round to whole units

    Returns:
        Rounded Decimal value
    """
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return to_decimal(value).quantize(precision, rounding=ROUND_HALF_UP)


def to_cents(value: Number) -> int:
    """
    Convert a decimal amount to integer minor units.

    Args:
        value: Amount in major units (e.g., 38.39)

    Returns:
        Amount in minor units (e.g., 3839)
    """
    return int((to_decimal(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert integer minor units back to a Decimal amount."""
    return Decimal(cents) / Decimal(100)


def to_float(value: Number) -> float:
    """
    Convert to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def subtract(a: Number, b: Number) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (USD, EUR, JPY, ...)

    Returns:
        Formatted string, e.g. "$1,234.50" or "1,234.50 kr"
    """
    from shop.services.currency import INTEGER_CURRENCIES, PREFIX_SYMBOL_CURRENCIES, get_currency_symbol

    currency = currency.upper()
    symbol = get_currency_symbol(currency)
    decimal_value = to_decimal(value)

    if currency in INTEGER_CURRENCIES:
        formatted = f"{int(round_money(decimal_value, to_int=True)):,}"
    else:
        formatted = f"{round_money(decimal_value):,.2f}"

    if currency in PREFIX_SYMBOL_CURRENCIES:
        if formatted.startswith("-"):
            return f"-{symbol}{formatted[1:]}"
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"
