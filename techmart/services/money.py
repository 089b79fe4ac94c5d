"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Display
formatting mirrors the en-IN locale: Indian digit grouping (last three
digits, then pairs) and a leading rupee sign.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from techmart.config import DISPLAY_CURRENCY

Number = Union[str, int, float, Decimal, None]

CURRENCY_SYMBOLS = {
    "INR": "₹",
}


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def group_indian(digits: str) -> str:
    """
    Insert en-IN grouping separators into a string of digits.

    >>> group_indian("12345678")
    '1,23,45,678'
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def _format_number(value: Decimal, fraction_digits: int | None) -> str:
    if fraction_digits is None:
        # Locale default: up to three fractional digits, trailing zeros dropped
        value = value.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP).normalize()
    else:
        value = value.quantize(Decimal(1).scaleb(-fraction_digits), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    text = format(abs(value), "f")
    integer_part, _, fraction_part = text.partition(".")
    grouped = group_indian(integer_part)
    return f"{sign}{grouped}.{fraction_part}" if fraction_part else f"{sign}{grouped}"


def format_money(value: Number, currency: str = DISPLAY_CURRENCY, fraction_digits: int = 2) -> str:
    """
    Format a monetary value with currency symbol and fixed fractional digits.

    Used for subtotal, tax and grand total.

    Args:
        value: Value to format
        currency: Currency code (only INR is displayed by the storefront)
        fraction_digits: Exact number of fractional digits

    Returns:
        Formatted string, e.g. "₹1,23,456.00"
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{_format_number(to_decimal(value), fraction_digits)}"


def format_amount(value: Number, currency: str = DISPLAY_CURRENCY) -> str:
    """
    Format a monetary value without forcing fractional digits.

    Used for unit prices and line totals, e.g. "₹1,299".
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{_format_number(to_decimal(value), None)}"
