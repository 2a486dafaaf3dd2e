"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Totals are
rounded half-to-even to whole cents.
"""
from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def to_decimal(value: Union[Number, None]) -> Decimal:
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
        if isinstance(value, float):
            # Via str so 9.99 stays 9.99 and not 9.9900000000000002131...
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_price(value: Number) -> Decimal:
    """
    Strict variant of to_decimal for prices read from outside.

    Raises:
        ValueError: value is not a finite, non-negative number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    try:
        decimal_value = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Invalid price: {value!r}") from e
    if not decimal_value.is_finite() or decimal_value < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return decimal_value


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents (half-to-even)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_EVEN)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def sum_money(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable sums to Decimal("0")."""
    total = Decimal("0")
    for value in values:
        total += to_decimal(value)
    return total


def format_amount(value: Number) -> str:
    """Two-decimal string without symbol, e.g. "24.98"."""
    return f"{round_money(value):.2f}"


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (USD, EUR, GBP, ...)

    Returns:
        "$24.98" for symbol currencies, "24.98 CHF" otherwise
    """
    formatted = format_amount(value)
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{formatted}"
    return f"{formatted} {currency}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
