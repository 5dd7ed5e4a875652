"""Numeric parsing and formatting utilities."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

STORAGE_QUANTUM = Decimal("0.01")

# Plain ASCII decimal or scientific notation, e.g. "12.5", "-3", ".5", "1e3"
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Float range: larger magnitudes parse to infinity, smaller ones to zero
MAX_EXPONENT = 308
MIN_EXPONENT = -324


def parse_numeric_value(value: Any, default_value: Any = 0) -> Decimal:
    """Parse arbitrary input into a Decimal without raising.

    Handles:
    - None, "" and blank strings (returns the default)
    - Decimal, int and float values (returned as Decimal when finite)
    - numeric strings such as "12.5", " -3 ", "1e3"

    Anything else falls back to the default: partial numbers like "3.5abc",
    digit separators ("1_000") and non-ASCII digits, NaN, infinity, values
    beyond float range (such as "1e999999") and booleans. Values too small
    for a float become 0.

    Args:
        value: Raw value from user input or storage
        default_value: Value returned when parsing fails

    Returns:
        Decimal value
    """
    default = _to_decimal(default_value)
    if default is None:
        default = Decimal("0")

    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default

    parsed = _to_decimal(value)
    if parsed is None:
        return default
    return parsed


def format_numeric_value(value: Any, decimals: int = 2, default_value: Any = 0) -> str:
    """Format a value with a fixed number of decimal places.

    Args:
        value: Raw value (parsed with parse_numeric_value)
        decimals: Number of digits after the decimal point
        default_value: Value used when parsing fails

    Returns:
        Formatted string, e.g. "107.57"
    """
    parsed = parse_numeric_value(value, default_value)
    rounded = _quantize(parsed, Decimal(1).scaleb(-max(decimals, 0)))
    if rounded == 0:
        # Drop the sign of values that round to zero ("-0.00")
        rounded = abs(rounded)
    return f"{rounded:f}"


def round_for_storage(value: Any) -> Decimal:
    """Round a value to two decimal places for persistence."""
    return _quantize(parse_numeric_value(value), STORAGE_QUANTUM)


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    # Widen precision so large values never overflow the default 28 digits
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() - quantum.adjusted() + 2)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        text = str(value).strip()
        if not NUMBER_PATTERN.fullmatch(text):
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    if result.is_zero():
        return result if result.adjusted() <= MAX_EXPONENT else Decimal("0")
    if result.adjusted() > MAX_EXPONENT:
        return None
    if result.adjusted() < MIN_EXPONENT:
        return Decimal("0")
    return result
