"""
Decimal helpers for monetary values.

Amounts are Numeric(15, 2) in the database and Decimal everywhere in between;
floats only ever appear at the display layer.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from app.core.exceptions import ValidationError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
# Largest value a Numeric(15, 2) column holds
MAX_MONEY = Decimal("9999999999999.99")


def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """Parse an int, Decimal, float or decimal string without going through binary floating point."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a decimal number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field} must be a decimal number, got {value!r}")
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return result


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_money(value: Any, field: str = "amount") -> Decimal:
    return quantize_money(to_decimal(value, field))


def non_negative_money(value: Any, field: str) -> Decimal:
    result = to_money(value, field)
    if result < 0:
        raise ValidationError(f"{field} must not be negative")
    return result


def ratio(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole, or zero when whole is zero."""
    if whole == 0:
        return ZERO
    return quantize_money(part / whole)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """part as a percentage of whole, rounded to 2 places; zero when whole is zero."""
    if whole == 0:
        return ZERO
    return quantize_money(part / whole * HUNDRED)
