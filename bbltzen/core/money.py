"""
Money helpers - fixed-point Decimal arithmetic for prices and taxes
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    """
    Convert to Decimal; floats go through str() to avoid binary noise

    Raises:
        ValidationError: value is not numeric, is a bool, or is NaN/Infinity
    """
    if isinstance(value, bool):
        raise ValidationError(f"Not a monetary amount: {value!r}")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Not a monetary amount: {value!r}")

    if not result.is_finite():
        raise ValidationError(f"Not a finite amount: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round to 2 decimal places, half away from zero (currency display)"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
