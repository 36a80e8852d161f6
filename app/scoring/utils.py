"""Decimal helpers for score arithmetic.

All score arithmetic goes through Decimal and rounds half-up, so
``80 * 0.7`` is exactly 56.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

SCORE_MIN = Decimal(0)
SCORE_MAX = Decimal(100)


def to_decimal(value: Any, places: int = 4) -> Decimal:
    """Convert a number to Decimal with explicit precision and ROUND_HALF_UP rounding.

    Args:
        value: Numeric value to convert.
        places: Number of decimal places to quantize to.

    Returns:
        Decimal with the specified precision.
    """
    if isinstance(value, Decimal):
        return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places,
        rounding=ROUND_HALF_UP,
    )


def clamp(
    value: Decimal,
    min_val: Decimal = SCORE_MIN,
    max_val: Decimal = SCORE_MAX,
) -> Decimal:
    """Clamp a Decimal value to [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def round_score(value: Decimal) -> int:
    """Round half-up to an integer score clamped to [0, 100]."""
    return int(clamp(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_score(value: Any) -> Optional[Decimal]:
    """Interpret an externally supplied score.

    Returns None for anything that is not a finite number (``None``, NaN,
    strings that do not parse, booleans). Range is not checked here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed
