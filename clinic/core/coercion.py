"""
Conversions between wire values and storage values.

Numeric columns hold fixed-precision decimals; the API speaks floats.
Timestamps are stored as naive UTC.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float, Decimal, str]

# Exclusive bounds of values that still fit the column after half-up rounding
NUMERIC_5_2_LIMIT = 999.995
NUMERIC_4_1_LIMIT = 999.95


def utcnow() -> datetime:
    """Naive UTC timestamp with microsecond resolution"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_decimal(value: Optional[Number], places: int) -> Optional[Decimal]:
    """Quantize a number to `places` decimal digits, half-up.

    Goes through str() so 4.25 becomes Decimal("4.25") and not the
    binary expansion of the float.
    """
    if value is None:
        return None
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def to_float(value: Optional[Number]) -> Optional[float]:
    if value is None:
        return None
    return float(value)
