from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

CENT = Decimal("0.01")
UNIT = Decimal("1")


def to_money(value: Any) -> Decimal:
    """Decimal rounded half-up to two places."""
    return Decimal(str(value if value is not None else 0)).quantize(CENT, rounding=ROUND_HALF_UP)


def round_to_unit(value: Decimal) -> Decimal:
    """Nearest whole currency unit, halves rounded up."""
    return value.quantize(UNIT, rounding=ROUND_HALF_UP)


def as_number(value: Decimal | None) -> Union[int, float, None]:
    """JSON-friendly number: int when whole, float otherwise."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)
