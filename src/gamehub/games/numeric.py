"""Coercion of aggregate values coming back from the database.

Depending on the driver, SUM/AVG/ROUND results arrive as ``Decimal``,
``float``, ``int`` or even ``str``. They are turned into plain numbers here,
before any ranking arithmetic or comparison happens.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


def to_int(value: Any, default: int = 0) -> int:  # noqa: ANN401
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return int(Decimal(str(value)))


def to_float(value: Any) -> float | None:  # noqa: ANN401
    if value is None:
        return None
    try:
        return float(Decimal(str(value)))
    except InvalidOperation as exc:
        msg = f"Not a number: {value!r}"
        raise ValueError(msg) from exc


def round_half_up(value: Any, places: int) -> float | None:  # noqa: ANN401
    """Round like SQL ``ROUND(x, places)``: halves go away from zero, None stays None."""
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: Any, whole: Any, places: int = 1) -> float | None:  # noqa: ANN401
    """``round(part / whole * 100, places)``, or None when ``whole`` is zero or missing."""
    whole_d = Decimal(str(whole)) if whole is not None else Decimal(0)
    if whole_d == 0:
        return None
    part_d = Decimal(str(part)) if part is not None else Decimal(0)
    return round_half_up(part_d / whole_d * 100, places)
