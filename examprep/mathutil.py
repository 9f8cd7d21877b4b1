"""Rounding helpers shared by the analytics modules."""

from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))


def percent_of(part: float, whole: float) -> int:
    """Integer percentage of *whole*, 0 when *whole* is not positive."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def safe_float(value, default: float = 0.0) -> float:
    """Coerce loosely typed record values ('25.5', 25, None) to a finite float."""
    if value is None or value == "":
        return default
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return result if math.isfinite(result) else default


def safe_int(value, default: int = 0) -> int:
    """Like safe_float, truncated to int ('25', 25.0 -> 25)."""
    result = safe_float(value, None)
    if result is None:
        return default
    return int(result)
