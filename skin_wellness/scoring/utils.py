"""
Decimal Utilities
skin_wellness/scoring/utils.py

Precision-safe decimal math shared by the aggregator and the geometry engine.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List

from skin_wellness.core.exceptions import LevelOutOfRangeError

MIN_LEVEL = 0
MAX_LEVEL = 10


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("10"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def clamp_level(level: int) -> int:
    """Clamp an integer level to the 0-10 visibility scale."""
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def mean(values: List[Decimal]) -> Decimal:
    """
    Arithmetic mean, summed in sorted order so the result only depends on
    the multiset of values.

    Returns Decimal("0") for an empty list.
    """
    if not values:
        return Decimal("0")
    total = sum(sorted(values), Decimal("0"))
    return total / Decimal(len(values))


def require_level(level) -> int:
    """Return level unchanged, raising LevelOutOfRangeError outside [0, 10]."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise LevelOutOfRangeError(level)
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise LevelOutOfRangeError(level)
    return level
