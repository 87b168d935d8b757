"""Half-away-from-zero rounding for sub-scores.

Python's built-in :func:`round` uses banker's rounding, which would turn
180.5 into 180. Sub-scores always round ties away from zero.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_away(value: float) -> int:
    """Round *value* to the nearest integer, ties away from zero.

    The exact binary value of the float is rounded, so 2.675 (stored as
    2.67499999...) behaves as the float it actually is.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp(value: int, ceiling: int) -> int:
    """Clamp *value* into the closed interval ``[0, ceiling]``."""
    return max(0, min(value, ceiling))
