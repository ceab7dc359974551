# Shared rounding helpers for targets, scores and durations
from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's built-in round() uses banker's rounding (round(16.5) == 16);
    targets and scores must round 16.5 up to 17.

    Args:
        value: Non-negative number

    Returns:
        Nearest integer, .5 rounded up
    """
    return int(math.floor(value + 0.5))


def round_to_nearest_5(value: float) -> int:
    """Round to the nearest multiple of 5 (halves up)."""
    return round_half_up(value / 5) * 5


def ceil_to_multiple_of_5(value: float) -> int:
    """Smallest multiple of 5 that is >= value."""
    return int(math.ceil(value / 5)) * 5


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division for non-negative operands."""
    return -(-numerator // denominator)
