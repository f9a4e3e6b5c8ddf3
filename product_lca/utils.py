"""
Numeric helpers shared by the impact aggregator and the quality assessor.

Rounding is round-half-up, so 2.5 -> 3 and 20.5 -> 21. Python's built-in
round() uses banker's rounding, which would move boundary cases across the
fixed compliance thresholds.
"""

import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves rounding towards +infinity."""
    return int(math.floor(value + 0.5))


def round_to(value: Number, decimals: int = 1) -> float:
    """Round half-up to a fixed number of decimals."""
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale


def safe_divide(numerator: Number, denominator: Number) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def percentage_of(part: Number, total: Number) -> float:
    """Share of ``total`` in percent; 0.0 for a zero total."""
    return safe_divide(part, total) * 100.0
