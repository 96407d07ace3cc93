"""Small numeric helpers shared by the normalizer, aggregator and projections."""

from __future__ import annotations

import math


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 whenever the denominator is not positive."""

    if denominator <= 0:
        return 0.0
    try:
        result = numerator / denominator
    except OverflowError:
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))

