# shadowcast/numeric.py
"""Epsilon-safe numeric helpers used by the octant sweep and beam limits."""

import math

from shadowcast.constants import EPSILON


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Limit ``x`` to ``[lo, hi]``, snapping values within EPSILON of a bound."""
    if x - lo < EPSILON:
        return lo
    if x - hi > EPSILON:
        return hi
    return x


def slope(dx: float, dy: float) -> float:
    """Slope ``dy / dx``; zero when ``dx`` is too small to divide by."""
    if dx <= -EPSILON or dx >= EPSILON:
        return dy / dx
    return 0.0


def round_half_up(value: float) -> int:
    return math.floor(0.5 + value)


def column_height(radius: int, d: int) -> int:
    """Largest secondary offset inside the circle for primary offset ``d``."""
    return math.isqrt(radius * radius - d * d)


__all__ = ["clamp", "slope", "round_half_up", "column_height"]
