"""Linear scales and axis tick selection."""

from __future__ import annotations

import math
from typing import Callable

from .constants import MAX_TICKS, TICK_INTERVALS_MINUTES

Scale = Callable[[float], float]


def scale_linear(
    domain_min: float, domain_max: float, range_min: float, range_max: float
) -> Scale:
    """Affine map from [domain_min, domain_max] to [range_min, range_max].

    Output is not clamped: values outside the domain extrapolate.
    A zero-width domain is treated as having span 1.
    """
    span = (domain_max - domain_min) or 1
    range_span = range_max - range_min

    def scale(value: float) -> float:
        return range_min + (value - domain_min) / span * range_span

    return scale


def choose_tick_interval(min_minutes: float, max_minutes: float) -> int:
    """Pick a label spacing (minutes) giving at most MAX_TICKS ticks.

    The smallest interval from TICK_INTERVALS_MINUTES that fits wins, so
    short ranges get 1 or 2 minute ticks and long ranges multiples of 5.
    """
    span = abs(max_minutes - min_minutes)
    for interval in TICK_INTERVALS_MINUTES:
        if span / interval <= MAX_TICKS:
            return interval
    return TICK_INTERVALS_MINUTES[-1]


def tick_values(low: float, high: float, interval: float) -> list[float]:
    """Multiples of interval within [low, high], ascending."""
    if interval <= 0:
        raise ValueError(f"Tick interval must be positive, got {interval}")
    first = math.ceil(low / interval)
    last = math.floor(high / interval)
    return [i * interval for i in range(first, last + 1)]
