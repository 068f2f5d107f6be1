"""Numeric range helpers used for 3D placement."""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple


def find_min_max(values: Sequence[float]) -> Tuple[float, float]:
    if not values:
        return 0.0, 0.0
    return min(values), max(values)


def normalize_values(
    values: Sequence[float],
    min_value: float,
    max_value: float,
    target_min: float = -5.0,
    target_max: float = 5.0,
) -> List[float]:
    """Rescale ``values`` from [min_value, max_value] into [target_min, target_max].

    A degenerate source range maps every value to the target midpoint.
    """
    if min_value == max_value:
        midpoint = (target_min + target_max) / 2
        return [midpoint for _ in values]
    # halves first so finite extremes like +-1e308 do not overflow the span
    span = max_value / 2 - min_value / 2
    target_span = target_max - target_min
    return [
        target_min + ((value / 2 - min_value / 2) / span) * target_span
        for value in values
    ]


def interpolate(ratio: float, min_value: float, max_value: float) -> float:
    """Value at ``ratio`` of the way from ``min_value`` to ``max_value``."""
    return min_value * (1 - ratio) + max_value * ratio


def normalize_to_range(
    values: Sequence[float],
    target_min: float = -5.0,
    target_max: float = 5.0,
) -> List[float]:
    """Rescale over the observed range of ``values``."""
    min_value, max_value = find_min_max(values)
    return normalize_values(values, min_value, max_value, target_min, target_max)


def round_half_up(value: float) -> int:
    # Tick labels round .5 away from the floor, not to even
    return int(math.floor(value + 0.5))
