from __future__ import annotations

import pytest

from sheetcharts.engine.normalize import (
    find_min_max,
    interpolate,
    normalize_to_range,
    normalize_values,
    round_half_up,
)


def test_normalize_values_maps_bounds_to_target_bounds() -> None:
    values = [3.0, 1.0, 5.0, 2.0]
    lo, hi = find_min_max(values)

    result = normalize_values(values, lo, hi, -5, 5)

    assert result[1] == pytest.approx(-5)
    assert result[2] == pytest.approx(5)
    assert result[0] == pytest.approx(0)


def test_normalize_values_degenerate_range_maps_to_midpoint() -> None:
    assert normalize_values([2.0, 2.0], 2.0, 2.0, -5, 5) == [0.0, 0.0]
    assert normalize_values([7.0], 7.0, 7.0, 0.1, 5) == [pytest.approx(2.55)]


def test_normalize_to_range_uses_observed_range() -> None:
    assert normalize_to_range([10.0, 20.0], 0, 1) == [pytest.approx(0.0), pytest.approx(1.0)]


def test_find_min_max_empty() -> None:
    assert find_min_max([]) == (0.0, 0.0)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(1.49) == 1


def test_normalize_values_handles_extreme_finite_range() -> None:
    result = normalize_values([-1e308, 0.0, 1e308], -1e308, 1e308, -5, 5)

    assert result == [pytest.approx(-5.0), pytest.approx(0.0), pytest.approx(5.0)]


def test_interpolate_endpoints_and_extremes() -> None:
    assert interpolate(0.0, 10.0, 30.0) == 10.0
    assert interpolate(1.0, 10.0, 30.0) == 30.0
    assert interpolate(0.25, 0.0, 10.0) == pytest.approx(2.5)
    assert interpolate(1.0, -1e308, 1e308) == 1e308
    assert interpolate(0.5, -1e308, 1e308) == pytest.approx(0.0)
