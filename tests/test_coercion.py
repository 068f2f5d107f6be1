from __future__ import annotations

import math

from sheetcharts.engine.coercion import NumericTracker, coerce_number, parse_number


def test_coerce_number_parses_numeric_text() -> None:
    assert coerce_number("3.5") == 3.5
    assert coerce_number("  -4e2 ") == -400.0
    assert coerce_number(7) == 7.0


def test_coerce_number_falls_back_to_zero() -> None:
    assert coerce_number("abc") == 0
    assert coerce_number("") == 0
    assert coerce_number(None) == 0
    assert coerce_number(True) == 0
    assert coerce_number(float("nan")) == 0
    assert coerce_number(float("inf")) == 0
    assert coerce_number("1e999") == 0


def test_coerce_number_reads_leading_numeric_prefix() -> None:
    assert coerce_number("12%") == 12.0
    assert coerce_number("3.5kg") == 3.5
    assert coerce_number("$5") == 0


def test_parse_number_distinguishes_missing_from_zero() -> None:
    assert parse_number("0") == 0.0
    assert parse_number("zero") is None


def test_numeric_tracker_reports_only_in_strict_mode() -> None:
    lenient = NumericTracker()
    strict = NumericTracker(strict=True)
    for tracker in (lenient, strict):
        assert tracker.coerce("n/a", "revenue") == 0.0
        assert tracker.coerce("oops", "revenue") == 0.0
        assert math.isclose(tracker.coerce("1.5", "revenue"), 1.5)

    assert lenient.failures() == {"revenue": 2}
    assert lenient.warnings() == []
    assert strict.warnings() == ["2 row(s) had non-numeric values in column 'revenue'"]
