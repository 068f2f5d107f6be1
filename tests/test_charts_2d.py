from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from sheetcharts.engine.chart_data_builder import build_chart_data
from sheetcharts.engine.palette import DEFAULT_PALETTE
from sheetcharts.models.chart_data import (
    CategoricalSeries,
    Dataset,
    PointGroups,
    ProportionSeries,
    RadarSeries,
)

FIXTURE_CSV = Path(__file__).parent / "fixtures" / "sample.csv"


def _load_dataset() -> Dataset:
    return Dataset.from_frame(pd.read_csv(FIXTURE_CSV))


def _dataset(rows: list[dict]) -> Dataset:
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    return Dataset(columns=columns, rows=rows)


def test_bar_labels_follow_first_occurrence_order() -> None:
    dataset = _dataset(
        [
            {"cat": "b", "v": 1},
            {"cat": "a", "v": 2},
            {"cat": "b", "v": 3},
            {"cat": "c", "v": 4},
        ]
    )

    result = build_chart_data(dataset, "bar", {"x": "cat", "y": "v"})

    assert isinstance(result, CategoricalSeries)
    assert result.labels == ["b", "a", "c"]
    # first matching row per label
    assert result.series[0].values == [1.0, 2.0, 4.0]
    assert result.series[0].name == "v"


def test_bar_aggregate_option_combines_duplicate_labels() -> None:
    dataset = _dataset([{"cat": "b", "v": 1}, {"cat": "a", "v": 2}, {"cat": "b", "v": 3}])

    summed = build_chart_data(dataset, "bar", {"x": "cat", "y": "v"}, {"aggregate": "sum"})
    averaged = build_chart_data(dataset, "bar", {"x": "cat", "y": "v"}, {"aggregate": "avg"})
    counted = build_chart_data(dataset, "bar", {"x": "cat", "y": "v"}, {"aggregate": "count"})
    last = build_chart_data(dataset, "bar", {"x": "cat", "y": "v"}, {"aggregate": "last"})

    assert summed.series[0].values == [4.0, 2.0]
    assert averaged.series[0].values == [2.0, 2.0]
    assert counted.series[0].values == [2.0, 1.0]
    assert last.series[0].values == [3.0, 2.0]


def test_bar_group_expands_sub_series_per_group() -> None:
    result = build_chart_data(
        _load_dataset(),
        "bar",
        {"xAxis": "month", "yAxis": "revenue", "category": "region"},
    )

    assert result.labels == ["2024-01", "2024-02"]
    assert [s.name for s in result.series] == [
        "revenue (North)",
        "revenue (South)",
        "revenue (East)",
    ]
    assert result.series[0].values == [120.5, 130.0]
    # non-numeric cell and missing label both read as 0
    assert result.series[1].values == [98.0, 0.0]
    assert result.series[2].values == [0.0, 75.25]
    assert [s.color for s in result.series] == list(DEFAULT_PALETTE[:3])


def test_multi_series_color_policy_does_not_cycle_user_colors() -> None:
    dataset = _dataset([{"x": "a", "p": 1, "q": 2, "r": 3}])

    result = build_chart_data(dataset, "line", {"x": "x", "y": ["p", "q", "r"]}, {"colors": ["#111"]})

    n = len(DEFAULT_PALETTE)
    assert [s.color for s in result.series] == ["#111", DEFAULT_PALETTE[1 % n], DEFAULT_PALETTE[2 % n]]


def test_area_marks_fill_and_line_does_not() -> None:
    dataset = _dataset([{"x": "a", "y": 1}, {"x": "b", "y": 2}])

    area = build_chart_data(dataset, "area", {"x": "x", "y": "y"})
    line = build_chart_data(dataset, "line", {"x": "x", "y": "y"})

    assert area.display.fill is True
    assert line.display.fill is False
    assert area.labels == line.labels
    assert area.series[0].values == line.series[0].values


def test_pie_sums_values_per_label() -> None:
    dataset = _dataset([{"cat": "A", "v": 1}, {"cat": "A", "v": 2}, {"cat": "B", "v": 5}])

    result = build_chart_data(dataset, "pie", {"labels": "cat", "values": "v"})

    assert isinstance(result, ProportionSeries)
    assert result.labels == ["A", "B"]
    assert result.values == [3.0, 5.0]
    assert result.colors == list(DEFAULT_PALETTE[:2])
    assert result.display.cutout == "0%"


def test_doughnut_display_follows_dark_mode() -> None:
    dataset = _dataset([{"cat": "A", "v": "2.5"}, {"cat": "B", "v": "x"}])

    result = build_chart_data(dataset, "doughnut", {"label": "cat", "value": "v"}, {"darkMode": True})

    assert result.values == [2.5, 0.0]
    assert result.display.cutout == "50%"
    assert result.display.border_color == "#374151"


def test_scatter_without_group_yields_one_point_per_row() -> None:
    dataset = _load_dataset()

    result = build_chart_data(dataset, "scatter", {"x": "units", "y": "revenue"})

    assert isinstance(result, PointGroups)
    assert len(result.groups) == 1
    assert result.groups[0].name == "Data Points"
    assert result.groups[0].color == DEFAULT_PALETTE[0]
    assert len(result.groups[0].points) == len(dataset.rows)
    assert result.groups[0].points[0].x == 10.0
    assert result.groups[0].points[0].size is None


def test_scatter_groups_by_group_then_color_role() -> None:
    dataset = _load_dataset()

    by_color = build_chart_data(dataset, "scatter", {"x": "units", "y": "revenue", "color": "channel", "size": "units"})
    by_group = build_chart_data(
        dataset,
        "scatter",
        {"x": "units", "y": "revenue", "group": "region", "color": "channel"},
    )

    assert [g.name for g in by_color.groups] == ["online", "retail"]
    assert [len(g.points) for g in by_color.groups] == [3, 2]
    assert by_color.groups[0].points[0].size == 10.0
    assert [g.name for g in by_group.groups] == ["North", "South", "East"]
    assert sum(len(g.points) for g in by_group.groups) == len(dataset.rows)


def test_radar_uses_first_matching_row_per_label() -> None:
    dataset = _dataset(
        [
            {"skill": "speed", "alice": 3, "bob": "4"},
            {"skill": "power", "alice": 5, "bob": None},
            {"skill": "speed", "alice": 9, "bob": 9},
        ]
    )

    result = build_chart_data(dataset, "radar", {"labels": "skill", "datasets": ["alice", "bob"]})

    assert isinstance(result, RadarSeries)
    assert result.labels == ["speed", "power"]
    assert result.series[0].values == [3.0, 5.0]
    assert result.series[1].values == [4.0, 0.0]
    assert result.series[0].background_color == "rgba(255,99,132,0.5)"
    assert result.display.begin_at_zero is True


def test_strict_numeric_reports_warnings() -> None:
    result = build_chart_data(
        _load_dataset(),
        "bar",
        {"x": "month", "y": "revenue"},
        {"strictNumeric": True},
    )

    assert result.warnings == ["1 row(s) had non-numeric values in column 'revenue'"]


def test_numeric_fallback_is_silent_by_default() -> None:
    result = build_chart_data(_load_dataset(), "bar", {"x": "month", "y": "revenue"})

    assert result.warnings == []
    assert result.series[0].values == pytest.approx([120.5, 130.0])


def test_grouped_bar_with_many_group_values_keeps_first_seen_order() -> None:
    rows = [{"x": "even" if i % 2 == 0 else "odd", "y": i, "g": f"g{i}"} for i in range(2000)]
    dataset = _dataset(rows)

    result = build_chart_data(dataset, "bar", {"x": "x", "y": "y", "group": "g"})

    assert isinstance(result, CategoricalSeries)
    assert result.labels == ["even", "odd"]
    assert len(result.series) == 2000
    assert [s.name for s in result.series[:3]] == ["y (g0)", "y (g1)", "y (g2)"]
    assert result.series[3].values == [0.0, 3.0]
    assert result.series[1998].values == [1998.0, 0.0]
