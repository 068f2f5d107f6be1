"""2D chart transforms: categorical, proportion, scatter and radar.

- Label order is the first-occurrence order of the label column, never sorted.
- Every emitted series takes the next color slot via ``color_for``.
- Each transform declares its role table in ``KIND_SPECS`` next to it.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from sheetcharts.engine.chart_kinds import BuildContext, ChartKindSpec
from sheetcharts.engine.indexing import label_text, unique_values
from sheetcharts.engine.palette import color_for, colors_for, with_alpha
from sheetcharts.models.chart_data import (
    AxisRole,
    CategoricalSeries,
    ChartKind,
    Point2D,
    PointGroup,
    PointGroups,
    ProportionSeries,
    RadarSeries,
    RadarSeriesItem,
    Series,
)

UNGROUPED_NAME = "Data Points"
_RADAR_FILL_ALPHA = 0.5

_AGG_MAP = {
    "avg": "mean",
    "mean": "mean",
    "sum": "sum",
    "min": "min",
    "max": "max",
    "count": "count",
    "median": "median",
}


def _aggregate(values: Optional[List[float]], agg: str) -> float:
    if not values:
        return 0.0
    if agg == "first":
        return values[0]
    if agg == "last":
        return values[-1]
    if agg == "count":
        return float(len(values))
    agg_func = _AGG_MAP.get(agg, "sum")
    return float(pd.Series(values, dtype="float64").agg(agg_func))


def _series_values(
    ctx: BuildContext,
    rows: List[Dict[str, Any]],
    x_col: str,
    y_col: str,
    label_values: List[Any],
) -> List[float]:
    buckets: Dict[Any, List[float]] = {}
    for row in rows:
        key = ctx.dataset.value(row, x_col)
        buckets.setdefault(key, []).append(ctx.number(row, y_col))
    return [_aggregate(buckets.get(value), ctx.options.aggregate) for value in label_values]


def partition_rows(ctx: BuildContext) -> List[Tuple[str, List[int]]]:
    """Split row positions by the group (else color) column, in first-seen order."""
    part_col = ctx.mapping.column(AxisRole.GROUP) or ctx.mapping.column(AxisRole.COLOR)
    rows = ctx.dataset.rows
    if not part_col:
        return [(UNGROUPED_NAME, list(range(len(rows))))]
    partitions: Dict[Any, List[int]] = {}
    for position, row in enumerate(rows):
        partitions.setdefault(ctx.dataset.value(row, part_col), []).append(position)
    return [(label_text(key), positions) for key, positions in partitions.items()]


def build_categorical(ctx: BuildContext) -> CategoricalSeries:
    """bar / line / area: one series per y column, or per (y column, group value)."""
    dataset = ctx.dataset
    x_col = ctx.mapping.column(AxisRole.X)
    y_cols = ctx.mapping.columns_for(AxisRole.Y)
    group_col = ctx.mapping.column(AxisRole.GROUP)

    label_values = unique_values(dataset.column_values(x_col))
    # group value -> rows, first-seen order; one pass over the dataset
    group_rows: Dict[Any, List[Dict[str, Any]]] = {}
    if group_col:
        for row in dataset.rows:
            group_rows.setdefault(dataset.value(row, group_col), []).append(row)

    series: List[Series] = []
    for y_col in y_cols:
        if not group_col:
            series.append(
                Series(
                    name=y_col,
                    values=_series_values(ctx, dataset.rows, x_col, y_col, label_values),
                    color=color_for(len(series), ctx.options.colors),
                )
            )
            continue
        for group_value, rows in group_rows.items():
            series.append(
                Series(
                    name=f"{y_col} ({label_text(group_value)})",
                    values=_series_values(ctx, rows, x_col, y_col, label_values),
                    color=color_for(len(series), ctx.options.colors),
                )
            )

    return CategoricalSeries(
        chart_kind=ctx.kind,
        labels=[label_text(value) for value in label_values],
        series=series,
    )


def build_proportion(ctx: BuildContext) -> ProportionSeries:
    """pie / doughnut: sum of values per distinct label."""
    dataset = ctx.dataset
    labels_col = ctx.mapping.column(AxisRole.LABELS)
    values_col = ctx.mapping.column(AxisRole.VALUES)

    totals: Dict[Any, float] = {}
    for row in dataset.rows:
        key = dataset.value(row, labels_col)
        totals[key] = totals.get(key, 0.0) + ctx.number(row, values_col)

    label_values = unique_values(dataset.column_values(labels_col))
    return ProportionSeries(
        chart_kind=ctx.kind,
        labels=[label_text(value) for value in label_values],
        values=[totals[value] for value in label_values],
        colors=colors_for(len(label_values), ctx.options.colors),
    )


def build_scatter(ctx: BuildContext) -> PointGroups:
    """2D scatter: every row becomes exactly one point."""
    x_col = ctx.mapping.column(AxisRole.X)
    y_col = ctx.mapping.column(AxisRole.Y)
    size_col = ctx.mapping.column(AxisRole.SIZE)

    rows = ctx.dataset.rows
    groups: List[PointGroup] = []
    for index, (name, positions) in enumerate(partition_rows(ctx)):
        points = [
            Point2D(
                x=ctx.number(rows[position], x_col),
                y=ctx.number(rows[position], y_col),
                size=ctx.number(rows[position], size_col) if size_col else None,
            )
            for position in positions
        ]
        groups.append(PointGroup(name=name, color=color_for(index, ctx.options.colors), points=points))
    return PointGroups(chart_kind=ctx.kind, groups=groups)


def build_radar(ctx: BuildContext) -> RadarSeries:
    """radar: one series per datasets column, value taken from the first row of each label."""
    dataset = ctx.dataset
    labels_col = ctx.mapping.column(AxisRole.LABELS)
    dataset_cols = ctx.mapping.columns_for(AxisRole.DATASETS)

    first_rows: Dict[Any, Dict[str, Any]] = {}
    for row in dataset.rows:
        first_rows.setdefault(dataset.value(row, labels_col), row)
    label_values = unique_values(dataset.column_values(labels_col))

    series: List[RadarSeriesItem] = []
    for index, col in enumerate(dataset_cols):
        color = color_for(index, ctx.options.colors)
        values = [
            ctx.number(first_rows[value], col) if value in first_rows else 0.0
            for value in label_values
        ]
        series.append(
            RadarSeriesItem(
                name=col,
                values=values,
                color=color,
                background_color=with_alpha(color, _RADAR_FILL_ALPHA),
            )
        )
    return RadarSeries(
        chart_kind=ctx.kind,
        labels=[label_text(value) for value in label_values],
        series=series,
    )


_CATEGORICAL_REQUIRED = (AxisRole.X, AxisRole.Y)
_CATEGORICAL_OPTIONAL = (AxisRole.GROUP,)
_PROPORTION_REQUIRED = (AxisRole.LABELS, AxisRole.VALUES)

KIND_SPECS = (
    ChartKindSpec(
        ChartKind.BAR,
        "Bar Chart",
        "Compare values across categories with rectangular bars",
        _CATEGORICAL_REQUIRED,
        _CATEGORICAL_OPTIONAL,
        build_categorical,
    ),
    ChartKindSpec(
        ChartKind.LINE,
        "Line Chart",
        "Show trends over a continuous interval or time period",
        _CATEGORICAL_REQUIRED,
        _CATEGORICAL_OPTIONAL,
        build_categorical,
    ),
    ChartKindSpec(
        ChartKind.AREA,
        "Area Chart",
        "Show cumulated totals using numbers or percentages over time",
        _CATEGORICAL_REQUIRED,
        _CATEGORICAL_OPTIONAL,
        build_categorical,
    ),
    ChartKindSpec(
        ChartKind.PIE,
        "Pie Chart",
        "Show proportions and percentages between categories",
        _PROPORTION_REQUIRED,
        (),
        build_proportion,
    ),
    ChartKindSpec(
        ChartKind.DOUGHNUT,
        "Doughnut Chart",
        "Show proportions between categories around an empty center",
        _PROPORTION_REQUIRED,
        (),
        build_proportion,
    ),
    ChartKindSpec(
        ChartKind.SCATTER,
        "Scatter Plot",
        "Show relationship between two variables as points",
        (AxisRole.X, AxisRole.Y),
        (AxisRole.GROUP, AxisRole.COLOR, AxisRole.SIZE),
        build_scatter,
    ),
    ChartKindSpec(
        ChartKind.RADAR,
        "Radar Chart",
        "Display multivariate data in a two-dimensional chart",
        (AxisRole.LABELS, AxisRole.DATASETS),
        (),
        build_radar,
    ),
)
