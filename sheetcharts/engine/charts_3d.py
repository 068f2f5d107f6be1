"""3D chart transforms: bars, scatter point cloud and height surface.

Scene coordinates live in a fixed cube: scatter and surface axes span
[-5, 5], bar heights span [0.1, 5] and bar categories sit on integer grid
positions centered on the origin.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sheetcharts.engine.chart_kinds import BuildContext, ChartKindSpec
from sheetcharts.engine.charts_2d import partition_rows
from sheetcharts.engine.indexing import index_values, label_text, unique_values
from sheetcharts.engine.normalize import (
    find_min_max,
    interpolate,
    normalize_to_range,
    normalize_values,
    round_half_up,
)
from sheetcharts.engine.palette import color_for
from sheetcharts.engine.surface_mesh import build_grid, build_mesh
from sheetcharts.models.chart_data import (
    AxisRole,
    AxisTick,
    Bar3D,
    Bars3D,
    ChartKind,
    Point3D,
    PointGroup3D,
    Points3D,
    SurfaceMesh3D,
)

SCENE_MIN = -5.0
SCENE_MAX = 5.0
BAR_HEIGHT_MIN = 0.1
BAR_HEIGHT_MAX = 5.0
BAR_WIDTH = 0.8
POINT_SIZE_MIN = 0.1
POINT_SIZE_MAX = 0.5

_CUBE_TICKS = (-5.0, -2.5, 0.0, 2.5, 5.0)
_BAR_HEIGHT_TICKS = (0, 1, 2, 3, 4, 5)


def _centered_positions(categories: Sequence[object]) -> Dict[object, float]:
    offset = (len(categories) - 1) / 2
    return {value: index - offset for index, value in enumerate(categories)}


def _tick_label(scene_value: float, min_value: float, max_value: float) -> int:
    # scene [-5, 5] back to the source range
    ratio = (scene_value - SCENE_MIN) / (SCENE_MAX - SCENE_MIN)
    return round_half_up(interpolate(ratio, min_value, max_value))


def _cube_axis_labels(
    x_range: tuple,
    y_range: tuple,
    z_range: tuple,
) -> Dict[str, List[AxisTick]]:
    return {
        "x": [
            AxisTick(position=[v, SCENE_MIN, SCENE_MIN], label=_tick_label(v, *x_range))
            for v in _CUBE_TICKS
        ],
        "y": [
            AxisTick(position=[SCENE_MIN, v, SCENE_MIN], label=_tick_label(v, *y_range))
            for v in _CUBE_TICKS
        ],
        "z": [
            AxisTick(position=[SCENE_MIN, SCENE_MIN, v], label=_tick_label(v, *z_range))
            for v in _CUBE_TICKS
        ],
    }


def _axis_titles(ctx: BuildContext) -> Dict[str, str]:
    titles: Dict[str, str] = {}
    for role in (AxisRole.X, AxisRole.Y, AxisRole.Z):
        column = ctx.mapping.column(role)
        if column:
            titles[role.value] = column
    return titles


def build_bars_3d(ctx: BuildContext) -> Bars3D:
    """One box per row on an x/z category grid; height from the y column."""
    dataset = ctx.dataset
    x_col = ctx.mapping.column(AxisRole.X)
    y_col = ctx.mapping.column(AxisRole.Y)
    z_col = ctx.mapping.column(AxisRole.Z)

    x_categories = unique_values(dataset.column_values(x_col))
    z_categories = unique_values(dataset.column_values(z_col))
    x_positions = _centered_positions(x_categories)
    z_positions = _centered_positions(z_categories)
    x_slots = index_values(x_categories)

    raw_heights = [ctx.number(row, y_col) for row in dataset.rows]
    y_min, y_max = find_min_max(raw_heights)
    heights = normalize_values(raw_heights, y_min, y_max, BAR_HEIGHT_MIN, BAR_HEIGHT_MAX)

    bars: List[Bar3D] = []
    for row, raw, height in zip(dataset.rows, raw_heights, heights):
        x_value = dataset.value(row, x_col)
        z_value = dataset.value(row, z_col)
        bars.append(
            Bar3D(
                position=[x_positions[x_value], height / 2, z_positions[z_value]],
                size=[BAR_WIDTH, height, BAR_WIDTH],
                color=color_for(x_slots[x_value], ctx.options.colors),
                original_value=raw,
                label=f"{label_text(x_value)}, {label_text(z_value)}: {label_text(raw)}",
            )
        )

    nx, nz = len(x_categories), len(z_categories)
    x_edge = -nx / 2 - 0.5
    z_edge = -nz / 2 - 0.5
    axis_labels = {
        "x": [
            AxisTick(position=[x_positions[value], 0.0, z_edge], label=label_text(value))
            for value in x_categories
        ],
        "y": [
            AxisTick(
                position=[x_edge, float(tick), z_edge],
                label=round_half_up(interpolate(tick / BAR_HEIGHT_MAX, y_min, y_max)),
            )
            for tick in _BAR_HEIGHT_TICKS
        ],
        "z": [
            AxisTick(position=[x_edge, 0.0, z_positions[value]], label=label_text(value))
            for value in z_categories
        ],
    }
    return Bars3D(
        chart_kind=ctx.kind,
        bars=bars,
        axis_labels=axis_labels,
        axis_titles=_axis_titles(ctx),
    )


def build_scatter_3d(ctx: BuildContext) -> Points3D:
    """Normalized point cloud; one point per row, grouped like the 2D scatter."""
    rows = ctx.dataset.rows
    x_col = ctx.mapping.column(AxisRole.X)
    y_col = ctx.mapping.column(AxisRole.Y)
    z_col = ctx.mapping.column(AxisRole.Z)
    size_col = ctx.mapping.column(AxisRole.SIZE)

    xs = [ctx.number(row, x_col) for row in rows]
    ys = [ctx.number(row, y_col) for row in rows]
    zs = [ctx.number(row, z_col) for row in rows]
    x_range, y_range, z_range = find_min_max(xs), find_min_max(ys), find_min_max(zs)
    norm_x = normalize_values(xs, *x_range, SCENE_MIN, SCENE_MAX)
    norm_y = normalize_values(ys, *y_range, SCENE_MIN, SCENE_MAX)
    norm_z = normalize_values(zs, *z_range, SCENE_MIN, SCENE_MAX)

    sizes: Optional[List[float]] = None
    norm_sizes: Optional[List[float]] = None
    if size_col:
        sizes = [ctx.number(row, size_col) for row in rows]
        norm_sizes = normalize_to_range(sizes, POINT_SIZE_MIN, POINT_SIZE_MAX)

    groups: List[PointGroup3D] = []
    for index, (name, positions) in enumerate(partition_rows(ctx)):
        points = [
            Point3D(
                x=norm_x[i],
                y=norm_y[i],
                z=norm_z[i],
                size=norm_sizes[i] if norm_sizes is not None else None,
                original={
                    "x": xs[i],
                    "y": ys[i],
                    "z": zs[i],
                    "size": sizes[i] if sizes is not None else None,
                },
            )
            for i in positions
        ]
        groups.append(PointGroup3D(name=name, color=color_for(index, ctx.options.colors), points=points))

    return Points3D(
        chart_kind=ctx.kind,
        groups=groups,
        axis_labels=_cube_axis_labels(x_range, y_range, z_range),
        axis_titles=_axis_titles(ctx),
    )


def build_surface_3d(ctx: BuildContext) -> SurfaceMesh3D:
    """Triangulated height mesh over the distinct normalized (x, z) grid."""
    rows = ctx.dataset.rows
    x_col = ctx.mapping.column(AxisRole.X)
    y_col = ctx.mapping.column(AxisRole.Y)
    z_col = ctx.mapping.column(AxisRole.Z)

    xs = [ctx.number(row, x_col) for row in rows]
    ys = [ctx.number(row, y_col) for row in rows]
    zs = [ctx.number(row, z_col) for row in rows]
    x_range, y_range, z_range = find_min_max(xs), find_min_max(ys), find_min_max(zs)

    grid = build_grid(
        normalize_values(xs, *x_range, SCENE_MIN, SCENE_MAX),
        normalize_values(zs, *z_range, SCENE_MIN, SCENE_MAX),
        normalize_values(ys, *y_range, SCENE_MIN, SCENE_MAX),
        duplicates=ctx.options.surface_duplicates,
    )
    mesh = build_mesh(grid, SCENE_MIN, SCENE_MAX)
    return SurfaceMesh3D(
        chart_kind=ctx.kind,
        vertices=mesh.vertices,
        faces=mesh.faces,
        vertex_colors=mesh.vertex_colors,
        axis_labels=_cube_axis_labels(x_range, y_range, z_range),
        axis_titles=_axis_titles(ctx),
    )


_XYZ = (AxisRole.X, AxisRole.Y, AxisRole.Z)

KIND_SPECS = (
    ChartKindSpec(
        ChartKind.BAR3D,
        "3D Bar Chart",
        "Compare values across categories with 3D rectangular bars",
        _XYZ,
        (),
        build_bars_3d,
    ),
    ChartKindSpec(
        ChartKind.SCATTER3D,
        "3D Scatter Plot",
        "Show relationship between three variables as points in 3D space",
        _XYZ,
        (AxisRole.GROUP, AxisRole.COLOR, AxisRole.SIZE),
        build_scatter_3d,
    ),
    ChartKindSpec(
        ChartKind.SURFACE3D,
        "3D Surface Plot",
        "Visualize a height field over two variables as a continuous surface",
        _XYZ,
        (),
        build_surface_3d,
    ),
)
