"""Cosmetic renderer options derived from ChartOptions (never the data shape)."""
from __future__ import annotations

from sheetcharts.models.chart_data import ChartKind, ChartOptions, DisplayOptions

_ANIMATION_DURATION_MS = 1000
_DARK_BORDER_COLOR = "#374151"
_LIGHT_BORDER_COLOR = "#fff"

_CARTESIAN_KINDS = {ChartKind.BAR, ChartKind.LINE, ChartKind.AREA, ChartKind.SCATTER}


def build_display_options(kind: ChartKind, options: ChartOptions) -> DisplayOptions:
    display = DisplayOptions(
        show_legend=options.show_legend,
        legend_position=options.legend_position or "top",
        title=options.title or None,
        subtitle=options.subtitle or None,
        animation_duration_ms=_ANIMATION_DURATION_MS if options.animation else 0,
        dark_mode=options.dark_mode,
    )

    if kind in _CARTESIAN_KINDS:
        display.show_grid = options.show_grid
        display.x_axis_title = options.x_axis_title or None
        display.y_axis_title = options.y_axis_title or None
        if kind != ChartKind.SCATTER:
            # bars always start at zero; line/area honor the flag
            display.begin_at_zero = True if kind == ChartKind.BAR else options.begin_at_zero
    if kind == ChartKind.BAR:
        display.horizontal = options.horizontal
    if kind == ChartKind.AREA:
        display.fill = True
    if kind in (ChartKind.LINE, ChartKind.AREA) and display.fill is None:
        display.fill = False
    if kind in (ChartKind.PIE, ChartKind.DOUGHNUT):
        display.cutout = "50%" if kind == ChartKind.DOUGHNUT else "0%"
        display.border_color = _DARK_BORDER_COLOR if options.dark_mode else _LIGHT_BORDER_COLOR
    if kind == ChartKind.RADAR:
        display.begin_at_zero = True
    if kind.is_3d:
        display.show_labels = options.show_labels
    return display
