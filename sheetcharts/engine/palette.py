"""Series/category color allocation.

``DEFAULT_PALETTE`` is the only default color list in the engine; builders ask
``color_for`` for slot colors instead of carrying their own lists.
"""
from __future__ import annotations

import colorsys
from typing import List, Optional, Sequence, Tuple

DEFAULT_PALETTE: Tuple[str, ...] = (
    "#ff6384",
    "#36a2eb",
    "#ffce56",
    "#4bc0c0",
    "#9966ff",
    "#ff9f40",
    "#c7c7c7",
    "#5366ff",
    "#289f40",
    "#d2c7c7",
)

# Surface height hue sweep: 0.7 (blue) at the lowest point -> 0.0 (red) at the highest
_HEIGHT_HUE_START = 0.7
_HEIGHT_SATURATION = 0.8
_HEIGHT_LIGHTNESS = 0.5


def color_for(
    index: int,
    user_colors: Optional[Sequence[str]] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> str:
    """Color for slot ``index``.

    User colors are used once each and never cycled; past them the default
    palette cycles by absolute slot index.
    """
    colors = user_colors or ()
    if index < len(colors):
        return colors[index]
    return palette[index % len(palette)]


def colors_for(
    count: int,
    user_colors: Optional[Sequence[str]] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> List[str]:
    return [color_for(index, user_colors, palette) for index in range(count)]


def _to_hex(rgb: Tuple[float, float, float]) -> str:
    r = max(0, min(255, int(round(float(rgb[0]) * 255))))
    g = max(0, min(255, int(round(float(rgb[1]) * 255))))
    b = max(0, min(255, int(round(float(rgb[2]) * 255))))
    return f"#{r:02x}{g:02x}{b:02x}"


def _hex_to_rgb(color: str) -> Optional[Tuple[int, int, int]]:
    text = str(color or "").strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        return None
    try:
        return (
            int(text[0:2], 16),
            int(text[2:4], 16),
            int(text[4:6], 16),
        )
    except ValueError:
        return None


def with_alpha(color: str, alpha: float) -> str:
    """Translucent variant of a hex color; other color syntaxes pass through."""
    rgb = _hex_to_rgb(color) if str(color or "").strip().startswith("#") else None
    if rgb is None:
        return color
    r, g, b = rgb
    a = min(1.0, max(0.0, float(alpha)))
    return f"rgba({r},{g},{b},{a})"


def height_color(normalized_height: float) -> str:
    """Hue-interpolated color for a height in [0, 1]."""
    level = min(1.0, max(0.0, float(normalized_height)))
    hue = _HEIGHT_HUE_START - level * _HEIGHT_HUE_START
    # colorsys takes (h, l, s)
    return _to_hex(colorsys.hls_to_rgb(hue, _HEIGHT_LIGHTNESS, _HEIGHT_SATURATION))
