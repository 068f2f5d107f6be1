"""Height-mesh construction for 3D surfaces.

Scattered (x, z) -> height samples are placed on a dense grid indexed by the
sorted distinct x and z values, then every interior cell is split into two
triangles. Vertices are laid out row-major: ``index = i * nz + j``.

Duplicate (x, z) samples: the last row written wins by default; ``"mean"``
averages all samples of a cell instead. Cells with no sample get height 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from sheetcharts.engine.palette import height_color

_EMPTY_CELL_HEIGHT = 0.0


@dataclass
class SurfaceGrid:
    x_values: List[float]
    z_values: List[float]
    heights: List[List[Optional[float]]]

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.x_values), len(self.z_values)


@dataclass
class SurfaceMesh:
    vertices: List[List[float]]
    faces: List[List[int]]
    vertex_colors: List[str]


def build_grid(
    xs: Sequence[float],
    zs: Sequence[float],
    heights: Sequence[float],
    duplicates: str = "last",
) -> SurfaceGrid:
    x_values = sorted(set(xs))
    z_values = sorted(set(zs))
    x_index = {value: i for i, value in enumerate(x_values)}
    z_index = {value: j for j, value in enumerate(z_values)}

    grid: List[List[Optional[float]]] = [[None] * len(z_values) for _ in x_values]
    sums: Dict[Tuple[int, int], Tuple[float, int]] = {}
    for x, z, height in zip(xs, zs, heights):
        i, j = x_index[x], z_index[z]
        if duplicates == "mean":
            total, count = sums.get((i, j), (0.0, 0))
            sums[(i, j)] = (total + height, count + 1)
            grid[i][j] = sums[(i, j)][0] / sums[(i, j)][1]
        else:
            grid[i][j] = height
    return SurfaceGrid(x_values=x_values, z_values=z_values, heights=grid)


def triangulate(nx: int, nz: int) -> List[List[int]]:
    """Two triangles per interior grid cell, 2 * (nx - 1) * (nz - 1) faces in total."""
    faces: List[List[int]] = []
    for i in range(nx - 1):
        for j in range(nz - 1):
            top_left = i * nz + j
            top_right = top_left + 1
            bottom_left = (i + 1) * nz + j
            bottom_right = bottom_left + 1
            faces.append([top_left, bottom_left, bottom_right])
            faces.append([top_left, bottom_right, top_right])
    return faces


def build_mesh(
    grid: SurfaceGrid,
    height_min: float = -5.0,
    height_max: float = 5.0,
) -> SurfaceMesh:
    vertices: List[List[float]] = []
    colors: List[str] = []
    span = height_max - height_min
    for i, x in enumerate(grid.x_values):
        for j, z in enumerate(grid.z_values):
            height = grid.heights[i][j]
            y = _EMPTY_CELL_HEIGHT if height is None else height
            vertices.append([x, y, z])
            colors.append(height_color((y - height_min) / span if span else 0.0))
    nx, nz = grid.shape
    return SurfaceMesh(vertices=vertices, faces=triangulate(nx, nz), vertex_colors=colors)
