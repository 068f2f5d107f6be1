from __future__ import annotations

import pytest

from sheetcharts.engine.palette import height_color
from sheetcharts.engine.surface_mesh import build_grid, build_mesh, triangulate


@pytest.mark.parametrize("nx,nz", [(2, 2), (3, 4), (1, 5), (5, 1)])
def test_triangulate_face_count(nx: int, nz: int) -> None:
    assert len(triangulate(nx, nz)) == 2 * (nx - 1) * (nz - 1)


def test_triangulate_winding_for_single_cell() -> None:
    assert triangulate(2, 2) == [[0, 2, 3], [0, 3, 1]]


def test_triangulate_indices_stay_in_bounds() -> None:
    nx, nz = 4, 3
    faces = triangulate(nx, nz)
    assert all(0 <= index < nx * nz for face in faces for index in face)


def test_build_grid_sorts_axes_and_keeps_last_write() -> None:
    grid = build_grid([1.0, -1.0, 1.0], [0.0, 0.0, 0.0], [3.0, 2.0, 4.0])

    assert grid.x_values == [-1.0, 1.0]
    assert grid.z_values == [0.0]
    assert grid.heights == [[2.0], [4.0]]
    assert grid.shape == (2, 1)


def test_build_grid_mean_duplicates() -> None:
    grid = build_grid([1.0, 1.0], [0.0, 0.0], [3.0, 4.0], duplicates="mean")
    assert grid.heights == [[3.5]]


def test_build_mesh_fills_empty_cells_with_zero_and_colors_by_height() -> None:
    grid = build_grid([-5.0, 5.0], [-5.0, 5.0], [-5.0, 5.0])

    mesh = build_mesh(grid)

    assert mesh.vertices == [[-5.0, -5.0, -5.0], [-5.0, 0.0, 5.0], [5.0, 0.0, -5.0], [5.0, 5.0, 5.0]]
    assert mesh.vertex_colors[0] == height_color(0.0)
    assert mesh.vertex_colors[1] == height_color(0.5)
    assert mesh.vertex_colors[3] == height_color(1.0)
