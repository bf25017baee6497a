"""Tests for the bucket grid."""

import math
import random

import pytest

from debris_field.generation.spatial import SpatialGrid


def test_dimensions_round_up() -> None:
    grid = SpatialGrid(800.0, 612.0, 10.0 / math.sqrt(2))
    assert grid.cols == math.ceil(800.0 / grid.cell_size)
    assert grid.rows == math.ceil(612.0 / grid.cell_size)


def test_cell_of_uses_row_col_and_clamps() -> None:
    grid = SpatialGrid(100.0, 50.0, 10.0)
    assert grid.cell_of((25.0, 5.0)) == (0, 2)
    assert grid.cell_of((99.9, 49.9)) == (4, 9)
    assert grid.cell_of((-5.0, 500.0)) == (4, 0)


def test_rejects_non_positive_cell_size() -> None:
    with pytest.raises(ValueError):
        SpatialGrid(10.0, 10.0, 0.0)


def test_insert_len_and_clear() -> None:
    grid = SpatialGrid(100.0, 100.0, 10.0)
    grid.insert(0, (5.0, 5.0))
    grid.insert(1, (6.0, 6.0))
    assert len(grid) == 2
    assert sorted(grid.neighbors_within((5.0, 5.0), 1.0)) == [0, 1]
    grid.clear()
    assert len(grid) == 0
    assert grid.neighbors_within((5.0, 5.0), 1.0) == []


def test_neighbors_are_a_superset_of_exact_matches() -> None:
    rng = random.Random(3)
    radius = 10.0
    grid = SpatialGrid(200.0, 200.0, radius / math.sqrt(2))
    points = [(rng.uniform(0, 200), rng.uniform(0, 200)) for _ in range(400)]
    for index, point in enumerate(points):
        grid.insert(index, point)

    for _ in range(50):
        query = (rng.uniform(0, 200), rng.uniform(0, 200))
        candidates = set(grid.neighbors_within(query, radius))
        exact = {i for i, p in enumerate(points) if math.dist(p, query) <= radius}
        assert exact <= candidates


def test_window_is_two_cells_for_poisson_cell_size() -> None:
    radius = 10.0
    grid = SpatialGrid(200.0, 200.0, radius / math.sqrt(2))
    center = (100.0, 100.0)
    row, col = grid.cell_of(center)
    cells = list(grid._window(center, radius))
    assert len(cells) == 25
    assert (row - 2, col - 2) in cells
    assert (row + 2, col + 2) in cells
