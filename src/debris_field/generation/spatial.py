"""Uniform bucket grid for radius-bounded neighbor queries."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterator

Point = tuple[float, float]


class SpatialGrid:
    """
    Bucket grid over a rectangular domain.

    Each cell keeps the indices of the points inserted into it, so callers own
    the point storage and the grid only narrows down which indices to check.
    Queries return candidates from every cell a radius could reach; they are not
    distance-filtered.
    """

    def __init__(self, width: float, height: float, cell_size: float):
        """
        Initialize the grid.

        Args:
            width: Domain width in units
            height: Domain height in units
            cell_size: Side length of each cell
        """
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")

        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.cols = max(1, math.ceil(width / cell_size))
        self.rows = max(1, math.ceil(height / cell_size))
        self.cells: dict[tuple[int, int], list[int]] = defaultdict(list)
        self._count = 0

    def cell_of(self, point: Point) -> tuple[int, int]:
        """Get the (row, col) cell for a position, clamped to the grid."""
        col = math.floor(point[0] / self.cell_size)
        row = math.floor(point[1] / self.cell_size)
        col = max(0, min(col, self.cols - 1))
        row = max(0, min(row, self.rows - 1))
        return (row, col)

    def insert(self, index: int, point: Point) -> None:
        """Record that the point with this index lies at the given position."""
        self.cells[self.cell_of(point)].append(index)
        self._count += 1

    def _window(self, point: Point, radius: float) -> Iterator[tuple[int, int]]:
        span = math.ceil(radius / self.cell_size)
        row, col = self.cell_of(point)
        for r in range(max(0, row - span), min(self.rows - 1, row + span) + 1):
            for c in range(max(0, col - span), min(self.cols - 1, col + span) + 1):
                yield (r, c)

    def neighbors_within(self, point: Point, radius: float) -> list[int]:
        """
        Get candidate indices that may lie within radius of the point.

        Scans +/- ceil(radius / cell_size) cells around the point's cell, which
        is +/- 2 cells when cell_size = r / sqrt(2) and radius <= r.
        """
        found: list[int] = []
        for cell in self._window(point, radius):
            bucket = self.cells.get(cell)
            if bucket:
                found.extend(bucket)
        return found

    def clear(self) -> None:
        """Remove all indices from the grid."""
        self.cells.clear()
        self._count = 0

    def __len__(self) -> int:
        """Return the total number of indices in the grid."""
        return self._count
