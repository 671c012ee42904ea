"""CollisionGrid — bucketed point store for "any point nearby?" queries.

Cells are ``cell_size`` wide and cover [0, width] x [0, height] with one
padding column/row on every side. Queries scan ``2 * ceil(min_distance /
cell_size)`` cells around the query cell.
"""

from __future__ import annotations

import math

from phishmark.engine.surface import Point


class CollisionGrid:
    """Spatial buckets of points; lives for one Spaced layout run."""

    def __init__(self, width: float, height: float, cell_size: float, min_distance: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size
        self.min_distance = min_distance
        self.num_columns = math.ceil(width / cell_size) + 2
        self.num_rows = math.ceil(height / cell_size) + 2
        self._buckets: list[list[list[Point]]] = [
            [[] for _ in range(self.num_rows)] for _ in range(self.num_columns)
        ]
        self._reach = math.ceil(min_distance / cell_size) * 2
        self.count = 0

    def cell_of(self, x: float, y: float) -> tuple[int, int] | None:
        """Padded (col, row) for a canvas point, or None outside the grid."""
        col = math.floor(x / self.cell_size) + 1
        row = math.floor(y / self.cell_size) + 1
        if col < 0 or row < 0 or col >= self.num_columns or row >= self.num_rows:
            return None
        return col, row

    def is_free(self, x: float, y: float) -> bool:
        """True when no stored point lies closer than min_distance.

        Points outside the grid are never free.
        """
        cell = self.cell_of(x, y)
        if cell is None:
            return False
        col, row = cell
        reach = self._reach
        min_d = self.min_distance
        for c in range(max(col - reach, 0), min(col + reach, self.num_columns - 1) + 1):
            column = self._buckets[c]
            for r in range(max(row - reach, 0), min(row + reach, self.num_rows - 1) + 1):
                for px, py in column[r]:
                    if math.hypot(x - px, y - py) < min_d:
                        return False
        return True

    def insert(self, x: float, y: float) -> bool:
        """Store a point; points outside the grid are skipped (returns False)."""
        cell = self.cell_of(x, y)
        if cell is None:
            return False
        self._buckets[cell[0]][cell[1]].append((x, y))
        self.count += 1
        return True
