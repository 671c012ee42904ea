"""VectorField — grid of direction angles over the virtual canvas.

The virtual canvas extends past the visible one so curves entering from
outside do not show field-edge artifacts. Lookups outside the grid return
None ("outside field"); they never raise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from phishmark.engine.config import DEFAULT_CONFIG, EngineConfig
from phishmark.engine.noise import PerlinNoise

TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class FieldGeometry:
    """Virtual rectangle and cell layout of the field."""

    left_x: float
    right_x: float
    top_y: float
    bottom_y: float
    resolution: float
    num_columns: int
    num_rows: int

    @classmethod
    def for_canvas(cls, size: int, config: EngineConfig = DEFAULT_CONFIG) -> FieldGeometry:
        res = size / config.reference_size
        left = config.virtual_min * res
        right = config.virtual_max * res
        resolution = config.field_resolution * res
        span = right - left
        return cls(
            left_x=left,
            right_x=right,
            top_y=left,
            bottom_y=right,
            resolution=resolution,
            num_columns=int(round(span / resolution)),
            num_rows=int(round(span / resolution)),
        )

    @property
    def width(self) -> float:
        return self.right_x - self.left_x

    @property
    def height(self) -> float:
        return self.bottom_y - self.top_y


def round_to(values: NDArray[np.float64], step: float) -> NDArray[np.float64]:
    """Quantize down to the nearest multiple of step."""
    return np.floor(values / step) * step


class VectorField:
    """Immutable angle grid indexed as ``angles[col, row]``."""

    def __init__(self, geometry: FieldGeometry, angles: NDArray[np.float64]) -> None:
        if angles.shape != (geometry.num_columns, geometry.num_rows):
            raise ValueError(
                f"Angle grid shape {angles.shape} does not match "
                f"{geometry.num_columns}x{geometry.num_rows}"
            )
        self.geometry = geometry
        self.angles = np.array(angles, dtype=np.float64)
        self.angles.setflags(write=False)
        # Python-level copy for the hot tracing loops
        self._rows: list[list[float]] = self.angles.tolist()

    @property
    def shape(self) -> tuple[int, int]:
        return self.angles.shape  # type: ignore[return-value]

    def cell_of(self, x: float, y: float) -> tuple[int, int] | None:
        """(col, row) of the cell containing (x, y), or None outside the field."""
        g = self.geometry
        col = math.floor((x - g.left_x) / g.resolution)
        row = math.floor((y - g.top_y) / g.resolution)
        if col < 0 or row < 0 or col >= g.num_columns or row >= g.num_rows:
            return None
        return col, row

    def angle_at(self, x: float, y: float) -> float | None:
        """Nearest-cell angle at (x, y), or None outside the field."""
        cell = self.cell_of(x, y)
        if cell is None:
            return None
        return self._rows[cell[0]][cell[1]]

    def angle_at_cell(self, col: int, row: int) -> float | None:
        if col < 0 or row < 0 or col >= self.geometry.num_columns or row >= self.geometry.num_rows:
            return None
        return self._rows[col][row]

    def curl_at(self, x: float, y: float) -> tuple[float, float] | None:
        """Unit step direction perpendicular to the angle gradient.

        Central differences in both axes; None when any neighbour cell is
        outside the grid or the gradient vanishes.
        """
        g = self.geometry
        col = math.floor((x - g.left_x) / g.resolution)
        row = math.floor((y - g.top_y) / g.resolution)
        if col < 1 or row < 1 or col >= g.num_columns - 1 or row >= g.num_rows - 1:
            return None

        grid = self._rows
        dx = (grid[col + 1][row] - grid[col - 1][row]) / (2 * g.resolution)
        dy = (grid[col][row + 1] - grid[col][row - 1]) / (2 * g.resolution)
        mag = math.hypot(dx, dy)
        if mag < 1e-12:
            return None
        dx /= mag
        dy /= mag
        return dy, -dx


def build_field(
    geometry: FieldGeometry,
    noise: PerlinNoise,
    continuous: bool,
    angle_step: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> VectorField:
    """Sample the noise once per cell and map [0, 1) to [0, 2π)."""
    cols = np.arange(geometry.num_columns, dtype=np.float64) * config.noise_scale
    rows = np.arange(geometry.num_rows, dtype=np.float64) * config.noise_scale
    values = noise.sample(cols[:, None], rows[None, :])
    angles = values * TWO_PI
    if not continuous:
        angles = round_to(angles, angle_step)
    return VectorField(geometry, angles)
