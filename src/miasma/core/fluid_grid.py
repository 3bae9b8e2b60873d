"""
FluidGrid: per-cell miasma state over a fixed width x height domain.

The grid stores three parallel fields:
- Fluid level (accumulated substance)
- Pressure (inbound flow piled up against solid cells, recomputed each step)
- Velocity (direction fluid last arrived from, used to bias the next step)

It does NOT know about walls, doors or entities. Connectivity comes from a
ConnectionGrid handed to flow() every step.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator, Sequence

import numpy as np

from miasma.core.flow import FlowConfig, calculate_flow

if TYPE_CHECKING:
    from miasma.core.connectivity import ConnectionGrid, Position

logger = logging.getLogger(__name__)

STABILITY_TOLERANCE = 0.01


class FluidGrid:
    """
    The miasma simulation state.

    Arrays are [height, width] (row-major, flat index = x + y * width).
    Accessors take (x, y) positions and return None when out of bounds.
    """

    def __init__(self, width: int, height: int, config: FlowConfig | None = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self.config = config if config is not None else FlowConfig()

        self._fluid = np.zeros((self._height, self._width), dtype=np.float64)
        self._pressure = np.zeros((self._height, self._width), dtype=np.float64)
        self._velocity = np.zeros((self._height, self._width, 2), dtype=np.int64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width) array dimensions."""
        return self._height, self._width

    def dimensions(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self._width, self._height

    @property
    def viscosity(self) -> float:
        return self.config.viscosity

    @viscosity.setter
    def viscosity(self, value: float):
        # Values above 1.0 overshoot; allowed, not physically meaningful
        self.config.viscosity = float(value)

    # Copies, so analysis and plotting can't corrupt the state
    @property
    def fluid(self) -> np.ndarray:
        return self._fluid.copy()

    @property
    def pressure(self) -> np.ndarray:
        return self._pressure.copy()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    def _flat_index(self, pos: Sequence[int]) -> int | None:
        """Flat index of pos, or None if it falls outside the arrays."""
        x, y = pos
        if x < 0 or y < 0:
            return None
        index = int(x) + int(y) * self._width
        if index >= self._fluid.size:
            return None
        return index

    def _valid_position(self, pos: Sequence[int]) -> bool:
        x, y = pos
        return 0 <= x < self._width and 0 <= y < self._height

    def get_fluid(self, pos: Sequence[int]) -> float | None:
        """Fluid level at pos, or None if out of bounds."""
        if not self._valid_position(pos):
            return None
        x, y = pos
        return float(self._fluid[y, x])

    def get_pressure(self, pos: Sequence[int]) -> float | None:
        """Pressure at pos, or None if out of bounds."""
        if not self._valid_position(pos):
            return None
        x, y = pos
        return float(self._pressure[y, x])

    def get_velocity(self, pos: Sequence[int]) -> tuple[int, int] | None:
        """Velocity (dx, dy) at pos, or None if out of bounds."""
        if not self._valid_position(pos):
            return None
        x, y = pos
        vx, vy = self._velocity[y, x]
        return int(vx), int(vy)

    def add_fluid(self, pos: Sequence[int], delta: float) -> float | None:
        """
        Add delta to the fluid at pos.

        Validity is checked on the flat index, so an x past the row end
        addresses the next row. Returns the new level, or None if the index
        falls outside the grid.
        """
        index = self._flat_index(pos)
        if index is None:
            return None
        current = self._fluid.flat[index]
        new_value = current + delta
        logger.debug("adding fluid at %s: %.4f + %s = %.4f", tuple(pos), current, delta, new_value)
        self._fluid.flat[index] = new_value
        return float(new_value)

    def set_fluid(self, pos: Sequence[int], value: float) -> float | None:
        """Overwrite the fluid at pos. Same index check as add_fluid."""
        index = self._flat_index(pos)
        if index is None:
            return None
        self._fluid.flat[index] = value
        return float(value)

    def total_fluid_level(self) -> float:
        """Sum of fluid over all cells."""
        return float(self._fluid.sum())

    def is_stable(self, tolerance: float = STABILITY_TOLERANCE) -> bool:
        """
        True if every non-empty cell is within tolerance of cell (0, 0).

        The anchor is always cell index 0. If that cell is solid or cut off
        from the fluid, any grid holding fluid reports unstable.
        """
        base = self._fluid.flat[0]
        occupied = self._fluid[self._fluid != 0.0]
        return bool(np.all(np.abs(base - occupied) < tolerance))

    def iter_fluid(self) -> Iterator[tuple["Position", float]]:
        """Iterate over ((x, y), fluid) pairs in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y), float(self._fluid[y, x])

    def __iter__(self) -> Iterator[tuple["Position", float]]:
        return self.iter_fluid()

    def flow(self, connection_grid: "ConnectionGrid"):
        """Advance one step and commit all three fields together."""
        fluid, pressure, velocity = calculate_flow(
            self._fluid, self._velocity, connection_grid, self.config
        )
        self._fluid = fluid
        self._pressure = pressure
        self._velocity = velocity
        logger.debug("flow step: total fluid %.4f", self.total_fluid_level())

    def __repr__(self) -> str:
        return f"FluidGrid(width={self._width}, height={self._height}, total={self.total_fluid_level():.3f})"
