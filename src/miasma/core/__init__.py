"""
Core engine primitives.

This layer knows NOTHING about tiles, doors or entities.
It only knows:
- Per-cell fluid, pressure and velocity fields
- A connectivity oracle answering "which neighbors are open" and "is this solid"
- One synchronous flow step producing the next fields from the current ones
"""

from miasma.core.connectivity import (
    ConnectionGrid,
    DIRECTIONS_VON_NEUMANN,
    Position,
    as_position,
    von_neumann_neighbors,
)
from miasma.core.flow import FlowConfig, calculate_flow
from miasma.core.fluid_grid import FluidGrid

__all__ = [
    "ConnectionGrid",
    "DIRECTIONS_VON_NEUMANN",
    "Position",
    "as_position",
    "von_neumann_neighbors",
    "FlowConfig",
    "calculate_flow",
    "FluidGrid",
]
