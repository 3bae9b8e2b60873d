"""
Flow engine: one synchronous diffusion step over the whole grid.

Each step is a local diffusion where every donor offers a quarter of its
fluid to each open neighbor, modulated by a momentum heuristic:
- A donor with all 4 connections open and a non-zero velocity sends 2.5x
  its share to the cell its velocity points at
- ...and 0.5x to every other neighbor
- Donors next to a wall or the grid edge always diffuse plainly

Flow that would enter a solid cell is turned into pressure instead of fluid.

The step is a pure function over a snapshot: it reads the current arrays and
the connectivity oracle, and returns three new arrays. Nothing is updated in
place, so traversal order cannot bias the result.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from miasma.core.connectivity import as_position

if TYPE_CHECKING:
    from miasma.core.connectivity import ConnectionGrid, Position


# A donor splits its fluid into quarter shares, one per von Neumann neighbor
SHARE_DIVISOR = 4.0

# Pressure is the inbound flow scaled back up to a full cell's worth
PRESSURE_SCALE = 4.0


@dataclass
class FlowConfig:
    """Configuration for the flow engine."""

    viscosity: float = 1.0  # Fraction of the net flow applied per step, not range-checked

    # Momentum bias. Empirical values, tunable rather than physical.
    aligned_gain: float = 2.5  # Share multiplier toward the donor's velocity target
    misaligned_gain: float = 0.5  # Share multiplier for every other neighbor
    momentum_connections: int = 4  # Donor must have exactly this many open connections


def _contribution(
    donor: "Position",
    target: "Position",
    fluid: np.ndarray,
    velocity: np.ndarray,
    connections: dict["Position", list["Position"]],
    config: FlowConfig,
) -> float:
    """Amount donor sends to target this step (donor fluid must be > 0)."""
    px, py = donor
    base = fluid[py, px] / SHARE_DIVISOR
    vx, vy = velocity[py, px]

    if (vx == 0 and vy == 0) or len(connections[donor]) != config.momentum_connections:
        return base
    if (px + vx, py + vy) == target:
        return base * config.aligned_gain
    return base * config.misaligned_gain


def calculate_flow(
    fluid: np.ndarray,
    velocity: np.ndarray,
    provider: "ConnectionGrid",
    config: FlowConfig | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute the next state of every cell.

    Args:
        fluid: Current fluid levels, shape [height, width]
        velocity: Current velocities, shape [height, width, 2] as (dx, dy)
        provider: Connectivity oracle, queried once per cell for this step
        config: Flow parameters (defaults if None)

    Returns:
        (fluid, pressure, velocity) new arrays with the input shapes
    """
    if config is None:
        config = FlowConfig()

    height, width = fluid.shape
    new_fluid = np.zeros_like(fluid)
    new_pressure = np.zeros_like(fluid)
    new_velocity = np.zeros_like(velocity)

    # The oracle must answer consistently for the whole step, so ask once
    connections: dict[Position, list[Position]] = {}
    for y in range(height):
        for x in range(width):
            connections[(x, y)] = [as_position(p) for p in provider.get_connections((x, y))]

    for y in range(height):
        for x in range(width):
            here = (x, y)
            cell_connections = connections[here]

            donors = []
            in_flow = 0.0
            for pos in cell_connections:
                px, py = pos
                if not (0 <= px < width and 0 <= py < height):
                    continue
                if fluid[py, px] <= 0.0:
                    continue
                donors.append(pos)
                in_flow += _contribution(pos, here, fluid, velocity, connections, config)

            if provider.is_solid(here):
                new_pressure[y, x] = in_flow * PRESSURE_SCALE
                continue

            out_flow = fluid[y, x] / SHARE_DIVISOR * len(cell_connections)
            new_fluid[y, x] = fluid[y, x] + config.viscosity * (in_flow - out_flow)

            if len(donors) == 1:
                px, py = donors[0]
                new_velocity[y, x] = (x - px, y - py)

    return new_fluid, new_pressure, new_velocity
