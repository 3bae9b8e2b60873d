"""
Reachable regions and equilibrium levels.

IMPORTANT: This is for ANALYSIS ONLY. The flow engine never builds a graph;
it asks the connectivity oracle cell by cell. Here the same answers are
assembled into a sparse adjacency matrix so regions can be found with
scipy's graph routines.

A closed region left to flow long enough settles at a uniform level:
    level = (fluid in region) / (cells in region)
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import breadth_first_order

from miasma.core.connectivity import Position, as_position

if TYPE_CHECKING:
    from miasma.core.connectivity import ConnectionGrid
    from miasma.core.fluid_grid import FluidGrid


def connectivity_matrix(
    provider: "ConnectionGrid",
    width: int,
    height: int,
) -> sparse.csr_matrix:
    """
    Build the directed adjacency matrix of a connectivity provider.

    Entry (i, j) is 1 when cell i lists cell j as a connection. Indices are
    flat (x + y * width); connections off the grid are dropped.

    Args:
        provider: Connectivity oracle
        width, height: Grid dimensions

    Returns:
        Sparse matrix of shape [width*height, width*height]
    """
    n = width * height
    rows = []
    cols = []

    for y in range(height):
        for x in range(width):
            i = x + y * width
            for cx, cy in map(as_position, provider.get_connections((x, y))):
                if 0 <= cx < width and 0 <= cy < height:
                    rows.append(i)
                    cols.append(cx + cy * width)

    data = np.ones(len(rows), dtype=np.int8)
    return sparse.csr_matrix((data, (rows, cols)), shape=(n, n))


def reachable_cells(
    provider: "ConnectionGrid",
    width: int,
    height: int,
    start: Sequence[int],
) -> list[Position]:
    """
    Cells fluid placed at start can reach through open connections.

    A cell receives from the neighbors it lists, so the search follows
    connections in reverse: j is reachable from i when j lists i.

    Returns:
        Sorted (x, y) positions including start; empty if start is off the
        grid or solid
    """
    x, y = as_position(start)
    if not (0 <= x < width and 0 <= y < height) or provider.is_solid((x, y)):
        return []

    # Fluid moves against the listing: a cell pulls from the cells it lists
    flow_graph = connectivity_matrix(provider, width, height).T.tocsr()
    order = breadth_first_order(
        flow_graph, x + y * width, directed=True, return_predecessors=False
    )
    cells = [(int(i % width), int(i // width)) for i in order]
    return sorted(cells, key=lambda p: (p[1], p[0]))


def equilibrium_level(
    fluid_grid: "FluidGrid",
    provider: "ConnectionGrid",
    start: Sequence[int],
) -> float:
    """
    Level every cell of start's region converges to.

    Returns:
        Region total / region size (0.0 for an empty region)
    """
    width, height = fluid_grid.dimensions()
    cells = reachable_cells(provider, width, height, start)
    if not cells:
        return 0.0
    total = sum(fluid_grid.get_fluid(pos) for pos in cells)
    return total / len(cells)
