"""
Connectivity: the oracle the flow engine consumes.

The engine never owns a map. Every step it asks a ConnectionGrid two things
about each cell:
- Which von Neumann neighbors are open to flow
- Whether the cell itself is solid

Answers may be asymmetric (A lists B without B listing A); the engine does
not assume otherwise.
"""

from __future__ import annotations
from typing import Iterator, Protocol, Sequence


Position = tuple[int, int]


# Neighbor offsets in the order providers report them: W, N, E, S
DIRECTIONS_VON_NEUMANN = {
    "W": (-1, 0),
    "N": (0, -1),   # North: y decreases
    "E": (1, 0),
    "S": (0, 1),    # South: y increases
}


class ConnectionGrid(Protocol):
    """Protocol for connectivity providers."""

    def get_connections(self, pos: Position) -> list[Position]:
        """
        Neighbor positions through which fluid may flow from/to pos.

        Args:
            pos: (x, y) cell position

        Returns:
            Subset of the 4-neighborhood of pos
        """
        ...

    def is_solid(self, pos: Position) -> bool:
        """True if pos is impassable (wall, out of bounds, blocking occupant)."""
        ...


def as_position(pos: Sequence[int]) -> Position:
    """Normalize any length-2 sequence to an (x, y) tuple of ints."""
    x, y = pos
    return int(x), int(y)


def von_neumann_neighbors(pos: Sequence[int]) -> Iterator[Position]:
    """Yield the four candidate neighbors of pos (may be out of bounds)."""
    x, y = as_position(pos)
    for dx, dy in DIRECTIONS_VON_NEUMANN.values():
        yield x + dx, y + dy
