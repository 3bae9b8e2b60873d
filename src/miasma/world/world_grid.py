"""
WorldGrid: connectivity from static walls plus dynamic occupants.

A tile is closed to flow if it is a wall, off the map, or holds a blocking
entity. Entities move and doors open between steps; the engine picks that up
on its next query without any notification.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from miasma.core.connectivity import Position, as_position, von_neumann_neighbors
from miasma.world.entities import EntityManager
from miasma.world.tile_map import TileMap


@dataclass
class WorldGrid:
    """ConnectionGrid over a TileMap and the entities standing on it."""

    tile_map: TileMap
    entities: EntityManager

    def _is_open(self, pos: Position, blocked: set[Position]) -> bool:
        return self.tile_map.is_open(pos) and pos not in blocked

    def get_connections(self, pos: Sequence[int]) -> list[Position]:
        blocked = self.entities.blocking_positions()
        return [n for n in von_neumann_neighbors(pos) if self._is_open(n, blocked)]

    def is_solid(self, pos: Sequence[int]) -> bool:
        return not self._is_open(as_position(pos), self.entities.blocking_positions())
