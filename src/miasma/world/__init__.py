"""
World layer: concrete connectivity providers and their collaborators.

- TileMap: static wall grid parsed from text
- WorldGrid: walls plus blocking entities (doors, crates)
- resolve_pressure_damage: pressure against solid cells wears entities down
- MiasmaWorld: owns map, entities and miasma; runs ticks
"""

from miasma.world.tile_map import Tile, TileMap
from miasma.world.entities import EntityID, EntityManager, Physics
from miasma.world.world_grid import WorldGrid
from miasma.world.damage import pressure_load, resolve_pressure_damage
from miasma.world.state import MiasmaWorld, WorldConfig

__all__ = [
    "Tile",
    "TileMap",
    "EntityID",
    "EntityManager",
    "Physics",
    "WorldGrid",
    "pressure_load",
    "resolve_pressure_damage",
    "MiasmaWorld",
    "WorldConfig",
]
