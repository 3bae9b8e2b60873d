"""
Pressure damage: entities standing in solid cells take the pressure built
up against them.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from miasma.core.fluid_grid import FluidGrid
    from miasma.world.entities import EntityID, EntityManager

logger = logging.getLogger(__name__)


def pressure_load(pressure: float | None) -> int:
    """Whole units of pressure acting on a cell (0 off the grid)."""
    if pressure is None:
        return 0
    return math.floor(pressure)


def resolve_pressure_damage(
    fluid_grid: "FluidGrid",
    entities: "EntityManager",
) -> list["EntityID"]:
    """
    Apply one tick of pressure damage.

    Load beyond an entity's hardness comes off its durability. Entities worn
    down to zero are deleted, which opens their tile to flow.

    Returns:
        Ids of destroyed entities
    """
    destroyed = []
    for entity_id, phys in list(entities.physics.items()):
        load = pressure_load(fluid_grid.get_pressure(phys.position))
        if load <= phys.hardness:
            continue

        phys.durability -= load - phys.hardness
        logger.debug(
            "entity %d at %s takes %d pressure damage (durability %d)",
            entity_id, phys.position, load - phys.hardness, phys.durability,
        )
        if phys.durability <= 0:
            entities.delete_entity(entity_id)
            destroyed.append(entity_id)
            logger.info("entity %d at %s destroyed by pressure", entity_id, phys.position)

    return destroyed
