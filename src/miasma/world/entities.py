"""
Entity bookkeeping for things that occupy tiles.

Only the physical side is tracked here: where an entity stands, whether it
blocks flow (closed doors, crates, barricades) and how much pressure it can
take before it breaks.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from miasma.core.connectivity import Position, as_position

EntityID = int


@dataclass
class Physics:
    """Physical properties of an entity."""

    position: Position
    durability: int  # Hit points against pressure damage
    hardness: int  # Pressure an entity shrugs off each tick
    blocking: bool = True  # Blocks flow through its tile (a closed door, a crate)

    def __post_init__(self):
        self.position = as_position(self.position)


@dataclass
class EntityManager:
    """Allocates entity ids and stores their physics components."""

    next_id: EntityID = 1
    physics: dict[EntityID, Physics] = field(default_factory=dict)

    def create_entity(self) -> EntityID:
        entity_id = self.next_id
        self.next_id += 1
        return entity_id

    def add_physics(self, entity_id: EntityID, physics: Physics):
        self.physics[entity_id] = physics

    def get_physics(self, entity_id: EntityID) -> Physics | None:
        return self.physics.get(entity_id)

    def spawn(
        self,
        position: Position,
        durability: int,
        hardness: int,
        blocking: bool = True,
    ) -> EntityID:
        """Create an entity with a physics component in one call."""
        entity_id = self.create_entity()
        self.add_physics(entity_id, Physics(position, durability, hardness, blocking))
        return entity_id

    def delete_entity(self, entity_id: EntityID):
        self.physics.pop(entity_id, None)

    def set_blocking(self, entity_id: EntityID, blocking: bool):
        """Close (True) or open (False) a door-like entity."""
        self.physics[entity_id].blocking = blocking

    def entities_at(self, pos: Position) -> list[EntityID]:
        pos = as_position(pos)
        return [eid for eid, phys in self.physics.items() if phys.position == pos]

    def blocking_positions(self) -> set[Position]:
        return {phys.position for phys in self.physics.values() if phys.blocking}

    def __len__(self) -> int:
        return len(self.physics)
