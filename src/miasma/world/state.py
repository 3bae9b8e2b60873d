"""
MiasmaWorld: owns a map, its entities and the miasma grid over them.

Each tick runs the flow engine a configurable number of times (more flows per
tick = faster spreading gas), then lets the resulting pressure damage
whatever is blocking it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from miasma.core.connectivity import Position
from miasma.core.flow import FlowConfig
from miasma.core.fluid_grid import FluidGrid
from miasma.world.damage import resolve_pressure_damage
from miasma.world.entities import EntityID, EntityManager
from miasma.world.tile_map import TileMap
from miasma.world.world_grid import WorldGrid

logger = logging.getLogger(__name__)


@dataclass
class WorldConfig:
    """Configuration for a miasma world."""

    flows_per_tick: int = 1  # Flow steps per logical tick
    injection_amount: float = 100.0  # Default amount added by inject()
    flow: FlowConfig = field(default_factory=FlowConfig)

    def __post_init__(self):
        if self.flows_per_tick < 0:
            raise ValueError(f"flows_per_tick must be >= 0, got {self.flows_per_tick}")


@dataclass
class MiasmaWorld:
    """
    A tile map, the entities on it, and the miasma spreading through it.

    `destroyed` is the full history of entity ids destroyed since the world
    was created. `tick()` returns only that tick's ids and `run()` only that
    run's.
    """

    tile_map: TileMap
    entities: EntityManager = field(default_factory=EntityManager)
    config: WorldConfig = field(default_factory=WorldConfig)
    miasma: FluidGrid | None = field(default=None)  # Sized to the map if None

    current_tick: int = field(default=0, init=False)
    destroyed: list[EntityID] = field(default_factory=list, init=False)  # Every tick so far

    def __post_init__(self):
        if self.miasma is None:
            self.miasma = FluidGrid(self.tile_map.width, self.tile_map.height, self.config.flow)
        elif self.miasma.dimensions() != (self.tile_map.width, self.tile_map.height):
            raise ValueError(
                f"Grid {self.miasma.dimensions()} does not match map "
                f"{(self.tile_map.width, self.tile_map.height)}"
            )

    @classmethod
    def from_str(cls, text: str, config: WorldConfig | None = None) -> "MiasmaWorld":
        """Build a world from map text ('.' floor, '#' wall)."""
        return cls(TileMap.from_str(text), config=config or WorldConfig())

    @property
    def connectivity(self) -> WorldGrid:
        return WorldGrid(self.tile_map, self.entities)

    def inject(self, pos: Position, amount: float | None = None) -> float | None:
        """Add miasma at pos. Returns the new level, None if pos is off the grid."""
        if amount is None:
            amount = self.config.injection_amount
        level = self.miasma.add_fluid(pos, amount)
        logger.debug("injected %s at %s, total %.4f", amount, pos, self.miasma.total_fluid_level())
        return level

    def tick(self) -> list[EntityID]:
        """One logical tick. Returns ids of entities destroyed this tick."""
        connectivity = self.connectivity
        for _ in range(self.config.flows_per_tick):
            self.miasma.flow(connectivity)

        destroyed = resolve_pressure_damage(self.miasma, self.entities)
        self.destroyed.extend(destroyed)
        self.current_tick += 1
        return destroyed

    def run(self, n_ticks: int) -> dict:
        """
        Run for n ticks.

        Returns:
            Statistics dictionary
        """
        destroyed = []
        for _ in range(n_ticks):
            destroyed.extend(self.tick())

        pressure = self.miasma.pressure
        fluid = self.miasma.fluid
        return {
            "n_ticks": n_ticks,
            "total_fluid": self.miasma.total_fluid_level(),
            "max_fluid": float(fluid.max()),
            "max_pressure": float(pressure.max()),
            "destroyed": destroyed,
            "stable": self.miasma.is_stable(),
        }
