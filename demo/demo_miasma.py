#!/usr/bin/env python3
"""
Demo: miasma leaking through a building.

A gas source in the west room presses against a weak door. The door gives
way, the gas floods the corridor, and the stronger door to the east room
holds. Prints the console view every few ticks and saves field heatmaps.
"""

import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt

from miasma.world import MiasmaWorld, WorldConfig
from miasma.viz import plot_fluid_summary, render_fluid, save_figure


BUILDING = """
##################
#.....#....#.....#
#.....#....#.....#
#..........#.....#
#.....#..........#
#.....#....#.....#
##################
"""


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--ticks", type=int, default=60)
    parser.add_argument("--flows-per-tick", type=int, default=2)
    parser.add_argument("--print-every", type=int, default=10)
    parser.add_argument("--output", type=Path, default=Path("output"))
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    world = MiasmaWorld.from_str(BUILDING, WorldConfig(flows_per_tick=args.flows_per_tick))
    weak_door = world.entities.spawn((6, 3), durability=4, hardness=6)
    strong_door = world.entities.spawn((11, 4), durability=50, hardness=40)

    print("=" * 60)
    print("MIASMA LEAK")
    print("=" * 60)
    print(f"Weak door {weak_door} at (6, 3), strong door {strong_door} at (11, 4)")

    world.inject((2, 3), 400.0)

    for tick in range(1, args.ticks + 1):
        destroyed = world.tick()
        for entity_id in destroyed:
            print(f"  tick {tick}: door {entity_id} destroyed")
        if tick % args.print_every == 0:
            print(f"\nTick {tick}  total={world.miasma.total_fluid_level():.2f}")
            print(render_fluid(world.miasma, world.tile_map))

    print(f"\nStable: {world.miasma.is_stable()}")

    fig = plot_fluid_summary(world.miasma, tile_map=world.tile_map)
    path = save_figure(fig, args.output / "miasma_summary.png")
    plt.close(fig)
    print(f"Saved {path}")


if __name__ == "__main__":
    main()
