"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def open_map():
    """A 5x5 map with no walls."""
    from miasma.world import TileMap
    return TileMap.from_str(
        """
        .....
        .....
        .....
        .....
        .....
        """
    )


@pytest.fixture
def split_map():
    """5x5 map with a wall row pierced at (2, 2) and a pillar at (3, 3)."""
    from miasma.world import TileMap
    return TileMap.from_str(
        """
        .....
        .....
        ##.##
        ...#.
        .....
        """
    )


@pytest.fixture
def corridor_map():
    """A room draining into a one-cell corridor that opens into a wider area."""
    from miasma.world import TileMap
    return TileMap.from_str(
        """
        .....
        ##.##
        .#.#.
        .....
        .....
        """
    )


@pytest.fixture
def walled_room():
    """A 3x3 floor enclosed by walls on a 5x5 map."""
    from miasma.world import TileMap
    return TileMap.from_str(
        """
        #####
        #...#
        #...#
        #...#
        #####
        """
    )


@pytest.fixture
def grid():
    """An empty 5x5 fluid grid."""
    from miasma.core import FluidGrid
    return FluidGrid(5, 5)
