"""Unit tests for analysis module."""

import numpy as np
import pytest

from miasma.analysis import connectivity_matrix, equilibrium_level, reachable_cells
from miasma.core import FluidGrid


class OneWay:
    """(0, 0) lists (1, 0); (1, 0) lists nothing. Fluid moves from (1, 0) to (0, 0)."""

    def get_connections(self, pos):
        return [(1, 0)] if tuple(pos) == (0, 0) else []

    def is_solid(self, pos):
        return False


class TestConnectivityMatrix:
    """Tests for connectivity_matrix."""

    def test_shape(self, open_map):
        m = connectivity_matrix(open_map, 5, 5)
        assert m.shape == (25, 25)

    def test_open_grid_edge_count(self, open_map):
        # 2 * (4 * 5) undirected edges on a 5x5 grid, counted in both directions
        m = connectivity_matrix(open_map, 5, 5)
        assert m.nnz == 80

    def test_entries(self, open_map):
        m = connectivity_matrix(open_map, 5, 5).toarray()
        assert m[0, 1] == 1  # (0, 0) -> (1, 0)
        assert m[0, 5] == 1  # (0, 0) -> (0, 1)
        assert m[0, 6] == 0  # no diagonals
        assert np.array_equal(m, m.T)

    def test_directed(self):
        m = connectivity_matrix(OneWay(), 2, 1).toarray()
        assert m[0, 1] == 1
        assert m[1, 0] == 0


class TestReachableCells:
    """Tests for reachable_cells."""

    def test_open_grid_reaches_everything(self, open_map):
        cells = reachable_cells(open_map, 5, 5, (0, 0))
        assert len(cells) == 25
        assert cells[0] == (0, 0)
        assert cells[-1] == (4, 4)

    def test_walls_excluded(self, split_map):
        cells = reachable_cells(split_map, 5, 5, (0, 0))
        assert len(cells) == 20
        assert (0, 2) not in cells
        assert (4, 3) in cells

    def test_sealed_region(self):
        from miasma.world import TileMap
        m = TileMap.from_str(".....\n.###.\n.#.#.\n.###.\n.....")
        assert reachable_cells(m, 5, 5, (2, 2)) == [(2, 2)]
        assert (2, 2) not in reachable_cells(m, 5, 5, (0, 0))

    def test_one_way_follows_flow_direction(self):
        assert reachable_cells(OneWay(), 2, 1, (1, 0)) == [(0, 0), (1, 0)]
        assert reachable_cells(OneWay(), 2, 1, (0, 0)) == [(0, 0)]

    def test_one_way_matches_engine(self):
        g = FluidGrid(2, 1)
        g.set_fluid((1, 0), 8.0)
        g.flow(OneWay())

        cells = reachable_cells(OneWay(), 2, 1, (1, 0))
        wet = [pos for pos, level in g if level > 0.0]
        assert set(wet) <= set(cells)
        assert (0, 0) in wet

    def test_solid_start(self, split_map):
        assert reachable_cells(split_map, 5, 5, (0, 2)) == []

    def test_off_grid_start(self, open_map):
        assert reachable_cells(open_map, 5, 5, (9, 0)) == []


class TestEquilibriumLevel:
    """Tests for equilibrium_level and convergence towards it."""

    def test_level(self, split_map):
        g = FluidGrid(5, 5)
        g.set_fluid((0, 0), 50.0)
        assert equilibrium_level(g, split_map, (0, 0)) == pytest.approx(2.5)

    def test_one_way_region(self):
        g = FluidGrid(2, 1)
        g.set_fluid((1, 0), 8.0)
        assert equilibrium_level(g, OneWay(), (1, 0)) == pytest.approx(4.0)

    def test_empty_region(self, split_map):
        assert equilibrium_level(FluidGrid(5, 5), split_map, (0, 2)) == 0.0

    def test_single_source_converges(self, split_map):
        g = FluidGrid(5, 5)
        g.set_fluid((4, 4), 30.0)
        target = equilibrium_level(g, split_map, (4, 4))

        for _ in range(500):
            g.flow(split_map)

        for pos in reachable_cells(split_map, 5, 5, (4, 4)):
            assert g.get_fluid(pos) == pytest.approx(target, abs=0.01)
