"""Unit tests for text and matplotlib visualization."""

import math

import matplotlib.pyplot as plt
import pytest

from miasma.core import FluidGrid
from miasma.viz import (
    fluid_glyph,
    format_fluid,
    plot_fluid,
    plot_fluid_summary,
    plot_pressure,
    plot_velocity,
    render_fluid,
    save_figure,
)


class TestFluidGlyph:
    """Tests for glyph bucketing."""

    @pytest.mark.parametrize(
        "level, glyph",
        [(0.5, "0"), (1.0, "1"), (4.99, "4"), (9.0, "9"), (250.0, "9")],
    )
    def test_buckets(self, level, glyph):
        assert fluid_glyph(level) == glyph

    def test_empty_has_no_glyph(self):
        assert fluid_glyph(0.0) is None
        assert fluid_glyph(-1.0) is None

    def test_unbounded_levels_cap(self):
        assert fluid_glyph(math.inf) == "9"
        assert fluid_glyph(1e308) == "9"
        assert fluid_glyph(math.nan) is None


class TestTextRendering:
    """Tests for render_fluid and format_fluid."""

    def test_render_without_map(self):
        g = FluidGrid(3, 2)
        g.set_fluid((1, 0), 3.2)
        assert render_fluid(g) == ".3.\n..."

    def test_render_over_map(self, split_map):
        g = FluidGrid(5, 5)
        g.set_fluid((2, 2), 12.0)
        g.set_fluid((0, 0), 0.4)
        lines = render_fluid(g, split_map).splitlines()
        assert lines[0] == "0...."
        assert lines[2] == "##9##"
        assert lines[3] == "...#."

    def test_format_fluid(self):
        g = FluidGrid(2, 1)
        g.set_fluid((0, 0), 2.5)
        assert format_fluid(g) == " 02.500  00.000 "


class TestPlots:
    """Smoke tests for matplotlib plots."""

    @pytest.fixture
    def flowed(self, split_map):
        g = FluidGrid(5, 5)
        g.set_fluid((0, 0), 20.0)
        for _ in range(3):
            g.flow(split_map)
        return g

    def test_plot_fluid(self, flowed, split_map):
        fig, ax = plot_fluid(flowed, tile_map=split_map)
        assert ax.get_title() == "Miasma Level"
        plt.close(fig)

    def test_plot_pressure(self, flowed):
        fig, ax = plot_pressure(flowed)
        assert ax.get_title() == "Pressure"
        plt.close(fig)

    def test_plot_velocity(self, flowed):
        fig, ax = plot_velocity(flowed)
        assert ax.get_title() == "Velocity"
        plt.close(fig)

    def test_summary_and_save(self, flowed, split_map, tmp_path):
        fig = plot_fluid_summary(flowed, tile_map=split_map)
        assert len(fig.axes) >= 3
        path = save_figure(fig, tmp_path / "frames" / "summary.png", dpi=50)
        assert path == tmp_path / "frames" / "summary.png"
        assert path.exists()
        plt.close(fig)
