"""
Text rendering of the miasma grid.

Fluid levels are bucketed into single glyphs '0'..'9' (9 means 9 or more),
the way a roguelike console draws gas over the map.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from miasma.core.fluid_grid import FluidGrid
    from miasma.world.tile_map import TileMap

MAX_GLYPH_LEVEL = 9


def fluid_glyph(level: float) -> str | None:
    """Glyph for a fluid level, or None for empty (or negative) cells."""
    if not level > 0.0:
        return None
    if level >= MAX_GLYPH_LEVEL:
        return str(MAX_GLYPH_LEVEL)
    return str(math.floor(level))


def render_fluid(fluid_grid: "FluidGrid", tile_map: "TileMap | None" = None) -> str:
    """
    Draw the grid as text, one line per row.

    Fluid glyphs are drawn over the map. Without a map, empty cells are '.'.
    """
    width, height = fluid_grid.dimensions()
    rows = [["." for _ in range(width)] for _ in range(height)]

    if tile_map is not None:
        for (x, y), tile in tile_map.iter_tiles():
            if x < width and y < height:
                rows[y][x] = tile.char

    for (x, y), level in fluid_grid.iter_fluid():
        glyph = fluid_glyph(level)
        if glyph is not None:
            rows[y][x] = glyph

    return "\n".join("".join(row) for row in rows)


def format_fluid(fluid_grid: "FluidGrid") -> str:
    """Numeric dump of fluid levels, one line per row."""
    width, height = fluid_grid.dimensions()
    lines = []
    for y in range(height):
        lines.append("".join(f" {fluid_grid.get_fluid((x, y)):06.3f} " for x in range(width)))
    return "\n".join(lines)
