"""
TileMap: the static wall grid.

The simplest connectivity provider: floor tiles are open, wall tiles and
anything off the map are solid. Maps are parsed from text where '.' is floor
and '#' is wall, one row per line.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterator, Sequence

from miasma.core.connectivity import Position, as_position, von_neumann_neighbors


class Tile(Enum):
    """Static map tile."""

    FLOOR = "."
    WALL = "#"

    @property
    def char(self) -> str:
        return self.value

    @property
    def solid(self) -> bool:
        return self is Tile.WALL

    @classmethod
    def from_char(cls, c: str) -> "Tile | None":
        """Tile for a map character, or None for characters that aren't tiles."""
        try:
            return cls(c)
        except ValueError:
            return None


class TileMap:
    """
    Fixed-size grid of tiles. Implements the ConnectionGrid protocol.

    A fresh map is solid rock: every tile starts as a wall.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Map dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.tiles = [Tile.WALL] * (width * height)

    @classmethod
    def from_str(cls, text: str) -> "TileMap":
        """
        Parse a map from text.

        Each non-blank line is a row. Characters other than '.' and '#'
        (indentation, stray markers) are ignored.

        Raises:
            ValueError: If there are no rows or rows differ in width
        """
        rows = []
        for line in text.splitlines():
            row = [tile for tile in map(Tile.from_char, line) if tile is not None]
            if row:
                rows.append(row)

        if not rows:
            raise ValueError("Map text contains no tiles")

        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} tiles, expected {width}")

        tile_map = cls(width, len(rows))
        tile_map.tiles = [tile for row in rows for tile in row]
        return tile_map

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width)."""
        return self.height, self.width

    def in_bounds(self, pos: Sequence[int]) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, pos: Sequence[int]) -> int | None:
        """Flat index of pos, or None if off the map."""
        if not self.in_bounds(pos):
            return None
        x, y = pos
        return x + y * self.width

    def tile_at(self, pos: Sequence[int]) -> Tile | None:
        index = self.index(pos)
        if index is None:
            return None
        return self.tiles[index]

    def set_tile(self, pos: Sequence[int], tile: Tile) -> bool:
        """Place a tile. Returns False if pos is off the map."""
        index = self.index(pos)
        if index is None:
            return False
        self.tiles[index] = tile
        return True

    def iter_tiles(self) -> Iterator[tuple[Position, Tile]]:
        """Iterate over ((x, y), tile) pairs in row-major order."""
        for i, tile in enumerate(self.tiles):
            yield (i % self.width, i // self.width), tile

    def is_open(self, pos: Sequence[int]) -> bool:
        tile = self.tile_at(pos)
        return tile is not None and not tile.solid

    # ConnectionGrid

    def get_connections(self, pos: Sequence[int]) -> list[Position]:
        return [n for n in von_neumann_neighbors(pos) if self.is_open(n)]

    def is_solid(self, pos: Sequence[int]) -> bool:
        return not self.is_open(as_position(pos))

    def __str__(self) -> str:
        return "\n".join(
            "".join(tile.char for tile in self.tiles[y * self.width:(y + 1) * self.width])
            for y in range(self.height)
        )

    def __repr__(self) -> str:
        return f"TileMap(width={self.width}, height={self.height})"
