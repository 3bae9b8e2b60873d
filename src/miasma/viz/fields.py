"""
2D visualization of miasma fields.

Provides heatmaps for:
- Fluid level
- Pressure against solid cells
- Velocity (last arrival direction) as arrows

All plots use matplotlib and return (fig, ax) so they compose into panels.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from miasma.core.fluid_grid import FluidGrid
    from miasma.world.tile_map import TileMap


def _create_miasma_cmap():
    """Create a colormap from black through sickly green to pale yellow."""
    from matplotlib.colors import LinearSegmentedColormap

    colors = [
        (0.02, 0.02, 0.02),   # Empty
        (0.0, 0.25, 0.18),    # Faint
        (0.0, 0.4, 0.3),      # Console miasma green
        (0.45, 0.7, 0.2),     # Thick
        (0.95, 0.95, 0.6),    # Saturated
    ]
    return LinearSegmentedColormap.from_list("miasma", colors)


CMAP_MIASMA = _create_miasma_cmap()
CMAP_PRESSURE = "YlOrRd"


def _wall_mask(tile_map: "TileMap") -> np.ndarray:
    """Boolean [height, width] array, True on wall tiles."""
    mask = np.zeros(tile_map.shape, dtype=bool)
    for (x, y), tile in tile_map.iter_tiles():
        mask[y, x] = tile.solid
    return mask


def plot_field(
    field: np.ndarray,
    title: str = "",
    cmap=None,
    vmin: float | None = None,
    vmax: float | None = None,
    ax: Axes | None = None,
    colorbar: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> tuple[Figure, Axes]:
    """
    Draw a per-cell grid quantity the way the tile map reads: one pixel per
    tile, row 0 at the top, x to the right.

    `field` is indexed [y, x] like the FluidGrid arrays; a masked array hides
    its masked cells (walls). Passing `ax` draws into an existing panel
    instead of opening a figure. `cmap` falls back to the miasma colormap and
    `vmin`/`vmax` to the data range.
    """
    if cmap is None:
        cmap = CMAP_MIASMA

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    # Row 0 at the top, as on a tile map
    im = ax.imshow(field, origin="upper", cmap=cmap, vmin=vmin, vmax=vmax, aspect="equal")

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_fluid(
    fluid_grid: "FluidGrid",
    tile_map: "TileMap | None" = None,
    title: str = "Miasma Level",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot fluid levels, with walls masked out if a map is given."""
    field = fluid_grid.fluid
    if tile_map is not None:
        field = np.ma.masked_where(_wall_mask(tile_map), field)
    return plot_field(field, title=title, cmap=CMAP_MIASMA, vmin=0, ax=ax, **kwargs)


def plot_pressure(
    fluid_grid: "FluidGrid",
    title: str = "Pressure",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Plot pressure; non-zero only on solid cells."""
    return plot_field(fluid_grid.pressure, title=title, cmap=CMAP_PRESSURE, vmin=0, ax=ax, **kwargs)


def plot_velocity(
    fluid_grid: "FluidGrid",
    title: str = "Velocity",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 6),
) -> tuple[Figure, Axes]:
    """Draw each cell's velocity as an arrow over the fluid heatmap."""
    fig, ax = plot_fluid(fluid_grid, title=title, ax=ax, colorbar=False, figsize=figsize)

    velocity = fluid_grid.velocity
    height, width = fluid_grid.shape
    yy, xx = np.mgrid[:height, :width]
    u = velocity[..., 0]
    v = velocity[..., 1]
    moving = (u != 0) | (v != 0)

    if np.any(moving):
        # Image y grows downward, so flip v for the quiver's upward axis
        ax.quiver(xx[moving], yy[moving], u[moving], -v[moving], color="white", scale=20)

    return fig, ax


def plot_fluid_summary(
    fluid_grid: "FluidGrid",
    tile_map: "TileMap | None" = None,
    figsize: tuple[float, float] = (15, 5),
) -> Figure:
    """Three panels: fluid, pressure, velocity."""
    fig, axes = plt.subplots(1, 3, figsize=figsize)
    plot_fluid(fluid_grid, tile_map=tile_map, ax=axes[0])
    plot_pressure(fluid_grid, ax=axes[1])
    plot_velocity(fluid_grid, ax=axes[2])
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> Path:
    """Write fig to path, creating missing directories. Returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
    return path
