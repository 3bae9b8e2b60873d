"""
Visualization utilities.

- Text glyph rendering for console-style output
- Field heatmaps (fluid, pressure, velocity)
"""

from miasma.viz.text import fluid_glyph, format_fluid, render_fluid

from miasma.viz.fields import (
    CMAP_MIASMA,
    plot_field,
    plot_fluid,
    plot_pressure,
    plot_velocity,
    plot_fluid_summary,
    save_figure,
)

__all__ = [
    "fluid_glyph",
    "format_fluid",
    "render_fluid",
    "CMAP_MIASMA",
    "plot_field",
    "plot_fluid",
    "plot_pressure",
    "plot_velocity",
    "plot_fluid_summary",
    "save_figure",
]
