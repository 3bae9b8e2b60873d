"""
Analysis layer: derived quantities for tests and visualization.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- connectivity_matrix: sparse adjacency built from a connectivity provider
- reachable_cells: region fluid can spread to from a start cell
- equilibrium_level: level a closed region settles at
"""

from miasma.analysis.regions import connectivity_matrix, equilibrium_level, reachable_cells

__all__ = [
    "connectivity_matrix",
    "reachable_cells",
    "equilibrium_level",
]
