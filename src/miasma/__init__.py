"""
miasma: tile-grid gas diffusion engine

Simulates a scalar substance ("miasma") spreading across a 2D tile grid
whose walls and doors are supplied by the caller.

Core concepts:
- Each cell offers a quarter of its fluid to each open neighbor per step
- Flow keeps a one-step memory of its direction and prefers to continue it
- Flow into a solid cell becomes pressure instead of fluid
- Pressure wears down whatever is blocking it

See SPEC_FULL.md and DESIGN.md for full details.
"""

__version__ = "0.1.0"
