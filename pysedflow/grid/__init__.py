"""
Grid geometry and neighbouring for PySedFlow.

Core Classes:
- Grid: shape and cell size of the regular 2D simulation grid

Modules:
- neighbourer: Taichi functions returning clamped or checked neighbours
  of a (row, col) cell in the N, E, S, W direction order used by the
  water flux vector

Usage:
    import pysedflow as psf

    grid = psf.grid.Grid(256, 256, 1.0)
    x, y = grid.to_grid(0.22, 0.08)   # water source A in cells

Author: B.G.
"""

from .gridfields import Grid
from . import neighbourer

__all__ = [
    "Grid",
    "neighbourer"
]
