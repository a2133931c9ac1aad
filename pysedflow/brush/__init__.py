"""
Terrain brush for PySedFlow.

Core Classes:
- BrushMode: DEPOSIT / ERODE

Functions:
- apply_brush: radial soil edit written to both soil copies
- brush_kernel: the Taichi kernel editing one copy
- pointer_to_grid: window pointer to grid-space mapping

Usage:
    import pysedflow as psf

    sim.brush(120.5, 64.0, radius=6., intensity=0.05, mode=psf.brush.BrushMode.ERODE)

Author: B.G.
"""

from .brush import BrushMode, apply_brush, brush_kernel, pointer_to_grid

__all__ = [
    "BrushMode",
    "apply_brush",
    "brush_kernel",
    "pointer_to_grid"
]
