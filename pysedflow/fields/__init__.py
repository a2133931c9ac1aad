"""
Simulation field storage and initial state for PySedFlow.

Core Classes:
- SimFields: double-buffered water and soil fields plus the two in-place trails

Modules:
- initializer: deterministic procedural soil and zeroing of all other fields

Usage:
    import pysedflow as psf

    fields = psf.fields.SimFields(psf.grid.Grid(128, 128))
    fields.initialise()
    soil = fields.soil_height.to_numpy(0)

Author: B.G.
"""

from .simfields import SimFields
from . import initializer
from .initializer import init_terrain, init_fields, terrain, terrain_numpy

__all__ = [
    "SimFields",
    "initializer",
    "init_terrain",
    "init_fields",
    "terrain",
    "terrain_numpy"
]
