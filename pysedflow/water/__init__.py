"""
Water transport submodule for PySedFlow.

Implements the damped, gravity-driven flux model that moves water over the
soil heightfield one explicit step at a time. The kernel reads the current
copies of water height, flux and soil height and writes the next copies of
water height, flux and velocity, plus the in-place water trail.

Core Kernels:
- update_water: one full water step over the grid
- point_source / limit_outflow: Taichi functions shared with the tests

Usage:
    import pysedflow as psf

    psf.water.update_water(
        f.water_height[src], f.soil_height[src], f.water_flux[src],
        f.water_height[dst], f.water_flux[dst], f.water_velocity[dst],
        f.water_trail, device_params)

Author: B.G.
"""

from .water_kernels import update_water, point_source, limit_outflow

__all__ = [
    "update_water",
    "point_source",
    "limit_outflow"
]
