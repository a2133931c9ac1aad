"""
Soil transport submodule for PySedFlow.

Sediment transport, diffusion and threshold erosion/deposition driven by
the water state of the same step.

Core Kernels:
- update_soil: one full soil step over the grid

Taichi functions:
- soil_gradient, sediment_velocity, flow_magnitude, erosion_deposition

Usage:
    import pysedflow as psf

    psf.soil.update_soil(
        f.soil_height[src], f.soil_velocity[src],
        f.water_height[wdst], f.water_velocity[wdst],
        f.soil_height[dst], f.soil_velocity[dst],
        f.soil_trail, device_params)

Author: B.G.
"""

from .soil_kernels import update_soil, soil_gradient, sediment_velocity, flow_magnitude, erosion_deposition

__all__ = [
    "update_soil",
    "soil_gradient",
    "sediment_velocity",
    "flow_magnitude",
    "erosion_deposition"
]
