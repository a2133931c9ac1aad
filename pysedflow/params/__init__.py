"""
Operator controls and per-frame parameter derivation for PySedFlow.

Core Classes:
- Controls: live operator knobs (time scale, water input, soil viscosity,
  show paths, run/pause)
- SimParameters: immutable, versioned coefficient block of one frame
- SimParams: Taichi dataclass mirroring SimParameters on the device

Functions:
- derive_parameters: (elapsed seconds, controls, grid) -> SimParameters
- delta_factor: elapsed seconds -> bounded number of reference frames
- allocate_device_params / upload_parameters: device mirror management

Usage:
    import pysedflow as psf

    controls = psf.params.Controls(time_scale=1.5)
    params = psf.params.derive_parameters(1/60, controls, grid, version=3)
    print(params.dt_water, params.soil_diffusion)

Author: B.G.
"""

from .parameters import *

__all__ = [
    "Controls",
    "SimParameters",
    "SimParams",
    "delta_factor",
    "derive_parameters",
    "allocate_device_params",
    "upload_parameters"
]
