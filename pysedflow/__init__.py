"""
PySedFlow - real-time coupled water and soil transport on the GPU.

A grid-based surface water and sediment simulator built on Taichi
data-parallel kernels. Water moves with a damped, gravity-driven flux
model; soil is advected by the flow, slides downslope, diffuses, and is
eroded or deposited depending on the flow strength. Both are advanced
with explicit ping-pong steps, and a terrain brush can edit the soil live
between steps.

Key Features:
- Flux-based water transport with a strict per-cell conservation limiter
- Sediment transport, diffusion and threshold erosion/deposition
- Double-buffered fields with in-place visualization trails
- Frame-time aware parameter derivation from live operator controls
- Terrain brush writing both buffer copies
- Interactive viewer with sliders and pointer brush
- Pool-based field allocation

Core Components:
- simulation: Simulator (frame loop, step scheduling, brush, snapshots)
- params: operator Controls and per-frame SimParameters
- water / soil: the two transport kernels
- brush: terrain edit operator
- fields: field storage and initial terrain
- grid: grid geometry and neighbouring
- visu: shading and live viewer
- pool / general_algorithms: field pooling, ping-pong pairs, reductions
- constants: all coefficients

Basic Usage:
    import taichi as ti
    import pysedflow as psf

    ti.init(ti.gpu)

    sim = psf.Simulator(256, 256)
    sim.controls.water_input = 1.5
    sim.run(N=600)
    sim.brush(128., 200., mode=psf.brush.BrushMode.ERODE)
    snap = sim.snapshot()
    print(sim.stats())

    psf.visu.LiveViewer(sim).run()

Author: B.G.
"""

__version__ = "0.1.0"
__author__ = "B.G."

from . import constants
from . import environment
from . import pool
from . import general_algorithms
from . import grid
from . import params
from . import fields
from . import water
from . import soil
from . import brush
from . import simulation
from . import visu

from .simulation import Simulator

__all__ = [
    "brush",
    "constants",
    "environment",
    "fields",
    "general_algorithms",
    "grid",
    "params",
    "pool",
    "simulation",
    "soil",
    "visu",
    "water",
    "Simulator"
]
