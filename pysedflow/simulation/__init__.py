"""
Simulation scheduling for PySedFlow.

Core Classes:
- Simulator: frame loop, step ordering, brush, snapshots and diagnostics
- SimulationState: double-buffer registers and counters
- Snapshot: read-only committed state handed to presentation

Usage:
    import pysedflow as psf

    sim = psf.simulation.Simulator(128, 128)
    sim.run(N=200)
    snap = sim.snapshot()

Author: B.G.
"""

from .simulator import Simulator, SimulationState, Snapshot

__all__ = [
    "Simulator",
    "SimulationState",
    "Snapshot"
]
