import pytest
import taichi as ti

import pysedflow as psf


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    if not psf.environment.is_initialised():
        psf.environment.initialise(arch=ti.cpu)
    yield


@pytest.fixture
def make_sim():
    """Factory of small simulators, released back to the pool after the test."""
    sims = []

    def _make(nx=16, ny=16, **controls):
        sim = psf.Simulator(nx, ny, controls=psf.params.Controls(**controls))
        sims.append(sim)
        return sim

    yield _make

    for sim in sims:
        sim.release()
