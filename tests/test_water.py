import numpy as np
import pytest
import taichi as ti

from pysedflow import constants as cte
from pysedflow.grid import neighbourer as nei
from pysedflow.water import limit_outflow, point_source


@ti.kernel
def eval_source(out: ti.template(), cx: ti.f32, cy: ti.f32, radius: ti.f32, strength: ti.f32):
    for row, col in out:
        out[row, col] = point_source(row, col, ti.math.vec2(cx, cy), radius, strength)


@ti.kernel
def eval_limiter(flux: ti.template(), hw: ti.f32, dt: ti.f32):
    flux[None] = limit_outflow(flux[None], hw, dt)


def inflow_numpy(flux):
    """Water received by every cell from the opposite-direction flux of its neighbours."""
    inflow = np.zeros(flux.shape[:2], dtype=np.float64)
    inflow[1:, :] += flux[:-1, :, nei.SOUTH]
    inflow[:-1, :] += flux[1:, :, nei.NORTH]
    inflow[:, 1:] += flux[:, :-1, nei.EAST]
    inflow[:, :-1] += flux[:, 1:, nei.WEST]
    return inflow


def test_flat_field_has_no_flux(make_sim):
    sim = make_sim(4, 4, water_input=0.)
    sim.load_state(soil_height=np.full((4, 4), 0.5), water_height=np.full((4, 4), 0.1))

    sim.run(1)

    f = sim.current_fields()
    np.testing.assert_allclose(f["water_height"].to_numpy(), 0.1, rtol=1e-6)
    np.testing.assert_array_equal(f["water_flux"].to_numpy(), 0.)
    np.testing.assert_array_equal(f["water_velocity"].to_numpy(), 0.)
    np.testing.assert_array_equal(f["water_trail"].to_numpy(), 0.)


def test_lowest_corner_emits_nothing(make_sim):
    sim = make_sim(4, 4, water_input=0.)
    rows, cols = np.mgrid[0:4, 0:4]
    sim.load_state(soil_height=(rows + cols).astype(np.float32), water_height=np.full((4, 4), 0.1))

    sim.run(1)

    flux = sim.current_fields()["water_flux"].to_numpy()
    np.testing.assert_array_equal(flux[0, 0], 0.)
    # Highest corner drains only towards its two in-grid neighbours
    assert flux[3, 3, nei.NORTH] > 0.
    assert flux[3, 3, nei.WEST] > 0.
    assert flux[3, 3, nei.SOUTH] == 0.
    assert flux[3, 3, nei.EAST] == 0.


def test_dry_cells_sit_on_the_floor(make_sim):
    sim = make_sim(8, 8, water_input=0.)
    sim.run(1)

    h = sim.current_fields()["water_height"].to_numpy()
    np.testing.assert_allclose(h, cte.WATER_HEIGHT_FLOOR, rtol=1e-5)
    np.testing.assert_array_equal(sim.current_fields()["water_flux"].to_numpy(), 0.)


def test_mass_bound_on_every_cell(make_sim):
    rng = np.random.default_rng(42)
    sim = make_sim(12, 12, water_input=0., time_scale=3.)
    rows, cols = np.mgrid[0:12, 0:12]
    sim.load_state(
        soil_height=(0.3 * np.sin(rows * 0.9) + 0.2 * cols + 1.).astype(np.float32),
        water_height=rng.uniform(0., 0.3, size=(12, 12)).astype(np.float32),
    )
    sim.run(5, elapsed_seconds=4. / 60.)

    for _ in range(5):
        h0 = sim.current_fields()["water_height"].to_numpy().astype(np.float64)
        flux0 = sim.current_fields()["water_flux"].to_numpy().astype(np.float64)
        sim.run(1, elapsed_seconds=4. / 60.)
        h1 = sim.current_fields()["water_height"].to_numpy()

        assert h1.min() >= cte.WATER_HEIGHT_FLOOR * (1. - 1e-5)
        assert np.all(h1 <= h0 + sim.params.dt_water * inflow_numpy(flux0) + 1e-5)


def test_volume_is_conserved_with_flux_in_flight(make_sim):
    sim = make_sim(16, 16, water_input=0.)
    water = np.full((16, 16), 0.1, dtype=np.float32)
    water[6:10, 6:10] += 0.5
    sim.load_state(soil_height=np.zeros((16, 16)), water_height=water)
    initial = float(water.astype(np.float64).sum())

    sim.run(50)

    in_flight = sim.params.dt_water * sim.current_fields()["water_flux"].to_numpy().astype(np.float64).sum()
    assert sim.total_water() + in_flight == pytest.approx(initial, rel=1e-4)
    assert sim.max_water_depth() < 0.6


def test_sources_add_water(make_sim):
    sim = make_sim(32, 32, water_input=1.)
    sim.run(10)
    assert sim.total_water() > 32 * 32 * cte.WATER_HEIGHT_FLOOR

    h = sim.current_fields()["water_height"].to_numpy()
    ax, ay = cte.WATER_SOURCE_A[0] * 32, cte.WATER_SOURCE_A[1] * 32
    assert h[int(round(ay)), int(round(ax))] > cte.WATER_HEIGHT_FLOOR


def test_point_source_linear_falloff():
    out = ti.field(ti.f32, shape=(9, 9))
    eval_source(out, 4., 4., 4., 2.)
    res = out.to_numpy()

    assert res[4, 4] == pytest.approx(2.)
    assert res[4, 6] == pytest.approx(1.)
    assert res[2, 4] == pytest.approx(1.)
    assert res[4, 8] == 0.
    assert res[0, 0] == 0.


def test_limiter_caps_outflow_to_available_water():
    flux = ti.Vector.field(4, ti.f32, shape=())
    flux[None] = [1., 2., 0., 1.]
    eval_limiter(flux, 0.1, 0.1)
    limited = flux[None].to_numpy()
    assert limited.sum() * 0.1 == pytest.approx(0.1, rel=1e-5)
    np.testing.assert_allclose(limited / limited.sum(), [0.25, 0.5, 0., 0.25], rtol=1e-5)

    flux[None] = [0.1, 0.1, 0., 0.]
    eval_limiter(flux, 1., 0.1)
    np.testing.assert_allclose(flux[None].to_numpy(), [0.1, 0.1, 0., 0.], rtol=1e-6)
