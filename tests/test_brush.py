import math

import numpy as np
import pytest

from pysedflow.brush import BrushMode, pointer_to_grid
from pysedflow.grid import Grid


def both_copies(sim):
    return sim.fields.soil_height.to_numpy(0), sim.fields.soil_height.to_numpy(1)


def test_brush_writes_both_copies(make_sim):
    sim = make_sim(16, 16, water_input=0.)
    before = sim.fields.soil_height.to_numpy(0)

    assert sim.brush(8., 8., radius=4., intensity=0.1)

    a, b = both_copies(sim)
    np.testing.assert_array_equal(a, b)
    assert a[8, 8] == pytest.approx(before[8, 8] + 0.1)
    assert a[8, 10] == pytest.approx(before[8, 10] + 0.05)
    np.testing.assert_array_equal(a[0, :], before[0, :])


def test_edit_survives_the_next_step(make_sim):
    sim = make_sim(16, 16, water_input=0.)
    sim.load_state(soil_height=np.full((16, 16), 0.5))
    sim.brush(8., 6., radius=4., intensity=0.2)

    sim.run(1)

    soil = sim.current_fields()["soil_height"].to_numpy()
    assert soil[6, 8] > 0.6
    assert soil[6, 8] > soil[6, 0]


def test_erode_floors_at_zero(make_sim):
    sim = make_sim(16, 16)
    sim.load_state(soil_height=np.full((16, 16), 0.01))

    assert sim.brush(8., 8., radius=5., intensity=1., mode=BrushMode.ERODE)

    a, b = both_copies(sim)
    assert a[8, 8] == 0.
    assert a.min() >= 0.
    np.testing.assert_array_equal(a, b)


def test_intensity_sign_is_ignored(make_sim):
    sim = make_sim(16, 16)
    before = sim.fields.soil_height.to_numpy(0)
    sim.brush(8., 8., radius=3., intensity=-0.1, mode=BrushMode.DEPOSIT)
    assert sim.fields.soil_height.to_numpy(0)[8, 8] == pytest.approx(before[8, 8] + 0.1)


@pytest.mark.parametrize("radius, cx", [(0., 8.), (-3., 8.), (math.nan, 8.), (4., math.inf)])
def test_out_of_range_input_is_a_noop(make_sim, radius, cx):
    sim = make_sim(16, 16)
    before = both_copies(sim)

    assert not sim.brush(cx, 8., radius=radius, intensity=0.1)

    for old, new in zip(before, both_copies(sim)):
        np.testing.assert_array_equal(old, new)


def test_brush_at_pointer_uses_modifier(make_sim):
    sim = make_sim(16, 16)
    sim.load_state(soil_height=np.full((16, 16), 0.5))

    sim.brush_at_pointer(0.5, 0.5, modifier=True, radius=3., intensity=0.1)
    soil = sim.fields.soil_height.to_numpy(0)
    assert soil[8, 8] == pytest.approx(0.4)


def test_mode_from_modifier():
    assert BrushMode.from_modifier(True) is BrushMode.ERODE
    assert BrushMode.from_modifier(False) is BrushMode.DEPOSIT
    assert BrushMode.ERODE.sign == -1.


def test_pointer_to_grid_flips_and_clamps():
    grid = Grid(100, 50)
    assert pointer_to_grid(0., 1., grid) == (0., 0.)
    assert pointer_to_grid(0.5, 0.5, grid) == (50., 25.)
    assert pointer_to_grid(0.25, 0.2, grid) == pytest.approx((25., 40.))
    assert pointer_to_grid(1.2, -0.5, grid) == (99., 49.)
