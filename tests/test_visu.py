import math

import numpy as np
import pytest

from pysedflow.simulation import Snapshot
from pysedflow.visu import hillshade, multi_hillshade, over_panel, shade, slope_aspect, to_canvas


def make_snapshot(show_paths=True, ny=12, nx=20):
    rows, cols = np.mgrid[0:ny, 0:nx]
    water = np.zeros((ny, nx), dtype=np.float32)
    water[:, :5] = 0.1
    trail = np.zeros((ny, nx), dtype=np.float32)
    trail[4:8, 10:14] = 0.2
    return Snapshot(
        water_height=water,
        soil_height=(0.1 * rows + 0.05 * np.sin(cols)).astype(np.float32),
        water_trail=trail,
        soil_trail=trail.copy(),
        nx=nx,
        ny=ny,
        show_paths=show_paths,
    )


def test_shade_image_layout():
    rgb = shade(make_snapshot())
    assert rgb.shape == (12, 20, 3)
    assert rgb.dtype == np.float32
    assert rgb.min() >= 0. and rgb.max() <= 1.


def test_water_is_tinted_blue():
    rgb = shade(make_snapshot(show_paths=False))
    wet, dry = rgb[:, :5], rgb[:, 6:9]
    assert (wet[..., 2] - wet[..., 0]).mean() > (dry[..., 2] - dry[..., 0]).mean()


def test_paths_only_drawn_when_enabled():
    with_paths = shade(make_snapshot(show_paths=True))
    without = shade(make_snapshot(show_paths=False))
    assert not np.allclose(with_paths[4:8, 10:14], without[4:8, 10:14])
    np.testing.assert_array_equal(with_paths[:2, 15:], without[:2, 15:])


def test_shade_flat_snapshot():
    snap = Snapshot(*(np.zeros((3, 3), dtype=np.float32) for _ in range(4)), nx=3, ny=3, show_paths=True)
    rgb = shade(snap)
    assert np.all(np.isfinite(rgb))


def test_to_canvas_orientation():
    rgb = np.random.default_rng(0).random((4, 6, 3)).astype(np.float32)
    canvas = to_canvas(rgb)
    assert canvas.shape == (6, 4, 3)
    # Canvas (x, 0) is the bottom row of the image
    np.testing.assert_array_equal(canvas[:, 0], rgb[-1])
    np.testing.assert_array_equal(canvas[:, -1], rgb[0])


def test_over_panel():
    assert over_panel(0.1, 0.9)
    assert not over_panel(0.5, 0.5)
    assert not over_panel(0.1, 0.1)


def test_hillshade_flat_and_degenerate():
    flat = hillshade(np.zeros((5, 5)))
    np.testing.assert_allclose(flat, math.cos(math.radians(45.)), rtol=1e-6)

    line = hillshade(np.arange(6, dtype=np.float64)[None, :])
    assert line.shape == (1, 6)

    multi = multi_hillshade(np.random.default_rng(1).random((8, 8)))
    assert multi.shape == (8, 8)
    assert np.nanmin(multi) >= 0. and np.nanmax(multi) <= 1.

    with pytest.raises(ValueError):
        hillshade(np.zeros(4))


def test_slope_aspect_of_an_eastward_ramp():
    slope, aspect = slope_aspect(np.tile(np.arange(5, dtype=np.float64), (4, 1)))
    np.testing.assert_allclose(slope, math.pi / 4.)
    # Rising eastwards means facing west
    np.testing.assert_allclose(aspect, 1.5 * math.pi)
