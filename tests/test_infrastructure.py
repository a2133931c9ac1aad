import numpy as np
import pytest
import taichi as ti

import pysedflow as psf
from pysedflow.general_algorithms import BufferIndex, PingPong, field_max, field_min, field_sum
from pysedflow.grid import Grid
from pysedflow.grid import neighbourer as nei
from pysedflow.pool import FieldAllocationError, TaiPool


@ti.kernel
def eval_neighbours(out: ti.template(), row: ti.i32, col: ti.i32, ny: ti.i32, nx: ti.i32):
    for k in ti.static(range(4)):
        r, c = nei.neighbour(row, col, k, ny, nx)
        out[k] = ti.Vector([r, c])
        r, c = nei.neighbour_clamped(row, col, k, ny, nx)
        out[k + 4] = ti.Vector([r, c])


def test_environment_initialises_once():
    assert psf.environment.is_initialised()
    with pytest.raises(RuntimeError):
        psf.environment.initialise(arch=ti.cpu)


def test_grid_geometry():
    g = Grid(30, 20, 2.)
    assert g.rshp == (20, 30)
    assert g.ncells == 600
    assert g.to_grid(0.5, 0.25) == (15., 5.)
    assert g.clamp(-1., 25.) == (0., 19.)
    assert g == Grid(30, 20, 2.)

    for args in ((0, 10), (10, -1), (2.5, 4), (4, 4, 0.), (4, 4, float("nan"))):
        with pytest.raises(ValueError):
            Grid(*args)


def test_neighbours_checked_and_clamped():
    out = ti.Vector.field(2, ti.i32, shape=8)
    eval_neighbours(out, 0, 0, 3, 5)
    res = out.to_numpy()

    # north, east, south, west of the top-left corner
    assert res[:4].tolist() == [[-1, -1], [0, 1], [1, 0], [-1, -1]]
    assert res[4:].tolist() == [[0, 0], [0, 1], [1, 0], [0, 0]]

    eval_neighbours(out, 2, 4, 3, 5)
    res = out.to_numpy()
    assert res[:4].tolist() == [[1, 4], [-1, -1], [-1, -1], [2, 3]]


def test_buffer_index():
    idx = BufferIndex()
    assert (idx.src, idx.dst) == (0, 1)
    idx.flip()
    assert (idx.src, idx.dst, int(idx)) == (1, 0, 1)
    with pytest.raises(ValueError):
        BufferIndex(2)


def test_pingpong_and_reductions():
    pp = PingPong(ti.f32, (4, 6), name="h")
    try:
        pp.fill(0.)
        arr = np.arange(24, dtype=np.float32).reshape(4, 6) - 5.
        pp[1].from_numpy(arr)

        assert field_sum(pp[1]) == pytest.approx(arr.sum())
        assert field_max(pp[1]) == pytest.approx(18.)
        assert field_min(pp[1]) == pytest.approx(-5.)
        np.testing.assert_array_equal(pp.to_numpy(0), 0.)
    finally:
        pp.release()


def test_pool_reuses_released_fields():
    pool = TaiPool()
    a = pool.get_tpfield(ti.f32, (4, 4), n=4)
    assert a.in_use
    assert a.field.n == 4
    assert pool.stats() == {"total": 1, "in_use": 1, "available": 0}

    b = pool.get_tpfield(ti.f32, (4, 4))
    assert b is not a

    pool.release_tpfield(a)
    assert pool.get_tpfield(ti.f32, (4, 4), n=4) is a

    pool.release_tpfield(a)
    pool.release_tpfield(b)
    pool.clear_unused()
    assert pool.stats()["total"] == 0


def test_pool_zero_d_and_errors():
    pool = TaiPool()
    with pool.get_tpfield(ti.f32, ()) as scalar:
        scalar.field[None] = 3.
        assert scalar.field[None] == 3.
    assert not scalar.in_use

    with pytest.raises(FieldAllocationError):
        pool.get_tpfield(ti.f32, (2, 2, 2))
    with pytest.raises(FieldAllocationError):
        pool.get_tpfield(ti.f32, (4, -1))
