"""
Utility kernels for Taichi field operations.

Copies and reductions shared by the field initializer, the scheduler
diagnostics and the tests.

Author: B.G.
"""

import taichi as ti

from .. import pool


#########################################
###### COPY AND STUFF ###################
#########################################

@ti.kernel
def copy_A_to_B(array1: ti.template(), array2: ti.template()):
    """
    Copy every element of array1 into array2 (same shape and type).

    Author: B.G.
    """
    for I in ti.grouped(array1):
        array2[I] = array1[I]


#########################################
###### REDUCTIONS #######################
#########################################

@ti.kernel
def field_sum(array: ti.template()) -> ti.f64:
    """
    Sum of all elements of a scalar field, accumulated in double precision.

    Author: B.G.
    """
    total = ti.f64(0.)
    for I in ti.grouped(array):
        total += ti.f64(array[I])
    return total


@ti.kernel
def _reduce_max(array: ti.template(), res: ti.template()):
    for I in ti.grouped(array):
        ti.atomic_max(res[None], array[I])


@ti.kernel
def _reduce_min(array: ti.template(), res: ti.template()):
    for I in ti.grouped(array):
        ti.atomic_min(res[None], array[I])


def field_max(array) -> float:
    """Maximum of a scalar f32 field, reduced into a pooled 0D field."""
    with pool.get_field(ti.f32, ()) as res:
        res.field[None] = -3.4e38
        _reduce_max(array, res.field)
        return float(res.field[None])


def field_min(array) -> float:
    """Minimum of a scalar f32 field, reduced into a pooled 0D field."""
    with pool.get_field(ti.f32, ()) as res:
        res.field[None] = 3.4e38
        _reduce_min(array, res.field)
        return float(res.field[None])
