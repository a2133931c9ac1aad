"""
Field pooling and memory management for PySedFlow.

Every simulation field (both copies of each double-buffered quantity and
the single-buffered trails) is allocated through this pool. Each field has
its own SNode tree, so a Simulator can hand its storage back without
resetting the Taichi runtime, and a new Simulator of the same grid size
reuses the released storage.

Core Classes:
- TPField: Wrapper owning one scalar or vector Taichi field
- TaiPool: Pool keyed by (dtype, shape, n_components)

Functions:
- get_field / release_field: global pool access
- pool_stats / clear_pool: monitoring and cleanup

Usage:
    import pysedflow as psf
    import taichi as ti

    flux = psf.pool.get_field(ti.f32, (256, 256), n=4)
    flux.field.fill(0.)
    psf.pool.release_field(flux)

Author: B. Gailleton
"""

from .pool import (
    FieldAllocationError,
    TPField,
    TaiPool,
    get_field,
    release_field,
    pool_stats,
    clear_pool,
    taipool
)

__all__ = [
    "FieldAllocationError",
    "TPField",
    "TaiPool",
    "get_field",
    "release_field",
    "pool_stats",
    "clear_pool",
    "taipool"
]
