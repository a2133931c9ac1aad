"""
General Algorithms Module

Reusable building blocks for the transport solvers.

Available Algorithms:
    - pingpong: double-buffered field pairs and their binary index register
    - util_taichi: field copies and parallel reductions (sum, min, max)

Example Usage:
    ```python
    import taichi as ti
    from pysedflow.general_algorithms import PingPong, BufferIndex, field_sum

    h = PingPong(ti.f32, (64, 64), name="h")
    idx = BufferIndex()
    some_update(h[idx.src], h[idx.dst])
    idx.flip()
    volume = field_sum(h[idx.src])
    ```

Author: B. Gailleton
"""

from .pingpong import PingPong, BufferIndex
from .util_taichi import copy_A_to_B, field_sum, field_max, field_min

__all__ = [
    'PingPong',
    'BufferIndex',
    'copy_A_to_B',
    'field_sum',
    'field_max',
    'field_min'
]
