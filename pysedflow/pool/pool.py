"""
Taichi Field Pool Module

Pooling system for Taichi fields. Every field is placed in its own
FieldsBuilder/SNode tree so it can be released and destroyed
independently of the others, and fields of identical signature are reused
instead of reallocated.

A field signature is (dtype, shape, n) where n is the number of vector
components (None for scalar fields). Supports 0D, 1D and 2D fields:
- 0D fields: Single values, accessed with [None]
- 1D fields: Linear arrays with ti.i indexing
- 2D fields: (rows, cols) arrays with ti.ij indexing

Author: B. Gailleton
"""

import taichi as ti
from typing import Tuple, Any, Optional


class FieldAllocationError(RuntimeError):
	"""Raised when a field cannot be built or allocated."""


def _normalise_shape(shape) -> Tuple[int, ...]:
	if isinstance(shape, int):
		shape = (shape,) if shape > 0 else ()
	elif not isinstance(shape, tuple):
		shape = tuple(shape) if hasattr(shape, '__iter__') else (shape,)

	if not shape or (len(shape) == 1 and shape[0] == 0):
		shape = ()
	return shape


class TPField:
	"""
	Pooled Field wrapper for Taichi fields.

	Owns one Taichi field and the SNode tree it lives in. The pool hands
	TPFields out and takes them back; `field` is what kernels receive.

	Attributes:
		id: Unique field identifier
		field: Underlying Taichi field (scalar or ti.Vector field)
		in_use: Current usage status
		dtype: Field data type
		shape: Field dimensions (empty tuple () for 0D)
		n: Number of vector components, None for scalar fields
		snodetree: Finalized field structure for memory management

	Author: B. Gailleton
	"""

	_next_id = 0

	def __init__(self, dtype: Any, shape: Tuple[int, ...], n: Optional[int] = None):
		"""
		Build and allocate the field.

		Args:
			dtype: Taichi data type (ti.f32, ti.i32, etc.)
			shape: Field dimensions as tuple, int, or ()/0 for a 0D field
			n: Number of vector components. Default: None (scalar field)

		Raises:
			FieldAllocationError: unsupported dimensionality or failed allocation

		Author: B. Gailleton
		"""
		shape = _normalise_shape(shape)
		if len(shape) > 2:
			raise FieldAllocationError(f"Unsupported field dimensionality: {len(shape)}D. Only 0D, 1D and 2D fields supported.")
		if any(s <= 0 for s in shape):
			raise FieldAllocationError(f"Invalid field shape {shape}")

		TPField._next_id += 1
		self.id = TPField._next_id
		self.in_use = False
		self.dtype = dtype
		self.shape = shape
		self.n = n

		self.fb = ti.FieldsBuilder()
		self.field = ti.field(dtype) if n is None else ti.Vector.field(n, dtype)

		if len(shape) == 0:
			self.fb.place(self.field)
		elif len(shape) == 1:
			self.fb.dense(ti.i, shape).place(self.field)
		else:
			self.fb.dense(ti.ij, shape).place(self.field)

		try:
			self.snodetree = self.fb.finalize()
		except Exception as exc:
			raise FieldAllocationError(f"Could not allocate field {dtype} {shape} n={n}") from exc

	@property
	def key(self):
		return (self.dtype, self.shape, self.n)

	def acquire(self):
		self.in_use = True

	def release(self):
		self.in_use = False

	def destroy(self):
		"""
		Destroy field and free its memory.

		Only call when permanently removing the field from the pool.

		Author: B. Gailleton
		"""
		if getattr(self, 'snodetree', None) is not None:
			self.snodetree.destroy()
			self.snodetree = None

	def to_numpy(self):
		return self.field.to_numpy()

	def from_numpy(self, val):
		return self.field.from_numpy(val)

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.release()
		return False

	def __str__(self):
		return f"Taichi field from the pool id:{self.id} - in_use:{self.in_use} - dtype:{self.dtype} - shape:{self.shape} - n:{self.n}"


class TaiPool:
	"""
	Pool manager for Taichi fields.

	Keeps lists of TPField objects keyed by (dtype, shape, n) and hands
	out an unused one, or builds a new one when none is free.

	Usage:
		pool = TaiPool()
		h = pool.get_tpfield(ti.f32, (ny, nx))
		flux = pool.get_tpfield(ti.f32, (ny, nx), n=4)
		# ...
		pool.release_tpfield(h)

	Author: B. Gailleton
	"""

	def __init__(self):
		self._pools = {}  # (dtype, shape, n) -> [TPField]

	def get_tpfield(self, dtype: Any, shape: Tuple[int, ...], n: Optional[int] = None) -> TPField:
		"""
		Get an available TPField or create a new one.

		The returned field is marked as in use. Its content is whatever the
		previous user left in it.

		Args:
			dtype: Taichi data type
			shape: Field dimensions
			n: Number of vector components (None for scalar)

		Returns:
			TPField: field marked as in use

		Author: B. Gailleton
		"""
		key = (dtype, _normalise_shape(shape), n)
		pool = self._pools.setdefault(key, [])

		for tpfield in pool:
			if not tpfield.in_use:
				tpfield.acquire()
				return tpfield

		tpfield = TPField(dtype, key[1], n)
		pool.append(tpfield)
		tpfield.acquire()
		return tpfield

	def release_tpfield(self, tpfield: TPField):
		tpfield.release()

	def clear_unused(self):
		"""
		Destroy all fields that are not in use and drop them from the pool.

		Author: B. Gailleton
		"""
		for pool in self._pools.values():
			for tpfield in pool[:]:
				if not tpfield.in_use:
					tpfield.destroy()
					pool.remove(tpfield)

	def stats(self) -> dict:
		"""
		Pool usage statistics.

		Returns:
			dict: total, in_use and available field counts

		Author: B. Gailleton
		"""
		total = sum(len(pool) for pool in self._pools.values())
		in_use = sum(1 for pool in self._pools.values() for tpf in pool if tpf.in_use)
		return {"total": total, "in_use": in_use, "available": total - in_use}


# Global pool instance
taipool = TaiPool()


def get_field(dtype: Any, shape: Tuple[int, ...], n: Optional[int] = None) -> TPField:
	"""Get a TPField from the global pool."""
	return taipool.get_tpfield(dtype, shape, n)


def release_field(tpfield: TPField):
	"""Return a TPField to the global pool."""
	taipool.release_tpfield(tpfield)


def pool_stats() -> dict:
	return taipool.stats()


def clear_pool():
	"""Destroy every unused field of the global pool."""
	taipool.clear_unused()
