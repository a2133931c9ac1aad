"""
Ping-Pong Buffer Management

Double buffering for explicit grid solvers. Reading from and writing to
the same field inside one parallel kernel lets a cell observe the
in-progress update of its neighbours. Ping-pong buffering keeps two full
copies of the field: kernels read the source copy and write the
destination copy, and the roles swap once the whole update has
committed.

Components:
    - PingPong: a pair of pooled fields addressed by a binary index
    - BufferIndex: the binary register telling which copy is current

Author: B. Gailleton
"""

from .. import pool


class BufferIndex:
	"""
	Binary register selecting the current copy of a ping-pong pair.

	Attributes:
		src (int): index of the current (committed) copy, 0 or 1

	Author: B. Gailleton
	"""

	def __init__(self, src:int = 0):
		if src not in (0, 1):
			raise ValueError(f"Buffer index must be 0 or 1, got {src}")
		self.src = src

	@property
	def dst(self):
		return 1 - self.src

	def flip(self):
		"""Make the destination copy the current one."""
		self.src = 1 - self.src

	def __int__(self):
		return self.src

	def __repr__(self):
		return f"BufferIndex(src={self.src})"


class PingPong:
	"""
	Two identically shaped pooled fields used as source/destination.

	Args:
		dtype: Taichi data type
		shape: Field shape, usually grid.rshp
		n: Vector components (None for scalar fields)
		name (str): Label used in error messages and repr

	Usage:
		h = PingPong(ti.f32, (ny, nx), name="water_height")
		update(h[idx.src], h[idx.dst])
		idx.flip()

	Author: B. Gailleton
	"""

	def __init__(self, dtype, shape, n=None, name=""):
		self.name = name
		self._tp = (pool.get_field(dtype, shape, n), pool.get_field(dtype, shape, n))

	def __getitem__(self, index):
		return self._tp[int(index)].field

	def fill(self, value):
		for tp in self._tp:
			tp.field.fill(value)

	def to_numpy(self, index):
		return self._tp[int(index)].to_numpy()

	def release(self):
		for tp in self._tp:
			pool.release_field(tp)

	def __repr__(self):
		tp = self._tp[0]
		return f"PingPong({self.name}, dtype={tp.dtype}, shape={tp.shape}, n={tp.n})"
