import math

from .. import constants as cte


class Grid:
	"""
	Geometry of the regular 2D simulation grid.

	Holds the shape and cell size shared by every field of a simulation
	and the conversions between normalized, grid and array coordinates.
	Fields are stored (row, col) = (y, x), so the numpy shape of any field
	is `rshp`.

	Attributes:
		nx (int): Number of grid columns (x-direction)
		ny (int): Number of grid rows (y-direction)
		dx (float): Uniform cell size
		rshp (tuple): (ny, nx), the 2D array shape of every field

	Author: B.G.
	"""

	def __init__(self, nx:int = cte.NX, ny:int = cte.NY, dx:float = cte.DX):
		"""
		Args:
			nx (int): Number of columns. Default: cte.NX
			ny (int): Number of rows. Default: cte.NY
			dx (float): Cell size. Default: cte.DX

		Raises:
			ValueError: non-positive dimensions or cell size

		Author: B.G.
		"""
		if int(nx) != nx or int(ny) != ny or nx < 1 or ny < 1:
			raise ValueError(f"Grid dimensions must be positive integers, got nx={nx}, ny={ny}")
		if not (dx > 0 and math.isfinite(dx)):
			raise ValueError(f"Cell size must be positive and finite, got dx={dx}")

		self.nx = int(nx)
		self.ny = int(ny)
		self.dx = float(dx)
		self.rshp = (self.ny, self.nx)

	@property
	def ncells(self):
		return self.nx * self.ny

	def to_grid(self, u:float, v:float):
		"""
		Convert normalized coordinates in [0, 1] to grid-space (x, y).

		Author: B.G.
		"""
		return u * self.nx, v * self.ny

	def clamp(self, x:float, y:float):
		"""Clamp grid-space coordinates onto the grid extent."""
		return min(max(x, 0.), self.nx - 1.), min(max(y, 0.), self.ny - 1.)

	def __eq__(self, other):
		return isinstance(other, Grid) and (self.nx, self.ny, self.dx) == (other.nx, other.ny, other.dx)

	def __hash__(self):
		return hash((self.nx, self.ny, self.dx))

	def __repr__(self):
		return f"Grid(nx={self.nx}, ny={self.ny}, dx={self.dx})"
