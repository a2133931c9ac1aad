"""
Field storage for the coupled water/soil simulation.

SimFields owns every field of one simulation:

	water_height    PingPong  f32          (ny, nx)
	water_flux      PingPong  vec4 f32     (ny, nx)   north, east, south, west
	water_velocity  PingPong  vec2 f32     (ny, nx)   vx, vy
	water_trail     single    f32          (ny, nx)
	soil_height     PingPong  f32          (ny, nx)
	soil_velocity   PingPong  vec2 f32     (ny, nx)
	soil_trail      single    f32          (ny, nx)

The two trails are single-buffered: a cell's trail update only
reads that same cell's previous trail value, so updating it in place from
parallel workers cannot race.

Author: B.G.
"""

import taichi as ti

from .. import pool
from ..general_algorithms import PingPong
from ..grid import Grid
from . import initializer


class SimFields:
	"""
	All field storage of one simulation, allocated from the field pool.

	Args:
		grid (Grid): Simulation grid

	Raises:
		FieldAllocationError: storage could not be allocated

	Author: B.G.
	"""

	def __init__(self, grid:Grid):
		self.grid = grid
		shp = grid.rshp

		self.water_height = PingPong(ti.f32, shp, name="water_height")
		self.water_flux = PingPong(ti.f32, shp, n=4, name="water_flux")
		self.water_velocity = PingPong(ti.f32, shp, n=2, name="water_velocity")
		self.soil_height = PingPong(ti.f32, shp, name="soil_height")
		self.soil_velocity = PingPong(ti.f32, shp, n=2, name="soil_velocity")

		self._water_trail = pool.get_field(ti.f32, shp)
		self._soil_trail = pool.get_field(ti.f32, shp)
		self._released = False

	@property
	def water_trail(self):
		return self._water_trail.field

	@property
	def soil_trail(self):
		return self._soil_trail.field

	def initialise(self):
		"""
		Seed the starting state: procedural soil in both copies, everything else zero.

		Author: B.G.
		"""
		initializer.init_fields(self)

	def release(self):
		"""Hand all storage back to the pool."""
		if self._released:
			return
		for pp in (self.water_height, self.water_flux, self.water_velocity, self.soil_height, self.soil_velocity):
			pp.release()
		pool.release_field(self._water_trail)
		pool.release_field(self._soil_trail)
		self._released = True
