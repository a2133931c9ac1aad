"""
Simulation scheduler: the frame loop entry point of PySedFlow.

The Simulator owns the field storage, the double-buffer registers and the
device parameter block. Every frame the caller hands it a timestamp
through `tick`; the Simulator derives the frame's parameters and, unless
paused, runs one step:

	water kernel  (water src -> water dst, reading soil src)
	soil kernel   (soil src -> soil dst, reading the water dst just written)
	flip both registers

Presentation only ever reads the committed copies selected by the
registers (`snapshot`, `current_fields`). The brush and the step are
serialized by one lock, so an edit lands either fully before or fully
after a step.

Author: B.G.
"""

import threading
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import taichi as ti

from .. import constants as cte
from ..brush import BrushMode, apply_brush, pointer_to_grid
from ..fields import SimFields
from ..general_algorithms import BufferIndex, copy_A_to_B, field_sum, field_max
from ..grid import Grid
from ..params import Controls, SimParameters, derive_parameters, allocate_device_params, upload_parameters
from ..soil import update_soil
from ..water import update_water


@dataclass
class SimulationState:
	"""
	Mutable scheduler state.

	Attributes:
		water (BufferIndex): register of the water copies
		soil (BufferIndex): register of the soil copies
		step_count (int): committed steps
		param_version (int): version of the last derived SimParameters
		last_time (float): timestamp of the previous tick, None before the first one

	Author: B.G.
	"""
	water: BufferIndex = field(default_factory=BufferIndex)
	soil: BufferIndex = field(default_factory=BufferIndex)
	step_count: int = 0
	param_version: int = 0
	last_time: Optional[float] = None

	@property
	def indices(self):
		return (self.water.src, self.soil.src)


@dataclass(frozen=True)
class Snapshot:
	"""
	Read-only copy of the committed state handed to presentation.

	All arrays have shape (ny, nx) and are not writeable.

	Author: B.G.
	"""
	water_height: np.ndarray
	soil_height: np.ndarray
	water_trail: np.ndarray
	soil_trail: np.ndarray
	nx: int
	ny: int
	show_paths: bool


def _frozen(arr):
	arr.setflags(write=False)
	return arr


class Simulator:
	"""
	Coupled water/soil simulation with live controls and a terrain brush.

	Args:
		nx (int): Number of columns. Default: cte.NX
		ny (int): Number of rows. Default: cte.NY
		dx (float): Cell size. Default: cte.DX
		controls (Controls, optional): Operator knobs. Default: Controls()
		verbose (bool): Print progress information. Default: False

	Attributes:
		grid (Grid): Simulation grid
		controls (Controls): Live operator knobs, read at every tick
		state (SimulationState): Buffer registers and counters
		fields (SimFields): Field storage
		params (SimParameters): Parameters of the last frame
		device_params: 0D SimParams struct field read by the kernels

	Example:
		import time
		import taichi as ti
		import pysedflow as psf

		ti.init(ti.gpu)
		sim = psf.Simulator(256, 256)
		for _ in range(600):
			sim.tick(time.perf_counter())
		snap = sim.snapshot()

	Author: B.G.
	"""

	def __init__(self, nx:int = cte.NX, ny:int = cte.NY, dx:float = cte.DX, controls:Controls = None, verbose:bool = False):
		self.grid = Grid(nx, ny, dx)
		self.controls = Controls() if controls is None else controls
		self.verbose = verbose
		self.state = SimulationState()
		self._lock = threading.RLock()

		self.fields = SimFields(self.grid)
		self.fields.initialise()

		self.device_params = allocate_device_params()
		self.params = None
		self.refresh_parameters(cte.PAUSED_ELAPSED)

		if(self.verbose):
			print(f"Simulator ready on {self.grid}")

	@property
	def nx(self):
		return self.grid.nx

	@property
	def ny(self):
		return self.grid.ny

	@property
	def running(self):
		return self.controls.running

	#########################################
	###### FRAME LOOP #######################
	#########################################

	def refresh_parameters(self, elapsed_seconds:float) -> SimParameters:
		"""
		Derive and upload the parameters of a frame.

		Args:
			elapsed_seconds (float): Wall-clock time covered by the frame

		Returns:
			SimParameters: the new parameter record

		Author: B.G.
		"""
		with self._lock:
			self.state.param_version += 1
			self.params = derive_parameters(elapsed_seconds, self.controls.clamped(), self.grid, self.state.param_version)
			upload_parameters(self.params, self.device_params)
			return self.params

	def tick(self, now:float) -> bool:
		"""
		Process one frame.

		While running, derives the parameters from the time elapsed since the
		previous tick and advances one step. While paused, only refreshes the
		parameters with a nominal delta: no kernel runs and the buffer
		registers stay untouched.

		Args:
			now (float): Monotonic timestamp in seconds

		Returns:
			bool: True if a step was committed

		Author: B.G.
		"""
		with self._lock:
			if self.state.last_time is None:
				elapsed = cte.PAUSED_ELAPSED
			else:
				elapsed = max(cte.MIN_ELAPSED, now - self.state.last_time)
			self.state.last_time = now

			if not self.controls.running:
				self.refresh_parameters(cte.PAUSED_ELAPSED)
				return False

			self.refresh_parameters(elapsed)
			self.step()
			return True

	def step(self):
		"""
		Run one water step, one soil step, and commit by flipping both registers.

		Uses the parameters currently uploaded on the device.

		Author: B.G.
		"""
		f = self.fields
		with self._lock:
			w, s = self.state.water, self.state.soil

			update_water(
				f.water_height[w.src], f.soil_height[s.src], f.water_flux[w.src],
				f.water_height[w.dst], f.water_flux[w.dst], f.water_velocity[w.dst],
				f.water_trail, self.device_params
			)

			update_soil(
				f.soil_height[s.src], f.soil_velocity[s.src],
				f.water_height[w.dst], f.water_velocity[w.dst],
				f.soil_height[s.dst], f.soil_velocity[s.dst],
				f.soil_trail, self.device_params
			)

			ti.sync()
			w.flip()
			s.flip()
			self.state.step_count += 1

			if(self.verbose and self.state.step_count % 100 == 0):
				print(f"step {self.state.step_count}: water {self.total_water():.4f} soil {self.total_soil():.4f}")

	def run(self, N:int = 1, elapsed_seconds:float = cte.PAUSED_ELAPSED):
		"""
		Advance N steps with a fixed frame time, ignoring the run/pause flag.

		Args:
			N (int): Number of steps. Default: 1
			elapsed_seconds (float): Frame time used for every step. Default: 1/60 s

		Author: B.G.
		"""
		for _ in range(N):
			self.refresh_parameters(elapsed_seconds)
			self.step()

	def pause(self):
		self.controls.running = False

	def resume(self):
		self.controls.running = True

	def toggle(self):
		self.controls.running = not self.controls.running
		return self.controls.running

	#########################################
	###### EDITING ##########################
	#########################################

	def brush(self, cx:float, cy:float, radius:float = cte.BRUSH_RADIUS, intensity:float = cte.BRUSH_INTENSITY, mode:BrushMode = BrushMode.DEPOSIT) -> bool:
		"""
		Edit the soil around a grid-space point, between two steps.

		Args:
			cx, cy (float): Centre in grid-space (x = column, y = row)
			radius (float): Brush radius in cells. Default: cte.BRUSH_RADIUS
			intensity (float): Height change at the centre. Default: cte.BRUSH_INTENSITY
			mode (BrushMode): DEPOSIT or ERODE

		Returns:
			bool: False if the input was out of range (no cell edited)

		Author: B.G.
		"""
		with self._lock:
			return apply_brush(self.fields.soil_height, self.state.soil, cx, cy, radius, intensity, mode)

	def brush_at_pointer(self, u:float, v:float, modifier:bool = False, radius:float = cte.BRUSH_RADIUS, intensity:float = cte.BRUSH_INTENSITY) -> bool:
		"""
		Brush at a normalized window position; the modifier flag selects ERODE.

		Author: B.G.
		"""
		x, y = pointer_to_grid(u, v, self.grid)
		return self.brush(x, y, radius, intensity, BrushMode.from_modifier(modifier))

	def load_state(self, soil_height:np.ndarray = None, water_height:np.ndarray = None):
		"""
		Overwrite the soil and/or water height, in both copies.

		Flux and velocities are left untouched.

		Args:
			soil_height (np.ndarray, optional): (ny, nx) soil height
			water_height (np.ndarray, optional): (ny, nx) water height

		Raises:
			ValueError: shape mismatch

		Author: B.G.
		"""
		with self._lock:
			for arr, pp, idx in ((soil_height, self.fields.soil_height, self.state.soil),
								 (water_height, self.fields.water_height, self.state.water)):
				if arr is None:
					continue
				arr = np.asarray(arr, dtype=np.float32)
				if arr.shape != self.grid.rshp:
					raise ValueError(f"Expected an array of shape {self.grid.rshp}, got {arr.shape}")
				pp[idx.src].from_numpy(arr)
				copy_A_to_B(pp[idx.src], pp[idx.dst])

	#########################################
	###### PRESENTATION #####################
	#########################################

	def current_fields(self):
		"""
		Committed Taichi fields, for zero-copy shading. Must not be written to.

		Returns:
			dict: water_height, soil_height, water_velocity, water_flux,
				soil_velocity, water_trail, soil_trail

		Author: B.G.
		"""
		f, w, s = self.fields, self.state.water.src, self.state.soil.src
		return {
			"water_height": f.water_height[w],
			"water_flux": f.water_flux[w],
			"water_velocity": f.water_velocity[w],
			"soil_height": f.soil_height[s],
			"soil_velocity": f.soil_velocity[s],
			"water_trail": f.water_trail,
			"soil_trail": f.soil_trail,
		}

	def snapshot(self) -> Snapshot:
		"""
		Read-only numpy copy of the committed state.

		Author: B.G.
		"""
		with self._lock:
			f, w, s = self.fields, self.state.water.src, self.state.soil.src
			return Snapshot(
				water_height = _frozen(f.water_height.to_numpy(w)),
				soil_height = _frozen(f.soil_height.to_numpy(s)),
				water_trail = _frozen(f.water_trail.to_numpy()),
				soil_trail = _frozen(f.soil_trail.to_numpy()),
				nx = self.params.nx,
				ny = self.params.ny,
				show_paths = self.params.show_paths,
			)

	#########################################
	###### DIAGNOSTICS ######################
	#########################################

	def total_water(self) -> float:
		return field_sum(self.fields.water_height[self.state.water.src])

	def total_soil(self) -> float:
		return field_sum(self.fields.soil_height[self.state.soil.src])

	def max_water_depth(self) -> float:
		return field_max(self.fields.water_height[self.state.water.src])

	def stats(self) -> dict:
		"""
		Counters and totals of the committed state.

		Returns:
			dict: step_count, param_version, water_index, soil_index,
				total_water, total_soil, max_water_depth

		Author: B.G.
		"""
		return {
			"step_count": self.state.step_count,
			"param_version": self.state.param_version,
			"water_index": self.state.water.src,
			"soil_index": self.state.soil.src,
			"total_water": self.total_water(),
			"total_soil": self.total_soil(),
			"max_water_depth": self.max_water_depth(),
		}

	def release(self):
		"""Return the field storage to the pool. The Simulator is unusable afterwards."""
		self.fields.release()
