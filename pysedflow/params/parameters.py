"""
Operator controls and per-frame simulation parameters.

The operator never talks to the kernels. Every frame, the live controls
and the wall-clock delta are folded into one immutable SimParameters
record, which is then mirrored onto the device as a 0D struct field
(`SimParams`) read by the water and soil kernels.

Key Points:
- The elapsed time is turned into a delta factor bounded to [0, 4] so a
  stalled frame never integrates more than four reference frames
- A single viscosity knob both stiffens (damping, deposition) and
  smooths less (diffusion) the sediment field
- Source positions are constants, not operator controlled
- Each derivation carries a version number

Author: B.G.
"""

import math
from dataclasses import dataclass, replace
from typing import Tuple

import taichi as ti

from .. import constants as cte
from ..grid import Grid


def _clamp(value, lo, hi):
	return min(max(value, lo), hi)


@dataclass
class Controls:
	"""
	Live operator knobs.

	Attributes:
		time_scale (float): Multiplier on both time steps
		water_input (float): Multiplier on the water source strength
		soil_viscosity (float): Drives soil damping and deposition up, soil diffusion down
		show_paths (bool): Whether trail overlays are shown (no effect on the physics)
		running (bool): Whether ticks advance the simulation

	Author: B.G.
	"""
	time_scale: float = cte.TIME_SCALE_RANGE[2]
	water_input: float = cte.WATER_INPUT_RANGE[2]
	soil_viscosity: float = cte.SOIL_VISCOSITY_RANGE[2]
	show_paths: bool = True
	running: bool = True

	def clamped(self):
		"""
		Copy of the controls with every knob folded back into its slider range.

		Non-finite values fall back to the slider default.

		Author: B.G.
		"""
		def fold(value, rng):
			lo, hi, default = rng
			value = float(value)
			return _clamp(value, lo, hi) if math.isfinite(value) else default

		return replace(
			self,
			time_scale = fold(self.time_scale, cte.TIME_SCALE_RANGE),
			water_input = fold(self.water_input, cte.WATER_INPUT_RANGE),
			soil_viscosity = fold(self.soil_viscosity, cte.SOIL_VISCOSITY_RANGE),
		)


@dataclass(frozen=True)
class SimParameters:
	"""
	Immutable, versioned coefficient block consumed by every kernel.

	Built by derive_parameters; see pysedflow.constants for the meaning
	of each coefficient.

	Author: B.G.
	"""
	version: int
	nx: int
	ny: int
	show_paths: bool
	dt_water: float
	dt_soil: float
	cell_size: float
	gravity: float
	flux_acceleration: float
	flux_damping: float
	water_height_floor: float
	water_source_strength: float
	soil_advection: float
	soil_slope: float
	soil_damping: float
	soil_diffusion: float
	soil_source_strength: float
	erosion_rate: float
	deposition_rate: float
	erosion_threshold: float
	water_source_a: Tuple[float, float] = cte.WATER_SOURCE_A
	water_source_b: Tuple[float, float] = cte.WATER_SOURCE_B
	soil_source_a: Tuple[float, float] = cte.SOIL_SOURCE_A
	soil_source_b: Tuple[float, float] = cte.SOIL_SOURCE_B

	@property
	def flow_scale(self):
		return self.flux_acceleration * self.gravity / self.cell_size


def delta_factor(elapsed_seconds:float) -> float:
	"""
	Number of reference frames covered by the elapsed time, bounded to [0, MAX_DELTA_FACTOR].

	Author: B.G.
	"""
	if not math.isfinite(elapsed_seconds):
		return 0.
	return _clamp(elapsed_seconds * cte.REFERENCE_FPS, 0., cte.MAX_DELTA_FACTOR)


def derive_parameters(elapsed_seconds:float, controls:Controls, grid:Grid, version:int = 0) -> SimParameters:
	"""
	Build the coefficient block of one frame.

	Pure function of its inputs. Called every frame, including paused frames
	(with cte.PAUSED_ELAPSED) so presentation flags stay live.

	Args:
		elapsed_seconds (float): Wall-clock time since the previous frame
		controls (Controls): Operator knobs
		grid (Grid): Simulation grid
		version (int): Version number stamped on the record

	Returns:
		SimParameters: coefficients for the water and soil kernels

	Author: B.G.
	"""
	factor = delta_factor(elapsed_seconds)
	time_scale = controls.time_scale
	viscosity = controls.soil_viscosity

	return SimParameters(
		version = version,
		nx = grid.nx,
		ny = grid.ny,
		show_paths = bool(controls.show_paths),
		dt_water = cte.BASE_DT_WATER * time_scale * factor,
		dt_soil = cte.BASE_DT_SOIL * time_scale * factor,
		cell_size = grid.dx,
		gravity = cte.GRAVITY,
		flux_acceleration = cte.FLUX_ACCELERATION,
		flux_damping = cte.FLUX_DAMPING * factor,
		water_height_floor = cte.WATER_HEIGHT_FLOOR,
		water_source_strength = cte.WATER_SOURCE_STRENGTH * controls.water_input,
		soil_advection = cte.SOIL_ADVECTION,
		soil_slope = cte.SOIL_SLOPE,
		soil_damping = cte.SOIL_DAMPING * viscosity,
		soil_diffusion = cte.SOIL_DIFFUSION / (viscosity + cte.SOIL_DIFFUSION_OFFSET),
		soil_source_strength = cte.SOIL_SOURCE_STRENGTH,
		erosion_rate = cte.EROSION_RATE * (1. + cte.EROSION_TIME_SENSITIVITY * time_scale),
		deposition_rate = cte.DEPOSITION_RATE * (1. + cte.DEPOSITION_VISCOSITY_SENSITIVITY * viscosity),
		erosion_threshold = cte.EROSION_THRESHOLD,
	)


#########################################
###### DEVICE MIRROR ####################
#########################################

# Device-side copy of SimParameters read by the kernels
@ti.dataclass
class SimParams:
	show_paths: ti.i32
	dt_water: ti.f32
	dt_soil: ti.f32
	cell_size: ti.f32
	gravity: ti.f32
	flux_acceleration: ti.f32
	flux_damping: ti.f32
	water_height_floor: ti.f32
	water_source_strength: ti.f32
	soil_advection: ti.f32
	soil_slope: ti.f32
	soil_damping: ti.f32
	soil_diffusion: ti.f32
	soil_source_strength: ti.f32
	erosion_rate: ti.f32
	deposition_rate: ti.f32
	erosion_threshold: ti.f32
	water_source_a: ti.math.vec2
	water_source_b: ti.math.vec2
	soil_source_a: ti.math.vec2
	soil_source_b: ti.math.vec2


_SCALARS = (
	"dt_water", "dt_soil", "cell_size", "gravity", "flux_acceleration",
	"flux_damping", "water_height_floor", "water_source_strength",
	"soil_advection", "soil_slope", "soil_damping", "soil_diffusion",
	"soil_source_strength", "erosion_rate", "deposition_rate", "erosion_threshold",
)

_SOURCES = ("water_source_a", "water_source_b", "soil_source_a", "soil_source_b")


def allocate_device_params():
	"""0D struct field holding the device copy of the parameters."""
	return SimParams.field(shape=())


def upload_parameters(params:SimParameters, device_params):
	"""
	Copy a SimParameters record into the device struct field.

	Source positions are stored in grid-space cells, so the kernels do not
	need the grid shape to place them.

	Args:
		params (SimParameters): Host record
		device_params: Field returned by allocate_device_params

	Author: B.G.
	"""
	device_params.show_paths[None] = 1 if params.show_paths else 0
	for name in _SCALARS:
		getattr(device_params, name)[None] = getattr(params, name)
	for name in _SOURCES:
		u, v = getattr(params, name)
		getattr(device_params, name)[None] = [u * params.nx, v * params.ny]
