"""
Terrain brush.

Immediate, out-of-band edit of the soil heightfield around a grid-space
point, with a linear radial falloff. The edit is written to both copies of
the double-buffered soil height: writing only the current copy would let
the next step overwrite it from the stale destination copy.

Author: B.G.
"""

import enum
import math

import taichi as ti

from ..general_algorithms import BufferIndex


class BrushMode(enum.Enum):
	"""Whether the brush adds or removes soil."""
	DEPOSIT = 1
	ERODE = -1

	@property
	def sign(self):
		return float(self.value)

	@classmethod
	def from_modifier(cls, modifier:bool):
		"""Shift-held (modifier) pointer strokes erode, plain strokes deposit."""
		return cls.ERODE if modifier else cls.DEPOSIT


@ti.kernel
def brush_kernel(z: ti.template(), cx: ti.f32, cy: ti.f32, radius: ti.f32, amount: ti.f32):
	"""
	Add amount * (1 - d / radius) to every cell closer than radius to (cx, cy).

	The result is floored at 0.

	Args:
		z (ti.template): (ny, nx) soil height copy
		cx, cy (ti.f32): Centre in grid-space (x = column, y = row)
		radius (ti.f32): Brush radius in cells
		amount (ti.f32): Signed change at the centre

	Author: B.G.
	"""
	for row, col in z:
		d = ti.math.length(ti.Vector([col - cx, row - cy]))
		if d < radius:
			z[row, col] = ti.max(0., z[row, col] + amount * (1. - d / radius))


def apply_brush(soil_height, index:BufferIndex, cx:float, cy:float, radius:float, intensity:float, mode:BrushMode = BrushMode.DEPOSIT) -> bool:
	"""
	Apply the brush to both copies of the soil height.

	Args:
		soil_height (PingPong): double-buffered soil height
		index (BufferIndex): soil buffer register, both src and dst copies are edited
		cx, cy (float): Centre in grid-space
		radius (float): Brush radius in cells
		intensity (float): Change at the centre, as a magnitude
		mode (BrushMode): DEPOSIT adds soil, ERODE removes it

	Returns:
		bool: False when the input was out of range and nothing was edited

	Author: B.G.
	"""
	if not all(math.isfinite(v) for v in (cx, cy, radius, intensity)) or radius <= 0.:
		return False

	amount = abs(intensity) * mode.sign
	brush_kernel(soil_height[index.src], cx, cy, radius, amount)
	brush_kernel(soil_height[index.dst], cx, cy, radius, amount)
	return True


def pointer_to_grid(u:float, v:float, grid):
	"""
	Map a normalized window position to clamped grid-space coordinates.

	Window coordinates have their origin at the bottom-left corner while
	grid rows grow downwards, so v is flipped.

	Args:
		u, v (float): Normalized pointer position in [0, 1]
		grid (Grid): Simulation grid

	Returns:
		tuple: (x, y) in grid-space, clamped to the grid

	Author: B.G.
	"""
	x, y = grid.to_grid(u, 1. - v)
	return grid.clamp(x, y)
