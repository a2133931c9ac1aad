"""
Starting state of the simulation.

The soil is a smooth procedural surface: a base elevation, a regional
slope rising towards the bottom rows, two low sinusoidal ridges along
different axes, and a Gaussian valley carved along a column band. It is
floored at a small positive height so no cell starts exactly dry of soil.
No randomness is involved: the same grid always gives the same terrain.

Author: B.G.
"""

import numpy as np
import taichi as ti

from .. import constants as cte
from ..general_algorithms import copy_A_to_B


@ti.kernel
def init_terrain(z: ti.template(), base: ti.f32, slope: ti.f32,
				 ridge_x_amp: ti.f32, ridge_x_freq: ti.f32,
				 ridge_y_amp: ti.f32, ridge_y_freq: ti.f32,
				 valley_depth: ti.f32, valley_centre: ti.f32, valley_sharpness: ti.f32,
				 min_height: ti.f32):
	"""
	Write the procedural soil heightfield into z.

	Args:
		z (ti.template): (ny, nx) soil height field
		base, slope: base elevation and its increase from the first to the last row
		ridge_*: amplitude and angular frequency of the x and y ridges
		valley_*: depth, normalized x centre and sharpness of the Gaussian valley
		min_height: floor of the result

	Author: B.G.
	"""
	ny, nx = z.shape
	for row, col in z:
		u = col / nx
		v = row / ny
		ridge = ridge_x_amp * ti.sin(u * ridge_x_freq) + ridge_y_amp * ti.cos(v * ridge_y_freq)
		valley = valley_depth * ti.exp(-((u - valley_centre) * valley_sharpness) ** 2)
		z[row, col] = ti.max(min_height, base + slope * v + ridge - valley)


def terrain(z):
	"""Fill z with the default procedural terrain of pysedflow.constants."""
	init_terrain(z, cte.TERRAIN_BASE, cte.TERRAIN_SLOPE,
				 cte.TERRAIN_RIDGE_X[0], cte.TERRAIN_RIDGE_X[1],
				 cte.TERRAIN_RIDGE_Y[0], cte.TERRAIN_RIDGE_Y[1],
				 cte.TERRAIN_VALLEY[0], cte.TERRAIN_VALLEY[1], cte.TERRAIN_VALLEY[2],
				 cte.TERRAIN_MIN_HEIGHT)


def init_fields(fields):
	"""
	Seed all fields of a SimFields.

	Both copies of every double-buffered field end up identical, so either
	index is a valid current state.

	Args:
		fields (SimFields): storage to seed

	Author: B.G.
	"""
	terrain(fields.soil_height[0])
	copy_A_to_B(fields.soil_height[0], fields.soil_height[1])

	fields.water_height.fill(0.)
	fields.water_flux.fill(0.)
	fields.water_velocity.fill(0.)
	fields.soil_velocity.fill(0.)
	fields.water_trail.fill(0.)
	fields.soil_trail.fill(0.)


def terrain_numpy(nx:int, ny:int):
	"""
	Reference numpy evaluation of the default terrain, shape (ny, nx).

	Author: B.G.
	"""
	v, u = np.mgrid[0:ny, 0:nx].astype(np.float64)
	u /= nx
	v /= ny
	ridge = cte.TERRAIN_RIDGE_X[0] * np.sin(u * cte.TERRAIN_RIDGE_X[1]) + cte.TERRAIN_RIDGE_Y[0] * np.cos(v * cte.TERRAIN_RIDGE_Y[1])
	valley = cte.TERRAIN_VALLEY[0] * np.exp(-((u - cte.TERRAIN_VALLEY[1]) * cte.TERRAIN_VALLEY[2]) ** 2)
	return np.maximum(cte.TERRAIN_MIN_HEIGHT, cte.TERRAIN_BASE + cte.TERRAIN_SLOPE * v + ridge - valley).astype(np.float32)
