"""
Soil (sediment) transport kernel.

Moves the soil heightfield with a transport velocity driven by the water
velocity of the same step and by the local soil slope, smooths it with a
Laplacian term and exchanges material with the flow through a threshold
erosion/deposition law.

Per cell, reading the current soil copy and the water copy that the water
kernel has just written:
1. Central-difference soil gradient over clamped neighbours
2. Sediment velocity: advected by the water velocity (stronger in deeper
   water), pushed downslope, damped, then clamped component-wise
3. Divergence with backward differences against the west and north
   neighbours' updated velocity
4. Transport and diffusion of the soil height
5. Erosion above the flow threshold, deposition below it in shallow water
6. Two soil point sources, then the height is floored at 0
7. Soil trail (in place)

The neighbours' updated velocity is recomputed from the source copies
rather than read back from the destination, so no cell ever reads another
cell's in-progress write.

Constants used from constants module:
- SOIL_VELOCITY_LIMIT
- SOIL_ADVECTION_MAX_SCALE, SOIL_ADVECTION_DEPTH_GAIN, SOIL_ADVECTION_BASE
- FLOW_DEPTH_OFFSET, DEPOSITION_DEPTH_FADE
- SOIL_SOURCE_RADIUS, SOIL_TRAIL_BLEND

Author: B.G.
"""

import taichi as ti

from .. import constants as cte
from ..grid import neighbourer as nei
from ..water.water_kernels import point_source


@ti.func
def soil_gradient(z:ti.template(), row:ti.i32, col:ti.i32, cell_size:ti.f32):
	"""
	Central-difference gradient (dz/dx, dz/dy) with clamped neighbours.

	On an edge the missing neighbour is the cell itself, which degrades the
	central difference to a one-sided one at half weight.

	Author: B.G.
	"""
	ny, nx = z.shape
	nr, nc = nei.neighbour_clamped(row, col, nei.NORTH, ny, nx)
	er, ec = nei.neighbour_clamped(row, col, nei.EAST, ny, nx)
	sr, sc = nei.neighbour_clamped(row, col, nei.SOUTH, ny, nx)
	wr, wc = nei.neighbour_clamped(row, col, nei.WEST, ny, nx)
	return ti.Vector([z[er, ec] - z[wr, wc], z[sr, sc] - z[nr, nc]]) * (0.5 / cell_size)


@ti.func
def sediment_velocity(
	row:ti.i32, col:ti.i32,
	z_src:ti.template(), v_src:ti.template(),
	wh:ti.template(), wv:ti.template(),
	params:ti.template()
):
	"""
	Updated sediment velocity of one cell, computed from source data only.

	Args:
		row, col: Cell
		z_src: soil height, current copy
		v_src: sediment velocity, current copy
		wh: water height written by this step's water kernel
		wv: water velocity written by this step's water kernel
		params: 0D SimParams struct field

	Returns:
		ti.math.vec2: damped and clamped velocity

	Author: B.G.
	"""
	p = params[None]
	grad = soil_gradient(z_src, row, col, p.cell_size)
	adv_scale = ti.min(cte.SOIL_ADVECTION_MAX_SCALE, wh[row, col] * cte.SOIL_ADVECTION_DEPTH_GAIN + cte.SOIL_ADVECTION_BASE)

	v = v_src[row, col] + p.dt_soil * (p.soil_advection * adv_scale * wv[row, col] - p.soil_slope * grad)
	v *= (1. - p.soil_damping)
	return ti.math.clamp(v, -cte.SOIL_VELOCITY_LIMIT, cte.SOIL_VELOCITY_LIMIT)


@ti.func
def flow_magnitude(depth:ti.f32, vel:ti.math.vec2) -> ti.f32:
	"""Erosive power of the flow: |v| * (depth + FLOW_DEPTH_OFFSET)."""
	return vel.norm() * (depth + cte.FLOW_DEPTH_OFFSET)


@ti.func
def erosion_deposition(flow:ti.f32, depth:ti.f32, threshold:ti.f32, erosion_rate:ti.f32, deposition_rate:ti.f32) -> ti.f32:
	"""
	Net height change of the threshold erosion/deposition law.

	Both terms are evaluated: erosion from the excess of flow over the
	threshold, deposition from the deficit, faded out with water depth.

	Author: B.G.
	"""
	erosion = ti.max(0., flow - threshold) * erosion_rate
	deposition = ti.max(0., threshold - flow) * deposition_rate * ti.max(0., 1. - depth * cte.DEPOSITION_DEPTH_FADE)
	return deposition - erosion


@ti.kernel
def update_soil(
	z_src: ti.template(),
	v_src: ti.template(),
	wh: ti.template(),
	wv: ti.template(),
	z_dst: ti.template(),
	v_dst: ti.template(),
	trail: ti.template(),
	params: ti.template()
):
	"""
	Advance soil height and sediment velocity by one step.

	Args:
		z_src (ti.template): (ny, nx) soil height, current copy (read)
		v_src (ti.template): (ny, nx) vec2 sediment velocity, current copy (read)
		wh (ti.template): (ny, nx) water height just written by update_water (read)
		wv (ti.template): (ny, nx) vec2 water velocity just written by update_water (read)
		z_dst (ti.template): soil height, next copy (written)
		v_dst (ti.template): sediment velocity, next copy (written)
		trail (ti.template): (ny, nx) soil trail, updated in place
		params (ti.template): 0D SimParams struct field

	Author: B.G.
	"""
	ny, nx = z_src.shape

	for row, col in z_src:
		p = params[None]
		dt = p.dt_soil

		v = sediment_velocity(row, col, z_src, v_src, wh, wv, params)

		# Backward differences against the west and north neighbours
		wr, wc = nei.neighbour_clamped(row, col, nei.WEST, ny, nx)
		nr, nc = nei.neighbour_clamped(row, col, nei.NORTH, ny, nx)
		v_west = sediment_velocity(wr, wc, z_src, v_src, wh, wv, params)
		v_north = sediment_velocity(nr, nc, z_src, v_src, wh, wv, params)
		divergence = ((v[0] - v_west[0]) + (v[1] - v_north[1])) / p.cell_size

		z = z_src[row, col]
		neighbours = 0.
		for k in ti.static(range(4)):
			kr, kc = nei.neighbour_clamped(row, col, k, ny, nx)
			neighbours += z_src[kr, kc]

		z_new = z - dt * divergence + p.soil_diffusion * (neighbours - 4. * z)

		depth = wh[row, col]
		flow = flow_magnitude(depth, wv[row, col])
		z_new += erosion_deposition(flow, depth, p.erosion_threshold, p.erosion_rate, p.deposition_rate)

		source = point_source(row, col, p.soil_source_a, cte.SOIL_SOURCE_RADIUS, p.soil_source_strength) + \
			point_source(row, col, p.soil_source_b, cte.SOIL_SOURCE_RADIUS, p.soil_source_strength)
		z_new = ti.max(0., z_new + dt * source)

		z_dst[row, col] = z_new
		v_dst[row, col] = v

		trail[row, col] += cte.SOIL_TRAIL_BLEND * (flow - trail[row, col])
