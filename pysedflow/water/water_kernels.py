"""
Water transport kernel.

Flux-based surface water model on the soil heightfield. Each cell keeps
four outgoing fluxes (north, east, south, west) accelerated by the drop of
the free surface (water + soil) towards each neighbour and damped every
step. This is not a shallow water momentum solver: there is no advection
of momentum, only a damped, gravity-driven height-difference outflow.

Per cell, reading the source copies only:
1. Free-surface drop towards the 4 clamped neighbours (positive part)
2. Damped flux update: max(0, flux*(1-damping) + dt*flow_scale*drop)
3. Conservation limiter: the outflow of one step never exceeds the water
   available in the cell
4. Inflow: the opposite-direction source flux of the 4 neighbours, 0 outside the grid
5. Height update with the two water point sources
6. Dry floor: below the floor a cell is reset to the floor and stops emitting
7. Velocity derived from the flux balance, for the soil kernel and presentation
8. Water trail (in place)

Constants used from constants module:
- WATER_SOURCE_A_RADIUS, WATER_SOURCE_B_RADIUS, WATER_SOURCE_B_WEIGHT
- VELOCITY_DEPTH_FLOOR
- WATER_TRAIL_DECAY

Everything operator dependent comes from the SimParams struct field.

Author: B.G.
"""

import taichi as ti

from .. import constants as cte
from ..grid import neighbourer as nei


@ti.func
def point_source(row:ti.i32, col:ti.i32, centre:ti.math.vec2, radius:ti.f32, strength:ti.f32) -> ti.f32:
	"""
	Linear radial falloff source: strength at the centre, 0 from `radius` on.

	Args:
		row, col: Cell
		centre: Source position in grid-space (x, y)
		radius: Source radius in cells
		strength: Rate at the centre

	Author: B.G.
	"""
	d = ti.math.length(ti.Vector([ti.f32(col), ti.f32(row)]) - centre)
	res = 0.
	if d < radius:
		res = strength * (1. - d / radius)
	return res


@ti.func
def limit_outflow(flux:ti.math.vec4, hw:ti.f32, dt:ti.f32):
	"""
	Scale the four outgoing fluxes so that sum(flux) * dt <= hw.

	Returns:
		ti.math.vec4: limited flux

	Author: B.G.
	"""
	res = flux
	outflow = flux.sum()
	if outflow > 0. and outflow * dt > hw:
		res = flux * (hw / (outflow * dt))
	return res


@ti.kernel
def update_water(
	h_src: ti.template(),
	z_src: ti.template(),
	flux_src: ti.template(),
	h_dst: ti.template(),
	flux_dst: ti.template(),
	vel_dst: ti.template(),
	trail: ti.template(),
	params: ti.template()
):
	"""
	Advance water height, flux and velocity by one step.

	Args:
		h_src (ti.template): (ny, nx) water height, current copy (read)
		z_src (ti.template): (ny, nx) soil height, current copy (read)
		flux_src (ti.template): (ny, nx) vec4 flux N, E, S, W, current copy (read)
		h_dst (ti.template): water height, next copy (written)
		flux_dst (ti.template): flux, next copy (written)
		vel_dst (ti.template): (ny, nx) vec2 water velocity, next copy (written)
		trail (ti.template): (ny, nx) water trail, updated in place
		params (ti.template): 0D SimParams struct field

	Author: B.G.
	"""
	ny, nx = h_src.shape

	for row, col in h_src:
		p = params[None]
		dt = p.dt_water
		flow_scale = p.flux_acceleration * p.gravity / p.cell_size

		hw = h_src[row, col]
		surface = hw + z_src[row, col]
		prev = flux_src[row, col]

		flux = ti.Vector([0., 0., 0., 0.])
		inflow = 0.
		for k in ti.static(range(4)):
			# Outgoing flux towards the clamped neighbour
			nr, nc = nei.neighbour_clamped(row, col, k, ny, nx)
			drop = ti.max(0., surface - (h_src[nr, nc] + z_src[nr, nc]))
			flux[k] = ti.max(0., prev[k] * (1. - p.flux_damping) + dt * flow_scale * drop)

			# Incoming flux: what the neighbour sent back towards us last step
			cr, cc = nei.neighbour(row, col, k, ny, nx)
			if cr > -1:
				inflow += flux_src[cr, cc][(k + 2) % 4]

		flux = limit_outflow(flux, hw, dt)
		outflow = flux.sum()

		source = point_source(row, col, p.water_source_a, cte.WATER_SOURCE_A_RADIUS, p.water_source_strength) + \
			point_source(row, col, p.water_source_b, cte.WATER_SOURCE_B_RADIUS, p.water_source_strength * cte.WATER_SOURCE_B_WEIGHT)

		h_new = hw + dt * (inflow - outflow) + dt * source

		if h_new < p.water_height_floor:
			h_new = p.water_height_floor
			flux = ti.Vector([0., 0., 0., 0.])

		depth = ti.max(h_new, cte.VELOCITY_DEPTH_FLOOR)
		vel = ti.Vector([flux[1] - flux[3], flux[2] - flux[0]]) / p.cell_size / depth

		h_dst[row, col] = h_new
		flux_dst[row, col] = flux
		vel_dst[row, col] = vel

		trail[row, col] = trail[row, col] * cte.WATER_TRAIL_DECAY + (1. - cte.WATER_TRAIL_DECAY) * vel.norm() * depth
