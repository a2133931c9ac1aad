"""
2D grid neighbouring operations for the transport stencils.

All fields are laid out (row, col) = (y, x). Directions follow the order
of the flux vector components:

	0 = North (y - 1)
	1 = East  (x + 1)
	2 = South (y + 1)
	3 = West  (x - 1)

The opposite of direction k is (k + 2) % 4.

Two boundary flavours are provided:
- clamped: out-of-grid coordinates are clamped onto the edge cell, so an
  edge cell sees itself as its missing neighbour
- checked: out-of-grid neighbours are reported as (-1, -1)

Author: B.G.
"""

import taichi as ti

NORTH = 0
EAST = 1
SOUTH = 2
WEST = 3


@ti.func
def offset(tdir:ti.template()):
	"""
	Row/col offset of a direction.

	Returns:
		tuple: (drow, dcol)

	Author: B.G.
	"""
	dr, dc = 0, 0
	if ti.static(tdir == NORTH):
		dr = -1
	elif ti.static(tdir == EAST):
		dc = 1
	elif ti.static(tdir == SOUTH):
		dr = 1
	else:
		dc = -1
	return dr, dc


@ti.func
def neighbour_clamped(row:ti.i32, col:ti.i32, tdir:ti.template(), ny:ti.i32, nx:ti.i32):
	"""
	Neighbour coordinates clamped to the grid.

	Args:
		row, col: Current cell
		tdir: Direction (compile-time)
		ny, nx: Grid shape

	Returns:
		tuple: (row, col) of the neighbour, or of the current cell on the edge

	Author: B.G.
	"""
	dr, dc = offset(tdir)
	return ti.math.clamp(row + dr, 0, ny - 1), ti.math.clamp(col + dc, 0, nx - 1)


@ti.func
def neighbour(row:ti.i32, col:ti.i32, tdir:ti.template(), ny:ti.i32, nx:ti.i32):
	"""
	Neighbour coordinates with out-of-grid detection.

	Returns:
		tuple: (row, col) of the neighbour, (-1, -1) if it lies outside the grid

	Author: B.G.
	"""
	dr, dc = offset(tdir)
	nr, nc = row + dr, col + dc
	if nr < 0 or nr >= ny or nc < 0 or nc >= nx:
		nr, nc = -1, -1
	return nr, nc


@ti.func
def clamped(row:ti.i32, col:ti.i32, ny:ti.i32, nx:ti.i32):
	"""Clamp arbitrary coordinates onto the grid."""
	return ti.math.clamp(row, 0, ny - 1), ti.math.clamp(col, 0, nx - 1)
