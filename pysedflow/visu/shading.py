"""
Shading of a simulation Snapshot into an RGB image.

Layers, bottom to top:
- soil: matplotlib 'terrain' colormap of the normalized soil height,
  modulated by a multidirectional hillshade
- water: depth-dependent blend towards the 'Blues' colormap
- paths (only when the snapshot's show_paths flag is set): water trail in
  pale blue, soil trail in amber

Reads only the snapshot; never touches the simulation.

Author: B.G.
"""

import matplotlib
import numpy as np

from .hillshading import multi_hillshade

WATER_TRAIL_COLOUR = np.array([0.85, 0.95, 1.0], dtype=np.float32)
SOIL_TRAIL_COLOUR = np.array([1.0, 0.68, 0.2], dtype=np.float32)


def _cmap(name):
	return matplotlib.colormaps[name]


def _normalise(arr):
	lo, hi = float(arr.min()), float(arr.max())
	if hi - lo > 0:
		return (arr - lo) / (hi - lo)
	return np.zeros_like(arr)


def _mix(rgb, colour, weight):
	return rgb * (1. - weight[..., None]) + colour * weight[..., None]


def shade(snapshot, z_factor=8.0, water_depth_scale=0.04, water_opacity=0.85,
		  water_trail_gain=20.0, soil_trail_gain=30.0, trail_opacity=0.6, dry_depth=1e-3):
	"""
	Build the RGB image of a snapshot.

	Args:
		snapshot (Snapshot): committed state from Simulator.snapshot()
		z_factor (float): vertical exaggeration of the hillshade. Default: 8.0
		water_depth_scale (float): depth at which water reaches ~63% opacity. Default: 0.04
		water_opacity (float): maximum water opacity. Default: 0.85
		water_trail_gain, soil_trail_gain (float): trail saturation gains
		trail_opacity (float): maximum trail opacity. Default: 0.6
		dry_depth (float): depths below this are not drawn. Default: 1e-3

	Returns:
		np.ndarray: (ny, nx, 3) float32 image in [0, 1], row 0 at the top

	Author: B.G.
	"""
	soil = np.asarray(snapshot.soil_height, dtype=np.float32)
	depth = np.asarray(snapshot.water_height, dtype=np.float32)

	hs = multi_hillshade(soil, z_factor=z_factor)
	rgb = _cmap('terrain')(_normalise(soil))[..., :3].astype(np.float32)
	rgb *= (0.35 + 0.65 * hs)[..., None]

	wet = np.where(depth > dry_depth, 1. - np.exp(-depth / water_depth_scale), 0.).astype(np.float32)
	water_rgb = _cmap('Blues')(0.45 + 0.55 * wet)[..., :3].astype(np.float32)
	rgb = rgb * (1. - water_opacity * wet[..., None]) + water_rgb * (water_opacity * wet[..., None])

	if snapshot.show_paths:
		wt = 1. - np.exp(-water_trail_gain * np.maximum(snapshot.water_trail, 0.))
		st = 1. - np.exp(-soil_trail_gain * np.maximum(snapshot.soil_trail, 0.))
		rgb = _mix(rgb, WATER_TRAIL_COLOUR, (trail_opacity * wt).astype(np.float32))
		rgb = _mix(rgb, SOIL_TRAIL_COLOUR, (trail_opacity * st).astype(np.float32))

	return np.clip(rgb, 0., 1.).astype(np.float32)


def to_canvas(rgb):
	"""
	Reorder a (ny, nx, 3) image, row 0 at the top, into the (nx, ny, 3)
	bottom-up layout expected by ti.ui canvases.

	Author: B.G.
	"""
	return np.ascontiguousarray(np.flipud(rgb).transpose(1, 0, 2))
