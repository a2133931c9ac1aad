"""
Real-time interactive viewer for PySedFlow.

Runs the frame loop of a Simulator inside a Taichi GUI window: every
frame it ticks the simulation with the wall clock, shades the committed
snapshot and shows it, while a control panel exposes the operator knobs
and the pointer drives the terrain brush.

Controls:
    - Left mouse button + drag: deposit soil
    - Shift + left mouse button + drag: erode soil
    - Space: run / pause
    - Panel: time scale, water input, soil viscosity, show paths, run/pause

Author: B.G.
"""

import time

import taichi as ti

from .. import constants as cte
from .. import pool
from .shading import shade, to_canvas

# Control panel rectangle in window fractions (x, y from the top-left, width, height)
PANEL = (0.02, 0.02, 0.3, 0.3)


def over_panel(u:float, v:float, panel=PANEL) -> bool:
	"""
	Whether a cursor position (v growing upwards) lies on the control panel.

	Author: B.G.
	"""
	x, y, w, h = panel
	return x <= u <= x + w and (1. - y - h) <= v <= (1. - y)


class LiveViewer:
	"""
	Interactive window driving a Simulator.

	Args:
		simulator (Simulator): simulation to run and display
		window_size (tuple): Window dimensions in pixels. Default: (768, 768)
		brush_radius (float): Brush radius in cells. Default: cte.BRUSH_RADIUS
		brush_intensity (float): Brush strength. Default: cte.BRUSH_INTENSITY

	Example:
		import taichi as ti
		import pysedflow as psf

		ti.init(ti.gpu)
		viewer = psf.visu.LiveViewer(psf.Simulator(256, 256))
		viewer.run()

	Author: B.G.
	"""

	def __init__(self, simulator, window_size=(768, 768), brush_radius=cte.BRUSH_RADIUS, brush_intensity=cte.BRUSH_INTENSITY):
		self.sim = simulator
		self.brush_radius = brush_radius
		self.brush_intensity = brush_intensity

		self.window = ti.ui.Window("PySedFlow", window_size, vsync=True)
		self.canvas = self.window.get_canvas()
		self.gui = self.window.get_gui()

		self._image = pool.get_field(ti.f32, (simulator.nx, simulator.ny), n=3)
		self.running = True

	def _controls_panel(self):
		c = self.sim.controls
		with self.gui.sub_window("Controls", *PANEL):
			c.time_scale = self.gui.slider_float("Time scale", c.time_scale, cte.TIME_SCALE_RANGE[0], cte.TIME_SCALE_RANGE[1])
			c.water_input = self.gui.slider_float("Water input", c.water_input, cte.WATER_INPUT_RANGE[0], cte.WATER_INPUT_RANGE[1])
			c.soil_viscosity = self.gui.slider_float("Soil viscosity", c.soil_viscosity, cte.SOIL_VISCOSITY_RANGE[0], cte.SOIL_VISCOSITY_RANGE[1])
			c.show_paths = self.gui.checkbox("Show paths", c.show_paths)
			if self.gui.button("Pause" if c.running else "Run"):
				self.sim.toggle()
			stats = self.sim.state
			self.gui.text(f"step {stats.step_count}  params v{stats.param_version}")

	def _handle_input(self):
		for e in self.window.get_events(ti.ui.PRESS):
			if e.key == ti.ui.SPACE:
				self.sim.toggle()

		if self.window.is_pressed(ti.ui.LMB):
			u, v = self.window.get_cursor_pos()
			if not over_panel(u, v):
				self.sim.brush_at_pointer(u, v, self.window.is_pressed(ti.ui.SHIFT),
										  radius=self.brush_radius, intensity=self.brush_intensity)

	def render_frame(self):
		"""
		Tick the simulation, handle input and draw one frame.

		Returns:
			bool: False once the window was closed

		Author: B.G.
		"""
		if not self.window.running:
			self.running = False
			return False

		self._handle_input()
		self.sim.tick(time.perf_counter())

		self._image.from_numpy(to_canvas(shade(self.sim.snapshot())))
		self.canvas.set_image(self._image.field)
		self._controls_panel()
		self.window.show()
		return True

	def run(self):
		"""Loop until the window is closed."""
		while self.running and self.render_frame():
			pass
		self.close()

	def close(self):
		self.running = False
		pool.release_field(self._image)
