"""
Headless run: let the sources carve the terrain for a while, cut a notch
with the brush, then plot the shaded result and the soil change.
"""
import taichi as ti
import numpy as np
import matplotlib.pyplot as plt
import pysedflow as psf

ti.init(ti.gpu, debug = False)

nx, ny = 256, 256
sim = psf.Simulator(nx, ny, verbose = True)
sim.controls.water_input = 1.5
sim.controls.soil_viscosity = 0.6

z0 = sim.snapshot().soil_height.copy()

for it in range(20):
	sim.run(N = 50)
	# Erode a notch across the valley, a bit further down every time
	sim.brush(0.45 * nx, 0.3 * ny + it * 4, radius = 5., intensity = 0.03, mode = psf.brush.BrushMode.ERODE)

snap = sim.snapshot()
print(sim.stats())

fig, ax = plt.subplots(1, 2, figsize = (12, 6))
ax[0].imshow(psf.visu.shade(snap))
ax[0].set_title("shaded state")
im = ax[1].imshow(snap.soil_height - z0, cmap = "RdBu_r", vmin = -0.05, vmax = 0.05)
ax[1].set_title("soil change")
plt.colorbar(im, ax = ax[1])
plt.show()
