"""
Visualization submodule for PySedFlow.

Turns the committed simulation state into images and runs the interactive
window. Nothing here writes to the simulation except through the
Simulator's public controls and brush.

Modules:
- hillshading: numpy slope/aspect and relief shading (single and multi-azimuth)
- shading: Snapshot -> RGB image (terrain colormap, water tint, trail overlays)
- live: LiveViewer, the Taichi GUI frame loop with sliders and pointer brush

Usage:
    import matplotlib.pyplot as plt
    import pysedflow as psf

    sim.run(N=500)
    plt.imshow(psf.visu.shade(sim.snapshot()))
    plt.show()

Author: B.G.
"""

from .hillshading import slope_aspect, hillshade, multi_hillshade
from .shading import shade, to_canvas
from .live import LiveViewer, over_panel

__all__ = [
    "hillshading",
    "shading",
    "live",
    "slope_aspect",
    "hillshade",
    "multi_hillshade",
    "shade",
    "to_canvas",
    "LiveViewer",
    "over_panel"
]
