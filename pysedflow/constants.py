"""
Global constants and configuration parameters for PySedFlow.

This module centralises every coefficient used by the coupled water/soil
simulation. Nothing here is mutated at runtime: operator knobs live in
``pysedflow.params.Controls`` and the per-frame coefficient block is
derived from both by ``pysedflow.params.derive_parameters``. Coefficients
that depend on the operator or on the frame time reach the kernels only
through the derived ``SimParams`` record; fixed geometry (source radii,
trail decays, velocity limits) is compiled into the kernels.

Constant Categories:
- Grid Constants: default domain size and cell spacing
- Time Stepping Constants: base time steps and frame-delta bounds
- Water Constants: flux kinetics, dry floor, point sources
- Soil Constants: sediment kinetics, erosion/deposition, point sources
- Brush Constants: default terrain brush geometry
- Control Ranges: slider bounds for the operator knobs

Usage:
    import pysedflow.constants as cte

    dt = cte.BASE_DT_WATER * time_scale

Author: B.G.
"""

import math

#########################################
###### GRID CONSTANTS ###################
#########################################

# Default number of columns (x-direction)
NX = 256

# Default number of rows (y-direction)
NY = 256

# Uniform cell size
DX = 1.0

# Gravitational acceleration, scaled down
GRAVITY = 9.8 * 0.35


#########################################
###### TIME STEPPING CONSTANTS ##########
#########################################

# Base time step of the water subsystem at 60 fps and time scale 1
BASE_DT_WATER = 0.018

# Base time step of the soil subsystem at 60 fps and time scale 1
BASE_DT_SOIL = 0.045

# Frames per second the base time steps are calibrated for
REFERENCE_FPS = 60.0

# Upper bound of elapsed_seconds * REFERENCE_FPS (stalls never integrate more than 4 frames)
MAX_DELTA_FACTOR = 4.0

# Smallest elapsed time accepted between two ticks (seconds)
MIN_ELAPSED = 1e-3

# Nominal elapsed time used while paused (seconds)
PAUSED_ELAPSED = 1.0 / 60.0


#########################################
###### WATER CONSTANTS ##################
#########################################

# Gain of the gravity-driven flux acceleration
FLUX_ACCELERATION = 55.0

# Flux damping per reference frame (multiplied by the delta factor)
FLUX_DAMPING = 0.075

# Water depth floor: cells never drop below this depth
WATER_HEIGHT_FLOOR = 5e-5

# Water source strength at water_input = 1
WATER_SOURCE_STRENGTH = 0.18

# Normalized (x, y) positions of the two water sources
WATER_SOURCE_A = (0.22, 0.08)
WATER_SOURCE_B = (0.78, 0.12)

# Radii (cells) of the two water sources
WATER_SOURCE_A_RADIUS = 6.0
WATER_SOURCE_B_RADIUS = 4.0

# Relative strength of the second water source
WATER_SOURCE_B_WEIGHT = 0.6

# Depth floor used when dividing flux by depth to get a velocity
VELOCITY_DEPTH_FLOOR = 0.02

# Exponential decay of the water trail
WATER_TRAIL_DECAY = 0.92


#########################################
###### SOIL CONSTANTS ###################
#########################################

# Gain of the water-velocity advection on sediment
SOIL_ADVECTION = 0.16

# Gain of the downslope term on sediment
SOIL_SLOPE = 0.09

# Sediment damping at soil_viscosity = 1
SOIL_DAMPING = 0.05

# Laplacian smoothing numerator (divided by viscosity + SOIL_DIFFUSION_OFFSET)
SOIL_DIFFUSION = 0.006
SOIL_DIFFUSION_OFFSET = 0.25

# Hard bound on each sediment velocity component
SOIL_VELOCITY_LIMIT = 0.8

# Advection coupling factor: min(MAX_SCALE, depth * DEPTH_GAIN + BASE)
SOIL_ADVECTION_MAX_SCALE = 1.5
SOIL_ADVECTION_DEPTH_GAIN = 4.0
SOIL_ADVECTION_BASE = 0.25

# Depth offset of the flow magnitude |v| * (depth + offset) driving erosion
FLOW_DEPTH_OFFSET = 0.02

# Soil source strength
SOIL_SOURCE_STRENGTH = 0.0065

# Radius (cells) of both soil sources
SOIL_SOURCE_RADIUS = 3.0

# Normalized (x, y) positions of the two soil sources
SOIL_SOURCE_A = (0.5, 0.92)
SOIL_SOURCE_B = (0.55, 0.95)

# Erosion: base rate and time-scale sensitivity
EROSION_RATE = 0.02
EROSION_TIME_SENSITIVITY = 0.4

# Deposition: base rate and viscosity sensitivity
DEPOSITION_RATE = 0.01
DEPOSITION_VISCOSITY_SENSITIVITY = 0.2

# Flow magnitude separating erosion from deposition
EROSION_THRESHOLD = 0.09

# Deposition fades out linearly with water depth, reaching zero at 1/DEPOSITION_DEPTH_FADE
DEPOSITION_DEPTH_FADE = 12.0

# Blend factor of the soil trail
SOIL_TRAIL_BLEND = 0.08


#########################################
###### INITIAL TERRAIN ##################
#########################################

TERRAIN_BASE = 0.25
TERRAIN_SLOPE = 0.25
TERRAIN_RIDGE_X = (0.08, 3.4 * math.pi)
TERRAIN_RIDGE_Y = (0.05, 4.1 * math.pi)
TERRAIN_VALLEY = (0.12, 0.45, 3.2)  # depth, normalized x centre, sharpness
TERRAIN_MIN_HEIGHT = 0.02


#########################################
###### BRUSH CONSTANTS ##################
#########################################

BRUSH_RADIUS = 6.0
BRUSH_INTENSITY = 0.05


#########################################
###### CONTROL RANGES ###################
#########################################

# (min, max, default) of each operator slider
TIME_SCALE_RANGE = (0.0, 3.0, 1.0)
WATER_INPUT_RANGE = (0.0, 3.0, 1.0)
SOIL_VISCOSITY_RANGE = (0.1, 3.0, 1.0)
