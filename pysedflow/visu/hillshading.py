"""
Relief shading of the soil heightfield.

The surface slope and aspect are computed once per frame with numpy
gradients (central inside, one-sided on the edges) and then lit from one
or several sun azimuths:

    shade = cos(zenith) * cos(slope) + sin(zenith) * sin(slope) * cos(azimuth - aspect)

Aspects are clockwise from North with rows growing southwards, which is
how the simulation grid is laid out.

Author: B.G.
"""

import math

import numpy as np

DEFAULT_AZIMUTHS = (315.0, 45.0, 135.0, 225.0)


def slope_aspect(elevation, z_factor=1.0, dx=1.0):
    """
    Slope angle and aspect (radians) of a 2D heightfield.

    Grids with a single row or column are treated as flat.

    Returns:
        tuple: (slope, aspect), two (ny, nx) float64 arrays

    Author: B.G.
    """
    if elevation.ndim != 2:
        raise ValueError("elevation must be a 2D array")

    z = np.asarray(elevation, dtype=np.float64) * z_factor
    if min(z.shape) > 1:
        dz_drow, dz_dcol = np.gradient(z, dx)
    else:
        dz_drow = dz_dcol = np.zeros_like(z)

    slope = np.arctan(np.hypot(dz_dcol, dz_drow))
    aspect = np.mod(np.arctan2(-dz_dcol, dz_drow), 2.0 * np.pi)
    return slope, aspect


def _lit(slope, aspect, altitude_deg, azimuth_deg):
    zenith = math.radians(90.0 - altitude_deg)
    azimuth = math.radians(azimuth_deg)
    return math.cos(zenith) * np.cos(slope) + math.sin(zenith) * np.sin(slope) * np.cos(azimuth - aspect)


def hillshade(elevation, altitude_deg=45.0, azimuth_deg=315.0, z_factor=1.0, dx=1.0):
    """
    Single-sun hillshade in [0, 1].

    Args:
        elevation (np.ndarray): (ny, nx) heightfield
        altitude_deg (float): sun altitude. Default: 45
        azimuth_deg (float): sun azimuth, clockwise from North. Default: 315
        z_factor (float): vertical exaggeration. Default: 1
        dx (float): cell size. Default: 1

    Returns:
        np.ndarray: (ny, nx) float32

    Author: B.G.
    """
    slope, aspect = slope_aspect(elevation, z_factor, dx)
    return np.clip(_lit(slope, aspect, altitude_deg, azimuth_deg), 0.0, 1.0).astype(np.float32)


def multi_hillshade(elevation, altitude_deg=45.0, z_factor=1.0, dx=1.0, azimuths_deg=DEFAULT_AZIMUTHS):
    """
    Mean of hillshades lit from several azimuths, so no slope direction is
    left fully dark. The gradients are only computed once.

    Returns:
        np.ndarray: (ny, nx) float32 in [0, 1]

    Author: B.G.
    """
    slope, aspect = slope_aspect(elevation, z_factor, dx)
    acc = np.zeros(slope.shape, dtype=np.float64)
    for azimuth_deg in azimuths_deg:
        acc += np.clip(_lit(slope, aspect, altitude_deg, azimuth_deg), 0.0, 1.0)
    return (acc / len(azimuths_deg)).astype(np.float32)
