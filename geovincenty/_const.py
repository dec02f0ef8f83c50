"""
Constants declarations for geovincenty
"""

import math

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = 6356752.314245  # Minor axis (meters)

# GRS80 Ellipsoid Constants
GRS80_A = 6378137.0
GRS80_F = 1 / 298.257222101
GRS80_B = 6356752.314140

M_2_PI = 2 * math.pi
M_3_PI = 3 * math.pi

# Solvers stop once successive estimates differ by no more than this (radians)
CONVERGENCE_TOLERANCE = 1e-12
