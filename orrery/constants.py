"""Physical constants and reference values shared by the simulation."""

import math

# Gravitational constant, m^3 kg^-1 s^-2
G_REAL = 6.674e-11

# Distances (meters)
AU = 1.496e11
LUNAR_DIST = 3.844e8
GEO_RADIUS = 4.216e7

# Masses (kg)
SOLAR_MASS = 1.989e30
EARTH_MASS = 5.972e24
MOON_MASS = 7.342e22

# Radii (meters)
SOLAR_RADIUS = 6.96e8
EARTH_RADIUS_METERS = 6.371e6
MOON_RADIUS = 1.737e6

# Time (seconds)
DAY = 86400.0
SIDEREAL_DAY = 86164.0
JULIAN_YEAR = 365.25 * DAY

# Default integrator step: six minutes
TIME_STEP_BASE = 360.0

TWO_PI = 2.0 * math.pi
