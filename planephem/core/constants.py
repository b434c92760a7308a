"""
Physical and mathematical constants.

Sources:
    - Meeus, "Astronomical Algorithms", 2nd ed., for epochs and series scales
    - IAU 1976 for the astronomical unit and the speed of light
"""

import numpy as np

# ---------------------------------------------------------------------------
# Mathematical constants
# ---------------------------------------------------------------------------
TWO_PI = 2.0 * np.pi
PI_OVER_TWO = np.pi / 2.0
TWO_OVER_PI = 2.0 / np.pi
ARCSEC_PER_DEGREE = 3600.0
ARCSEC2RAD = np.pi / (180.0 * ARCSEC_PER_DEGREE)

# ---------------------------------------------------------------------------
# Time constants
# ---------------------------------------------------------------------------
J2000_JD = 2451545.0                    # JD of J2000.0 epoch (2000-01-01 12:00 TT)
DAYS_PER_CENTURY = 36525.0
HOURS_PER_DAY = 24
DAYS_PER_HOUR = 1.0 / HOURS_PER_DAY
SECONDS_PER_DAY = 86400.0

# Generic "did not happen" marker for fractional-day results
INVALID = -1.0

# ---------------------------------------------------------------------------
# Earth and light
# ---------------------------------------------------------------------------
AU_KM = 149597870.691                   # Astronomical unit [km]
C_LIGHT = 299792.458                    # Speed of light [km/s]
R_EARTH_MEAN = 6368.0                   # Mean radius used for parallax [km]

# ---------------------------------------------------------------------------
# Series scales
# ---------------------------------------------------------------------------
VSOP_SCALE = 1.0e-8                     # Table amplitudes -> rad / AU
NUTATION_SCALE = 1.0e-4                 # Table units -> arcseconds

# ---------------------------------------------------------------------------
# Lunar cycle
# ---------------------------------------------------------------------------
SYNODIC_MONTH = 29.530588861            # Mean new moon to new moon [days]
LUNATION_BASE = 2423436.40347           # Brown lunation 1: 1923 Jan 17 02:41 UT

# ---------------------------------------------------------------------------
# Rise / set reference altitudes [rad]
# ---------------------------------------------------------------------------
SUN_ALT = np.deg2rad(-0.83333)          # Refraction + solar semi-diameter
SUN_TOPO_ALT = np.deg2rad(-0.83555)     # Same, for topocentric positions
MOON_ALT = np.deg2rad(0.125)            # Geocentric lunar coordinates only
PLANET_ALT = np.deg2rad(-0.57)          # Point source, refraction only
CIVIL_TWILIGHT_ALT = np.deg2rad(-6.0)
NAUTICAL_TWILIGHT_ALT = np.deg2rad(-12.0)
ASTRONOMICAL_TWILIGHT_ALT = np.deg2rad(-18.0)
