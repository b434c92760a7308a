"""
Heliocentric position of Pluto.

Periodic series in the mean longitudes of Jupiter (J), Saturn (S) and
Pluto (P): 43 terms, each a sine/cosine pair for longitude, latitude and
radius. Coordinates refer to the standard equinox J2000.0.

Valid only for 1885-2099; accuracy 0.07" in longitude, 0.02" in latitude
and 0.000006 AU in radius inside that span.

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 37, Table 37.A
"""

from __future__ import annotations

import numpy as np

from ..core.constants import J2000_JD, DAYS_PER_CENTURY
from ..core.types import PolarCoordinates

VALID_JD_RANGE = (2409542.5, 2488069.5)   # 1885-01-01 .. 2100-01-01

# fmt: off
# (j, s, p,  lon_sin, lon_cos,  lat_sin, lat_cos,  rad_sin, rad_cos)
# longitude/latitude in 1e-6 degrees, radius in 1e-7 AU
PLUTO_TERMS = np.array([
    ( 0,  0,  1, -19799805,  19850055,  -5452852, -14974862,  66865439,  68951812),
    ( 0,  0,  2,    897144,  -4954829,   3527812,   1672790, -11827535,   -332538),
    ( 0,  0,  3,    611149,   1211027,  -1050748,    327647,   1593179,  -1438890),
    ( 0,  0,  4,   -341243,   -189585,    178690,   -292153,    -18444,    483220),
    ( 0,  0,  5,    129287,    -34992,     18650,    100340,    -65977,    -85431),
    ( 0,  0,  6,    -38164,     30893,    -30697,    -25823,     31174,     -6032),
    ( 0,  1, -1,     20442,     -9987,      4878,     11248,     -5794,     22161),
    ( 0,  1,  0,     -4063,     -5071,       226,       -64,      4601,      4032),
    ( 0,  1,  1,     -6016,     -3336,      2030,      -836,     -1729,       234),
    ( 0,  1,  2,     -3956,      3039,        69,      -604,      -415,       702),
    ( 0,  1,  3,      -667,      3572,      -247,      -567,       239,       723),
    ( 0,  2, -2,      1276,       501,       -57,         1,        67,       -67),
    ( 0,  2, -1,      1152,      -917,      -122,       175,      1034,      -451),
    ( 0,  2,  0,       630,     -1277,       -49,      -164,      -129,       504),
    ( 1, -1,  0,      2571,      -459,      -197,       199,       480,      -231),
    ( 1, -1,  1,       899,     -1449,       -25,       217,         2,      -441),
    ( 1,  0, -3,     -1016,      1043,       589,      -248,     -3359,       265),
    ( 1,  0, -2,     -2343,     -1012,      -269,       711,      7856,     -7832),
    ( 1,  0, -1,      7042,       788,       185,       193,        36,     45763),
    ( 1,  0,  0,      1199,      -338,       315,       807,      8663,      8547),
    ( 1,  0,  1,       418,       -67,      -130,       -43,      -809,      -769),
    ( 1,  0,  2,       120,      -274,         5,         3,       263,      -144),
    ( 1,  0,  3,       -60,      -159,         2,        17,      -126,        32),
    ( 1,  0,  4,       -82,       -29,         2,         5,       -35,       -16),
    ( 1,  1, -3,       -36,       -20,         2,         3,       -19,        -4),
    ( 1,  1, -2,       -40,         7,         3,         1,       -15,         8),
    ( 1,  1, -1,       -14,        22,         2,        -1,        -4,        12),
    ( 1,  1,  0,         4,        13,         1,        -1,         5,         6),
    ( 1,  1,  1,         5,         2,         0,        -1,         3,         1),
    ( 1,  1,  3,        -1,         0,         0,         0,         6,        -2),
    ( 2,  0, -6,         2,         0,         0,        -2,         2,         2),
    ( 2,  0, -5,        -4,         5,         2,         2,        -2,        -2),
    ( 2,  0, -4,         4,        -7,        -7,         0,        14,        13),
    ( 2,  0, -3,        14,        24,        10,        -8,       -63,        13),
    ( 2,  0, -2,       -49,       -34,        -3,        20,       136,      -236),
    ( 2,  0, -1,       163,       -48,         6,         5,       273,      1065),
    ( 2,  0,  0,         9,        24,        14,        17,       251,       149),
    ( 2,  0,  1,        -4,         1,        -2,         0,       -25,        -9),
    ( 2,  0,  2,        -3,         1,         0,         0,         9,        -2),
    ( 2,  0,  3,         1,         3,         0,         0,        -8,         7),
    ( 3,  0, -2,        -3,        -1,         0,         1,         2,       -10),
    ( 3,  0, -1,         5,        -3,         0,         0,        19,        35),
    ( 3,  0,  0,         0,         0,         1,         0,        10,         2),
], dtype=float)
# fmt: on

N_PLUTO_TERMS = len(PLUTO_TERMS)


def pluto_position(jd: float) -> PolarCoordinates:
    """Heliocentric ecliptic position of Pluto (J2000.0).

    Args:
        jd: Julian Day (TT).

    Returns:
        PolarCoordinates (rad, rad, AU). Longitude is not reduced to
        [0, 2pi).
    """
    t = (jd - J2000_JD) / DAYS_PER_CENTURY

    # Mean longitudes [deg]
    J = 34.35 + 3034.9057 * t
    S = 50.08 + 1222.1138 * t
    P = 238.96 + 144.9600 * t

    a = np.deg2rad(PLUTO_TERMS[:, 0:3] @ np.array([J, S, P]))
    sin_a = np.sin(a)
    cos_a = np.cos(a)

    sum_lon = np.sum(PLUTO_TERMS[:, 3] * sin_a + PLUTO_TERMS[:, 4] * cos_a)
    sum_lat = np.sum(PLUTO_TERMS[:, 5] * sin_a + PLUTO_TERMS[:, 6] * cos_a)
    sum_rad = np.sum(PLUTO_TERMS[:, 7] * sin_a + PLUTO_TERMS[:, 8] * cos_a)

    return PolarCoordinates(
        longitude=float(np.deg2rad(238.958116 + 144.96 * t + sum_lon * 1.0e-6)),
        latitude=float(np.deg2rad(-3.908239 + sum_lat * 1.0e-6)),
        radius=float(40.7241346 + sum_rad * 1.0e-7)
    )


def in_valid_range(jd: float) -> bool:
    """Whether jd lies inside the span the series was fitted to."""
    return VALID_JD_RANGE[0] <= jd < VALID_JD_RANGE[1]
