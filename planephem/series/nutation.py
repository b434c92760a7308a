"""
Nutation and obliquity of the ecliptic.

Nutation uses the IAU 1980 theory truncated to the 63 largest terms
(one explicit Omega term plus 62 tabulated), as given by Meeus. Each
tabulated row packs the five integer multipliers of the fundamental
arguments (D, M, M', F, Omega) as base-5 digits offset by 2, followed by
the sine coefficient for delta-psi and the cosine coefficient for
delta-epsilon, both in units of 0.0001".

Mean obliquity uses Laskar's 10-term polynomial in U = T / 100,
valid for years -8000 .. +12000.

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 22
    Laskar (1986), A&A 157, 59
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.constants import ARCSEC2RAD, ARCSEC_PER_DEGREE, NUTATION_SCALE

# ---------------------------------------------------------------------------
# Mean obliquity
# ---------------------------------------------------------------------------
OBLIQUITY_J2000_ARCSEC = 23.0 * ARCSEC_PER_DEGREE + 26.0 * 60.0 + 21.448

OBLIQUITY_COEFFS = np.array([
    -468093.0, -155.0, 199925.0, -5138.0, -24967.0,
    -3905.0, 712.0, 2787.0, 579.0, 245.0
])

# ---------------------------------------------------------------------------
# Fundamental arguments (D, M, M', F, Omega)
# angle_deg = linear * T + c0 / 1e5 + c1 * 1e-7 * T^2 + T^3 / c2
# ---------------------------------------------------------------------------
_LINEAR = np.array([
    445267.111480, 35999.050340, 477198.867398, 483202.017538, -1934.136261
])

_POLY = np.array([
    [29785036.0, -19142.0, 189474.0],
    [35752772.0, -1603.0, -300000.0],
    [13496298.0, 86972.0, 56250.0],
    [9327191.0, -36825.0, 327270.0],
    [12504452.0, 20708.0, 450000.0],
])

# fmt: off
# (packed multipliers, delta-psi coefficient, delta-epsilon coefficient)
_TERMS = np.array([
    ( 324, -13187, 5736), (1574, -2274,  977), (1564,  2062, -895),
    (1687,   1426,   54), (1587,   712,   -7), ( 449,  -517,  224),
    (1573,   -386,  200), (1599,  -301,  129), ( 199,   217,  -95),
    ( 337,   -158,    0), ( 323,   129,  -70), (1549,   123,  -53),
    (2812,     63,    0), (1588,    63,  -33), (2799,   -59,   26),
    (1538,    -58,   32), (1598,   -51,   27), ( 362,    48,    0),
    (1523,     46,  -24), (2824,   -38,   16), (1624,   -31,   13),
    (1612,     29,    0), ( 349,    29,  -12), (1572,    26,    0),
    ( 322,    -22,    0), (1548,    21,  -10), (1812,    17,    0),
    (2788,     16,   -8), ( 574,   -16,    7), (1688,   -15,    9),
    ( 338,    -13,    7), (1438,   -12,    6), (1602,    11,    0),
    (2798,    -10,    5), (2849,    -8,    3), (1699,     7,   -3),
    ( 462,     -7,    0), (1449,    -7,    3), (2823,    -7,    3),
    (2837,      6,    0), ( 374,     6,   -3), ( 348,     6,   -3),
    (2763,     -6,    3), (2813,    -6,    3), (1462,     5,    0),
    ( 198,     -5,    3), ( 313,    -5,    3), (1623,    -5,    3),
    (1524,     -3,    0), ( 363,     4,    0), ( 448,     4,    0),
    (1474,     -3,    0), (2674,    -3,    0), (1649,    -3,    0),
    (2699,     -3,    0), ( 837,    -3,    0), ( 962,    -4,    0),
    ( 437,     -4,    0), (1577,     4,    0), (2187,    -4,    0),
    (1712,     -3,    0), (1597,     3,    0),
])

# Time-dependent parts, 0.0001" per millennium: first 16 apply to
# delta-psi rows 0..15, the remaining 9 to delta-epsilon rows 0..8.
_TIME_DEPENDENT = np.array([
    -16, -2, 2, -34, 1, 12, -4, 0, -5, 0, 1, 0, 0, 1, 0, -1,
    -31, -5, 5, -1, 0, -6, 0, -1, 3
])
# fmt: on

N_NUTATION_TERMS = len(_TERMS)


def _unpack_multipliers(packed: np.ndarray) -> np.ndarray:
    """Decode base-5 packed multipliers into an (N, 5) integer matrix."""
    powers = 5 ** np.arange(4, -1, -1)          # D is the most significant digit
    return (packed[:, None] // powers[None, :]) % 5 - 2


_MULTIPLIERS = _unpack_multipliers(_TERMS[:, 0])
_PSI_BASE = _TERMS[:, 1].astype(float)
_EPS_BASE = _TERMS[:, 2].astype(float)

_PSI_RATE = np.zeros(N_NUTATION_TERMS)
_PSI_RATE[:16] = _TIME_DEPENDENT[:16]
_PSI_RATE[26] = 1.0                             # rows 26 and 28 carry +/-1
_PSI_RATE[28] = -1.0

_EPS_RATE = np.zeros(N_NUTATION_TERMS)
_EPS_RATE[:9] = _TIME_DEPENDENT[16:]


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude and obliquity.

    A component that was not requested is None.

    Attributes:
        delta_psi: Nutation in longitude [arcsec].
        delta_epsilon: Nutation in obliquity [arcsec].
    """
    delta_psi: Optional[float]
    delta_epsilon: Optional[float]

    @property
    def delta_psi_rad(self) -> Optional[float]:
        return None if self.delta_psi is None else self.delta_psi * ARCSEC2RAD

    @property
    def delta_epsilon_rad(self) -> Optional[float]:
        return None if self.delta_epsilon is None else self.delta_epsilon * ARCSEC2RAD


def mean_obliquity(t: float) -> float:
    """Mean obliquity of the ecliptic.

    Args:
        t: Julian centuries from J2000.0 (valid |t| < 100).

    Returns:
        Mean obliquity epsilon_0 [rad].
    """
    u0 = t / 100.0
    u = u0
    arcsec = OBLIQUITY_J2000_ARCSEC
    for coeff in OBLIQUITY_COEFFS:
        arcsec += u * coeff / 100.0
        u *= u0
    return float(np.deg2rad(arcsec / ARCSEC_PER_DEGREE))


def fundamental_arguments(t: float) -> np.ndarray:
    """D, M, M', F, Omega at time t [rad], shape (5,)."""
    t2 = t * t
    t3 = t2 * t
    deg = (_LINEAR * t + _POLY[:, 0] / 100000.0
           + t2 * _POLY[:, 1] * 1.0e-7 + t3 / _POLY[:, 2])
    return np.deg2rad(deg)


def nutation(t: float, want_longitude: bool = True,
             want_obliquity: bool = True) -> Nutation:
    """Nutation in longitude and obliquity.

    Either component may be skipped; the one that is computed is the same
    whether or not the other was requested.

    Args:
        t: Julian centuries from J2000.0.
        want_longitude: Compute delta-psi.
        want_obliquity: Compute delta-epsilon.

    Returns:
        Nutation in arcseconds.
    """
    angles = fundamental_arguments(t)
    omega = angles[4]
    args = _MULTIPLIERS @ angles

    d_psi = None
    if want_longitude:
        coeff = _PSI_BASE + _PSI_RATE * t / 10.0
        d_psi = ((-171996.0 - 174.2 * t) * np.sin(omega)
                 + float(np.sum(coeff * np.sin(args))))
        d_psi = float(d_psi) * NUTATION_SCALE

    d_eps = None
    if want_obliquity:
        coeff = _EPS_BASE + _EPS_RATE * t / 10.0
        d_eps = ((92025.0 + 8.9 * t) * np.cos(omega)
                 + float(np.sum(coeff * np.cos(args))))
        d_eps = float(d_eps) * NUTATION_SCALE

    return Nutation(delta_psi=d_psi, delta_epsilon=d_eps)


def true_obliquity(t: float) -> float:
    """Mean obliquity plus nutation in obliquity [rad]."""
    return mean_obliquity(t) + nutation(t, want_longitude=False).delta_epsilon_rad
