"""
Geocentric position of the Moon.

Truncated ELP-2000/82 series as given by Meeus: 60 periodic terms for
longitude and distance, 60 for latitude, plus the additive corrections
for Venus (A1), Jupiter (A2) and the flattening of the Earth (L' - F).
Terms involving the Sun's mean anomaly M are scaled by E^|M| to account
for the decreasing eccentricity of the Earth's orbit.

Accuracy is about 10" in longitude and 4" in latitude.

Output is the mean equinox of date (no nutation), ecliptic coordinates,
distance in km between the centres of the Earth and the Moon.

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 47
"""

from __future__ import annotations

import numpy as np

from ..core.timescales import normalize_radians
from ..core.types import PolarCoordinates
from .lunar_data import LONGITUDE_DISTANCE_TERMS, LATITUDE_TERMS

# ---------------------------------------------------------------------------
# Fundamental arguments: degrees, polynomial in T (c0 + c1 T + ... + c4 T^4)
# ---------------------------------------------------------------------------
MEAN_LONGITUDE = np.array([218.3164477, 481267.88123421, -0.0015786,
                           1.85583502e-6, -1.53388349e-8])       # L'
MEAN_ELONGATION = np.array([297.8501921, 445267.1114034, -0.0018819,
                            1.83194472e-6, -8.84447e-9])          # D
SUN_MEAN_ANOMALY = np.array([357.5291092, 35999.0502909, -0.0001536,
                             4.08329931e-8, 0.0])                 # M
MOON_MEAN_ANOMALY = np.array([134.9633964, 477198.8675055, 0.0087414,
                              1.43474081e-5, -6.79717238e-8])     # M'
ARGUMENT_OF_LATITUDE = np.array([93.2720950, 483202.0175233, -0.0036539,
                                 -2.83607487e-7, 1.15833247e-9])  # F

MEAN_DISTANCE_KM = 385000.56

_LR = np.array(LONGITUDE_DISTANCE_TERMS, dtype=float)
_LR_MULT = _LR[:, 0:4]
_LR_SL = _LR[:, 4]
_LR_SR = _LR[:, 5]
_LR_M = np.abs(_LR[:, 1])

_B = np.array(LATITUDE_TERMS, dtype=float)
_B_MULT = _B[:, 0:4]
_B_SB = _B[:, 4]
_B_M = np.abs(_B[:, 1])


def _poly_deg(coeffs: np.ndarray, t: float) -> float:
    """Evaluate a degree polynomial in t and return radians."""
    return float(np.deg2rad(np.polynomial.polynomial.polyval(t, coeffs)))


def lunar_arguments(t: float) -> dict[str, float]:
    """Fundamental lunar arguments at time t.

    Args:
        t: Julian centuries from J2000.0 (TT).

    Returns:
        Mapping with keys Lp, D, M, Mp, F [rad] and E (dimensionless).
    """
    return {
        "Lp": _poly_deg(MEAN_LONGITUDE, t),
        "D": _poly_deg(MEAN_ELONGATION, t),
        "M": _poly_deg(SUN_MEAN_ANOMALY, t),
        "Mp": _poly_deg(MOON_MEAN_ANOMALY, t),
        "F": _poly_deg(ARGUMENT_OF_LATITUDE, t),
        "E": 1.0 - 0.002516 * t - 0.0000074 * t * t,
    }


def moon_position(t: float) -> PolarCoordinates:
    """Geocentric ecliptic position of the Moon.

    Args:
        t: Julian centuries from J2000.0 (TT).

    Returns:
        PolarCoordinates: longitude [rad, 0..2pi), latitude [rad],
        radius [km].
    """
    a = lunar_arguments(t)
    Lp, F, E = a["Lp"], a["F"], a["E"]
    fund = np.array([a["D"], a["M"], a["Mp"], F])

    A1 = np.deg2rad(119.75 + 131.849 * t)
    A2 = np.deg2rad(53.09 + 479264.290 * t)
    A3 = np.deg2rad(313.45 + 481266.484 * t)

    # Eccentricity factor: E for |M| = 1, E^2 for |M| = 2
    arg_lr = _LR_MULT @ fund
    ecc_lr = E ** _LR_M
    sum_l = float(np.sum(_LR_SL * ecc_lr * np.sin(arg_lr)))
    sum_r = float(np.sum(_LR_SR * ecc_lr * np.cos(arg_lr)))

    arg_b = _B_MULT @ fund
    sum_b = float(np.sum(_B_SB * E ** _B_M * np.sin(arg_b)))

    # Additive terms (Venus, Jupiter, flattening of the Earth)
    sum_l += (3958.0 * np.sin(A1)
              + 1962.0 * np.sin(Lp - F)
              + 318.0 * np.sin(A2))
    sum_b += (-2235.0 * np.sin(Lp)
              + 382.0 * np.sin(A3)
              + 175.0 * np.sin(A1 - F)
              + 175.0 * np.sin(A1 + F)
              + 127.0 * np.sin(Lp - a["Mp"])
              - 115.0 * np.sin(Lp + a["Mp"]))

    lon = normalize_radians(Lp + np.deg2rad(sum_l / 1.0e6))
    lat = float(np.deg2rad(sum_b / 1.0e6))
    dist_km = MEAN_DISTANCE_KM + sum_r / 1000.0

    return PolarCoordinates(longitude=lon, latitude=lat, radius=float(dist_km))
