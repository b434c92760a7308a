"""
Reference frame primitives.

Provides the vector and rotation operations used to move a position
between the frames of the pipeline:
    - Heliocentric ecliptic (of date)
    - Geocentric / topocentric ecliptic
    - Equatorial (of date)
    - Horizontal (alt-az, south = 0 azimuth)

Vectors are numpy arrays of shape (3,). Every function returns a new
array; inputs are never modified.
"""

from __future__ import annotations

import numpy as np

from .constants import J2000_JD, DAYS_PER_CENTURY
from .types import PolarCoordinates


def polar_to_cartesian(lon: float, lat: float, radius: float = 1.0) -> np.ndarray:
    """Convert spherical coordinates to a Cartesian vector.

    Args:
        lon: Longitude [rad].
        lat: Latitude [rad].
        radius: Distance (any unit; the output has the same unit).

    Returns:
        [x, y, z], shape (3,).
    """
    cos_lat = np.cos(lat)
    return np.array([
        np.cos(lon) * cos_lat * radius,
        np.sin(lon) * cos_lat * radius,
        np.sin(lat) * radius
    ])


def cartesian_to_polar(vec: np.ndarray) -> PolarCoordinates:
    """Convert a Cartesian vector to spherical coordinates.

    Latitude uses atan2(z, sqrt(x^2 + y^2)) rather than asin(z / r): it
    keeps full precision near the poles and needs no unit vector.

    Args:
        vec: [x, y, z], shape (3,).

    Returns:
        PolarCoordinates with longitude in [-pi, pi].
    """
    x, y, z = vec
    rho = np.hypot(x, y)
    return PolarCoordinates(
        longitude=float(np.arctan2(y, x)),
        latitude=float(np.arctan2(z, rho)),
        radius=float(np.sqrt(x * x + y * y + z * z))
    )


def rotate_vector(vec: np.ndarray, angle: float, axis: int) -> np.ndarray:
    """Rotate a vector about one coordinate axis.

    The two components orthogonal to ``axis`` are rotated right-handedly:
        v[a] = v[a] cos(angle) - v[b] sin(angle)
        v[b] = v[b] cos(angle) + v[a] sin(angle)
    with a = (axis + 1) % 3, b = (axis + 2) % 3.

    Args:
        vec: Vector, shape (3,).
        angle: Rotation angle [rad].
        axis: 0 (x), 1 (y) or 2 (z).

    Returns:
        Rotated vector, shape (3,). Magnitude is preserved.
    """
    s, c = np.sin(angle), np.cos(angle)
    a = (axis + 1) % 3
    b = (axis + 2) % 3

    out = np.array(vec, dtype=float)
    out[a] = vec[a] * c - vec[b] * s
    out[b] = vec[b] * c + vec[a] * s
    return out


def rotation_matrix(angle: float, axis: int) -> np.ndarray:
    """3x3 matrix R such that R @ v == rotate_vector(v, angle, axis)."""
    s, c = np.sin(angle), np.cos(angle)
    a = (axis + 1) % 3
    b = (axis + 2) % 3

    R = np.eye(3)
    R[a, a] = c
    R[a, b] = -s
    R[b, a] = s
    R[b, b] = c
    return R


def invert_orthonormal(matrix: np.ndarray) -> np.ndarray:
    """Invert an orthonormal 3x3 matrix by swapping rows and columns.

    Accepts either a (3, 3) matrix or its row-major flat (9,) form and
    returns the same shape.
    """
    m = np.array(matrix, dtype=float)
    flat = m.reshape(9)
    flat[[1, 3]] = flat[[3, 1]]
    flat[[2, 6]] = flat[[6, 2]]
    flat[[5, 7]] = flat[[7, 5]]
    return flat.reshape(m.shape)


def acose(arg: float) -> float:
    """Arc cosine with the argument clamped to [-1, 1]."""
    if arg >= 1.0:
        return 0.0
    if arg <= -1.0:
        return float(np.pi)
    return float(np.arccos(arg))


def asine(arg: float) -> float:
    """Arc sine with the argument clamped to [-1, 1]."""
    if arg >= 1.0:
        return float(np.pi / 2.0)
    if arg <= -1.0:
        return float(-np.pi / 2.0)
    return float(np.arcsin(arg))


def greenwich_sidereal_time(jd_ut: float) -> float:
    """Greenwich mean sidereal time from a Julian Day in UT.

    Meeus eq. 12.4. The whole and fractional days are fed separately
    to keep precision in the large 360.98...-degree-per-day term.

    Args:
        jd_ut: Julian Day (UT).

    Returns:
        GMST in radians, NOT wrapped (callers only take sin/cos of it).
    """
    d = jd_ut - J2000_JD
    T = d / DAYS_PER_CENTURY
    whole = np.floor(d)
    frac = d - whole

    gmst_deg = (280.46061837
                + 360.98564736629 * frac
                + 0.98564736629 * whole
                + T * T * (3.87933e-4 - T / 38710000.0))
    return float(np.deg2rad(gmst_deg))


def ecliptic_to_equatorial(vec_ecl: np.ndarray, obliquity: float) -> np.ndarray:
    """Rotate an ecliptic vector into the equatorial frame of date."""
    return rotate_vector(vec_ecl, obliquity, 0)


def equatorial_to_horizontal(vec_equ: np.ndarray, local_sidereal_time: float,
                             latitude: float) -> tuple[np.ndarray, float]:
    """Rotate an equatorial vector into the observer's horizontal frame.

    Args:
        vec_equ: Equatorial vector of date, shape (3,).
        local_sidereal_time: Local sidereal time [rad].
        latitude: Observer latitude [rad].

    Returns:
        vec_hor: Horizontal vector (x south, y west, z zenith), shape (3,).
        hour_angle: Hour angle [rad], taken before the latitude rotation.
    """
    v = rotate_vector(vec_equ, -local_sidereal_time, 2)
    hour_angle = float(np.arctan2(-v[1], v[0]))
    v = rotate_vector(v, latitude - np.pi / 2.0, 1)
    return v, hour_angle
