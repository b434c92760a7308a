"""Vector, rotation and sidereal-time primitives."""

import numpy as np
import pytest

from planephem.core.frames import (
    polar_to_cartesian, cartesian_to_polar, rotate_vector, rotation_matrix,
    invert_orthonormal, acose, asine, greenwich_sidereal_time,
    ecliptic_to_equatorial, equatorial_to_horizontal
)
from planephem.core.timescales import normalize_radians


@pytest.mark.parametrize("lon, lat, radius", [
    (0.3, 0.2, 1.0),
    (-2.9, -1.2, 0.00004),
    (3.0, 1.5, 30.0),
    (-0.001, 0.0, 5.2),
])
def test_polar_cartesian_round_trip(lon, lat, radius):
    p = cartesian_to_polar(polar_to_cartesian(lon, lat, radius))
    assert p.longitude == pytest.approx(lon, abs=1e-9)
    assert p.latitude == pytest.approx(lat, abs=1e-9)
    assert p.radius == pytest.approx(radius, abs=1e-9)


def test_latitude_exact_at_pole():
    p = cartesian_to_polar(np.array([0.0, 0.0, 2.0]))
    assert p.latitude == pytest.approx(np.pi / 2)
    assert p.radius == pytest.approx(2.0)


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_rotation_preserves_magnitude(axis):
    v = np.array([0.3, -1.7, 2.2])
    r = rotate_vector(v, 1.234, axis)
    assert np.linalg.norm(r) == pytest.approx(np.linalg.norm(v), rel=1e-12)
    assert r[axis] == v[axis]
    np.testing.assert_allclose(rotate_vector(r, -1.234, axis), v, atol=1e-12)


def test_rotation_is_right_handed():
    np.testing.assert_allclose(
        rotate_vector(np.array([1.0, 0.0, 0.0]), np.pi / 2, 2),
        [0.0, 1.0, 0.0], atol=1e-15)


def test_rotate_vector_returns_copy():
    v = np.array([1.0, 2.0, 3.0])
    rotate_vector(v, 0.5, 0)
    np.testing.assert_array_equal(v, [1.0, 2.0, 3.0])


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_rotation_matrix_matches_rotate_vector(axis):
    v = np.array([0.4, 0.5, -0.6])
    np.testing.assert_allclose(rotation_matrix(0.7, axis) @ v,
                               rotate_vector(v, 0.7, axis), atol=1e-15)


def test_invert_orthonormal_is_transpose():
    R = rotation_matrix(0.3, 0) @ rotation_matrix(-1.1, 2)
    np.testing.assert_allclose(invert_orthonormal(R), R.T)
    np.testing.assert_allclose(invert_orthonormal(R.reshape(9)), R.T.reshape(9))
    np.testing.assert_allclose(invert_orthonormal(R) @ R, np.eye(3), atol=1e-15)


def test_clamped_inverse_trig():
    assert acose(1.0000001) == 0.0
    assert acose(-3.0) == pytest.approx(np.pi)
    assert asine(1.5) == pytest.approx(np.pi / 2)
    assert asine(-1.0) == pytest.approx(-np.pi / 2)
    assert asine(0.5) == pytest.approx(np.pi / 6)


@pytest.mark.parametrize("jd, expected_deg", [
    (2446895.5, 197.693195),        # Meeus ex. 12.a, 1987 Apr 10 0h UT
    (2446896.30625, 128.7378734),   # Meeus ex. 12.b, 1987 Apr 10 19:21 UT
])
def test_greenwich_sidereal_time(jd, expected_deg):
    gmst = np.rad2deg(normalize_radians(greenwich_sidereal_time(jd)))
    assert gmst == pytest.approx(expected_deg, abs=1e-4)


def test_ecliptic_pole_tilts_by_obliquity():
    eps = 0.409
    equ = ecliptic_to_equatorial(np.array([0.0, 0.0, 1.0]), eps)
    assert cartesian_to_polar(equ).latitude == pytest.approx(np.pi / 2 - eps)


def test_object_on_meridian_at_zenith():
    lst, lat = 1.1, np.deg2rad(40.0)
    hor, hour_angle = equatorial_to_horizontal(polar_to_cartesian(lst, lat), lst, lat)
    assert hour_angle == pytest.approx(0.0, abs=1e-12)
    assert hor[2] == pytest.approx(1.0)


def test_celestial_pole_altitude_equals_latitude():
    lat = np.deg2rad(52.0)
    hor, _ = equatorial_to_horizontal(np.array([0.0, 0.0, 1.0]), 4.0, lat)
    assert cartesian_to_polar(hor).latitude == pytest.approx(lat)
    # pole lies due north: azimuth pi from south
    assert abs(np.arctan2(hor[1], hor[0])) == pytest.approx(np.pi)


def test_hour_angle_positive_west_of_meridian():
    lst, lat = 2.0, np.deg2rad(30.0)
    equ = polar_to_cartesian(lst - 0.5, 0.0)    # RA half a radian east of lst
    _, hour_angle = equatorial_to_horizontal(equ, lst, lat)
    assert hour_angle == pytest.approx(0.5)
