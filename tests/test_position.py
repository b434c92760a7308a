"""Position pipeline and the PlanetData facade."""

import numpy as np
import pytest

from planephem.core.config import CorrectionConfig
from planephem.core.constants import AU_KM
from planephem.core.exceptions import NotComputedError
from planephem.core.timescales import julian_centuries, normalize_degrees
from planephem.core.types import BodyKind, ObserverLocation
from planephem.ephemeris.position import (
    PlanetData, compute_position, heliocentric_position
)
from planephem.series.periodic import vsop_position

PHILADELPHIA = ObserverLocation.from_degrees(40.0, -75.8, timezone=-5)
GEOCENTRIC = CorrectionConfig(apply_topocentric=False)


def test_sun_is_earth_turned_half_a_circle():
    jd = 2448908.5
    earth = vsop_position(julian_centuries(jd), BodyKind.EARTH)
    sun = heliocentric_position(BodyKind.SUN, jd)
    assert sun.longitude == earth.longitude + np.pi
    assert sun.latitude == -earth.latitude
    assert sun.radius == earth.radius


def test_sun_geocentric_1992_oct_13():
    """Meeus ex. 25.b: geometric longitude 199.907372 deg."""
    r = compute_position(BodyKind.SUN, 2448908.5, config=GEOCENTRIC)
    assert normalize_degrees(np.rad2deg(r.ecliptic_longitude)) == pytest.approx(199.907372, abs=1e-5)
    assert r.distance == pytest.approx(0.99760775, abs=1e-7)
    assert r.light_time_days == 0.0
    # apparent place (with nutation and aberration) is within 0.01 deg
    assert np.rad2deg(r.right_ascension) % 360.0 == pytest.approx(198.378178, abs=0.02)
    assert np.rad2deg(r.declination) == pytest.approx(-7.783871, abs=0.02)


def test_solar_coordinates_on_every_result():
    r = compute_position(BodyKind.MARS, 2448908.5)
    sun = heliocentric_position(BodyKind.SUN, 2448908.5)
    assert r.solar == sun


def test_venus_light_time_1992_dec_20():
    """Meeus ex. 33.a: geocentric Venus corrected for light time."""
    r = compute_position(BodyKind.VENUS, 2448976.5, config=GEOCENTRIC)
    assert r.light_time_days == pytest.approx(0.0052606, abs=2e-6)
    assert normalize_degrees(np.rad2deg(r.ecliptic_longitude)) == pytest.approx(313.08102, abs=1e-3)
    assert np.rad2deg(r.ecliptic_latitude) == pytest.approx(-2.08474, abs=1e-3)
    assert r.distance == pytest.approx(0.910947, abs=1e-4)


def test_light_time_toggle():
    on = compute_position(BodyKind.JUPITER, 2455000.5, config=GEOCENTRIC)
    off = compute_position(BodyKind.JUPITER, 2455000.5, config=GEOCENTRIC,
                           apply_light_time=False)
    assert off.light_time_days == 0.0
    assert 0.02 < on.light_time_days < 0.04
    assert on.ecliptic_longitude != off.ecliptic_longitude


@pytest.mark.parametrize("body", list(BodyKind))
def test_result_ranges(body):
    r = compute_position(body, 2453000.5, observer=PHILADELPHIA)
    assert -np.pi / 2 <= r.declination <= np.pi / 2
    assert -np.pi <= r.right_ascension <= np.pi
    assert -np.pi <= r.hour_angle <= np.pi
    assert -np.pi / 2 <= r.altitude <= np.pi / 2
    assert 0.0 <= r.light_time_days < 0.3


@pytest.mark.parametrize("body", [BodyKind.SUN, BodyKind.EARTH, BodyKind.MOON])
def test_no_light_time_for_sun_earth_moon(body):
    assert compute_position(body, 2453000.5).light_time_days == 0.0


def test_moon_distance_matches_series():
    """Meeus ex. 47.a distance, 368409.7 km."""
    r = compute_position(BodyKind.MOON, 2448724.5, config=GEOCENTRIC)
    assert r.distance * AU_KM == pytest.approx(368409.7, abs=0.5)
    assert normalize_degrees(np.rad2deg(r.ecliptic_longitude)) == pytest.approx(133.162655, abs=1e-4)


def test_moon_heliocentric_is_earth_plus_moon():
    jd = 2448724.5
    r = compute_position(BodyKind.MOON, jd, config=GEOCENTRIC)
    earth = vsop_position(julian_centuries(jd), BodyKind.EARTH)
    assert r.heliocentric.radius == pytest.approx(earth.radius, abs=0.003)
    assert normalize_degrees(np.rad2deg(r.heliocentric.longitude)) == pytest.approx(
        normalize_degrees(earth.longitude_deg), abs=0.2)


def test_lunar_parallax_below_one_degree():
    jd = 2448724.5
    geo = compute_position(BodyKind.MOON, jd, observer=PHILADELPHIA, config=GEOCENTRIC)
    topo = compute_position(BodyKind.MOON, jd, observer=PHILADELPHIA)
    shift = np.arccos(np.clip(
        np.dot(geo.ecliptic_xyz, topo.ecliptic_xyz) / (geo.distance * topo.distance),
        -1.0, 1.0))
    assert 0.0 < shift < np.deg2rad(1.0)
    assert topo.distance < geo.distance + 6400.0 / AU_KM


def test_altitude_from_hour_angle_and_declination():
    r = compute_position(BodyKind.MARS, 2453000.5, observer=PHILADELPHIA)
    lat = PHILADELPHIA.latitude
    sin_alt = (np.sin(lat) * np.sin(r.declination)
               + np.cos(lat) * np.cos(r.declination) * np.cos(r.hour_angle))
    assert r.altitude == pytest.approx(np.arcsin(sin_alt), abs=1e-10)


def test_delta_t_only_moves_sidereal_time():
    a = compute_position(BodyKind.SATURN, 2453000.5, delta_t=0.0, config=GEOCENTRIC)
    b = compute_position(BodyKind.SATURN, 2453000.5, delta_t=64.0 / 86400.0,
                         config=GEOCENTRIC)
    assert a.right_ascension == b.right_ascension
    assert a.local_sidereal_time != b.local_sidereal_time


def test_keyword_overrides_config():
    cfg = CorrectionConfig(apply_topocentric=True, apply_light_time=True)
    r = compute_position(BodyKind.MARS, 2453000.5, config=cfg, apply_light_time=False)
    assert r.light_time_days == 0.0


def test_result_vectors_are_read_only():
    r = compute_position(BodyKind.VENUS, 2453000.5)
    with pytest.raises(ValueError):
        r.ecliptic_xyz[0] = 1.0


def test_repeated_calls_identical():
    a = compute_position(BodyKind.URANUS, 2453000.5, observer=PHILADELPHIA)
    b = compute_position(BodyKind.URANUS, 2453000.5, observer=PHILADELPHIA)
    np.testing.assert_array_equal(a.horizontal_xyz, b.horizontal_xyz)


class TestPlanetData:

    def test_accessors_fail_before_calc(self):
        pd = PlanetData()
        assert pd.result is None
        for name in ("right_ascension", "declination", "altitude", "azimuth",
                     "hour_angle", "heliocentric", "ecliptic", "solar"):
            with pytest.raises(NotComputedError):
                getattr(pd, name)

    def test_not_computed_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            PlanetData().julian_day

    def test_calc_exposes_result(self):
        pd = PlanetData(GEOCENTRIC)
        result = pd.calc(BodyKind.JUPITER, 2453000.5, PHILADELPHIA)
        assert pd.result is result
        assert pd.body is BodyKind.JUPITER
        assert pd.right_ascension == result.right_ascension
        assert pd.altitude == result.altitude

    def test_calc_longitude_leaves_result_untouched(self):
        pd = PlanetData()
        lon = pd.calc_longitude(BodyKind.MOON, 2448724.5)
        assert np.rad2deg(lon) == pytest.approx(133.162655, abs=1e-4)
        assert pd.result is None

    def test_instances_share_nothing(self):
        a, b = PlanetData(), PlanetData()
        a.calc(BodyKind.MARS, 2453000.5)
        assert b.result is None
