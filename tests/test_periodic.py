"""VSOP87 periodic-series evaluation."""

import numpy as np
import pytest

from planephem.core.constants import TWO_PI
from planephem.core.exceptions import InvalidIndexError
from planephem.core.timescales import julian_centuries, normalize_degrees
from planephem.core.types import BodyKind, CoordinateKind, SeriesTerm
from planephem.series.periodic import (
    VSOP_BODIES, term_table, series_terms, evaluate_series, vsop_coordinate,
    vsop_position
)


def test_every_planet_has_six_power_groups():
    for body in VSOP_BODIES:
        for kind in CoordinateKind:
            groups = term_table(body, kind)
            assert len(groups) == 6
            assert all(g.ndim == 2 and g.shape[1] == 3 for g in groups)


def test_tables_are_read_only():
    group = term_table(BodyKind.MARS, CoordinateKind.RADIUS)[0]
    with pytest.raises(ValueError):
        group[0, 0] = 0.0


@pytest.mark.parametrize("body", [BodyKind.SUN, BodyKind.MOON, BodyKind.PLUTO])
def test_bodies_without_vsop_series(body):
    with pytest.raises(InvalidIndexError):
        term_table(body, CoordinateKind.LONGITUDE)


def test_bad_power_group():
    with pytest.raises(IndexError):
        series_terms(BodyKind.EARTH, CoordinateKind.LONGITUDE, 6)


def test_series_terms_as_records():
    terms = series_terms(BodyKind.EARTH, CoordinateKind.LONGITUDE, 0)
    assert terms[0] == SeriesTerm(175347046.0, 0.0, 0.0)
    assert terms[0].amplitude == 175347046.0


def test_evaluate_series_power_weighting():
    groups = [np.array([[1.0e8, 0.0, 0.0]]), np.empty((0, 3)),
              np.array([[1.0e8, 0.0, 0.0]])]
    # 1 + 0 * t + 1 * t^2 at t = 2
    assert evaluate_series(2.0, groups) == pytest.approx(5.0)


def test_evaluate_series_empty_groups():
    assert evaluate_series(0.3, [np.empty((0, 3))] * 6) == 0.0


def test_evaluate_series_normalize():
    groups = [np.array([[-1.0, 0.0, 0.0]])]
    value = evaluate_series(0.0, groups, scale=1.0, normalize=True)
    assert value == pytest.approx(TWO_PI - 1.0)


def test_earth_longitude_at_j2000():
    """True heliocentric longitude; the mean longitude is 100.466 deg."""
    lon = vsop_coordinate(0.0, BodyKind.EARTH, CoordinateKind.LONGITUDE)
    assert np.rad2deg(lon) == pytest.approx(100.378, abs=0.01)


def test_earth_1992_oct_13():
    """Meeus ex. 25.b, 1992 Oct 13.0 TD."""
    p = vsop_position(julian_centuries(2448908.5), BodyKind.EARTH)
    assert p.longitude_deg == pytest.approx(19.907372, abs=1e-5)
    assert p.latitude_deg == pytest.approx(-0.000179, abs=1e-5)
    assert p.radius == pytest.approx(0.99760775, abs=1e-7)


def test_venus_1992_dec_20():
    """Meeus ex. 32.a, 1992 Dec 20.0 TD."""
    p = vsop_position(julian_centuries(2448976.5), BodyKind.VENUS)
    assert normalize_degrees(p.longitude_deg) == pytest.approx(26.11428, abs=2e-4)
    assert p.latitude_deg == pytest.approx(-2.62070, abs=2e-4)
    assert p.radius == pytest.approx(0.724603, abs=1e-6)


@pytest.mark.parametrize("body, r_min, r_max", [
    (BodyKind.MERCURY, 0.30, 0.47),
    (BodyKind.MARS, 1.38, 1.67),
    (BodyKind.JUPITER, 4.95, 5.46),
    (BodyKind.SATURN, 9.0, 10.1),
    (BodyKind.URANUS, 18.2, 20.1),
    (BodyKind.NEPTUNE, 29.8, 30.4),
])
def test_planet_distances_plausible(body, r_min, r_max):
    for jd in (2451545.0, 2455000.0, 2460000.0):
        p = vsop_position(julian_centuries(jd), body)
        assert r_min < p.radius < r_max
        assert 0.0 <= p.longitude < TWO_PI
        assert abs(p.latitude) < np.deg2rad(7.5)
