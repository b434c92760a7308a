"""Lunar series (Meeus ex. 47.a, 1992 Apr 12 0h TD)."""

import numpy as np
import pytest

from planephem.core.timescales import julian_centuries, normalize_degrees
from planephem.series.lunar import lunar_arguments, moon_position

T = julian_centuries(2448724.5)


def test_fundamental_arguments():
    a = lunar_arguments(T)
    assert normalize_degrees(np.rad2deg(a["Lp"])) == pytest.approx(134.290182, abs=1e-5)
    assert normalize_degrees(np.rad2deg(a["D"])) == pytest.approx(113.842304, abs=1e-5)
    assert normalize_degrees(np.rad2deg(a["M"])) == pytest.approx(97.643514, abs=1e-5)
    assert normalize_degrees(np.rad2deg(a["Mp"])) == pytest.approx(5.150833, abs=1e-5)
    assert normalize_degrees(np.rad2deg(a["F"])) == pytest.approx(219.889721, abs=1e-5)
    assert a["E"] == pytest.approx(1.000194, abs=1e-6)


def test_moon_position():
    p = moon_position(T)
    assert p.longitude_deg == pytest.approx(133.162655, abs=1e-4)
    assert p.latitude_deg == pytest.approx(-3.229126, abs=1e-4)
    assert p.radius == pytest.approx(368409.7, abs=0.5)


@pytest.mark.parametrize("jd", [2451545.0, 2453000.25, 2458000.75, 2460500.5])
def test_moon_bounds(jd):
    p = moon_position(julian_centuries(jd))
    assert 0.0 <= p.longitude < 2.0 * np.pi
    assert abs(p.latitude_deg) < 5.35
    assert 356000.0 < p.radius < 407000.0
