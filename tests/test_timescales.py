"""Julian Day and angle helpers."""

import numpy as np
import pytest

from planephem.core.constants import TWO_PI, J2000_JD
from planephem.core.timescales import (
    julian_centuries, hours_to_days, normalize_radians, normalize_degrees,
    quadrant, calendar_to_jd, jd_to_calendar, local_midnight_jd, wrap_pi
)


def test_julian_centuries():
    assert julian_centuries(J2000_JD) == 0.0
    assert julian_centuries(J2000_JD + 36525.0) == pytest.approx(1.0)


def test_hours_to_days():
    assert hours_to_days(12) == 0.5


@pytest.mark.parametrize("angle", [-100.0, -TWO_PI, -1e-18, 0.0, 3.0, TWO_PI, 7.0, 1e6])
def test_normalize_radians_range_and_idempotence(angle):
    n = normalize_radians(angle)
    assert 0.0 <= n < TWO_PI
    assert normalize_radians(n) == n


def test_normalize_radians_value():
    assert normalize_radians(-0.1) == pytest.approx(TWO_PI - 0.1)
    assert normalize_radians(TWO_PI + 0.25) == pytest.approx(0.25)


def test_normalize_degrees():
    assert normalize_degrees(-30.0) == pytest.approx(330.0)
    assert normalize_degrees(725.0) == pytest.approx(5.0)


def test_wrap_pi():
    assert wrap_pi(TWO_PI - 0.1) == pytest.approx(-0.1)
    assert wrap_pi(0.2) == pytest.approx(0.2)


@pytest.mark.parametrize("angle, expected", [
    (0.0, 0), (0.1, 0), (np.pi / 2 + 0.01, 1), (np.pi + 0.01, 2),
    (-0.1, 3), (TWO_PI + 0.1, 0),
])
def test_quadrant(angle, expected):
    assert quadrant(angle) == expected


@pytest.mark.parametrize("angle", [0.3, 1.9, 3.5, 5.0])
def test_quadrant_is_periodic(angle):
    assert quadrant(angle) == quadrant(angle + TWO_PI) == quadrant(angle - 3 * TWO_PI)


@pytest.mark.parametrize("date, jd", [
    ((2000, 1, 1.5), 2451545.0),
    ((1987, 4, 10.0), 2446895.5),
    ((1957, 10, 4.81), 2436116.31),     # Meeus ex. 7.a
    ((1988, 1, 27.0), 2447187.5),
])
def test_calendar_to_jd(date, jd):
    assert calendar_to_jd(*date) == pytest.approx(jd, abs=1e-6)


def test_calendar_to_jd_julian_calendar():
    # Meeus ex. 7.b: 333 Jan 27 12h (Julian calendar)
    assert calendar_to_jd(333, 1, 27.5, gregorian=False) == pytest.approx(1842713.0)


def test_jd_to_calendar():
    year, month, day = jd_to_calendar(2436116.31)     # Meeus ex. 7.c
    assert (year, month) == (1957, 10)
    assert day == pytest.approx(4.81, abs=1e-6)


def test_local_midnight_jd():
    assert local_midnight_jd(1987, 4, 10, -5) == pytest.approx(2446895.5 + 5.0 / 24.0)
