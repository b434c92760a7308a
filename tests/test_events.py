"""Threshold crossings, rise/set, quadrant changes and lunar age."""

import numpy as np
import pytest

from planephem.core.config import EventSearchConfig
from planephem.core.constants import INVALID, SYNODIC_MONTH, LUNATION_BASE, MOON_ALT
from planephem.core.timescales import calendar_to_jd, local_midnight_jd
from planephem.core.types import (
    BodyKind, CrossingDirection, ObserverLocation, RiseSetKind
)
from planephem.ephemeris.events import (
    find_crossing, altitude_function, find_rise_set, quarter_change,
    season_change, moon_age_days, lunation
)

OBSERVER = ObserverLocation.from_degrees(40.0, -75.8, timezone=-5)
EQUINOX_DAY = local_midnight_jd(2023, 3, 20, OBSERVER.timezone)


# ---------------------------------------------------------------------------
# Crossing primitive
# ---------------------------------------------------------------------------

def test_linear_crossing_is_exact():
    crossings = find_crossing(lambda t: t - 0.3, 0.0)
    assert len(crossings) == 1
    c = crossings[0]
    assert c.direction is CrossingDirection.RISING
    assert c.fraction == pytest.approx(0.3, abs=1e-12)
    assert c.hour == 7
    assert c.converged


def test_threshold_is_subtracted():
    crossings = find_crossing(lambda t: 1.0 - t, 0.0, threshold=0.25)
    assert [c.direction for c in crossings] == [CrossingDirection.SETTING]
    assert crossings[0].fraction == pytest.approx(0.75, abs=1e-12)


def test_sine_rising_and_setting():
    crossings = find_crossing(lambda t: np.sin(2.0 * np.pi * (t - 0.1)), 0.0)
    assert [c.direction for c in crossings] == [CrossingDirection.RISING,
                                                CrossingDirection.SETTING]
    assert crossings[0].fraction == pytest.approx(0.1, abs=2e-4)
    assert crossings[1].fraction == pytest.approx(0.6, abs=2e-4)
    assert all(c.iterations <= 10 for c in crossings)


def test_no_sign_change_no_crossing():
    assert find_crossing(lambda t: 1.0 + t, 0.0) == []


def test_iteration_budget_is_best_effort():
    cfg = EventSearchConfig(max_iterations=1)
    (c,) = find_crossing(lambda t: t - 0.3, 0.0, config=cfg)
    assert not c.converged
    assert c.iterations == 1
    assert c.fraction == pytest.approx(0.3, abs=1e-12)


def test_sampling_density_is_configurable():
    cfg = EventSearchConfig(samples_per_day=48)
    (c,) = find_crossing(lambda t: t - 0.3, 0.0, config=cfg)
    assert c.hour == 14


# ---------------------------------------------------------------------------
# Rise / set
# ---------------------------------------------------------------------------

def test_sunrise_sunset_near_equinox():
    """40N 75.8W, 2023 Mar 20 EST: rise ~06:07, set ~18:15."""
    times = find_rise_set(RiseSetKind.SUN, EQUINOX_DAY, OBSERVER)
    assert times.has_rise and times.has_set
    assert times.a * 1440.0 == pytest.approx(6 * 60 + 7, abs=3.0)
    assert times.b * 1440.0 == pytest.approx(18 * 60 + 15, abs=3.0)


def test_sun_altitude_at_rise_matches_threshold():
    times = find_rise_set(RiseSetKind.SUN, EQUINOX_DAY, OBSERVER)
    altitude = altitude_function(BodyKind.SUN, OBSERVER)
    assert altitude(EQUINOX_DAY + times.a) == pytest.approx(RiseSetKind.SUN.altitude, abs=2e-4)
    assert altitude(EQUINOX_DAY + times.b) == pytest.approx(RiseSetKind.SUN.altitude, abs=2e-4)


def test_twilight_ordering():
    kinds = [RiseSetKind.ASTRONOMICAL_TWILIGHT, RiseSetKind.NAUTICAL_TWILIGHT,
             RiseSetKind.CIVIL_TWILIGHT, RiseSetKind.SUN]
    pairs = [find_rise_set(k, EQUINOX_DAY, OBSERVER) for k in kinds]
    starts = [p.a for p in pairs]
    ends = [p.b for p in pairs]
    assert starts == sorted(starts)
    assert ends == sorted(ends, reverse=True)


@pytest.mark.parametrize("date", [(2023, 6, 21), (2023, 12, 21)])
def test_polar_day_and_night_have_no_events(date):
    arctic = ObserverLocation.from_degrees(80.0, 15.0, timezone=1)
    times = find_rise_set(RiseSetKind.SUN, local_midnight_jd(*date, 1), arctic)
    assert times.a == INVALID and times.b == INVALID
    assert not times.has_rise and not times.has_set


def test_moonrise_altitude():
    jd = local_midnight_jd(2023, 1, 28, OBSERVER.timezone)
    times = find_rise_set(RiseSetKind.MOON, jd, OBSERVER)
    altitude = altitude_function(BodyKind.MOON, OBSERVER)
    assert times.has_rise or times.has_set
    for t in (times.a, times.b):
        if t != INVALID:
            assert 0.0 <= t <= 1.0
            assert altitude(jd + t) == pytest.approx(MOON_ALT, abs=1e-3)


# ---------------------------------------------------------------------------
# Quadrant changes
# ---------------------------------------------------------------------------

def test_march_equinox_2023():
    """Equinox 2023 Mar 20 21:24 UT (geometric longitude runs ~12 min early)."""
    fraction = season_change(calendar_to_jd(2023, 3, 20))
    assert fraction * 24.0 == pytest.approx(21.4, abs=0.5)


def test_no_season_change_mid_season():
    assert season_change(calendar_to_jd(2023, 5, 5)) == INVALID


def test_new_moon_january_2023():
    """New moon 2023 Jan 21 20:53 UT."""
    fraction = quarter_change(calendar_to_jd(2023, 1, 21))
    assert fraction * 24.0 == pytest.approx(20.88, abs=0.25)


def test_no_quarter_change_between_phases():
    assert quarter_change(calendar_to_jd(2023, 1, 25)) == INVALID


# ---------------------------------------------------------------------------
# Lunar age
# ---------------------------------------------------------------------------

NEW_MOON = calendar_to_jd(2023, 1, 21) + 20.88 / 24.0


def test_moon_age_at_new_moon():
    age = moon_age_days(NEW_MOON)
    assert min(age, SYNODIC_MONTH - age) < 0.05


def test_moon_age_a_week_later():
    assert moon_age_days(NEW_MOON + 7.38) == pytest.approx(7.38, abs=1.0)


@pytest.mark.parametrize("jd", [2451545.0, 2455555.5, 2460000.25])
def test_moon_age_range(jd):
    assert 0.0 <= moon_age_days(jd) < SYNODIC_MONTH


def test_lunation_numbers():
    assert lunation(LUNATION_BASE + 0.5) == 1
    assert lunation(LUNATION_BASE + SYNODIC_MONTH + 0.5) == 2
    assert lunation(NEW_MOON + 1.0) == lunation(NEW_MOON + 20.0)
