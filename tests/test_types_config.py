"""Data model invariants and configuration objects."""

import numpy as np
import pytest

from planephem.core.config import (
    CorrectionConfig, EventSearchConfig, EphemerisConfig, RISE_SET_CORRECTIONS
)
from planephem.core.constants import INVALID, SUN_TOPO_ALT, PLANET_ALT
from planephem.core.exceptions import InvalidValueError, PlanephemError
from planephem.core.types import (
    BodyKind, ObserverLocation, PolarCoordinates, RiseSetKind, TimePair
)


@pytest.mark.parametrize("kwargs", [
    dict(latitude=1.6, longitude=0.0),
    dict(latitude=-1.6, longitude=0.0),
    dict(latitude=0.0, longitude=3.2),
    dict(latitude=0.0, longitude=0.0, timezone=13),
])
def test_observer_invariants(kwargs):
    with pytest.raises(InvalidValueError):
        ObserverLocation(**kwargs)


def test_invalid_value_is_value_error():
    with pytest.raises(ValueError):
        ObserverLocation.from_degrees(95.0, 0.0)
    assert issubclass(InvalidValueError, PlanephemError)


def test_observer_from_degrees():
    obs = ObserverLocation.from_degrees(40.0, -75.8, timezone=-5)
    assert obs.latitude == pytest.approx(np.deg2rad(40.0))
    assert obs.longitude_deg == pytest.approx(-75.8)
    assert obs.timezone_days == pytest.approx(-5.0 / 24.0)


def test_polar_coordinates():
    p = PolarCoordinates(np.pi, np.pi / 4, 2.0)
    assert p.longitude_deg == pytest.approx(180.0)
    assert p.latitude_deg == pytest.approx(45.0)
    np.testing.assert_array_equal(p.as_array(), [np.pi, np.pi / 4, 2.0])


def test_time_pair_defaults_to_invalid():
    tp = TimePair()
    assert tp.a == INVALID and tp.b == INVALID
    assert not tp.has_rise
    assert TimePair(0.25, INVALID).has_rise


def test_body_numbering_and_light_time():
    assert BodyKind.SUN.value == 0
    assert BodyKind.PLUTO.value == 9
    assert BodyKind.MOON.value == 10
    assert BodyKind.JUPITER.has_light_time
    assert BodyKind.PLUTO.has_light_time
    assert not BodyKind.MOON.has_light_time
    assert not BodyKind.SUN.has_light_time


@pytest.mark.parametrize("kind, degrees, body", [
    (RiseSetKind.SUN, -0.83333, BodyKind.SUN),
    (RiseSetKind.MOON, 0.125, BodyKind.MOON),
    (RiseSetKind.CIVIL_TWILIGHT, -6.0, BodyKind.SUN),
    (RiseSetKind.NAUTICAL_TWILIGHT, -12.0, BodyKind.SUN),
    (RiseSetKind.ASTRONOMICAL_TWILIGHT, -18.0, BodyKind.SUN),
])
def test_rise_set_kinds(kind, degrees, body):
    assert np.rad2deg(kind.altitude) == pytest.approx(degrees)
    assert kind.body is body


def test_light_time_passes_fixed():
    with pytest.raises(InvalidValueError):
        CorrectionConfig(light_time_passes=3)


def test_config_describe():
    assert CorrectionConfig().describe() == "Geometric + light time (2 passes) + topocentric"
    assert RISE_SET_CORRECTIONS.describe() == "Geometric"
    text = EphemerisConfig().describe()
    assert "24x/day" in text and "<= 10 refinements" in text


def test_default_configs_are_independent():
    a, b = EphemerisConfig(), EphemerisConfig()
    a.corrections.apply_light_time = False
    assert b.corrections.apply_light_time
    assert EventSearchConfig().tolerance_days == 1.0e-4


def test_topocentric_reference_altitudes():
    assert np.rad2deg(SUN_TOPO_ALT) == pytest.approx(-0.83555)
    assert np.rad2deg(PLANET_ALT) == pytest.approx(-0.57)
