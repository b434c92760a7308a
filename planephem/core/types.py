"""
Foundational data types for the ephemeris core.

Every value here is created fresh per computation and is immutable once
built; frame identity is carried by the name of the field that holds a
coordinate, not by the coordinate type itself.

Convention:
    - Angles: radians
    - Distances: AU
    - Epochs: Julian Day (TT unless noted)
    - Times of day: fraction of a day, local to the requested Julian Day
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple

from .constants import (
    INVALID, PI_OVER_TWO, DAYS_PER_HOUR,
    SUN_ALT, MOON_ALT, CIVIL_TWILIGHT_ALT, NAUTICAL_TWILIGHT_ALT,
    ASTRONOMICAL_TWILIGHT_ALT
)
from .exceptions import InvalidValueError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class BodyKind(Enum):
    """Solar-system bodies the position pipeline can dispatch on.

    Values follow the usual planet numbering (Sun = 0 ... Pluto = 9) with
    the Moon appended as 10.
    """
    SUN = 0
    MERCURY = 1
    VENUS = 2
    EARTH = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8
    PLUTO = 9
    MOON = 10

    @property
    def has_light_time(self) -> bool:
        """Whether light-time correction applies (not Sun, Earth or Moon)."""
        return self not in (BodyKind.SUN, BodyKind.EARTH, BodyKind.MOON)


class CoordinateKind(Enum):
    """Which spherical coordinate a periodic series produces."""
    LATITUDE = 0
    LONGITUDE = 1
    RADIUS = 2


class CrossingDirection(Enum):
    """Direction of a threshold crossing found by the event finder."""
    RISING = auto()     # <= 0 then > 0
    SETTING = auto()    # > 0 then <= 0


class RiseSetKind(Enum):
    """Rise/set event families and their reference altitudes."""
    SUN = auto()
    MOON = auto()
    CIVIL_TWILIGHT = auto()
    NAUTICAL_TWILIGHT = auto()
    ASTRONOMICAL_TWILIGHT = auto()

    @property
    def altitude(self) -> float:
        """Threshold altitude [rad] the body must cross."""
        return _RISE_SET_ALTITUDES[self]

    @property
    def body(self) -> BodyKind:
        """Body whose altitude is sampled (the Sun for every twilight)."""
        return BodyKind.MOON if self is RiseSetKind.MOON else BodyKind.SUN


_RISE_SET_ALTITUDES = {
    RiseSetKind.SUN: SUN_ALT,
    RiseSetKind.MOON: MOON_ALT,
    RiseSetKind.CIVIL_TWILIGHT: CIVIL_TWILIGHT_ALT,
    RiseSetKind.NAUTICAL_TWILIGHT: NAUTICAL_TWILIGHT_ALT,
    RiseSetKind.ASTRONOMICAL_TWILIGHT: ASTRONOMICAL_TWILIGHT_ALT,
}


# ---------------------------------------------------------------------------
# Series data
# ---------------------------------------------------------------------------

class SeriesTerm(NamedTuple):
    """One periodic term: amplitude * cos(phase + frequency * t)."""
    amplitude: float
    phase: float
    frequency: float


# ---------------------------------------------------------------------------
# Coordinates and observer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PolarCoordinates:
    """Spherical coordinates in some named frame.

    Attributes:
        longitude: Longitude-like angle [rad].
        latitude: Latitude-like angle [rad], in [-pi/2, pi/2].
        radius: Distance [AU].
    """
    longitude: float
    latitude: float
    radius: float

    @property
    def longitude_deg(self) -> float:
        return float(np.rad2deg(self.longitude))

    @property
    def latitude_deg(self) -> float:
        return float(np.rad2deg(self.latitude))

    def as_array(self) -> np.ndarray:
        """[longitude, latitude, radius], shape (3,)."""
        return np.array([self.longitude, self.latitude, self.radius])


@dataclass(frozen=True)
class ObserverLocation:
    """Geographic location and time zone of an observer.

    Attributes:
        latitude: Geodetic latitude [rad], north positive.
        longitude: Longitude [rad], east positive.
        timezone: Offset from UTC [hours], -12 to 12 inclusive.
    """
    latitude: float
    longitude: float
    timezone: int = 0

    def __post_init__(self):
        if not -PI_OVER_TWO <= self.latitude <= PI_OVER_TWO:
            raise InvalidValueError(
                f"latitude {self.latitude!r} rad outside [-pi/2, pi/2]")
        if not -np.pi <= self.longitude <= np.pi:
            raise InvalidValueError(
                f"longitude {self.longitude!r} rad outside [-pi, pi]")
        if not -12 <= self.timezone <= 12:
            raise InvalidValueError(
                f"timezone {self.timezone!r} h outside [-12, 12]")

    @classmethod
    def from_degrees(cls, latitude_deg: float, longitude_deg: float,
                     timezone: int = 0) -> ObserverLocation:
        """Build a location from degrees (the usual calling convenience)."""
        return cls(latitude=float(np.deg2rad(latitude_deg)),
                   longitude=float(np.deg2rad(longitude_deg)),
                   timezone=timezone)

    @property
    def latitude_deg(self) -> float:
        return float(np.rad2deg(self.latitude))

    @property
    def longitude_deg(self) -> float:
        return float(np.rad2deg(self.longitude))

    @property
    def timezone_days(self) -> float:
        """Time zone offset as a fraction of a day."""
        return self.timezone * DAYS_PER_HOUR


GREENWICH = ObserverLocation(latitude=0.0, longitude=0.0, timezone=0)


# ---------------------------------------------------------------------------
# Event results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimePair:
    """A rise/set (or start/end) pair of fractional-day times.

    Either member is INVALID (-1.0) when the event did not occur inside
    the sampled window.

    Attributes:
        a: Rise / start time [fraction of day].
        b: Set / end time [fraction of day].
    """
    a: float = INVALID
    b: float = INVALID

    @property
    def has_rise(self) -> bool:
        return self.a >= 0.0

    @property
    def has_set(self) -> bool:
        return self.b >= 0.0


@dataclass(frozen=True)
class Crossing:
    """One refined threshold crossing.

    Attributes:
        fraction: Time of the crossing [fraction of day from the start jd].
        direction: RISING or SETTING.
        hour: Index of the bracketing sample interval.
        iterations: Refinement iterations actually used.
        converged: False if the iteration budget ran out first.
    """
    fraction: float
    direction: CrossingDirection
    hour: int
    iterations: int
    converged: bool
