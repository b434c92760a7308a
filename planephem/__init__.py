"""
Planetary Ephemeris Core
========================
Apparent positions of the Sun, Moon and planets for an observer on the
Earth, and the day's rise/set/twilight and quadrant-change events
derived from them.

Architecture:
    - Periodic-series evaluation of VSOP87 planetary theories
    - Truncated ELP-2000/82 lunar series and Meeus Pluto series
    - IAU 1980 nutation and Laskar mean obliquity
    - Position pipeline: light time, geocentric, topocentric, equatorial,
      horizontal
    - Hourly sampling with linear refinement for threshold crossings
"""

from .core.config import CorrectionConfig, EventSearchConfig, EphemerisConfig
from .core.exceptions import (
    PlanephemError, NotComputedError, InvalidIndexError, InvalidValueError
)
from .core.types import (
    BodyKind, CoordinateKind, RiseSetKind, PolarCoordinates,
    ObserverLocation, TimePair, GREENWICH
)
from .ephemeris.position import PositionResult, PlanetData, compute_position
from .ephemeris.events import (
    find_crossing, find_rise_set, quarter_change, season_change,
    moon_age_days, lunation
)

__version__ = "0.1.0"
