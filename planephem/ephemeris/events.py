"""
Event finder: threshold crossings over one day.

A scalar function of time is sampled at the ends of equal intervals
across a day (hourly by default, 25 samples), sign changes are located,
and each bracketed crossing is refined by linear iteration using the
slope of its bracketing interval:

    delta = (-f(estimate) / (f[i+1] - f[i])) / samples_per_day

Refinement is best effort. When the iteration budget runs out the last
estimate is returned and flagged as not converged.

The same primitive serves rise/set/twilight times (altitude minus a
reference altitude) and quadrant changes (a longitude minus the
quadrant boundary it crosses).

Known limitation: one sign change per interval. Two crossings inside
the same hour (a grazing rise and set near the poles) cancel out and
are missed.

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 15, 49
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from ..core.config import EventSearchConfig, CorrectionConfig, RISE_SET_CORRECTIONS
from ..core.constants import (
    INVALID, PI_OVER_TWO, TWO_PI, SYNODIC_MONTH, LUNATION_BASE
)
from ..core.timescales import normalize_radians, quadrant, wrap_pi
from ..core.types import (
    BodyKind, Crossing, CrossingDirection, ObserverLocation, RiseSetKind,
    TimePair, GREENWICH
)
from .position import compute_position, heliocentric_position

LOG = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Crossing primitive
# ---------------------------------------------------------------------------

def _refine(func: Callable[[float], float],
            jd: float,
            hour: int,
            f_start: float,
            slope: float,
            direction: CrossingDirection,
            threshold: float,
            config: EventSearchConfig) -> Crossing:
    """Refine one bracketed crossing by linear iteration."""
    n = config.samples_per_day
    fraction = hour / n
    value = f_start
    converged = False
    iterations = 0

    while iterations < config.max_iterations:
        iterations += 1
        delta = (-value / slope) / n
        fraction += delta
        if abs(delta) <= config.tolerance_days:
            converged = True
            break
        value = func(jd + fraction) - threshold

    if not converged:
        LOG.debug("crossing in interval %d not converged after %d "
                  "iterations, keeping %.6f", hour, iterations, fraction)
    return Crossing(fraction=fraction, direction=direction, hour=hour,
                    iterations=iterations, converged=converged)


def find_crossing(func: Callable[[float], float],
                  jd: float,
                  threshold: float = 0.0,
                  config: Optional[EventSearchConfig] = None) -> list[Crossing]:
    """Find every crossing of ``threshold`` by ``func`` within one day.

    Args:
        func: Scalar function of Julian Day.
        jd: Start of the window [JD]. Results are day fractions from here.
        threshold: Level whose crossings are wanted.
        config: Sampling and refinement settings.

    Returns:
        Crossings in time order. RISING means a sample <= threshold
        followed by one > threshold, SETTING the reverse.
    """
    cfg = config if config is not None else EventSearchConfig()
    n = cfg.samples_per_day
    values = np.array([func(jd + i / n) - threshold for i in range(n + 1)])

    crossings = []
    for i in range(n):
        if values[i] <= 0.0 < values[i + 1]:
            direction = CrossingDirection.RISING
        elif values[i] > 0.0 >= values[i + 1]:
            direction = CrossingDirection.SETTING
        else:
            continue

        crossing = _refine(func, jd, i, values[i], values[i + 1] - values[i],
                           direction, threshold, cfg)
        LOG.debug("%s crossing at %.6f d (interval %d, %d iterations)",
                  direction.name.lower(), crossing.fraction, i,
                  crossing.iterations)
        crossings.append(crossing)

    return crossings


# ---------------------------------------------------------------------------
# Rise / set / twilight
# ---------------------------------------------------------------------------

def altitude_function(body: BodyKind,
                      observer: ObserverLocation,
                      corrections: CorrectionConfig = RISE_SET_CORRECTIONS
                      ) -> Callable[[float], float]:
    """Altitude of a body [rad] as a function of Julian Day."""
    def altitude(jd: float) -> float:
        return compute_position(body, jd, observer=observer,
                                config=corrections).altitude
    return altitude


def find_rise_set(kind: RiseSetKind,
                  jd: float,
                  observer: ObserverLocation = GREENWICH,
                  config: Optional[EventSearchConfig] = None,
                  corrections: CorrectionConfig = RISE_SET_CORRECTIONS
                  ) -> TimePair:
    """Rise and set (or twilight start and end) within one day.

    Args:
        kind: Event family; fixes the body and the reference altitude.
        jd: Julian Day of local midnight; results are local clock times
            as day fractions.
        observer: Observer location.
        config: Sampling and refinement settings.
        corrections: Pipeline corrections for the altitude samples
            (default: geometric, no light time or parallax).

    Returns:
        TimePair with a = rise and b = set, INVALID where absent. If a
        window holds two events of one kind the later one is kept.
    """
    crossings = find_crossing(altitude_function(kind.body, observer, corrections),
                              jd, threshold=kind.altitude, config=config)

    rise = INVALID
    set_ = INVALID
    for crossing in crossings:
        if crossing.direction is CrossingDirection.RISING:
            rise = crossing.fraction
        else:
            set_ = crossing.fraction
    return TimePair(a=rise, b=set_)


# ---------------------------------------------------------------------------
# Quadrant changes: lunar phases and seasons
# ---------------------------------------------------------------------------

def solar_longitude(jd: float) -> float:
    """Geometric geocentric ecliptic longitude of the Sun [rad]."""
    return heliocentric_position(BodyKind.SUN, jd).longitude


def lunar_elongation(jd: float) -> float:
    """Moon minus Sun geometric ecliptic longitude [rad], unreduced."""
    return heliocentric_position(BodyKind.MOON, jd).longitude - solar_longitude(jd)


def _quadrant_change(angle_func: Callable[[float], float],
                     jd: float,
                     config: Optional[EventSearchConfig] = None) -> float:
    """First quadrant change of a prograde angle within one day.

    Returns:
        Day fraction from jd, or INVALID if the quadrant never changes.
    """
    cfg = config if config is not None else EventSearchConfig()
    n = cfg.samples_per_day
    quads = [quadrant(angle_func(jd + i / n)) for i in range(n + 1)]

    for i in range(n):
        if quads[i] != quads[i + 1]:
            boundary = quads[i + 1] * PI_OVER_TWO

            def offset(t: float) -> float:
                return wrap_pi(angle_func(t) - boundary)

            for crossing in find_crossing(offset, jd, config=cfg):
                if crossing.direction is CrossingDirection.RISING:
                    return crossing.fraction
            LOG.debug("quadrant change in interval %d had no rising "
                      "crossing of %.4f rad", i, boundary)
            break
    return INVALID


def quarter_change(jd: float, config: Optional[EventSearchConfig] = None) -> float:
    """Time of a lunar quarter (new, first quarter, full, last quarter).

    Args:
        jd: Julian Day less than one day before the event.
        config: Sampling and refinement settings.

    Returns:
        Day fraction from jd of the first quadrant change of the lunar
        elongation, or INVALID if there is none that day.
    """
    return _quadrant_change(lunar_elongation, jd, config)


def season_change(jd: float, config: Optional[EventSearchConfig] = None) -> float:
    """Time of an equinox or solstice within one day of ``jd``.

    Returns:
        Day fraction from jd, or INVALID if the solar longitude stays in
        one quadrant all day.
    """
    return _quadrant_change(solar_longitude, jd, config)


# ---------------------------------------------------------------------------
# Lunar age
# ---------------------------------------------------------------------------

def moon_age_days(jd: float) -> float:
    """Days since the last new moon, from the mean synodic month.

    Uses geometric longitudes, so the age is 0 at conjunction in
    longitude and SYNODIC_MONTH / 2 at opposition.
    """
    sun_lon = solar_longitude(jd)
    moon_lon = heliocentric_position(BodyKind.MOON, jd).longitude
    age = normalize_radians(TWO_PI - (sun_lon - moon_lon))
    return SYNODIC_MONTH * age / TWO_PI


def lunation(jd: float) -> int:
    """Brown lunation number (lunation 1 began 1923 Jan 17)."""
    return int((jd - LUNATION_BASE) / SYNODIC_MONTH) + 1
