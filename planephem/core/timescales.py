"""
Time and angle bookkeeping.

Thin adapter between Julian Days and the time parameters the series
expect, plus the angle reductions used throughout the pipeline.

References:
    Meeus, "Astronomical Algorithms", Ch. 7 (Julian Day)
"""

from __future__ import annotations

import math

import numpy as np

from .constants import (
    J2000_JD, DAYS_PER_CENTURY, HOURS_PER_DAY, TWO_PI, TWO_OVER_PI
)


def julian_centuries(jd: float) -> float:
    """Julian centuries from J2000.0 (the T of most series)."""
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def hours_to_days(hours: float) -> float:
    """Convert hours to a day fraction (12 h -> 0.5 d)."""
    return hours / HOURS_PER_DAY


def normalize_radians(r: float) -> float:
    """Reduce an angle to [0, 2pi).

    Uses floor rather than fmod so negative inputs land in range too.
    """
    r = r - TWO_PI * math.floor(r / TWO_PI)
    if r < 0.0:
        r += TWO_PI
    # floor() can leave exactly 2pi for tiny negative inputs
    if r >= TWO_PI:
        r -= TWO_PI
    return r


def normalize_degrees(d: float) -> float:
    """Reduce an angle to [0, 360)."""
    d = d - 360.0 * math.floor(d / 360.0)
    if d < 0.0:
        d += 360.0
    if d >= 360.0:
        d -= 360.0
    return d


def quadrant(radians: float) -> int:
    """Quadrant (0, 1, 2 or 3) of an angle.

    A change of quadrant of the solar longitude across a day marks a
    solstice or equinox; a change of quadrant of (lunar - solar)
    longitude marks a lunar phase.
    """
    return int(normalize_radians(radians) * TWO_OVER_PI)


def calendar_to_jd(year: int, month: int, day: float,
                   gregorian: bool = True) -> float:
    """Julian Day of a calendar date (Meeus eq. 7.1).

    Args:
        year: Astronomical year (1 BC = 0).
        month: 1..12.
        day: Day of month, may carry a fraction (0h = .0).
        gregorian: Use the Gregorian calendar (otherwise Julian).

    Returns:
        Julian Day.
    """
    if month <= 2:
        year -= 1
        month += 12

    b = 0
    if gregorian:
        a = year // 100
        b = 2 - a + a // 4

    return (math.floor(365.25 * (year + 4716))
            + math.floor(30.6001 * (month + 1))
            + day + b - 1524.5)


def jd_to_calendar(jd: float) -> tuple[int, int, float]:
    """Calendar date of a Julian Day (Meeus Ch. 7, valid for jd >= 0).

    Returns:
        (year, month, day) with the day carrying the time as a fraction.
    """
    jd = jd + 0.5
    z = math.floor(jd)
    f = jd - z
    if z < 2299161:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - alpha // 4

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return int(year), int(month), float(day)


def local_midnight_jd(year: int, month: int, day: int, timezone: int) -> float:
    """Julian Day (UT) of local 0h on a civil date.

    The event finder samples from this instant so its fractional-day
    results read directly as local clock time.
    """
    return calendar_to_jd(year, month, day) - timezone / HOURS_PER_DAY


def wrap_pi(angle: float) -> float:
    """Reduce an angle to [-pi, pi)."""
    return float((angle + np.pi) % TWO_PI - np.pi)
