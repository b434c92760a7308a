"""
Periodic series evaluator for VSOP-style planetary theories.

A coordinate is represented as six "power groups" of terms:

    X = sum_i  t^i * sum_j  A_ij * cos(B_ij + C_ij * t)

The same evaluator serves longitude, latitude and radius of every
planet from Mercury to Neptune; only the term table changes. Tables are
looked up by (BodyKind, CoordinateKind) in a registry built once at
import, and are read-only numpy arrays of shape (N, 3) whose columns
follow SeriesTerm._fields (amplitude, phase, frequency).

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 32
    Bretagnon & Francou (1988), A&A 202, 309
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..core.constants import VSOP_SCALE
from ..core.exceptions import InvalidIndexError
from ..core.timescales import normalize_radians
from ..core.types import BodyKind, CoordinateKind, PolarCoordinates, SeriesTerm
from . import vsop87_data as _data


def _freeze(groups: Sequence[Sequence[Sequence[float]]]) -> tuple[np.ndarray, ...]:
    """Convert nested term tuples into read-only (N, 3) arrays."""
    frozen = []
    for group in groups:
        arr = np.array(group, dtype=float).reshape(-1, 3)
        arr.flags.writeable = False
        frozen.append(arr)
    return tuple(frozen)


_KIND_SUFFIX = {
    CoordinateKind.LONGITUDE: "LONGITUDE",
    CoordinateKind.LATITUDE: "LATITUDE",
    CoordinateKind.RADIUS: "RADIUS",
}

VSOP_BODIES = (
    BodyKind.MERCURY, BodyKind.VENUS, BodyKind.EARTH, BodyKind.MARS,
    BodyKind.JUPITER, BodyKind.SATURN, BodyKind.URANUS, BodyKind.NEPTUNE,
)

_TABLES: dict[tuple[BodyKind, CoordinateKind], tuple[np.ndarray, ...]] = {
    (body, kind): _freeze(getattr(_data, f"{body.name}_{suffix}"))
    for body in VSOP_BODIES
    for kind, suffix in _KIND_SUFFIX.items()
}


def term_table(body: BodyKind, kind: CoordinateKind) -> tuple[np.ndarray, ...]:
    """Power groups for one (body, coordinate) pair.

    Raises:
        InvalidIndexError: The body has no VSOP series (Sun, Moon, Pluto)
            or ``kind`` is not a CoordinateKind.
    """
    try:
        return _TABLES[(body, kind)]
    except KeyError:
        raise InvalidIndexError(
            f"no VSOP series for body={body!r}, kind={kind!r}") from None


def series_terms(body: BodyKind, kind: CoordinateKind, power: int) -> list[SeriesTerm]:
    """Terms of one power group as SeriesTerm records.

    Raises:
        InvalidIndexError: ``power`` outside 0..5, or bad body/kind.
    """
    groups = term_table(body, kind)
    if not 0 <= power < len(groups):
        raise InvalidIndexError(
            f"power group {power} outside 0..{len(groups) - 1}")
    return [SeriesTerm(*row) for row in groups[power].tolist()]


def evaluate_series(t: float, groups: Sequence[np.ndarray],
                    scale: float = VSOP_SCALE,
                    normalize: bool = False) -> float:
    """Evaluate a multi-power periodic series.

    Args:
        t: Time parameter in the table's native unit (Julian millennia
            for VSOP).
        groups: Power groups, index i multiplying t^i. Each is an array
            of (amplitude, phase, frequency) rows; empty groups add zero.
        scale: Factor applied to the final sum.
        normalize: Reduce the result to [0, 2pi) (for longitudes).

    Returns:
        The scaled series value.
    """
    total = 0.0
    t_power = 1.0
    for group in groups:
        if len(group):
            A, B, C = group[:, 0], group[:, 1], group[:, 2]
            total += float(np.sum(A * np.cos(B + C * t))) * t_power
        t_power *= t

    total *= scale
    if normalize:
        total = normalize_radians(total)
    return total


def vsop_coordinate(t_centuries: float, body: BodyKind, kind: CoordinateKind) -> float:
    """One heliocentric ecliptic coordinate of a planet.

    Args:
        t_centuries: Julian centuries from J2000.0.
        body: MERCURY .. NEPTUNE.
        kind: LONGITUDE / LATITUDE [rad] or RADIUS [AU].

    Returns:
        The coordinate, longitude normalised to [0, 2pi).
    """
    return evaluate_series(t_centuries / 10.0, term_table(body, kind),
                           normalize=kind is CoordinateKind.LONGITUDE)


def vsop_position(t_centuries: float, body: BodyKind) -> PolarCoordinates:
    """Heliocentric ecliptic position of date of a planet.

    Args:
        t_centuries: Julian centuries from J2000.0.
        body: MERCURY .. NEPTUNE.

    Returns:
        PolarCoordinates (rad, rad, AU).
    """
    return PolarCoordinates(
        longitude=vsop_coordinate(t_centuries, body, CoordinateKind.LONGITUDE),
        latitude=vsop_coordinate(t_centuries, body, CoordinateKind.LATITUDE),
        radius=vsop_coordinate(t_centuries, body, CoordinateKind.RADIUS)
    )
