"""
Apparent position pipeline.

Turns a body and an instant into heliocentric, geocentric ecliptic,
equatorial and horizontal coordinates for one observer:

    heliocentric series -> light time (2 passes) -> geocentric
        -> topocentric -> equatorial -> horizontal

Body dispatch:
    - Mercury .. Neptune: VSOP87 series (heliocentric, ecliptic of date)
    - Pluto: Meeus Ch. 37 series (heliocentric, J2000.0)
    - Moon: ELP-2000/82 truncated series (already geocentric)
    - Sun / Earth: the Earth's VSOP position turned through 180 degrees,
      i.e. the Sun as seen from the Earth (already geocentric)

Light time is a fixed two-pass correction: the first pass measures the
Earth-body distance, the second re-evaluates the body at jd - tau while
the Earth stays at jd. It is never applied to the Sun, Earth or Moon.

The rise/set sampler drives this pipeline with both corrections off
and delta-T = 0, which is adequate at hourly resolution.

References:
    Meeus, "Astronomical Algorithms", 2nd ed., Ch. 12, 13, 33, 40
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.config import CorrectionConfig
from ..core.constants import AU_KM, C_LIGHT, SECONDS_PER_DAY, R_EARTH_MEAN
from ..core.exceptions import NotComputedError
from ..core.frames import (
    polar_to_cartesian, cartesian_to_polar, rotate_vector,
    greenwich_sidereal_time, ecliptic_to_equatorial, equatorial_to_horizontal
)
from ..core.timescales import julian_centuries
from ..core.types import BodyKind, ObserverLocation, PolarCoordinates, GREENWICH
from ..series.lunar import moon_position
from ..series.nutation import mean_obliquity
from ..series.periodic import vsop_position
from ..series.pluto import pluto_position, in_valid_range

LOG = logging.getLogger(__name__)

# Bodies whose series output is already centred on the Earth
_GEOCENTRIC_SERIES = (BodyKind.SUN, BodyKind.EARTH, BodyKind.MOON)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class PositionResult:
    """Every output of one pipeline pass.

    Cartesian vectors are read-only arrays of shape (3,) in AU. Polar
    views of them are derived on access.

    Attributes:
        body: Body the pass was run for.
        julian_day: Requested instant (TT).
        heliocentric: Heliocentric ecliptic coordinates of the body, as
            evaluated for the light-time-corrected instant. For the Sun
            this is the geocentric Sun; for the Moon it is rebuilt as
            Earth + Moon.
        solar: Geocentric ecliptic coordinates of the Sun at julian_day.
        ecliptic_xyz: Geocentric (or topocentric) ecliptic vector.
        equatorial_xyz: Equatorial vector of date.
        horizontal_xyz: Horizontal vector (x south, y west, z zenith).
        right_ascension: [rad], in [-pi, pi].
        declination: [rad], in [-pi/2, pi/2].
        hour_angle: [rad], in [-pi, pi].
        light_time_days: Light-time delay applied [days], 0 if none.
        obliquity: Mean obliquity of the ecliptic used [rad].
        local_sidereal_time: [rad], not reduced to [0, 2pi).
    """
    body: BodyKind
    julian_day: float
    heliocentric: PolarCoordinates
    solar: PolarCoordinates
    ecliptic_xyz: np.ndarray
    equatorial_xyz: np.ndarray
    horizontal_xyz: np.ndarray
    right_ascension: float
    declination: float
    hour_angle: float
    light_time_days: float
    obliquity: float
    local_sidereal_time: float

    @property
    def ecliptic(self) -> PolarCoordinates:
        """Geocentric ecliptic longitude, latitude and distance."""
        return cartesian_to_polar(self.ecliptic_xyz)

    @property
    def ecliptic_longitude(self) -> float:
        return self.ecliptic.longitude

    @property
    def ecliptic_latitude(self) -> float:
        return self.ecliptic.latitude

    @property
    def distance(self) -> float:
        """Earth-body distance [AU]."""
        return float(np.linalg.norm(self.ecliptic_xyz))

    @property
    def equatorial(self) -> PolarCoordinates:
        return cartesian_to_polar(self.equatorial_xyz)

    @property
    def horizontal(self) -> PolarCoordinates:
        """Azimuth (south = 0, westward positive), altitude, distance."""
        return cartesian_to_polar(self.horizontal_xyz)

    @property
    def altitude(self) -> float:
        x, y, z = self.horizontal_xyz
        return float(np.arctan2(z, np.hypot(x, y)))

    @property
    def azimuth(self) -> float:
        return float(np.arctan2(self.horizontal_xyz[1], self.horizontal_xyz[0]))


def _frozen(vec: np.ndarray) -> np.ndarray:
    out = np.array(vec, dtype=float)
    out.flags.writeable = False
    return out


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------

def heliocentric_position(body: BodyKind, julian_day: float) -> PolarCoordinates:
    """Series-level position of a body.

    Args:
        body: Body to evaluate.
        julian_day: Julian Day (TT).

    Returns:
        PolarCoordinates (rad, rad, AU). Heliocentric for the planets and
        Pluto; geocentric for the Moon and for the Sun/Earth (see module
        docstring).
    """
    t = julian_centuries(julian_day)

    if body is BodyKind.MOON:
        moon = moon_position(t)
        return PolarCoordinates(moon.longitude, moon.latitude,
                                moon.radius / AU_KM)

    if body is BodyKind.PLUTO:
        if not in_valid_range(julian_day):
            LOG.debug("Pluto series used outside 1885-2099 (JD %.1f)", julian_day)
        return pluto_position(julian_day)

    if body in (BodyKind.SUN, BodyKind.EARTH):
        earth = vsop_position(t, BodyKind.EARTH)
        return PolarCoordinates(earth.longitude + np.pi, -earth.latitude,
                                earth.radius)

    return vsop_position(t, body)


def light_time(geocentric_xyz: np.ndarray) -> float:
    """Light travel time over a geocentric vector [days]."""
    return float(np.linalg.norm(geocentric_xyz)) * AU_KM / (C_LIGHT * SECONDS_PER_DAY)


def observer_offset(local_sidereal_time: float, latitude: float,
                    obliquity: float) -> np.ndarray:
    """Observer position relative to the Earth's centre, ecliptic frame [AU].

    Spherical Earth of mean radius R_EARTH_MEAN.
    """
    equatorial = polar_to_cartesian(local_sidereal_time, latitude,
                                    R_EARTH_MEAN / AU_KM)
    return rotate_vector(equatorial, -obliquity, 0)


def compute_position(body: BodyKind,
                     julian_day: float,
                     delta_t: Optional[float] = None,
                     observer: ObserverLocation = GREENWICH,
                     apply_topocentric: Optional[bool] = None,
                     apply_light_time: Optional[bool] = None,
                     config: Optional[CorrectionConfig] = None
                     ) -> PositionResult:
    """Run the full position pipeline for one body and instant.

    Explicit keyword arguments override the matching ``config`` field.

    Args:
        body: Body to locate.
        julian_day: Julian Day (TT).
        delta_t: TT - UT [days], used only for sidereal time.
        observer: Observer location.
        apply_topocentric: Reduce to the observer's position on the
            Earth's surface.
        apply_light_time: Back-date the body by the light travel time.
        config: Correction settings (defaults: both corrections on,
            delta-T = 0).

    Returns:
        PositionResult for this pass.
    """
    cfg = config if config is not None else CorrectionConfig()
    if delta_t is None:
        delta_t = cfg.delta_t_days
    if apply_topocentric is None:
        apply_topocentric = cfg.apply_topocentric
    if apply_light_time is None:
        apply_light_time = cfg.apply_light_time

    t = julian_centuries(julian_day)
    lst = greenwich_sidereal_time(julian_day - delta_t) + observer.longitude
    obliquity = mean_obliquity(t)

    # --- Earth, fixed at the requested instant ---
    earth = vsop_position(t, BodyKind.EARTH)
    earth_xyz = polar_to_cartesian(earth.longitude, earth.latitude, earth.radius)
    solar = PolarCoordinates(earth.longitude + np.pi, -earth.latitude, earth.radius)

    # --- Pass 1: geometric ---
    helio = heliocentric_position(body, julian_day)
    vec = polar_to_cartesian(helio.longitude, helio.latitude, helio.radius)
    if body not in _GEOCENTRIC_SERIES:
        vec = vec - earth_xyz

    # --- Pass 2: light time ---
    tau = 0.0
    if apply_light_time and body.has_light_time:
        tau = light_time(vec)
        helio = heliocentric_position(body, julian_day - tau)
        vec = polar_to_cartesian(helio.longitude, helio.latitude, helio.radius)
        vec = vec - earth_xyz
        LOG.debug("%s: light time %.3f min", body.name, tau * 1440.0)

    # --- Topocentric ---
    if apply_topocentric:
        vec = vec - observer_offset(lst, observer.latitude, obliquity)

    if body is BodyKind.MOON:
        helio = cartesian_to_polar(earth_xyz + vec)

    # --- Equatorial and horizontal ---
    equ = ecliptic_to_equatorial(vec, obliquity)
    ra = float(np.arctan2(equ[1], equ[0]))
    dec = float(np.arctan2(equ[2], np.hypot(equ[0], equ[1])))
    hor, hour_angle = equatorial_to_horizontal(equ, lst, observer.latitude)

    return PositionResult(
        body=body,
        julian_day=julian_day,
        heliocentric=helio,
        solar=solar,
        ecliptic_xyz=_frozen(vec),
        equatorial_xyz=_frozen(equ),
        horizontal_xyz=_frozen(hor),
        right_ascension=ra,
        declination=dec,
        hour_angle=hour_angle,
        light_time_days=tau,
        obliquity=obliquity,
        local_sidereal_time=lst
    )


# ---------------------------------------------------------------------------
# Stateful facade
# ---------------------------------------------------------------------------

class PlanetData:
    """Holds the most recent pipeline pass for one caller.

    Every accessor raises NotComputedError until calc() has run; a
    failed calc() leaves the previous result in place.

    Attributes:
        config: Correction settings used by calc().
        result: Last PositionResult, or None before the first calc().
    """

    def __init__(self, config: Optional[CorrectionConfig] = None):
        self.config = config if config is not None else CorrectionConfig()
        self.result: Optional[PositionResult] = None

    def calc(self, body: BodyKind, julian_day: float,
             observer: ObserverLocation = GREENWICH,
             delta_t: Optional[float] = None,
             apply_topocentric: Optional[bool] = None,
             apply_light_time: Optional[bool] = None) -> PositionResult:
        """Run the pipeline and keep its result."""
        self.result = compute_position(
            body, julian_day, delta_t=delta_t, observer=observer,
            apply_topocentric=apply_topocentric,
            apply_light_time=apply_light_time, config=self.config
        )
        return self.result

    @staticmethod
    def calc_longitude(body: BodyKind, julian_day: float) -> float:
        """Series-level longitude only (no light time, no frames) [rad]."""
        return heliocentric_position(body, julian_day).longitude

    def _require(self) -> PositionResult:
        if self.result is None:
            raise NotComputedError("call PlanetData.calc() first")
        return self.result

    @property
    def body(self) -> BodyKind:
        return self._require().body

    @property
    def julian_day(self) -> float:
        return self._require().julian_day

    @property
    def heliocentric(self) -> PolarCoordinates:
        return self._require().heliocentric

    @property
    def solar(self) -> PolarCoordinates:
        return self._require().solar

    @property
    def ecliptic(self) -> PolarCoordinates:
        return self._require().ecliptic

    @property
    def equatorial(self) -> PolarCoordinates:
        return self._require().equatorial

    @property
    def horizontal(self) -> PolarCoordinates:
        return self._require().horizontal

    @property
    def right_ascension(self) -> float:
        return self._require().right_ascension

    @property
    def declination(self) -> float:
        return self._require().declination

    @property
    def hour_angle(self) -> float:
        return self._require().hour_angle

    @property
    def altitude(self) -> float:
        return self._require().altitude

    @property
    def azimuth(self) -> float:
        return self._require().azimuth
