"""
Ephemeris configuration.

Central configuration objects with toggleable corrections and the
sampling / refinement settings of the event finder.
"""

from dataclasses import dataclass, field

from .constants import HOURS_PER_DAY
from .exceptions import InvalidValueError


@dataclass
class CorrectionConfig:
    """Toggleable apparent-place corrections.

    Both corrections can be disabled for cheap low-precision work (the
    rise/set sampler runs with both off).

    Attributes:
        apply_topocentric: Subtract the observer's offset from the Earth's
            centre (parallax; matters mostly for the Moon).
        apply_light_time: Back-date planet positions by the light travel
            time. Never applied to the Sun, the Earth or the Moon.
        delta_t_days: TT - UT [days] used for sidereal time.
        light_time_passes: Number of light-time passes. Fixed at 2.
    """
    apply_topocentric: bool = True
    apply_light_time: bool = True
    delta_t_days: float = 0.0
    light_time_passes: int = 2

    def __post_init__(self):
        if self.light_time_passes != 2:
            raise InvalidValueError(
                "light-time correction is a fixed two-pass scheme, "
                f"got light_time_passes={self.light_time_passes}")

    def describe(self) -> str:
        """Human-readable description of active corrections."""
        parts = ["Geometric"]
        if self.apply_light_time: parts.append("light time (2 passes)")
        if self.apply_topocentric: parts.append("topocentric")
        if self.delta_t_days: parts.append(f"dT={self.delta_t_days * 86400.0:.1f} s")
        return " + ".join(parts)


@dataclass
class EventSearchConfig:
    """Sampling and refinement settings for threshold-crossing searches.

    Attributes:
        samples_per_day: Sampling intervals per day (hourly by default).
        max_iterations: Refinement iteration budget per crossing.
        tolerance_days: Stop refining once a step is this small
            (1e-4 d is about 8.6 s).
    """
    samples_per_day: int = HOURS_PER_DAY
    max_iterations: int = 10
    tolerance_days: float = 1.0e-4


@dataclass
class EphemerisConfig:
    """Top-level ephemeris configuration."""
    corrections: CorrectionConfig = field(default_factory=CorrectionConfig)
    events: EventSearchConfig = field(default_factory=EventSearchConfig)

    def describe(self) -> str:
        return (f"{self.corrections.describe()}; events sampled "
                f"{self.events.samples_per_day}x/day, "
                f"<= {self.events.max_iterations} refinements")


# Low-precision settings used when sampling altitudes for rise/set.
RISE_SET_CORRECTIONS = CorrectionConfig(apply_topocentric=False,
                                        apply_light_time=False)
