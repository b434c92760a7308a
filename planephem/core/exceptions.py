"""
Error types raised by the ephemeris core.

All of them are precondition violations on the caller's side; none is
transient, so none is retried.
"""


class PlanephemError(Exception):
    """Base class for every error raised by planephem."""


class NotComputedError(PlanephemError, RuntimeError):
    """A derived position value was read before ``calc()`` produced one."""


class InvalidIndexError(PlanephemError, IndexError):
    """A body / coordinate-kind / table index is outside its valid range."""


class InvalidValueError(PlanephemError, ValueError):
    """An input value violates its documented range."""
