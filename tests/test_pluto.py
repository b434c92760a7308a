"""Pluto series (Meeus ex. 37.a, 1992 Oct 13.0 TD)."""

import pytest

from planephem.core.timescales import normalize_degrees
from planephem.series.pluto import N_PLUTO_TERMS, pluto_position, in_valid_range


def test_table_size():
    assert N_PLUTO_TERMS == 43


def test_pluto_1992():
    p = pluto_position(2448908.5)
    assert normalize_degrees(p.longitude_deg) == pytest.approx(232.74071, abs=1e-3)
    assert p.latitude_deg == pytest.approx(14.58782, abs=1e-3)
    assert p.radius == pytest.approx(29.711111, abs=1e-4)


def test_valid_range():
    assert in_valid_range(2448908.5)
    assert not in_valid_range(2400000.5)
    assert not in_valid_range(2500000.5)
