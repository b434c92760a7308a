"""Nutation and obliquity (Meeus ex. 22.a, 1987 Apr 10 0h TD)."""

import numpy as np
import pytest

from planephem.core.constants import ARCSEC2RAD
from planephem.core.timescales import julian_centuries, normalize_degrees
from planephem.series.nutation import (
    N_NUTATION_TERMS, mean_obliquity, fundamental_arguments, nutation,
    true_obliquity
)

T_1987 = julian_centuries(2446895.5)


def test_table_size():
    assert N_NUTATION_TERMS == 62


def test_mean_obliquity_j2000():
    assert mean_obliquity(0.0) == pytest.approx(0.4090928, abs=1e-6)
    assert mean_obliquity(0.0) / ARCSEC2RAD == pytest.approx(84381.448, abs=1e-6)


def test_mean_obliquity_1987():
    # 23 deg 26' 27.407"
    assert mean_obliquity(T_1987) / ARCSEC2RAD == pytest.approx(84387.407, abs=1e-3)


def test_fundamental_arguments_1987():
    deg = [normalize_degrees(a) for a in np.rad2deg(fundamental_arguments(T_1987))]
    expected = [136.9623, 94.9792, 229.2784, 143.4079, 11.2531]
    assert deg == pytest.approx(expected, abs=1e-3)


def test_nutation_1987():
    n = nutation(T_1987)
    assert n.delta_psi == pytest.approx(-3.788, abs=0.01)
    assert n.delta_epsilon == pytest.approx(9.443, abs=0.01)
    assert n.delta_psi_rad == pytest.approx(-3.788 * ARCSEC2RAD, abs=1e-7)


def test_true_obliquity_1987():
    # 23 deg 26' 36.850"
    assert true_obliquity(T_1987) / ARCSEC2RAD == pytest.approx(84396.850, abs=0.01)


def test_suppressed_outputs_are_none():
    assert nutation(0.1, want_longitude=False).delta_psi is None
    assert nutation(0.1, want_obliquity=False).delta_epsilon is None
    assert nutation(0.1, want_obliquity=False).delta_epsilon_rad is None


@pytest.mark.parametrize("t", [-1.3, 0.0, 0.25, 0.9])
def test_components_independent_of_each_other(t):
    both = nutation(t)
    assert nutation(t, want_obliquity=False).delta_psi == both.delta_psi
    assert nutation(t, want_longitude=False).delta_epsilon == both.delta_epsilon


@pytest.mark.parametrize("t", np.linspace(-2.0, 2.0, 9))
def test_nutation_bounded(t):
    n = nutation(t)
    assert abs(n.delta_psi) < 20.0
    assert abs(n.delta_epsilon) < 11.0
