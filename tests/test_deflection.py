"""
Unit Tests for the Impulsive Deflection Model
---------------------------------------------
Verifies the vis-viva semi-major axis update, the carried error kinds and the
period change summary for the 1981 Midas kinetic impactor scenario.
"""

import numpy as np
import pytest

from deflection_toolkit.config.constants import AU_TO_METERS, MIDAS_ELEMENTS, MIDAS_MISSION, SUN
from deflection_toolkit.dynamics.kepler import jd_from_years, propagate
from deflection_toolkit.errors import DegenerateStateError, ErrorKind, InvalidInputError
from deflection_toolkit.mission.deflection import (
    DeflectionResult,
    closest_approach,
    deflect,
    impact_summary,
    osculating_deflection,
    separation_history,
)

DV = 0.00125 # m/s
YEARS = 11.0


def test_zero_delta_v_is_noop():
    for years in [0.0, 2.5, 11.0]:
        result = deflect(MIDAS_ELEMENTS, years, 0.0)
        assert result.ok
        assert result.elements.a == pytest.approx(MIDAS_ELEMENTS.a, rel=1e-10)

def test_midas_scenario():
    result = deflect(MIDAS_ELEMENTS, YEARS, DV)
    assert result.ok

    new = result.elements
    # Slightly larger orbit
    assert new.a > MIDAS_ELEMENTS.a
    assert new.a - MIDAS_ELEMENTS.a < 1e-4

    # Everything else carried over
    assert new.e == MIDAS_ELEMENTS.e
    assert new.i_deg == MIDAS_ELEMENTS.i_deg
    assert new.raan_deg == MIDAS_ELEMENTS.raan_deg
    assert new.arg_p_deg == MIDAS_ELEMENTS.arg_p_deg
    assert new.M0_deg == MIDAS_ELEMENTS.M0_deg
    assert new.epoch_jd == MIDAS_ELEMENTS.epoch_jd

    summary = impact_summary(MIDAS_ELEMENTS, DV, YEARS)
    assert summary.delta_v == DV
    assert summary.delta_period_days > 0
    expected = (new.a**1.5 - MIDAS_ELEMENTS.a**1.5) * 365.25
    assert summary.delta_period_days == pytest.approx(expected, rel=1e-12)

def test_midas_scenario_deterministic():
    assert deflect(MIDAS_ELEMENTS, YEARS, DV) == deflect(MIDAS_ELEMENTS, YEARS, DV)
    assert impact_summary(MIDAS_ELEMENTS, DV, YEARS) == impact_summary(MIDAS_ELEMENTS, DV, YEARS)

def test_vis_viva_update_matches_first_order_estimate():
    """da = 2 a^2 v dv / mu for a small tangential impulse."""
    state = propagate(MIDAS_ELEMENTS, jd_from_years(MIDAS_ELEMENTS.epoch_jd, YEARS))
    a_m = MIDAS_ELEMENTS.a * AU_TO_METERS
    da_expected = 2 * a_m**2 * state.speed * DV / SUN.mu

    new = deflect(MIDAS_ELEMENTS, YEARS, DV).unwrap()
    da = (new.a - MIDAS_ELEMENTS.a) * AU_TO_METERS
    assert da == pytest.approx(da_expected, rel=1e-3)

def test_retrograde_impulse_shrinks_orbit():
    new = deflect(MIDAS_ELEMENTS, YEARS, -DV).unwrap()
    assert new.a < MIDAS_ELEMENTS.a
    assert impact_summary(MIDAS_ELEMENTS, -DV, YEARS).delta_period_days < 0

def test_escape_impulse_is_degenerate():
    result = deflect(MIDAS_ELEMENTS, YEARS, 50_000.0)

    assert not result.ok
    assert result.elements is None
    assert isinstance(result.error, DegenerateStateError)
    assert result.error.kind is ErrorKind.DEGENERATE_STATE

    with pytest.raises(DegenerateStateError):
        result.unwrap()
    with pytest.raises(DegenerateStateError):
        impact_summary(MIDAS_ELEMENTS, 50_000.0, YEARS)

def test_invalid_elements_carried_not_raised():
    bad = MIDAS_ELEMENTS.replace(e=1.2)
    result = deflect(bad, YEARS, DV)

    assert not result.ok
    assert isinstance(result.error, InvalidInputError)
    assert result.error.kind is ErrorKind.INVALID_INPUT

def test_non_finite_delta_v_rejected():
    result = deflect(MIDAS_ELEMENTS, YEARS, float("nan"))
    assert result.error.kind is ErrorKind.INVALID_INPUT

def test_result_unwrap():
    result = DeflectionResult(elements=MIDAS_ELEMENTS)
    assert result.ok
    assert result.unwrap() is MIDAS_ELEMENTS

def test_osculating_deflection():
    # Zero impulse: same orbit, epoch moved to the burn
    burn_jd = jd_from_years(MIDAS_ELEMENTS.epoch_jd, YEARS)
    same = osculating_deflection(MIDAS_ELEMENTS, YEARS, 0.0).unwrap()
    assert same.epoch_jd == burn_jd
    assert same.a == pytest.approx(MIDAS_ELEMENTS.a, rel=1e-10)
    assert same.e == pytest.approx(MIDAS_ELEMENTS.e, abs=1e-10)

    # A sizeable impulse also moves eccentricity, which deflect() keeps fixed
    big_dv = 100.0
    full = osculating_deflection(MIDAS_ELEMENTS, YEARS, big_dv).unwrap()
    simple = deflect(MIDAS_ELEMENTS, YEARS, big_dv).unwrap()
    assert full.a == pytest.approx(simple.a, rel=1e-9)
    assert abs(full.e - MIDAS_ELEMENTS.e) > 1e-6
    assert simple.e == MIDAS_ELEMENTS.e

    # Tangential burns stay in the orbit plane
    assert full.i_deg == pytest.approx(MIDAS_ELEMENTS.i_deg, abs=1e-8)
    assert full.raan_deg == pytest.approx(MIDAS_ELEMENTS.raan_deg, abs=1e-8)

def test_separation_history():
    new = deflect(MIDAS_ELEMENTS, YEARS, DV).unwrap()
    jds = MIDAS_ELEMENTS.epoch_jd + np.array([0.0, 365.25, 3652.5])

    assert np.allclose(separation_history(MIDAS_ELEMENTS, MIDAS_ELEMENTS, jds), 0.0)

    sep = separation_history(MIDAS_ELEMENTS, new, jds)
    assert sep.shape == (3,)
    # Same M0 at epoch, then the slower mean motion accumulates along-track drift
    assert sep[0] < sep[-1]

def test_closest_approach():
    offset = MIDAS_ELEMENTS.replace(M0_deg=MIDAS_ELEMENTS.M0_deg + 1.0)
    jd, dist = closest_approach(MIDAS_ELEMENTS, offset, MIDAS_ELEMENTS.epoch_jd,
                                MIDAS_ELEMENTS.epoch_jd + 1000.0, num=101)

    assert MIDAS_ELEMENTS.epoch_jd <= jd <= MIDAS_ELEMENTS.epoch_jd + 1000.0
    assert dist > 0
    sep = separation_history(MIDAS_ELEMENTS, offset, [jd])
    assert np.isclose(sep[0], dist)

    with pytest.raises(InvalidInputError):
        closest_approach(MIDAS_ELEMENTS, offset, 0.0, 1.0, num=1)

def test_mission_defaults_match_scenario():
    assert MIDAS_MISSION.delta_v_m_s == DV
    assert MIDAS_MISSION.years_to_impact == YEARS

if __name__ == "__main__":
    pytest.main([__file__])
