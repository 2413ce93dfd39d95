import numpy as np
import pytest

from deflection_toolkit.config.constants import MIDAS_MISSION, MIDAS_PROPERTIES
from deflection_toolkit.dynamics.state import OrbitalState
from deflection_toolkit.dynamics.vector import Vector3
from deflection_toolkit.errors import DegenerateStateError, InvalidInputError
from deflection_toolkit.trajectory.maneuver import TangentialImpulse, kinetic_impactor_delta_v


def test_tangential_impulse_prograde():
    man = TangentialImpulse(epoch_jd=100.0, delta_v=1.0)

    state = OrbitalState(Vector3(1000.0, 0.0, 0.0), Vector3(3.0, 4.0, 0.0), 100.0)
    new_state = man.apply_to_state(state)

    assert new_state.position == state.position # Position unchanged
    assert np.allclose(new_state.velocity.to_array(), [3.6, 4.8, 0.0]) # |v| 5 -> 6 along v_hat
    assert new_state.jd == state.jd

def test_tangential_impulse_retrograde():
    man = TangentialImpulse(epoch_jd=0.0, delta_v=-2.0)
    state = OrbitalState(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 5.0, 0.0), 0.0)

    new_state = man.apply_to_state(state)
    assert np.isclose(new_state.speed, 3.0)

def test_tangential_impulse_timing():
    man = TangentialImpulse(epoch_jd=100.0, delta_v=1.0)
    state = OrbitalState(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 0.0)

    # Wrong time
    assert man.apply_to_state(state) is state

    # Correct time
    state = OrbitalState(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 100.0)
    assert man.apply_to_state(state).velocity.y == 2.0

def test_tangential_impulse_zero_velocity():
    man = TangentialImpulse(epoch_jd=0.0, delta_v=1.0)
    state = OrbitalState(Vector3(1.0, 0.0, 0.0), Vector3.zero(), 0.0)

    with pytest.raises(DegenerateStateError):
        man.apply_to_state(state)

def test_kinetic_impactor_midas_mission():
    # 2.5 * 50 * 1e4 kg * 1e4 m/s / 1e13 kg
    dv = kinetic_impactor_delta_v(50, 10_000.0, 10_000.0, 2.5, 1.0e13)
    assert np.isclose(dv, 0.00125)
    assert np.isclose(MIDAS_MISSION.momentum_delta_v(MIDAS_PROPERTIES), MIDAS_MISSION.delta_v_m_s)

def test_kinetic_impactor_scales_linearly():
    base = kinetic_impactor_delta_v(1, 500.0, 6000.0, 1.0, 5e9)
    assert np.isclose(kinetic_impactor_delta_v(2, 500.0, 6000.0, 1.0, 5e9), 2 * base)
    assert np.isclose(kinetic_impactor_delta_v(1, 500.0, 6000.0, 3.0, 5e9), 3 * base)

def test_kinetic_impactor_rejects_massless_target():
    with pytest.raises(InvalidInputError):
        kinetic_impactor_delta_v(1, 500.0, 6000.0, 1.0, 0.0)
