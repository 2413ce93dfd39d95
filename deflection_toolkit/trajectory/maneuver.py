import logging

from deflection_toolkit.dynamics.state import OrbitalState
from deflection_toolkit.errors import DegenerateStateError, InvalidInputError

logger = logging.getLogger(__name__)

EPOCH_TOLERANCE_DAYS = 1e-6


def kinetic_impactor_delta_v(n_probes: int, probe_mass_kg: float, impact_speed_m_s: float,
                             beta: float, target_mass_kg: float) -> float:
    """
    Velocity change imparted to a target by a salvo of kinetic impactors.

    dV = beta * N * m * v / M, where beta > 1 accounts for the momentum carried
    away by ejecta.

    Args:
        n_probes (int): Number of impactors.
        probe_mass_kg (float): Mass of each impactor [kg].
        impact_speed_m_s (float): Relative impact speed [m/s].
        beta (float): Momentum enhancement factor.
        target_mass_kg (float): Target body mass [kg].

    Returns:
        float: Delta-V of the target [m/s].
    """
    if target_mass_kg <= 0:
        raise InvalidInputError(f"Target mass must be > 0, got {target_mass_kg}")
    return beta * n_probes * probe_mass_kg * impact_speed_m_s / target_mass_kg


class TangentialImpulse:
    """
    Represents an instantaneous delta-v along the current velocity direction.
    Position is unchanged by the impulse.
    """
    def __init__(self, epoch_jd: float, delta_v: float):
        """
        Args:
            epoch_jd (float): Time of execution [JD].
            delta_v (float): Signed magnitude [m/s]; positive is prograde.
        """
        self.epoch_jd = epoch_jd
        self.delta_v = float(delta_v)

    def apply_to_state(self, state: OrbitalState) -> OrbitalState:
        """
        Applies the impulse to a state if the epochs match; otherwise the state
        is returned unchanged.

        Args:
            state (OrbitalState): Pre-burn state.

        Returns:
            OrbitalState: Post-burn state with v' = v + dV * v_hat.

        Raises:
            DegenerateStateError: If the velocity is zero, leaving no burn direction.
        """
        if abs(state.jd - self.epoch_jd) > EPOCH_TOLERANCE_DAYS:
            return state

        v_mag = state.speed
        if v_mag == 0:
            raise DegenerateStateError("Zero velocity at the burn point, tangential direction undefined.")

        v_hat = state.velocity / v_mag
        v_new = state.velocity + self.delta_v * v_hat

        logger.debug("Tangential impulse of %.6e m/s at JD %.5f: |v| %.6f -> %.6f m/s",
                     self.delta_v, self.epoch_jd, v_mag, v_new.norm())
        return OrbitalState(position=state.position, velocity=v_new, jd=state.jd)
