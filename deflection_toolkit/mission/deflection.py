"""
Impulsive deflection of a small body.

First-order model: an instantaneous prograde delta-v is applied at a fixed
position, the new semi-major axis follows from the vis-viva equation, and
every other element (e, i, Omega, omega, M0, epoch) is carried over unchanged.
A real burn also perturbs eccentricity and orientation; that is ignored here
and is available separately through osculating_deflection().
"""
import logging
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from deflection_toolkit.config.constants import DAYS_PER_YEAR, SUN, CentralBody
from deflection_toolkit.dynamics.kepler import jd_from_years, propagate
from deflection_toolkit.dynamics.state import OrbitalElements, OrbitalState
from deflection_toolkit.errors import DegenerateStateError, InvalidInputError, OrbitError
from deflection_toolkit.mission.elements import state_to_orbital_elements
from deflection_toolkit.trajectory.maneuver import TangentialImpulse

logger = logging.getLogger(__name__)


class DeflectionResult(NamedTuple):
    """
    Outcome of a deflection: either new elements or the error that prevented them.
    """
    elements: Optional[OrbitalElements]
    error: Optional[OrbitError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> OrbitalElements:
        """Returns the elements, raising the carried error if the deflection failed."""
        if self.error is not None:
            raise self.error
        return self.elements


class ImpactSummary(NamedTuple):
    delta_v: float  # m/s
    delta_period_days: float


def _burn_state(elements: OrbitalElements, years_since_epoch: float, delta_v: float,
                body: CentralBody) -> OrbitalState:
    if not np.isfinite(delta_v):
        raise InvalidInputError(f"delta_v must be finite, got {delta_v}")
    target_jd = jd_from_years(elements.epoch_jd, years_since_epoch)
    state = propagate(elements, target_jd, body)
    return TangentialImpulse(target_jd, delta_v).apply_to_state(state)


def _vis_viva_semi_major_axis(state: OrbitalState, mu: float) -> float:
    """Semi-major axis [m] from 1/a = 2/r - v^2/mu."""
    r = state.radius
    if r == 0:
        raise DegenerateStateError("Burn position coincides with the central body.")
    v = state.speed
    inv_a = 2.0 / r - (v * v) / mu
    if inv_a <= 0:
        raise DegenerateStateError(
            f"Post-burn trajectory is not a bound ellipse (1/a = {inv_a:.6e} 1/m)."
        )
    return 1.0 / inv_a


def deflect(elements: OrbitalElements, years_since_epoch: float, delta_v: float,
            body: CentralBody = SUN) -> DeflectionResult:
    """
    Applies a tangential delta-v and re-derives the semi-major axis.

    Args:
        elements (OrbitalElements): Baseline orbit.
        years_since_epoch (float): Burn time in Julian years after elements.epoch_jd.
        delta_v (float): Impulse magnitude along the velocity [m/s].
        body (CentralBody): Central body.

    Returns:
        DeflectionResult: New elements (only a changed) or the error kind
        (InvalidInputError for malformed elements, DegenerateStateError for a
        zero-velocity burn point or an unbound post-burn orbit).
    """
    try:
        burned = _burn_state(elements, years_since_epoch, delta_v, body)
        a_new = _vis_viva_semi_major_axis(burned, body.mu) / body.length_unit_m
    except OrbitError as e:
        logger.info("Deflection at %+.3f yr with dV=%.6e m/s failed: %s", years_since_epoch, delta_v, e)
        return DeflectionResult(elements=None, error=e)

    logger.info("Deflection at JD %.5f with dV=%.6e m/s: a %.10f -> %.10f",
                burned.jd, delta_v, elements.a, a_new)
    return DeflectionResult(elements=elements.replace(a=a_new))


def impact_summary(elements: OrbitalElements, delta_v: float, years_to_impact: float,
                   body: CentralBody = SUN) -> ImpactSummary:
    """
    Period change caused by a deflection.

    Uses Kepler's third law normalized to 1 AU / 1 year (T [yr] = a [AU] ** 1.5),
    so element sets must be expressed in AU around a solar-mass primary.

    Args:
        elements (OrbitalElements): Baseline orbit.
        delta_v (float): Impulse magnitude [m/s].
        years_to_impact (float): Burn time in Julian years after the epoch.
        body (CentralBody): Central body.

    Returns:
        ImpactSummary: The supplied delta_v and the period change [days].

    Raises:
        OrbitError: The error carried by a failed deflection.
    """
    deflected = deflect(elements, years_to_impact, delta_v, body).unwrap()

    T_old_years = elements.a ** 1.5
    T_new_years = deflected.a ** 1.5
    delta_days = (T_new_years - T_old_years) * DAYS_PER_YEAR

    return ImpactSummary(delta_v=delta_v, delta_period_days=delta_days)


def osculating_deflection(elements: OrbitalElements, years_since_epoch: float, delta_v: float,
                          body: CentralBody = SUN) -> DeflectionResult:
    """
    Full osculating elements of the post-burn state, with epoch at the burn.

    Unlike deflect(), eccentricity and orientation are re-derived from the
    perturbed state vector.
    """
    try:
        burned = _burn_state(elements, years_since_epoch, delta_v, body)
        new_elements = state_to_orbital_elements(burned, body)
    except OrbitError as e:
        return DeflectionResult(elements=None, error=e)
    return DeflectionResult(elements=new_elements)


def separation_history(baseline: OrbitalElements, deflected: OrbitalElements, jds: Sequence[float],
                       body: CentralBody = SUN) -> np.ndarray:
    """
    Distance between two propagated bodies at each Julian Date.

    Args:
        baseline (OrbitalElements): First orbit.
        deflected (OrbitalElements): Second orbit.
        jds (Sequence[float]): Julian Dates.
        body (CentralBody): Central body.

    Returns:
        np.ndarray: Separations [m], one per JD.
    """
    distances = []
    for jd in jds:
        r1 = propagate(baseline, float(jd), body).position
        r2 = propagate(deflected, float(jd), body).position
        distances.append((r1 - r2).norm())
    return np.array(distances)


def closest_approach(elements_a: OrbitalElements, elements_b: OrbitalElements, jd_start: float,
                     jd_end: float, num: int = 2000, body: CentralBody = SUN) -> Tuple[float, float]:
    """
    Sampled minimum separation between two orbits over a time window.

    Resolution is (jd_end - jd_start) / (num - 1) days; no refinement is done
    between samples.

    Returns:
        Tuple[float, float]: (JD of the minimum, distance [m]).
    """
    if num < 2:
        raise InvalidInputError(f"num must be >= 2, got {num}")
    jds = np.linspace(jd_start, jd_end, num)
    distances = separation_history(elements_a, elements_b, jds, body)
    k = int(np.argmin(distances))
    return float(jds[k]), float(distances[k])
