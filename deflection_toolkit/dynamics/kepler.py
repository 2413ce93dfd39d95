"""
Analytic two-body (Keplerian) propagation of elliptical orbits.

Elements -> mean anomaly -> eccentric anomaly (Kepler's equation) -> true anomaly
-> perifocal state -> inertial state.
"""
import logging
import math
from typing import List

import numpy as np
from scipy.optimize import newton

from deflection_toolkit.config.constants import DAYS_PER_YEAR, SECONDS_PER_DAY, SUN, CentralBody
from deflection_toolkit.dynamics.state import OrbitalElements, OrbitalState
from deflection_toolkit.dynamics.vector import Vector3
from deflection_toolkit.errors import InvalidInputError

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


def normalize_angle(angle: float) -> float:
    """Reduces an angle [rad] into [0, 2*pi)."""
    result = float(np.mod(angle, TWO_PI))
    # Tiny negative inputs round up to exactly 2*pi
    if result >= TWO_PI:
        result = 0.0
    return result


def solve_kepler(M: float, e: float, tol: float = 1e-10, max_iter: int = 50) -> float:
    """
    Solves Kepler's equation M = E - e*sin(E) for the eccentric anomaly.

    Newton-Raphson starting from E0 = M. Iteration stops once |dE| < tol or after
    max_iter steps; the last iterate is returned either way. Hitting the cap is
    logged but not treated as an error.

    Args:
        M (float): Mean anomaly [rad].
        e (float): Eccentricity, 0 <= e < 1.
        tol (float): Absolute tolerance on the Newton step [rad].
        max_iter (int): Iteration cap.

    Returns:
        float: Eccentric anomaly E [rad].
    """
    def f(E):
        return E - e * np.sin(E) - M

    def fprime(E):
        return 1.0 - e * np.cos(E)

    E, info = newton(f, M, fprime=fprime, tol=tol, maxiter=max_iter,
                     full_output=True, disp=False)
    if not info.converged:
        logger.warning(
            "Kepler solver hit the %d iteration cap (M=%.12f, e=%.6f); accepting last iterate E=%.12f",
            max_iter, M, e, E
        )
    return float(E)


def eccentric_to_true_anomaly(E: float, e: float) -> float:
    """True anomaly [rad] in (-pi, pi] from the eccentric anomaly."""
    cos_E = np.cos(E)
    denom = 1.0 - e * cos_E
    sin_nu = np.sqrt(1.0 - e**2) * np.sin(E) / denom
    cos_nu = (cos_E - e) / denom
    return float(np.arctan2(sin_nu, cos_nu))


def true_to_eccentric_anomaly(nu: float, e: float) -> float:
    """Eccentric anomaly [rad] in (-pi, pi] from the true anomaly."""
    return float(np.arctan2(np.sqrt(1.0 - e**2) * np.sin(nu), e + np.cos(nu)))


def eccentric_to_mean_anomaly(E: float, e: float) -> float:
    return float(E - e * np.sin(E))


def perifocal_to_inertial_matrix(i: float, raan: float, arg_p: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal (PQW) frame to the inertial frame,
    R = Rz(Omega) * Rx(i) * Rz(omega).

    Args:
        i (float): Inclination [rad].
        raan (float): Longitude of the ascending node [rad].
        arg_p (float): Argument of periapsis [rad].

    Returns:
        np.ndarray: 3x3 rotation matrix.
    """
    cos_O, sin_O = np.cos(raan), np.sin(raan)
    cos_i, sin_i = np.cos(i), np.sin(i)
    cos_w, sin_w = np.cos(arg_p), np.sin(arg_p)

    return np.array([
        [cos_O * cos_w - sin_O * sin_w * cos_i, -cos_O * sin_w - sin_O * cos_w * cos_i,  sin_O * sin_i],
        [sin_O * cos_w + cos_O * sin_w * cos_i, -sin_O * sin_w + cos_O * cos_w * cos_i, -cos_O * sin_i],
        [sin_w * sin_i,                          cos_w * sin_i,                           cos_i],
    ])


def _check_jd(jd: float) -> None:
    if not math.isfinite(jd):
        raise InvalidInputError(f"Julian Date must be finite, got {jd}")


def jd_from_years(epoch_jd: float, years: float) -> float:
    """Julian Date a number of Julian years after an epoch."""
    return epoch_jd + years * DAYS_PER_YEAR


def mean_motion(elements: OrbitalElements, body: CentralBody = SUN) -> float:
    """Mean motion n = sqrt(mu / a^3) [rad/s]."""
    a = elements.a * body.length_unit_m
    return float(np.sqrt(body.mu / a**3))


def orbital_period(elements: OrbitalElements, body: CentralBody = SUN) -> float:
    """Orbital period [s]."""
    elements.validate()
    return TWO_PI / mean_motion(elements, body)


def mean_anomaly_at(elements: OrbitalElements, target_jd: float, body: CentralBody = SUN) -> float:
    """
    Mean anomaly [rad], reduced to [0, 2*pi), at a Julian Date.

    Raises:
        InvalidInputError: If the elements violate the elliptical contract or the JD is not finite.
    """
    elements.validate()
    _check_jd(target_jd)

    M0 = np.radians(elements.M0_deg)
    dt = (target_jd - elements.epoch_jd) * SECONDS_PER_DAY
    return normalize_angle(M0 + mean_motion(elements, body) * dt)


def propagate(elements: OrbitalElements, target_jd: float, body: CentralBody = SUN) -> OrbitalState:
    """
    Propagates Keplerian elements to a Julian Date.

    Args:
        elements (OrbitalElements): Elements with a in body length units and angles in degrees.
        target_jd (float): Julian Date of the requested state (before or after epoch).
        body (CentralBody): Central body supplying mu and the length unit.

    Returns:
        OrbitalState: Inertial position [m] and velocity [m/s] at target_jd.

    Raises:
        InvalidInputError: If e is outside [0, 1), a <= 0 or an input is not finite.
    """
    M = mean_anomaly_at(elements, target_jd, body)

    i, raan, arg_p, _ = elements.angles_rad()
    a = elements.a * body.length_unit_m
    e = elements.e
    mu = body.mu

    E = solve_kepler(M, e)
    nu = eccentric_to_true_anomaly(E, e)

    r = a * (1.0 - e * np.cos(E))
    p = a * (1.0 - e**2)

    # Radial and transverse velocity components
    rdot = np.sqrt(mu / p) * e * np.sin(nu)
    rfdot = np.sqrt(mu / p) * (1.0 + e * np.cos(nu))

    cos_nu, sin_nu = np.cos(nu), np.sin(nu)
    r_pqw = np.array([r * cos_nu, r * sin_nu, 0.0])
    v_pqw = np.array([rdot * cos_nu - rfdot * sin_nu, rdot * sin_nu + rfdot * cos_nu, 0.0])

    R = perifocal_to_inertial_matrix(i, raan, arg_p)

    logger.debug("Propagated to JD %.5f: M=%.9f E=%.9f nu=%.9f r=%.6e m", target_jd, M, E, nu, r)

    return OrbitalState(
        position=Vector3.from_array(R @ r_pqw),
        velocity=Vector3.from_array(R @ v_pqw),
        jd=float(target_jd),
    )


def sample_trajectory(elements: OrbitalElements, jd_start: float, jd_end: float, num: int = 200,
                      body: CentralBody = SUN) -> List[OrbitalState]:
    """
    Propagates elements to evenly spaced Julian Dates (end points included).

    Args:
        elements (OrbitalElements): Orbit to sample.
        jd_start (float): First Julian Date.
        jd_end (float): Last Julian Date.
        num (int): Number of samples (>= 1).
        body (CentralBody): Central body.

    Returns:
        List[OrbitalState]: One state per sample time.
    """
    if num < 1:
        raise InvalidInputError(f"num must be >= 1, got {num}")
    _check_jd(jd_start)
    _check_jd(jd_end)
    return [propagate(elements, float(jd), body) for jd in np.linspace(jd_start, jd_end, num)]


class KeplerPropagator:
    """
    Stateless two-body propagator. Groups the module-level functions so they
    can be passed around as a single collaborator.
    """

    @staticmethod
    def propagate(elements: OrbitalElements, target_jd: float, body: CentralBody = SUN) -> OrbitalState:
        return propagate(elements, target_jd, body)

    @staticmethod
    def solve_kepler(M: float, e: float, tol: float = 1e-10, max_iter: int = 50) -> float:
        return solve_kepler(M, e, tol=tol, max_iter=max_iter)

    @staticmethod
    def sample(elements: OrbitalElements, jd_start: float, jd_end: float, num: int = 200,
               body: CentralBody = SUN) -> List[OrbitalState]:
        return sample_trajectory(elements, jd_start, jd_end, num, body)
