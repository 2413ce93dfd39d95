import numpy as np

from deflection_toolkit.config.constants import SUN, CentralBody
from deflection_toolkit.dynamics.kepler import (
    eccentric_to_mean_anomaly,
    normalize_angle,
    true_to_eccentric_anomaly,
)
from deflection_toolkit.dynamics.state import OrbitalElements, OrbitalState
from deflection_toolkit.errors import DegenerateStateError

# Below this, the orbit is treated as circular / equatorial
SINGULARITY_TOL = 1e-11


def state_to_orbital_elements(state: OrbitalState, body: CentralBody = SUN) -> OrbitalElements:
    """
    Converts a Cartesian state to osculating Keplerian elements.

    Args:
        state (OrbitalState): Position [m] and velocity [m/s] at state.jd.
        body (CentralBody): Central body; a is returned in its length unit.

    Returns:
        OrbitalElements: Elements with epoch_jd = state.jd and angles in degrees.

    Raises:
        DegenerateStateError: If the state has no angular momentum or is not a bound ellipse.
    """
    mu = body.mu
    r = state.position.to_array()
    v = state.velocity.to_array()

    h_vec = np.cross(r, v)
    h_mag = np.linalg.norm(h_vec)

    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)

    if r_mag == 0 or h_mag == 0:
        raise DegenerateStateError("State has zero angular momentum (rectilinear motion).")

    # Specific energy
    energy = (v_mag**2) / 2 - mu / r_mag
    if energy >= 0:
        raise DegenerateStateError(f"State is not on a bound ellipse (specific energy {energy:.6e} J/kg).")

    a = -mu / (2 * energy)

    # Eccentricity vector points to periapsis
    e_vec = (1 / mu) * ((v_mag**2 - mu / r_mag) * r - np.dot(r, v) * v)
    e = np.linalg.norm(e_vec)

    i_rad = np.arccos(np.clip(h_vec[2] / h_mag, -1.0, 1.0))

    # Node vector n = k x h
    n_vec = np.array([-h_vec[1], h_vec[0], 0.0])
    n_mag = np.linalg.norm(n_vec)
    equatorial = n_mag <= SINGULARITY_TOL * h_mag
    circular = e < SINGULARITY_TOL

    if equatorial:
        raan_rad = 0.0
        n_hat = np.array([1.0, 0.0, 0.0])
    else:
        n_hat = n_vec / n_mag
        raan_rad = np.arccos(np.clip(n_hat[0], -1.0, 1.0))
        if n_hat[1] < 0:
            raan_rad = 2 * np.pi - raan_rad

    # Periapsis direction measured in the orbit plane from the node line
    h_hat = h_vec / h_mag
    if circular:
        arg_p_rad = 0.0
        p_hat = n_hat
    else:
        p_hat = e_vec / e
        arg_p_rad = np.arctan2(np.dot(np.cross(n_hat, p_hat), h_hat), np.dot(n_hat, p_hat))

    # True anomaly from periapsis (or node line for circular orbits)
    nu_rad = np.arctan2(np.dot(np.cross(p_hat, r), h_hat), np.dot(p_hat, r))

    E = true_to_eccentric_anomaly(nu_rad, e)
    M = normalize_angle(eccentric_to_mean_anomaly(E, e))

    return OrbitalElements(
        a=float(a / body.length_unit_m),
        e=float(e),
        i_deg=float(np.degrees(i_rad)),
        raan_deg=float(np.degrees(raan_rad)),
        arg_p_deg=float(np.degrees(normalize_angle(arg_p_rad))),
        M0_deg=float(np.degrees(M)),
        epoch_jd=state.jd,
    )
