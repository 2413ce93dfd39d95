"""
Baseline vs. Deflected Orbit Plot
---------------------------------
Samples the undeflected and deflected orbits of 1981 Midas together with
Earth's orbit, plots them in 3D and reports the closest sampled approach
to Earth of each asteroid trajectory within the deflection window.
"""

import numpy as np
import matplotlib.pyplot as plt

from deflection_toolkit.config.constants import AU_TO_METERS, EARTH_ELEMENTS, MIDAS_ELEMENTS, MIDAS_MISSION
from deflection_toolkit.dynamics.kepler import jd_from_years, orbital_period, sample_trajectory
from deflection_toolkit.mission.deflection import closest_approach, deflect

def orbit_comparison_plot():
    years = MIDAS_MISSION.years_to_impact
    deflected = deflect(MIDAS_ELEMENTS, years, MIDAS_MISSION.delta_v_m_s).unwrap()

    jd_impact = jd_from_years(MIDAS_ELEMENTS.epoch_jd, years)
    jd_end = jd_from_years(jd_impact, MIDAS_MISSION.deflection_window_years)

    # One full revolution of each orbit for the plot
    period_days = orbital_period(MIDAS_ELEMENTS) / 86400.0
    midas = sample_trajectory(MIDAS_ELEMENTS, jd_impact, jd_impact + period_days, num=400)
    deflected_states = sample_trajectory(deflected, jd_impact, jd_impact + period_days, num=400)
    earth = sample_trajectory(EARTH_ELEMENTS, jd_impact, jd_impact + 365.25, num=200)

    midas_xyz = np.array([s.position.to_array() for s in midas]) / AU_TO_METERS
    deflected_xyz = np.array([s.position.to_array() for s in deflected_states]) / AU_TO_METERS
    earth_xyz = np.array([s.position.to_array() for s in earth]) / AU_TO_METERS

    print("--- Closest Sampled Approach to Earth ---")
    for label, elements in [("Baseline", MIDAS_ELEMENTS), ("Deflected", deflected)]:
        jd, dist = closest_approach(elements, EARTH_ELEMENTS, jd_impact, jd_end, num=5000)
        print(f"{label}: {dist / AU_TO_METERS:.5f} AU at JD {jd:.2f}")

    fig = plt.figure(figsize=(9, 8))
    ax = fig.add_subplot(111, projection='3d')
    ax.plot(midas_xyz[:, 0], midas_xyz[:, 1], midas_xyz[:, 2], 'r-', label='1981 Midas')
    ax.plot(deflected_xyz[:, 0], deflected_xyz[:, 1], deflected_xyz[:, 2], 'g--', label='1981 Midas (deflected)')
    ax.plot(earth_xyz[:, 0], earth_xyz[:, 1], earth_xyz[:, 2], 'b-', label='Earth')
    ax.scatter([0], [0], [0], color='orange', s=80, label='Sun')
    ax.scatter(*midas_xyz[0], color='k', s=20, label='Impact point')

    ax.set_xlabel('X [AU]')
    ax.set_ylabel('Y [AU]')
    ax.set_zlabel('Z [AU]')
    ax.set_title('Heliocentric orbits (ecliptic J2000)')
    ax.legend()
    plt.tight_layout()
    plt.show()

if __name__ == "__main__":
    orbit_comparison_plot()
