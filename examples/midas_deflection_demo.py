"""
1981 Midas Kinetic Impactor Example
-----------------------------------
This script reproduces the deflection scenario for asteroid 1981 Midas:
50 probes impact the asteroid 11 years after the element epoch. It reports
the imparted Delta-V, the new semi-major axis and period change, and plots
how far the deflected asteroid drifts from its undeflected position.
"""

import numpy as np
import matplotlib.pyplot as plt

from deflection_toolkit.config.constants import (
    AU_TO_METERS, DAYS_PER_YEAR, MIDAS_ELEMENTS, MIDAS_MISSION, MIDAS_PROPERTIES
)
from deflection_toolkit.dynamics.kepler import jd_from_years, propagate
from deflection_toolkit.logging_config import setup_logging
from deflection_toolkit.mission.deflection import (
    deflect, impact_summary, osculating_deflection, separation_history
)

def midas_deflection_demo():
    setup_logging()
    MIDAS_MISSION.validate()

    # 1. Impactor momentum transfer
    dv_momentum = MIDAS_MISSION.momentum_delta_v(MIDAS_PROPERTIES)
    print("--- Kinetic Impactor Campaign ---")
    print(f"Probes: {MIDAS_MISSION.n_probes} x {MIDAS_MISSION.probe_mass_kg / 1000:.1f} t "
          f"at {MIDAS_MISSION.impact_speed_m_s / 1000:.1f} km/s (beta = {MIDAS_MISSION.beta})")
    print(f"Target mass: {MIDAS_PROPERTIES.mass_kg:.2e} kg")
    print(f"Imparted Delta-V: {dv_momentum * 1000:.4f} mm/s")

    # 2. State at impact
    years = MIDAS_MISSION.years_to_impact
    dv = MIDAS_MISSION.delta_v_m_s
    jd_impact = jd_from_years(MIDAS_ELEMENTS.epoch_jd, years)
    state = propagate(MIDAS_ELEMENTS, jd_impact)

    print(f"\n--- State at Impact (JD {jd_impact:.2f}) ---")
    print(f"Heliocentric distance: {state.radius / AU_TO_METERS:.4f} AU")
    print(f"Speed: {state.speed / 1000:.4f} km/s")

    # 3. Deflected orbit
    result = deflect(MIDAS_ELEMENTS, years, dv)
    if not result.ok:
        print(f"Deflection failed ({result.error.kind.value}): {result.error}")
        return
    deflected = result.elements
    summary = impact_summary(MIDAS_ELEMENTS, dv, years)

    print("\n--- Deflection (first-order model) ---")
    print(f"a: {MIDAS_ELEMENTS.a:.10f} AU -> {deflected.a:.10f} AU "
          f"(+{(deflected.a - MIDAS_ELEMENTS.a) * AU_TO_METERS / 1000:.3f} km)")
    print(f"Period change: {summary.delta_period_days * 86400:.2f} s "
          f"({summary.delta_period_days:.6f} days)")

    full = osculating_deflection(MIDAS_ELEMENTS, years, dv).unwrap()
    print(f"Osculating e after burn: {full.e:.12f} (model keeps {deflected.e})")

    # 4. Drift between the baseline and the deflected asteroid
    window = MIDAS_MISSION.deflection_window_years
    jds = np.linspace(jd_impact, jd_from_years(MIDAS_ELEMENTS.epoch_jd, years + window), 400)
    sep_km = separation_history(MIDAS_ELEMENTS, deflected, jds) / 1000.0
    print(f"Separation {window:.0f} years after impact: {sep_km[-1]:.1f} km")

    t_years = (jds - jd_impact) / DAYS_PER_YEAR
    plt.figure(figsize=(9, 5))
    plt.plot(t_years, sep_km, 'b-')
    plt.xlabel('Years after impact')
    plt.ylabel('Separation from undeflected position [km]')
    plt.title(f'1981 Midas: drift after a {dv * 1000:.2f} mm/s tangential impulse')
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.show()

if __name__ == "__main__":
    midas_deflection_demo()
