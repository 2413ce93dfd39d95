"""
Physical and mission constants.

Everything here is an immutable table passed explicitly to the computations;
nothing in the toolkit reads or mutates module-level state at run time.
Units: meters (m), seconds (s), kilograms (kg), meters/second (m/s).
Element sets keep their semi-major axis in the central body's length unit (AU).
"""
from dataclasses import dataclass

from deflection_toolkit.dynamics.state import OrbitalElements
from deflection_toolkit.errors import InvalidInputError
from deflection_toolkit.trajectory.maneuver import kinetic_impactor_delta_v

SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25

AU_TO_METERS = 1.495978707e11
GM_SUN = 1.32712440018e20  # m^3/s^2


@dataclass(frozen=True)
class CentralBody:
    """
    Attracting body of a two-body problem.

    Attributes:
        name: Display name.
        mu: Gravitational parameter [m^3/s^2].
        length_unit_m: Meters per element-set length unit (1 AU for the Sun).
    """
    name: str
    mu: float
    length_unit_m: float


@dataclass(frozen=True)
class BodyProperties:
    name: str
    mass_kg: float
    rotation_period_hours: float


@dataclass(frozen=True)
class MissionParameters:
    """
    Kinetic impactor campaign.

    Attributes:
        n_probes: Number of impactors.
        probe_mass_kg: Mass of each impactor [kg].
        impact_speed_m_s: Relative impact speed [m/s].
        beta: Momentum enhancement factor (ejecta recoil).
        delta_v_m_s: Total velocity change imparted to the target [m/s].
        years_to_impact: Impact time measured from the element epoch [years].
        deflection_window_years: Span shown when comparing baseline and deflected orbits [years].
    """
    n_probes: int
    probe_mass_kg: float
    impact_speed_m_s: float
    beta: float
    delta_v_m_s: float
    years_to_impact: float
    deflection_window_years: float

    def validate(self) -> None:
        if self.n_probes <= 0:
            raise InvalidInputError("n_probes must be > 0")
        if self.probe_mass_kg <= 0:
            raise InvalidInputError("probe_mass_kg must be > 0")
        if self.impact_speed_m_s <= 0:
            raise InvalidInputError("impact_speed_m_s must be > 0")
        if self.beta <= 0:
            raise InvalidInputError("beta must be > 0")
        if self.delta_v_m_s < 0:
            raise InvalidInputError("delta_v_m_s must be >= 0")
        if self.years_to_impact < 0:
            raise InvalidInputError("years_to_impact must be >= 0")
        if self.deflection_window_years <= 0:
            raise InvalidInputError("deflection_window_years must be > 0")

    def momentum_delta_v(self, target: BodyProperties) -> float:
        """Delta-V implied by the probe momentum for a given target body [m/s]."""
        return kinetic_impactor_delta_v(
            self.n_probes, self.probe_mass_kg, self.impact_speed_m_s,
            self.beta, target.mass_kg
        )


SUN = CentralBody(name='SUN', mu=GM_SUN, length_unit_m=AU_TO_METERS)

# 1981 Midas (JPL, epoch JD 2458000.5 = 2017-Sep-04)
MIDAS_ELEMENTS = OrbitalElements(
    a=1.7759,
    e=0.6502,
    i_deg=39.833,
    raan_deg=356.90,
    arg_p_deg=267.80,
    M0_deg=256.48,
    epoch_jd=2458000.5,
)

MIDAS_PROPERTIES = BodyProperties(name='1981 Midas', mass_kg=1.0e13, rotation_period_hours=5.2)

# Earth-Moon barycenter mean elements at J2000 (Standish), M0 = L - varpi
EARTH_ELEMENTS = OrbitalElements(
    a=1.00000261,
    e=0.01671123,
    i_deg=-0.00001531,
    raan_deg=0.0,
    arg_p_deg=102.93768193,
    M0_deg=357.52688973,
    epoch_jd=2451545.0,
)

# 50 probes of 10 t at 10 km/s, beta = 2.5 -> ~1.25 mm/s on a 1e13 kg body
MIDAS_MISSION = MissionParameters(
    n_probes=50,
    probe_mass_kg=10_000.0,
    impact_speed_m_s=10_000.0,
    beta=2.5,
    delta_v_m_s=0.00125,
    years_to_impact=11.0,
    deflection_window_years=15.0,
)
