"""
Deflection Toolkit: Keplerian propagation of small bodies and first-order
impulsive deflection analysis.
"""
from .errors import DegenerateStateError, ErrorKind, InvalidInputError, OrbitError
from .config.constants import (
    EARTH_ELEMENTS,
    MIDAS_ELEMENTS,
    MIDAS_MISSION,
    MIDAS_PROPERTIES,
    SUN,
    BodyProperties,
    CentralBody,
    MissionParameters,
)
from .dynamics.vector import Vector3
from .dynamics.state import OrbitalElements, OrbitalState
from .dynamics.kepler import KeplerPropagator, propagate, sample_trajectory, solve_kepler
from .trajectory.maneuver import TangentialImpulse, kinetic_impactor_delta_v
from .mission.elements import state_to_orbital_elements
from .mission.deflection import (
    DeflectionResult,
    ImpactSummary,
    closest_approach,
    deflect,
    impact_summary,
    osculating_deflection,
    separation_history,
)
from .logging_config import setup_logging

__version__ = "0.1.0"
