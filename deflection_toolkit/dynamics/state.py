"""
Orbital element and Cartesian state containers.
"""
import math
import dataclasses
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from deflection_toolkit.dynamics.vector import Vector3
from deflection_toolkit.errors import InvalidInputError


@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical Keplerian elements of an elliptical heliocentric orbit.

    Angles are given in degrees and converted to radians where they are used.
    A deflected orbit is always a new instance, never an edit of this one.

    Attributes:
        a: Semi-major axis (central body length unit, AU for the Sun).
        e: Eccentricity, 0 <= e < 1.
        i_deg: Inclination [deg].
        raan_deg: Longitude of the ascending node, Omega [deg].
        arg_p_deg: Argument of perihelion, omega [deg].
        M0_deg: Mean anomaly at epoch [deg].
        epoch_jd: Epoch of the elements [Julian Date].
    """
    a: float
    e: float
    i_deg: float
    raan_deg: float
    arg_p_deg: float
    M0_deg: float
    epoch_jd: float

    def validate(self) -> None:
        """
        Checks the elliptical-orbit contract.

        Raises:
            InvalidInputError: If a <= 0, e is outside [0, 1) or any value is not finite.
        """
        for name, value in self.as_dict().items():
            if not math.isfinite(value):
                raise InvalidInputError(f"Orbital element '{name}' must be finite, got {value}")
        if self.a <= 0:
            raise InvalidInputError(f"Semi-major axis must be > 0, got {self.a}")
        if not 0.0 <= self.e < 1.0:
            raise InvalidInputError(f"Eccentricity must be in [0, 1) for an elliptical orbit, got {self.e}")

    def angles_rad(self) -> Tuple[float, float, float, float]:
        """Returns (i, Omega, omega, M0) in radians."""
        return (
            np.radians(self.i_deg),
            np.radians(self.raan_deg),
            np.radians(self.arg_p_deg),
            np.radians(self.M0_deg),
        )

    def replace(self, **changes) -> 'OrbitalElements':
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'OrbitalElements':
        try:
            return cls(**{k: float(data[k]) for k in ('a', 'e', 'i_deg', 'raan_deg', 'arg_p_deg', 'M0_deg', 'epoch_jd')})
        except KeyError as exc:
            raise InvalidInputError(f"Missing orbital element {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Malformed orbital element: {exc}") from exc


@dataclass(frozen=True)
class OrbitalState:
    """
    Heliocentric inertial state at a Julian Date.

    Attributes:
        position: Position vector [m].
        velocity: Velocity vector [m/s].
        jd: Julian Date at which the state is valid.
    """
    position: Vector3
    velocity: Vector3
    jd: float

    @property
    def radius(self) -> float:
        return self.position.norm()

    @property
    def speed(self) -> float:
        return self.velocity.norm()

    def to_array(self) -> np.ndarray:
        """State vector [rx, ry, rz, vx, vy, vz]."""
        return np.concatenate((self.position.to_array(), self.velocity.to_array()))

    @classmethod
    def from_array(cls, state: np.ndarray, jd: float) -> 'OrbitalState':
        state = np.asarray(state, dtype=float)
        if state.shape != (6,):
            raise ValueError(f"Expected a 6-element state vector, got shape {state.shape}")
        return cls(Vector3.from_array(state[0:3]), Vector3.from_array(state[3:6]), float(jd))
