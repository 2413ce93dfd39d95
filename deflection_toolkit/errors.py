"""
Error types raised (or carried in result objects) by the toolkit.
"""
from enum import Enum


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    DEGENERATE_STATE = "degenerate_state"


class OrbitError(Exception):
    """
    Base class for orbit computation failures. Carries an ErrorKind so callers
    can branch on the kind without matching on exception types.
    """
    kind: ErrorKind = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(OrbitError, ValueError):
    """Malformed orbital elements or arguments, detected before computing."""
    kind = ErrorKind.INVALID_INPUT


class DegenerateStateError(OrbitError, RuntimeError):
    """
    Physically degenerate intermediate result, e.g. zero velocity at the burn
    point or a post-burn trajectory that is no longer a bound ellipse.
    """
    kind = ErrorKind.DEGENERATE_STATE
