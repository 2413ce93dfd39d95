from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector. All operations return new instances.
    """
    x: float
    y: float
    z: float

    # numpy scalars defer to __rmul__
    __array_ufunc__ = None

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr) -> 'Vector3':
        arr = np.asarray(arr, dtype=float)
        if arr.shape != (3,):
            raise ValueError(f"Expected a 3-element vector, got shape {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __add__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> 'Vector3':
        if isinstance(s, Vector3):
            return NotImplemented
        return Vector3(s * self.x, s * self.y, s * self.z)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> 'Vector3':
        return Vector3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3.from_array(np.cross(self.to_array(), other.to_array()))

    def norm(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    def normalize(self) -> 'Vector3':
        """Unit vector in the same direction. The zero vector maps to itself."""
        n = self.norm()
        if n == 0:
            return Vector3.zero()
        return Vector3(self.x / n, self.y / n, self.z / n)
