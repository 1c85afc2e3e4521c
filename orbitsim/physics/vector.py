# orbitsim/physics/vector.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass(frozen=True)
class Vec3:
    """
    Immutable 3-component vector (ECI components, units set by the owner).
    Division by zero follows float semantics (inf/nan), it does not raise.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Vec3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr) -> "Vec3":
        a = np.asarray(arr, dtype=float)
        if a.shape != (3,):
            raise ValueError(f"Cannot build Vec3 from shape {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vec3":
        # zero divisor -> inf/nan components, never ZeroDivisionError
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vec3.from_array(self.to_array() / np.float64(scalar))

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return float(np.sqrt(self.dot(self)))

    def normalize(self) -> "Vec3":
        mag = self.magnitude()
        if mag == 0.0:
            return Vec3.zero()
        return self / mag
