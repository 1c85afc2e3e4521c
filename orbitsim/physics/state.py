# orbitsim/physics/state.py
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from orbitsim.physics.vector import Vec3


def _as_vec3(v) -> Vec3:
    if isinstance(v, Vec3):
        return v
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError("Position, velocity and thrust must be 3D vectors.")
    return Vec3.from_array(arr)


class State:
    """
    Integrable orbital state.
    r: position (km), v: velocity (km/s), m: mass (kg).
    Flattened form for the integrator: [x, y, z, vx, vy, vz, m]
    """
    __slots__ = ("r", "v", "m")

    def __init__(self, position, velocity, mass: float = 0.0):
        self.r = _as_vec3(position)
        self.v = _as_vec3(velocity)
        self.m = float(mass)

    @classmethod
    def from_array(cls, y) -> "State":
        y = np.asarray(y, dtype=float)
        if y.shape != (7,):
            raise ValueError(f"State vector must have 7 components, got shape {y.shape}")
        return cls(y[0:3], y[3:6], y[6])

    def to_array(self) -> np.ndarray:
        return np.hstack((self.r.to_array(), self.v.to_array(), [self.m]))

    def copy(self):
        return State(self.r, self.v, self.m)

    def __repr__(self):
        return f"State(r={tuple(self.r)}, v={tuple(self.v)}, m={self.m})"


@dataclass(frozen=True)
class Control:
    """
    Actuator command, held constant over one integration step.
    thrust_eci: thrust vector in ECI (N), already clamped to the actuator limit.
    isp: specific impulse (s); <= 0 means no propellant accounting.
    """
    thrust_eci: Vec3 = field(default_factory=Vec3.zero)
    isp: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "thrust_eci", _as_vec3(self.thrust_eci))
        object.__setattr__(self, "isp", float(self.isp))

    @property
    def thrust_magnitude(self) -> float:
        return self.thrust_eci.magnitude()
