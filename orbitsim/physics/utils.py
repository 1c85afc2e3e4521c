# orbitsim/physics/utils.py
import numpy as np
from orbitsim.config.settings import MU_EARTH, RE, J2

TWO_PI = 2.0 * np.pi


def deg_to_rad(degrees: float) -> float:
    return float(degrees) * np.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return float(radians) * 180.0 / np.pi


def normalize_angle(angle: float) -> float:
    """Wrap an angle (radians) into [0, 2*pi)."""
    ang = float(np.fmod(angle, TWO_PI))
    if ang < 0.0:
        ang += TWO_PI
    # fmod of a tiny negative can round back up to exactly 2*pi
    if ang >= TWO_PI:
        ang = 0.0
    return ang


def clamp(value: float, lo: float, hi: float) -> float:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def specific_energy(state, j2_enabled: bool = True) -> float:
    """
    Compute specific mechanical energy (kinetic + potential, optionally including J2), km^2/s^2.
    Used as a numerical stability diagnostic (not physical conservation proof).
    """
    position = state.r.to_array()
    r = np.linalg.norm(position)
    phi = -MU_EARTH / r
    if j2_enabled:
        cos_theta = position[2] / r
        phi += -(MU_EARTH / r) * (J2 * (RE / r)**2) * (1 - 3 * cos_theta**2) / 2
    kinetic = 0.5 * state.v.dot(state.v)
    return float(kinetic + phi)


def specific_angular_momentum(state) -> float:
    """|r x v| in km^2/s."""
    return state.r.cross(state.v).magnitude()
