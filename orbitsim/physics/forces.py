# orbitsim/physics/forces.py
import numpy as np
from orbitsim.config.settings import MU_EARTH, RE, J2


class ForceModel:
    """
    Base force model. Returns acceleration in km/s^2.
    Signature accepts the active control and an optional time t (seconds);
    models that do not depend on them ignore them.
    """
    def acceleration(self, state, control=None, t: float = 0.0) -> np.ndarray:
        raise NotImplementedError


class NewtonianGravity(ForceModel):
    def __init__(self, mu: float = MU_EARTH):
        self.mu = float(mu)

    def acceleration(self, state, control=None, t: float = 0.0) -> np.ndarray:
        r = state.r.to_array()
        norm = np.linalg.norm(r)
        if norm == 0:
            return np.zeros(3, dtype=float)
        return -(self.mu / norm**3) * r


class J2Perturbation(ForceModel):
    """
    Earth oblateness (J2 zonal term), closed form in ECI.
    """
    def __init__(self, mu: float = MU_EARTH, radius: float = RE, j2: float = J2):
        self.mu = float(mu)
        self.radius = float(radius)
        self.j2 = float(j2)

    def acceleration(self, state, control=None, t: float = 0.0) -> np.ndarray:
        r = state.r.to_array()
        norm = np.linalg.norm(r)
        if norm == 0:
            return np.zeros(3, dtype=float)
        z2_r2 = (r[2] / norm)**2
        factor = 1.5 * self.j2 * self.mu * self.radius**2 / norm**5
        a_j2 = factor * np.array([
            r[0] * (5.0 * z2_r2 - 1.0),
            r[1] * (5.0 * z2_r2 - 1.0),
            r[2] * (5.0 * z2_r2 - 3.0)
        ], dtype=float)
        return a_j2


class ThrustAcceleration(ForceModel):
    """
    Thrust from the active control. N -> km/s^2: divide by 1000, then by mass (kg).
    Non-positive mass contributes nothing.
    """
    def acceleration(self, state, control=None, t: float = 0.0) -> np.ndarray:
        if control is None or state.m <= 0.0:
            return np.zeros(3, dtype=float)
        thrust_km = control.thrust_eci.to_array() / 1000.0
        return thrust_km / state.m


class CompositeForce(ForceModel):
    def __init__(self, *models):
        self.models = list(models)

    def acceleration(self, state, control=None, t: float = 0.0) -> np.ndarray:
        total_a = np.zeros(3, dtype=float)
        for model in self.models:
            total_a += model.acceleration(state, control, t)
        return total_a

    def has_j2(self) -> bool:
        return any(isinstance(m, J2Perturbation) for m in self.models)
