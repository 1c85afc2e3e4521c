# orbitsim/physics/dynamics.py
import numpy as np

from orbitsim.config.settings import G0
from orbitsim.physics.state import State
from orbitsim.physics.forces import (
    NewtonianGravity,
    J2Perturbation,
    ThrustAcceleration,
    CompositeForce,
)


def mass_flow_rate(thrust_n: float, isp: float) -> float:
    """
    Continuous propellant flow mdot = -T / (Isp * g0), kg/s.
    Isp <= 0 means no propellant accounting (returns 0).
    """
    if isp > 0.0:
        return -float(thrust_n) / (float(isp) * G0)
    return 0.0


class EquationsOfMotion:
    """
    Capability used by the integrators: x_dot = f(x, u, t).
    derivative() returns a State whose fields hold (r_dot, v_dot, m_dot).
    """
    def derivative(self, state: State, control, t: float = 0.0) -> State:
        raise NotImplementedError


class OrbitalDynamics(EquationsOfMotion):
    """
    Point-mass orbit under two-body gravity, optional J2 and thrust.
    Autonomous: t is accepted and ignored.
    """
    def __init__(self, j2_enabled: bool = True, force_model: CompositeForce = None):
        if force_model is None:
            models = [NewtonianGravity()]
            if j2_enabled:
                models.append(J2Perturbation())
            models.append(ThrustAcceleration())
            force_model = CompositeForce(*models)
        self.force = force_model

    @property
    def j2_enabled(self) -> bool:
        return self.force.has_j2()

    def derivative(self, state: State, control, t: float = 0.0) -> State:
        a_total = self.force.acceleration(state, control, t)
        mdot = 0.0
        if control is not None:
            mdot = mass_flow_rate(control.thrust_magnitude, control.isp)
        return State(state.v, np.asarray(a_total, dtype=float), mdot)
