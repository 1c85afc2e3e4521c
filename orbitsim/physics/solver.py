# orbitsim/physics/solver.py
from orbitsim.physics.state import State


class RK4Solver:
    """
    Runge-Kutta 4th order solver for state integration.
    Works with any EquationsOfMotion (object exposing derivative(state, control, t)).
    Fixed step: accuracy is controlled by the caller's choice of dt.
    """
    def __init__(self, dynamics):
        self.dynamics = dynamics

    def step(self, state, control, dt, t: float = 0.0):
        """
        Perform a single RK4 step. The same control is used for all four stages.
        """
        def deriv(y, ti):
            return self.dynamics.derivative(State.from_array(y), control, ti).to_array()

        y0 = state.to_array()

        k1 = deriv(y0, t)
        k2 = deriv(y0 + 0.5 * dt * k1, t + 0.5 * dt)
        k3 = deriv(y0 + 0.5 * dt * k2, t + 0.5 * dt)
        k4 = deriv(y0 + dt * k3, t + dt)

        y_next = y0 + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)

        return State.from_array(y_next)
