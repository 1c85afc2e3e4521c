import math

import numpy as np
import pytest

from orbitsim.config.settings import MU_EARTH
from orbitsim.physics.dynamics import EquationsOfMotion, OrbitalDynamics
from orbitsim.physics.solver import RK4Solver
from orbitsim.physics.state import Control, State


class DecayDynamics(EquationsOfMotion):
    """m_dot = -m, everything else frozen."""
    def derivative(self, state, control, t=0.0):
        return State([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], -state.m)


class RecordingDynamics(EquationsOfMotion):
    def __init__(self):
        self.calls = []

    def derivative(self, state, control, t=0.0):
        self.calls.append((control, t))
        return State(state.v, [0.0, 0.0, 0.0], 0.0)


def test_rk4_matches_fourth_order_taylor_on_linear_system():
    h = 0.1
    state = State([1.0, 2.0, 3.0], [0.0, 0.0, 0.0], 2.0)

    out = RK4Solver(DecayDynamics()).step(state, Control(), h)

    expected = 2.0 * (1 - h + h**2 / 2 - h**3 / 6 + h**4 / 24)
    assert out.m == pytest.approx(expected, rel=1e-14)
    np.testing.assert_array_equal(out.r.to_array(), [1.0, 2.0, 3.0])


def test_stages_share_control_and_use_classical_times():
    dyn = RecordingDynamics()
    control = Control([0.3, 0.0, 0.0], 100.0)
    RK4Solver(dyn).step(State([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], 1.0), control, 2.0, t=10.0)

    assert [t for _, t in dyn.calls] == [10.0, 11.0, 11.0, 12.0]
    assert all(c is control for c, _ in dyn.calls)


def test_step_does_not_mutate_input_state():
    state = State([7000.0, 0.0, 0.0], [0.0, 7.5, 0.0], 100.0)
    before = state.to_array().copy()
    RK4Solver(OrbitalDynamics()).step(state, Control(), 10.0)
    np.testing.assert_array_equal(state.to_array(), before)


def _circular_error(dt, duration, radius=7000.0):
    """Position error of a two-body circular orbit against the analytic solution."""
    omega = math.sqrt(MU_EARTH / radius**3)
    v = omega * radius
    solver = RK4Solver(OrbitalDynamics(j2_enabled=False))
    state = State([radius, 0.0, 0.0], [0.0, v, 0.0], 100.0)

    n = int(round(duration / dt))
    for i in range(n):
        state = solver.step(state, Control(), dt, i * dt)

    angle = omega * n * dt
    expected = np.array([radius * math.cos(angle), radius * math.sin(angle), 0.0])
    return float(np.linalg.norm(state.r.to_array() - expected))


def test_rk4_error_scales_with_fourth_power_of_step():
    coarse = _circular_error(60.0, 1200.0)
    fine = _circular_error(30.0, 1200.0)

    ratio = coarse / fine
    assert 12.0 < ratio < 20.0


def test_step_preserves_circular_orbit_over_short_step():
    radius = 7000.0
    angular_speed = math.sqrt(MU_EARTH / radius**3)
    velocity_mag = math.sqrt(MU_EARTH / radius)
    dt = 1.0

    state = State([radius, 0.0, 0.0], [0.0, velocity_mag, 0.0], 100.0)
    next_state = RK4Solver(OrbitalDynamics(j2_enabled=False)).step(state, Control(), dt)

    angle = angular_speed * dt
    expected_r = np.array([radius * math.cos(angle), radius * math.sin(angle), 0.0])
    expected_v = np.array([-velocity_mag * math.sin(angle), velocity_mag * math.cos(angle), 0.0])

    np.testing.assert_allclose(next_state.r.to_array(), expected_r, atol=1e-9, rtol=0.0)
    np.testing.assert_allclose(next_state.v.to_array(), expected_v, atol=1e-12, rtol=0.0)
