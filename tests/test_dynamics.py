import numpy as np
import pytest

from orbitsim.config.settings import G0
from orbitsim.physics.dynamics import EquationsOfMotion, OrbitalDynamics, mass_flow_rate
from orbitsim.physics.forces import J2Perturbation, NewtonianGravity
from orbitsim.physics.state import Control, State


def _state():
    return State([6000.0, 2500.0, 1500.0], [-2.0, 6.5, 1.0], 250.0)


def test_mass_flow_rate_follows_rocket_equation():
    assert mass_flow_rate(10.0, 300.0) == pytest.approx(-10.0 / (300.0 * G0))


@pytest.mark.parametrize("isp", [0.0, -100.0])
def test_mass_flow_rate_without_isp_is_zero(isp):
    assert mass_flow_rate(10.0, isp) == 0.0


def test_position_derivative_is_velocity():
    state = _state()
    xdot = OrbitalDynamics().derivative(state, Control())

    assert xdot.r == state.v


def test_velocity_derivative_sums_gravity_and_j2():
    state = _state()
    xdot = OrbitalDynamics(j2_enabled=True).derivative(state, Control())

    expected = NewtonianGravity().acceleration(state) + J2Perturbation().acceleration(state)
    np.testing.assert_allclose(xdot.v.to_array(), expected, rtol=1e-14)
    assert xdot.m == 0.0


def test_j2_can_be_disabled():
    state = _state()
    dyn = OrbitalDynamics(j2_enabled=False)
    xdot = dyn.derivative(state, Control())

    np.testing.assert_allclose(xdot.v.to_array(), NewtonianGravity().acceleration(state), rtol=1e-14)
    assert not dyn.j2_enabled
    assert OrbitalDynamics().j2_enabled


def test_thrust_adds_acceleration_and_mass_flow():
    state = _state()
    control = Control([0.0, 5.0, 0.0], 250.0)
    dyn = OrbitalDynamics(j2_enabled=False)

    coast = dyn.derivative(state, Control())
    burn = dyn.derivative(state, control)

    np.testing.assert_allclose((burn.v - coast.v).to_array(), [0.0, 5.0 / 1000.0 / 250.0, 0.0], atol=1e-15)
    assert burn.m == pytest.approx(-5.0 / (250.0 * G0))


def test_derivative_is_pure_and_time_invariant():
    state = _state()
    before = state.to_array().copy()
    control = Control([1.0, 0.0, 0.0], 200.0)
    dyn = OrbitalDynamics()

    a = dyn.derivative(state, control, 0.0)
    b = dyn.derivative(state, control, 86400.0)

    np.testing.assert_array_equal(state.to_array(), before)
    np.testing.assert_array_equal(a.to_array(), b.to_array())


def test_base_capability_is_abstract():
    with pytest.raises(NotImplementedError):
        EquationsOfMotion().derivative(_state(), Control())
