# orbitsim/models/satellite.py
import logging

import numpy as np

from orbitsim.config.settings import (
    MU_EARTH,
    EARTH_RADIUS,
    DEFAULT_MASS_KG,
    DEFAULT_ISP_S,
    DEFAULT_THRUST_LIMIT_N,
    J2_ENABLED,
)
from orbitsim.data.tle_to_state import tle_to_state
from orbitsim.physics.dynamics import OrbitalDynamics
from orbitsim.physics.elements import (
    OrbitalElements,
    elements_to_state_vectors,
    state_vectors_to_elements,
)
from orbitsim.physics.solver import RK4Solver
from orbitsim.physics.state import State, Control
from orbitsim.physics.vector import Vec3

logger = logging.getLogger(__name__)


class Satellite:
    """
    Point-mass satellite: Keplerian elements + ECI state + actuator control + clock.

    Angles are given in degrees at construction and stored/returned in radians.
    advance() is the only mutator of state, elements and time.
    """
    def __init__(self, semi_major_axis, eccentricity, inclination, raan, arg_periapsis,
                 true_anomaly, mass_kg=DEFAULT_MASS_KG, isp_s=DEFAULT_ISP_S,
                 thrust_limit_n=DEFAULT_THRUST_LIMIT_N, j2_enabled=J2_ENABLED):
        elements = OrbitalElements.from_degrees(
            semi_major_axis, eccentricity, inclination, raan, arg_periapsis, true_anomaly
        )
        r, v = elements_to_state_vectors(elements)
        self._init_common(elements, State(r, v, mass_kg), isp_s, thrust_limit_n, j2_enabled)

    @classmethod
    def from_state(cls, position, velocity, mass_kg=DEFAULT_MASS_KG, isp_s=DEFAULT_ISP_S,
                   thrust_limit_n=DEFAULT_THRUST_LIMIT_N, j2_enabled=J2_ENABLED):
        """Build from an ECI state (km, km/s); elements are derived from it."""
        state = State(position, velocity, mass_kg)
        sat = cls.__new__(cls)
        sat._init_common(
            state_vectors_to_elements(state.r, state.v),
            state, isp_s, thrust_limit_n, j2_enabled,
        )
        return sat

    @classmethod
    def from_tle(cls, tle1, tle2, epoch=None, **kwargs):
        """Build from a two-line element set, sampled with SGP4 at epoch (UTC, default now)."""
        r, v = tle_to_state(tle1, tle2, epoch=epoch)
        return cls.from_state(r, v, **kwargs)

    def _init_common(self, elements, state, isp_s, thrust_limit_n, j2_enabled):
        if thrust_limit_n < 0:
            raise ValueError("thrust_limit_n must be >= 0")
        self.elements = elements
        self.state = state
        self.control = Control(Vec3.zero(), isp_s)
        self.time = 0.0
        self.thrust_limit_n = float(thrust_limit_n)
        self.j2_enabled = bool(j2_enabled)
        self._solver = RK4Solver(OrbitalDynamics(j2_enabled=self.j2_enabled))

    # ---------------------------------------------------------------- mutators

    def set_thrust(self, thrust):
        """
        Command an ECI thrust vector (N). Magnitudes above thrust_limit_n are
        scaled down uniformly (direction kept); Isp is unchanged.
        """
        vec = thrust if isinstance(thrust, Vec3) else Vec3.from_array(thrust)
        mag = vec.magnitude()
        if mag > self.thrust_limit_n:
            logger.debug("Clamping thrust %.6g N to limit %.6g N", mag, self.thrust_limit_n)
            vec = vec.normalize() * self.thrust_limit_n
        self.control = Control(vec, self.control.isp)

    def advance(self, dt):
        """One RK4 step of dt seconds with the current control, then refresh elements."""
        new_state = self._solver.step(self.state, self.control, dt, self.time)
        new_elements = state_vectors_to_elements(new_state.r, new_state.v)
        if not new_elements.is_finite():
            logger.warning("Non-finite orbital elements at t=%.3f s (escape or degenerate orbit)",
                           self.time + dt)
        self.state, self.elements, self.time = new_state, new_elements, self.time + dt

    # ----------------------------------------------------------------- queries

    @property
    def position(self) -> Vec3:
        return self.state.r

    @property
    def velocity(self) -> Vec3:
        return self.state.v

    @property
    def x(self) -> float:
        return self.state.r.x

    @property
    def y(self) -> float:
        return self.state.r.y

    @property
    def z(self) -> float:
        return self.state.r.z

    @property
    def mass(self) -> float:
        return self.state.m

    @property
    def speed(self) -> float:
        """Inertial speed |v| (km/s)."""
        return self.state.v.magnitude()

    @property
    def period(self) -> float:
        """Orbital period 2*pi*sqrt(a^3/mu) (s)."""
        return float(2.0 * np.pi * np.sqrt(self.elements.semi_major_axis**3 / MU_EARTH))

    @property
    def apoapsis_altitude(self) -> float:
        return self.elements.semi_major_axis * (1.0 + self.elements.eccentricity) - EARTH_RADIUS

    @property
    def periapsis_altitude(self) -> float:
        return self.elements.semi_major_axis * (1.0 - self.elements.eccentricity) - EARTH_RADIUS

    @property
    def semi_major_axis(self) -> float:
        return self.elements.semi_major_axis

    @property
    def eccentricity(self) -> float:
        return self.elements.eccentricity

    @property
    def inclination(self) -> float:
        return self.elements.inclination

    @property
    def raan(self) -> float:
        return self.elements.raan

    @property
    def arg_periapsis(self) -> float:
        return self.elements.arg_periapsis

    @property
    def true_anomaly(self) -> float:
        return self.elements.true_anomaly

    def __repr__(self):
        return (f"Satellite(t={self.time:.1f}s, a={self.semi_major_axis:.3f} km, "
                f"e={self.eccentricity:.6f}, m={self.mass:.3f} kg)")
