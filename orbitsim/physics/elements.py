"""
Keplerian elements <-> ECI state vectors.

Angles are radians internally. Bound orbits (0 <= e < 1) only: for e >= 1 or a
vis-viva denominator near zero the conversions do not raise, but the results
(negative or infinite semi-major axis, NaN angles) are unspecified.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from orbitsim.config.settings import MU_EARTH, ELEMENT_EPSILON, ORBIT_PATH_STEPS
from orbitsim.physics.vector import Vec3
from orbitsim.physics.utils import clamp, deg_to_rad, rad_to_deg, normalize_angle


@dataclass(frozen=True)
class OrbitalElements:
    semi_major_axis: float   # a (km)
    eccentricity: float      # e
    inclination: float       # i (rad)
    raan: float              # Omega (rad)
    arg_periapsis: float     # omega (rad)
    true_anomaly: float      # nu (rad)

    @classmethod
    def from_degrees(cls, semi_major_axis, eccentricity, inclination_deg,
                     raan_deg, arg_periapsis_deg, true_anomaly_deg) -> "OrbitalElements":
        return cls(
            semi_major_axis=float(semi_major_axis),
            eccentricity=float(eccentricity),
            inclination=deg_to_rad(inclination_deg),
            raan=deg_to_rad(raan_deg),
            arg_periapsis=deg_to_rad(arg_periapsis_deg),
            true_anomaly=deg_to_rad(true_anomaly_deg),
        )

    def as_degrees(self) -> dict:
        return {
            "semi_major_axis": self.semi_major_axis,
            "eccentricity": self.eccentricity,
            "inclination": rad_to_deg(self.inclination),
            "raan": rad_to_deg(self.raan),
            "arg_periapsis": rad_to_deg(self.arg_periapsis),
            "true_anomaly": rad_to_deg(self.true_anomaly),
        }

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite([
            self.semi_major_axis, self.eccentricity, self.inclination,
            self.raan, self.arg_periapsis, self.true_anomaly,
        ])))


def perifocal_to_eci_matrix(raan: float, inclination: float, arg_periapsis: float) -> np.ndarray:
    """3-1-3 rotation (RAAN, i, argp) from the perifocal frame to ECI."""
    cO, sO = np.cos(raan), np.sin(raan)
    ci, si = np.cos(inclination), np.sin(inclination)
    cw, sw = np.cos(arg_periapsis), np.sin(arg_periapsis)
    return np.array([
        [cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci, sO * si],
        [sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si],
        [sw * si, cw * si, ci],
    ], dtype=float)


def elements_to_state_vectors(elements: OrbitalElements, mu: float = MU_EARTH):
    """
    Convert Keplerian elements to ECI position (km) and velocity (km/s).

    Returns:
        (position Vec3, velocity Vec3)
    """
    a = elements.semi_major_axis
    e = elements.eccentricity
    nu = elements.true_anomaly

    p = a * (1.0 - e**2)
    r = p / (1.0 + e * np.cos(nu))
    h = np.sqrt(mu * p)

    pos_pqw = np.array([r * np.cos(nu), r * np.sin(nu), 0.0])
    vel_pqw = np.array([-mu / h * np.sin(nu), mu / h * (e + np.cos(nu)), 0.0])

    R = perifocal_to_eci_matrix(elements.raan, elements.inclination, elements.arg_periapsis)
    return Vec3.from_array(R @ pos_pqw), Vec3.from_array(R @ vel_pqw)


def _signed_angle(a: Vec3, b: Vec3, axis: Vec3) -> float:
    """Angle from a to b, positive about axis, in (-pi, pi]."""
    return float(np.arctan2(a.cross(b).dot(axis), a.dot(b)))


def state_vectors_to_elements(position, velocity, mu: float = MU_EARTH) -> OrbitalElements:
    """
    Convert ECI position (km) and velocity (km/s) to Keplerian elements.

    Degenerate cases, checked in this order:
      eccentric, inclined   -> argp from node to e_vec, nu from e_vec to r
      eccentric, equatorial -> argp from the x-axis to e_vec
      circular, inclined    -> argp = 0, nu = argument of latitude (node to r)
      circular, equatorial  -> argp = 0, nu from the x-axis to r
    RAAN is 0 whenever the node vector vanishes. argp = 0 for circular orbits and
    the x-axis reference for equatorial ones are conventions, not derived values.
    """
    r_vec = position if isinstance(position, Vec3) else Vec3.from_array(position)
    v_vec = velocity if isinstance(velocity, Vec3) else Vec3.from_array(velocity)
    eps = ELEMENT_EPSILON

    # np.float64 so a zero |r| or |h| gives inf/nan rather than ZeroDivisionError
    r = np.float64(r_vec.magnitude())
    v = v_vec.magnitude()

    h_vec = r_vec.cross(v_vec)
    h = np.float64(h_vec.magnitude())
    h_hat = h_vec.normalize()
    with np.errstate(divide="ignore", invalid="ignore"):
        inclination = float(np.arccos(clamp(h_vec.z / h, -1.0, 1.0)))

    n_vec = Vec3(-h_vec.y, h_vec.x, 0.0)
    n = n_vec.magnitude()

    e_vec = v_vec.cross(h_vec) / mu - r_vec / r
    e = e_vec.magnitude()

    with np.errstate(divide="ignore", invalid="ignore"):
        a = float(1.0 / (2.0 / r - v**2 / mu))

    eccentric = e > eps
    inclined = n > eps

    raan = normalize_angle(np.arctan2(n_vec.y, n_vec.x)) if inclined else 0.0

    if eccentric and inclined:
        arg_periapsis = normalize_angle(_signed_angle(n_vec, e_vec, h_hat))
    elif eccentric:
        arg_periapsis = normalize_angle(np.arctan2(e_vec.y, e_vec.x))
    else:
        arg_periapsis = 0.0

    if eccentric:
        nu = float(np.arctan2(e_vec.cross(r_vec).magnitude(), e_vec.dot(r_vec)))
        if r_vec.dot(v_vec) < 0.0:
            # moving toward periapsis
            nu = 2.0 * np.pi - nu
        true_anomaly = normalize_angle(nu)
    elif inclined:
        true_anomaly = normalize_angle(_signed_angle(n_vec, r_vec, h_hat))
    else:
        true_anomaly = normalize_angle(np.arctan2(r_vec.y, r_vec.x))

    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination=inclination,
        raan=raan,
        arg_periapsis=arg_periapsis,
        true_anomaly=true_anomaly,
    )


def orbit_path(elements: OrbitalElements, steps: int = ORBIT_PATH_STEPS) -> np.ndarray:
    """
    Sample the osculating orbit over true anomaly [0, 2*pi), ECI km, shape (steps, 3).
    """
    a = elements.semi_major_axis
    e = elements.eccentricity
    nu = np.linspace(0.0, 2.0 * np.pi, int(steps), endpoint=False)
    r = a * (1.0 - e**2) / (1.0 + e * np.cos(nu))
    pts_pqw = np.stack([r * np.cos(nu), r * np.sin(nu), np.zeros_like(nu)], axis=1)
    R = perifocal_to_eci_matrix(elements.raan, elements.inclination, elements.arg_periapsis)
    return pts_pqw @ R.T
