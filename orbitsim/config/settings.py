"""
Project settings (constants + small helpers).
Units: kilometers (km), seconds (s), kilograms (kg), km/s. Thrust in Newtons.
"""
from __future__ import annotations

import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
VALIDATE_ON_IMPORT = False

# Earth
MU_EARTH = 398600.4418       # km^3/s^2
EARTH_RADIUS = 6371.0        # km (mean radius)
RE = EARTH_RADIUS
J2 = 1.08263e-3
G0 = 9.80665                 # m/s^2 (standard gravity, used for Isp)

# Elements <-> state
ELEMENT_EPSILON = 1e-10      # below this, e or |n| is treated as zero

# Simulation
DT = 10.0
STEPS = 600
STEPS_MIN = 1
STEPS_MAX = 1_000_000
J2_ENABLED = True

# Default satellite (ISS-like)
DEFAULT_ALTITUDE_KM = 408.0
DEFAULT_ECCENTRICITY = 0.0
DEFAULT_INCLINATION_DEG = 51.6
DEFAULT_MASS_KG = 500.0
DEFAULT_ISP_S = 220.0
DEFAULT_THRUST_LIMIT_N = 1.0

# Orbit path sampling (plots)
ORBIT_PATH_STEPS = 360


def clamp_steps(val: Optional[int]) -> int:
    out = int(STEPS if val is None else val)
    return max(int(STEPS_MIN), min(int(STEPS_MAX), out))


def validate_settings() -> None:
    if MU_EARTH <= 0:
        raise ValueError("MU_EARTH must be > 0")
    if EARTH_RADIUS <= 0:
        raise ValueError("EARTH_RADIUS must be > 0")
    if G0 <= 0:
        raise ValueError("G0 must be > 0")
    if ELEMENT_EPSILON <= 0:
        raise ValueError("ELEMENT_EPSILON must be > 0")
    if DT <= 0:
        raise ValueError("DT must be > 0")
    if STEPS <= 0:
        raise ValueError("STEPS must be > 0")
    if STEPS_MAX < STEPS_MIN:
        raise ValueError("STEPS_MAX must be >= STEPS_MIN")
    if DEFAULT_ALTITUDE_KM <= 0:
        raise ValueError("DEFAULT_ALTITUDE_KM must be > 0")
    if not 0.0 <= DEFAULT_ECCENTRICITY < 1.0:
        raise ValueError("DEFAULT_ECCENTRICITY must be in [0, 1)")
    if DEFAULT_MASS_KG <= 0:
        raise ValueError("DEFAULT_MASS_KG must be > 0")
    if DEFAULT_ISP_S < 0:
        raise ValueError("DEFAULT_ISP_S must be >= 0")
    if DEFAULT_THRUST_LIMIT_N < 0:
        raise ValueError("DEFAULT_THRUST_LIMIT_N must be >= 0")
    if ORBIT_PATH_STEPS <= 0:
        raise ValueError("ORBIT_PATH_STEPS must be > 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
