# orbitsim/cli.py
import numpy as np
from orbitsim.models.satellite import Satellite
from orbitsim.config import settings

# bring in useful defaults from settings for CLI defaults
from orbitsim.config.settings import (
    EARTH_RADIUS,
    DEFAULT_ALTITUDE_KM,
    DEFAULT_ECCENTRICITY,
    DEFAULT_INCLINATION_DEG,
    DEFAULT_MASS_KG,
    DEFAULT_ISP_S,
    DEFAULT_THRUST_LIMIT_N,
    clamp_steps,
)


def _to_3d_array(v):
    """Ensure the input is a numpy array of shape (3,).

    - Scalars will be promoted to (scalar, 0.0, 0.0)
    - 2-element lists/arrays will get a trailing 0.0 appended
    - 3-element lists/arrays become numpy arrays
    - Anything else will raise ValueError
    """
    arr = np.array(v, dtype=float)
    if arr.ndim == 0:
        return np.array([float(arr), 0.0, 0.0])
    if arr.shape == (2,):
        return np.append(arr, 0.0)
    if arr.shape == (3,):
        return arr
    raise ValueError(f"Cannot coerce {v!r} to 3D vector")


def get_float(prompt, default=None, min_val=None, max_val=None):
    """
    Safe float input with optional default and limits. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return float(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return float(default)
        try:
            val = float(user)
            if min_val is not None and val < min_val:
                raise ValueError
            if max_val is not None and val > max_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("❌ Please enter a valid number.")


def get_int(prompt, default=None, min_val=None, max_val=None):
    """
    Safe integer input with limits. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return int(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return int(default)
        try:
            val = int(user)
            if min_val is not None and val < min_val:
                raise ValueError
            if max_val is not None and val > max_val:
                raise ValueError
            return val
        except (ValueError, TypeError):
            print("❌ Invalid integer input.")


def get_vector(prompt, default=(0.0, 0.0, 0.0)):
    """
    Comma/space separated vector input. Non-interactive (EOF) or empty returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return _to_3d_array(default)
        if user.strip() == "":
            return _to_3d_array(default)
        try:
            parts = [float(p) for p in user.replace(",", " ").split()]
            return _to_3d_array(parts)
        except (ValueError, TypeError):
            print("❌ Enter 1-3 numbers, e.g. 0.5, 0, 0")


def create_satellite():
    print("\n🛰️ Orbit Configuration")

    altitude = get_float(
        f"Mean altitude a - Re (km) [default {DEFAULT_ALTITUDE_KM}]: ",
        default=DEFAULT_ALTITUDE_KM,
        min_val=0.0,
    )
    e = get_float(
        f"Eccentricity [default {DEFAULT_ECCENTRICITY}]: ",
        default=DEFAULT_ECCENTRICITY,
        min_val=0.0,
        max_val=0.99,
    )
    inc = get_float(
        f"Inclination (deg) [default {DEFAULT_INCLINATION_DEG}]: ",
        default=DEFAULT_INCLINATION_DEG,
        min_val=0.0,
        max_val=180.0,
    )
    raan = get_float("RAAN (deg) [default 0]: ", default=0.0)
    argp = get_float("Argument of periapsis (deg) [default 0]: ", default=0.0)
    nu = get_float("True anomaly (deg) [default 0]: ", default=0.0)

    print("\n🔥 Propulsion")
    mass = get_float(f"Mass (kg) [default {DEFAULT_MASS_KG}]: ", default=DEFAULT_MASS_KG, min_val=0.0)
    isp = get_float(f"Isp (s) [default {DEFAULT_ISP_S}]: ", default=DEFAULT_ISP_S, min_val=0.0)
    limit = get_float(
        f"Thrust limit (N) [default {DEFAULT_THRUST_LIMIT_N}]: ",
        default=DEFAULT_THRUST_LIMIT_N,
        min_val=0.0,
    )

    try:
        j2_choice = input("Include J2 perturbation? (Y/n): ").strip().lower()
    except EOFError:
        j2_choice = ""
    j2_enabled = not j2_choice.startswith("n")

    a = EARTH_RADIUS + altitude
    sat = Satellite(a, e, inc, raan, argp, nu, mass_kg=mass, isp_s=isp,
                    thrust_limit_n=limit, j2_enabled=j2_enabled)

    print(f"✔ Satellite initialized: a = {a:.1f} km, period = {sat.period:.1f} s, "
          f"speed = {sat.speed:.3f} km/s")
    return sat


def ask_burn(steps):
    """
    Ask for an optional constant ECI thrust vector and how many steps to hold it.
    Returns (thrust ndarray or None, burn_steps).
    """
    thrust = get_vector("\nThrust vector in ECI (N), e.g. '0 0.5 0' [default none]: ")
    if not np.any(thrust):
        return None, 0
    burn_steps = get_int(
        f"Burn duration in steps (1–{steps}) [default {steps}]: ",
        default=steps,
        min_val=1,
        max_val=steps,
    )
    return thrust, burn_steps


def run_cli():
    print("======================================")
    print("  ORBIT PROPAGATOR (CLI)  ")
    print("======================================")

    satellite = create_satellite()

    dt = get_float(f"\nTime step dt (s) [default {settings.DT}]: ", default=settings.DT, min_val=1e-6)
    default_steps = int(np.ceil(satellite.period / dt)) if np.isfinite(satellite.period) else settings.STEPS
    steps = clamp_steps(get_int(
        f"Number of steps [default {default_steps} ≈ one orbit]: ",
        default=default_steps,
        min_val=1,
    ))

    thrust, burn_steps = ask_burn(steps)

    print("\n✅ CLI input complete.")
    print(f"→ dt = {dt} s, steps = {steps} ({steps * dt:.0f} s)")
    if thrust is not None:
        print(f"→ Burn: {thrust.tolist()} N for {burn_steps} steps")

    return satellite, float(dt), int(steps), thrust, int(burn_steps)
