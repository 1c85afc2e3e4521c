import logging
from typing import List, Tuple, Any, Dict, Optional

from orbitsim.models.satellite import Satellite
from orbitsim.physics.utils import specific_energy, specific_angular_momentum

logger = logging.getLogger(__name__)


def _record(step: int, sat: Satellite) -> Dict[str, Any]:
    return {
        "step": step,
        "time": sat.time,
        "position": (sat.x, sat.y, sat.z),
        "speed": sat.speed,
        "mass": sat.mass,
        "thrust": sat.control.thrust_magnitude,
        "semi_major_axis": sat.semi_major_axis,
        "eccentricity": sat.eccentricity,
        "inclination": sat.inclination,
        "raan": sat.raan,
        "arg_periapsis": sat.arg_periapsis,
        "true_anomaly": sat.true_anomaly,
        "apoapsis_altitude": sat.apoapsis_altitude,
        "periapsis_altitude": sat.periapsis_altitude,
    }


def run_simulation(
    satellite: Satellite,
    dt: float,
    steps: int,
    thrust: Optional[Any] = None,
    burn_steps: int = 0,
) -> Tuple[List[Dict], Dict[str, Any]]:
    """
    Fixed-step propagation of one satellite.

    thrust: ECI thrust vector (N) commanded for the first burn_steps steps,
            then the control is set back to zero. Clamped by the satellite.
    Returns (records, summary); records[0] is the initial state. Nothing is written to disk.

    summary:
      {
        "duration": float (s),
        "steps": int,
        "final_elements": dict (angles in degrees),
        "propellant_used_kg": float,
        "energy_drift_percent": float | None   (None when thrust was applied),
        "angular_momentum_drift_percent": float | None,
      }
    """
    dt = float(dt)
    steps = int(steps)
    if dt <= 0:
        raise ValueError("dt must be > 0")
    if steps <= 0:
        raise ValueError("steps must be > 0")

    burn_steps = max(0, int(burn_steps)) if thrust is not None else 0
    conservative = burn_steps == 0 and satellite.control.thrust_magnitude == 0.0

    init_mass = satellite.mass
    init_energy = specific_energy(satellite.state, satellite.j2_enabled) if conservative else None
    init_h = specific_angular_momentum(satellite.state) if conservative else None

    logger.info("Propagating %d steps of %.3f s (J2=%s, burn_steps=%d)",
                steps, dt, satellite.j2_enabled, burn_steps)

    records: List[Dict] = [_record(0, satellite)]
    for step in range(1, steps + 1):
        if step == 1 and burn_steps:
            satellite.set_thrust(thrust)
        elif step == burn_steps + 1 and burn_steps:
            satellite.set_thrust((0.0, 0.0, 0.0))
        satellite.advance(dt)
        records.append(_record(step, satellite))

    if conservative:
        final_energy = specific_energy(satellite.state, satellite.j2_enabled)
        energy_drift = abs(final_energy - init_energy) / abs(init_energy) * 100.0 if init_energy else 0.0
        final_h = specific_angular_momentum(satellite.state)
        h_drift = abs(final_h - init_h) / init_h * 100.0 if init_h else 0.0
    else:
        energy_drift = None
        h_drift = None

    summary = {
        "duration": steps * dt,
        "steps": steps,
        "final_elements": satellite.elements.as_degrees(),
        "propellant_used_kg": init_mass - satellite.mass,
        "energy_drift_percent": energy_drift,
        "angular_momentum_drift_percent": h_drift,
    }
    logger.info("Run complete: t=%.1f s, a=%.3f km, e=%.6f, propellant=%.4f kg",
                satellite.time, satellite.semi_major_axis, satellite.eccentricity,
                summary["propellant_used_kg"])
    return records, summary
