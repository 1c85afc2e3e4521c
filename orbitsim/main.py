# orbitsim/main.py
import os
import logging
import traceback

from orbitsim.cli import run_cli
from orbitsim.simulation.runner import run_simulation
from orbitsim.visualization.plots import plot_trajectory, plot_elements_over_time
from orbitsim.config import settings

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def print_summary(summary):
    print("\n================ RUN SUMMARY ================\n")
    print(f"Duration (s)         : {summary['duration']:.1f}")
    print(f"Steps                : {summary['steps']}")
    el = summary["final_elements"]
    print(f"Semi-major axis (km) : {el['semi_major_axis']:.3f}")
    print(f"Eccentricity         : {el['eccentricity']:.6f}")
    print(f"Inclination (deg)    : {el['inclination']:.4f}")
    print(f"RAAN (deg)           : {el['raan']:.4f}")
    print(f"Arg. periapsis (deg) : {el['arg_periapsis']:.4f}")
    print(f"True anomaly (deg)   : {el['true_anomaly']:.4f}")
    print(f"Propellant used (kg) : {summary['propellant_used_kg']:.4f}")
    drift = summary.get("energy_drift_percent")
    if drift is not None:
        print(f"Energy drift (%)     : {drift:.3e}")
    print("-" * 45)


def main():
    try:
        satellite, dt, steps, thrust, burn_steps = run_cli()
        log.info("Starting propagation: dt=%ss, steps=%d", dt, steps)

        records, summary = run_simulation(satellite, dt, steps, thrust=thrust, burn_steps=burn_steps)
        print_summary(summary)

        # Plots (best-effort)
        os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
        try:
            plot_trajectory(records)
            plot_elements_over_time(records)
            log.info("Plots generated in %s", settings.OUTPUT_DIR)
        except Exception as e:
            log.warning("Plotting failed: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
