import os
import numpy as np
import matplotlib.pyplot as plt
from orbitsim.config import settings
from orbitsim.physics.elements import OrbitalElements, orbit_path


def _output_path(output_dir, name):
    out = output_dir or settings.OUTPUT_DIR
    os.makedirs(out, exist_ok=True)
    return os.path.join(out, name)


def plot_trajectory(records, output_dir=None):
    """
    3D ECI trajectory of a run, with the initial and final osculating orbits and Earth.
    """
    pos = np.array([r["position"] for r in records], dtype=float)

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(projection="3d")

    # Earth wireframe
    u, v = np.mgrid[0:2 * np.pi:30j, 0:np.pi:15j]
    re = settings.EARTH_RADIUS
    ax.plot_wireframe(re * np.cos(u) * np.sin(v), re * np.sin(u) * np.sin(v), re * np.cos(v),
                      color="lightsteelblue", linewidth=0.4)

    for rec, style, label in ((records[0], "--", "Initial orbit"), (records[-1], ":", "Final orbit")):
        el = OrbitalElements(
            rec["semi_major_axis"], rec["eccentricity"], rec["inclination"],
            rec["raan"], rec["arg_periapsis"], rec["true_anomaly"],
        )
        if not el.is_finite() or el.eccentricity >= 1.0:
            continue
        path = orbit_path(el)
        ax.plot(path[:, 0], path[:, 1], path[:, 2], style, linewidth=1, label=label)

    ax.plot(pos[:, 0], pos[:, 1], pos[:, 2], color="tab:orange", linewidth=1.5, label="Propagated")
    ax.scatter(*pos[-1], color="tab:red", s=20, label="Final position")

    lim = float(np.max(np.abs(pos))) * 1.1
    ax.set_xlim(-lim, lim)
    ax.set_ylim(-lim, lim)
    ax.set_zlim(-lim, lim)
    ax.set_xlabel("x [km]")
    ax.set_ylabel("y [km]")
    ax.set_zlabel("z [km]")
    ax.set_title("ECI Trajectory")
    ax.legend(fontsize=8)

    save_path = _output_path(output_dir, "trajectory.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close(fig)

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_elements_over_time(records, output_dir=None):
    """
    Semi-major axis, eccentricity, inclination, apsis altitudes and mass vs time.
    """
    t = np.array([r["time"] for r in records], dtype=float)

    fig, axes = plt.subplots(4, 1, figsize=(10, 10), sharex=True)

    axes[0].plot(t, [r["semi_major_axis"] for r in records])
    axes[0].set_ylabel("a [km]")

    axes[1].plot(t, [r["eccentricity"] for r in records])
    axes[1].set_ylabel("e")

    axes[2].plot(t, [r["apoapsis_altitude"] for r in records], label="Apoapsis")
    axes[2].plot(t, [r["periapsis_altitude"] for r in records], label="Periapsis")
    axes[2].set_ylabel("Altitude [km]")
    axes[2].legend()

    axes[3].plot(t, [r["mass"] for r in records])
    axes[3].set_ylabel("Mass [kg]")
    axes[3].set_xlabel("Time [s]")

    for ax in axes:
        ax.grid(True)
    fig.suptitle(f"Orbital Elements (i = {np.degrees(records[-1]['inclination']):.3f} deg)")

    save_path = _output_path(output_dir, "elements_over_time.png")
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close(fig)

    print(f"[OK] Saved: {save_path}")
    return save_path
