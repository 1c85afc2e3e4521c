import os

from orbitsim.models.satellite import Satellite
from orbitsim.simulation.runner import run_simulation
from orbitsim.visualization.plots import plot_elements_over_time, plot_trajectory


def _records():
    sat = Satellite(7000.0, 0.01, 45.0, 10.0, 20.0, 0.0)
    records, _ = run_simulation(sat, dt=60.0, steps=20)
    return records


def test_plots_are_written_to_output_dir(tmp_path, capsys):
    records = _records()

    traj = plot_trajectory(records, output_dir=str(tmp_path))
    elems = plot_elements_over_time(records, output_dir=str(tmp_path))

    assert os.path.isfile(traj) and traj.endswith("trajectory.png")
    assert os.path.isfile(elems) and elems.endswith("elements_over_time.png")
    assert capsys.readouterr().out.count("[OK] Saved:") == 2


def test_output_dir_is_created(tmp_path):
    out = tmp_path / "nested" / "plots"

    path = plot_elements_over_time(_records(), output_dir=str(out))

    assert os.path.dirname(path) == str(out)
    assert os.path.isfile(path)
