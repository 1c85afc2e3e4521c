import builtins
import math

import numpy as np
import pytest

from orbitsim import cli
from orbitsim.config import settings


def _eof(prompt=""):
    raise EOFError


def _feed(monkeypatch, answers):
    it = iter(answers)
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(it))


def test_non_interactive_run_uses_defaults(monkeypatch):
    monkeypatch.setattr(builtins, "input", _eof)

    satellite, dt, steps, thrust, burn_steps = cli.run_cli()

    assert satellite.semi_major_axis == pytest.approx(settings.EARTH_RADIUS + settings.DEFAULT_ALTITUDE_KM)
    assert np.degrees(satellite.inclination) == pytest.approx(settings.DEFAULT_INCLINATION_DEG)
    assert satellite.mass == settings.DEFAULT_MASS_KG
    assert satellite.j2_enabled is True
    assert dt == settings.DT
    assert steps == math.ceil(satellite.period / settings.DT)
    assert thrust is None
    assert burn_steps == 0


def test_get_float_retries_until_valid(monkeypatch, capsys):
    _feed(monkeypatch, ["abc", "-5", "12.5"])

    assert cli.get_float("x: ", default=1.0, min_val=0.0) == 12.5
    assert capsys.readouterr().out.count("valid number") == 2


def test_get_float_blank_returns_default(monkeypatch):
    _feed(monkeypatch, [""])

    assert cli.get_float("x: ", default=3.0) == 3.0


def test_get_int_rejects_out_of_range(monkeypatch):
    _feed(monkeypatch, ["0", "2.5", "7"])

    assert cli.get_int("n: ", default=1, min_val=1, max_val=10) == 7


def test_ask_burn_reads_vector_and_duration(monkeypatch):
    _feed(monkeypatch, ["0.5, 0, 0", "20"])

    thrust, burn_steps = cli.ask_burn(100)

    np.testing.assert_allclose(thrust, [0.5, 0.0, 0.0])
    assert burn_steps == 20


def test_create_satellite_can_disable_j2(monkeypatch):
    _feed(monkeypatch, ["500", "0.01", "98", "10", "20", "30", "800", "300", "0.5", "n"])

    sat = cli.create_satellite()

    assert sat.semi_major_axis == pytest.approx(settings.EARTH_RADIUS + 500.0)
    assert sat.j2_enabled is False
    assert sat.thrust_limit_n == 0.5
    assert sat.control.isp == 300.0


@pytest.mark.parametrize("value, expected", [
    (1.5, [1.5, 0.0, 0.0]),
    ([1.0, 2.0], [1.0, 2.0, 0.0]),
    ((1.0, 2.0, 3.0), [1.0, 2.0, 3.0]),
])
def test_to_3d_array(value, expected):
    np.testing.assert_allclose(cli._to_3d_array(value), expected)


def test_to_3d_array_rejects_long_input():
    with pytest.raises(ValueError):
        cli._to_3d_array([1, 2, 3, 4])
