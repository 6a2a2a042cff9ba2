import numpy as np
import pytest

from fis.config_loader import load_controller_from_file
from utils.response_curve import is_non_decreasing, sweep

from conftest import config_path


@pytest.fixture
def pass_speed():
    return load_controller_from_file(config_path("direct_pass_speed.toml"))


def test_sweep_covers_the_domain(pass_speed):
    xs, ys = sweep(pass_speed, "distance", "speed", points=21)
    assert xs[0] == 1.0 and xs[-1] == 21.0
    assert ys.shape == (21,)
    assert ys[10] == pytest.approx(2.06)


def test_pass_speed_is_monotonic(pass_speed):
    _, ys = sweep(pass_speed, "distance", "speed", points=201)
    assert is_non_decreasing(ys)
    assert ys[0] < ys[-1]


def test_monotonic_for_every_resolution(pass_speed):
    for steps in (2, 4, 8, 16, 64):
        _, ys = sweep(pass_speed, "distance", "speed", points=81, steps=steps)
        assert is_non_decreasing(ys)


def test_pos_eval_sweep_holds_other_inputs():
    pos_eval = load_controller_from_file(config_path("offensive_pos_eval.toml"))
    # Far from the current position is worse.
    _, ys = sweep(pos_eval, "dist_curr_pos", "eval", points=35, fixed={"dist_ball_pos": 7.5})
    assert is_non_decreasing(-ys)
    assert ys[0] > ys[-1]


def test_is_non_decreasing():
    assert is_non_decreasing(np.array([0.0, 0.0, 1.0]))
    assert not is_non_decreasing(np.array([1.0, 0.5]))
