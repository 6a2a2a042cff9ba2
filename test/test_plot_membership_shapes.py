import matplotlib

matplotlib.use("Agg")

import os

import matplotlib.pyplot as plt
import pytest

from fis.config_loader import load_controller_from_file
from utils.plot_membership_shapes import plot_controller, plot_response

from conftest import config_path


@pytest.fixture
def pass_speed():
    return load_controller_from_file(config_path("direct_pass_speed.toml"))


def test_plot_controller_saves_one_figure_per_variable(pass_speed, tmp_path):
    figs = plot_controller(pass_speed, save=True, output_dir=str(tmp_path), show=False)
    assert len(figs) == 2
    assert sorted(os.listdir(tmp_path)) == [
        "direct_pass_speed_distance_membership_functions.png",
        "direct_pass_speed_speed_membership_functions.png",
    ]
    # One line per membership function.
    assert len(figs[0].axes[0].lines) == 2
    plt.close("all")


def test_plot_response(pass_speed, tmp_path):
    fig = plot_response(pass_speed, "distance", "speed", points=11, save=True, output_dir=str(tmp_path), show=False)
    line = fig.axes[0].lines[0]
    assert len(line.get_xdata()) == 11
    assert (tmp_path / "direct_pass_speed_speed_vs_distance.png").exists()
    plt.close("all")
