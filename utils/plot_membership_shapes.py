import logging
import os

import matplotlib.pyplot as plt

from fis.config_loader import load_controller_from_file
from fis.controller import FuzzyController, Variable
from fis.engine import InferenceEngine
from utils.response_curve import sweep

main_log = logging.getLogger("main")


def plot_membership_functions(
    engine: InferenceEngine, var: Variable, output: bool = False, points=None, save=False, output_dir="plots", show=True
):
    """
    Plot the triangular and trapezoidal membership functions of one variable.
    Optionally overlay points as red dots.
    Args:
        engine (InferenceEngine): Engine holding the functions
        var (Variable): Variable whose group is plotted
        output (bool): Plot the output namespace instead of the input one
        points (list of (x, y)): Points to overlay (optional)
        save (bool): Whether to save the plot as a PNG
        output_dir (str): Directory to save the plot
    """
    registry = engine.output_functions if output else engine.input_functions
    fig = plt.figure(figsize=(8, 4))
    for label, mf in registry.items():
        if mf.group_index != var.group_index:
            continue
        xs = list(mf.points)
        y = [0, 1, 1, 0]
        plt.plot(xs, y, label=label)
        plt.fill_between(xs, y, alpha=0.1)

    # Overlay points if given
    if points is not None and len(points) > 0:
        x, y = zip(*points)
        plt.scatter(
            x,
            y,
            color="red",
            s=30,
            marker="o",
            edgecolors="black",
            linewidths=0.8,
            label="(Input, degree)",
            zorder=10,
        )

    plt.title(f"Membership Functions – {engine.name} / {var.name}")
    plt.xlabel(var.name)
    plt.ylabel("Membership Degree")
    plt.xlim(var.lower, var.upper)
    plt.grid(True)
    plt.legend()
    plt.tight_layout()

    if save:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"{engine.name}_{var.name}_membership_functions.png")
        plt.savefig(filename)
        main_log.info("Saved plot to: %s", filename)

    if show:
        plt.show()
    return fig


def plot_response(
    controller: FuzzyController, input_name: str, output_name: str, points=81, save=False, output_dir="plots", show=True
):
    """Plot one output of a controller against one swept input."""
    xs, ys = sweep(controller, input_name, output_name, points=points)
    fig = plt.figure(figsize=(8, 4))
    plt.plot(xs, ys, marker=".")
    plt.title(f"Response – {controller.name}: {output_name}({input_name})")
    plt.xlabel(input_name)
    plt.ylabel(output_name)
    plt.grid(True)
    plt.tight_layout()

    if save:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"{controller.name}_{output_name}_vs_{input_name}.png")
        plt.savefig(filename)
        main_log.info("Saved plot to: %s", filename)

    if show:
        plt.show()
    return fig


def plot_controller(controller: FuzzyController, save=False, output_dir="plots", show=True):
    """Membership shapes of every input and output variable of a controller."""
    figs = []
    for var in controller.inputs.values():
        figs.append(plot_membership_functions(controller.engine, var, save=save, output_dir=output_dir, show=show))
    for var in controller.outputs.values():
        figs.append(
            plot_membership_functions(controller.engine, var, output=True, save=save, output_dir=output_dir, show=show)
        )
    return figs


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description="Plot fuzzy membership function shapes of a rule table."
    )
    parser.add_argument("config", help="Path to a TOML rule table.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save plots as PNG files in the 'plots/' directory.",
    )
    args = parser.parse_args()

    controller = load_controller_from_file(args.config)
    plot_controller(controller, save=args.save)


if __name__ == "__main__":
    main()
