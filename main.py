"""
Command-line entry point for evaluating fuzzy rule tables.

Loads a TOML rule table, builds its controller and evaluates it for the
inputs given on the command line:

    python main.py config/direct_pass_speed.toml distance=11
    python main.py offensive_pos_eval.toml dist_ball_pos=12 dist_opp_pos=4 \
        dist_ball_line_opp=3 dist_curr_pos=2 dist_opp_goal_pos=5 --trace
"""

import argparse
import logging
import sys

from fis.config_loader import load_controller_from_file
from fis.errors import ConfigurationError
from utils.logger import set_eval_index, setup_logging
from utils.profiler import CodeProfiler


def parse_assignment(text: str):
    """Parses 'name=value' into (name, float(value))."""
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected name=value, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: '{value}'") from None


def positive_int(text: str) -> int:
    """Parses a step count of at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an integer: '{text}'") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a fuzzy rule table.")
    parser.add_argument("config", help="Path to a TOML rule table.")
    parser.add_argument("inputs", nargs="*", type=parse_assignment, help="Inputs as name=value.")
    parser.add_argument("--steps", type=positive_int, default=None, help="Output discretisation.")
    parser.add_argument("--trace", action="store_true", help="Log the firing strength of every rule.")
    parser.add_argument("--plot", action="store_true", help="Plot the membership functions.")
    parser.add_argument("--sweep", metavar="INPUT", help="Print the response over one input's domain.")
    parser.add_argument("--log-dir", default="logs", help="Directory for component log files.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(log_dir=args.log_dir)
    main_log = logging.getLogger("main")

    try:
        controller = load_controller_from_file(args.config)
    except (OSError, ConfigurationError) as e:
        main_log.critical("Cannot load rule table '%s': %s", args.config, e)
        return 2

    values = dict(args.inputs)
    set_eval_index(0)
    try:
        with CodeProfiler(controller.name, budget_ms=5.0):
            result = controller.decide(values, steps=args.steps)
    except KeyError as e:
        main_log.error("%s (expected inputs: %s)", e.args[0], ", ".join(controller.inputs))
        return 2

    for name, value in result.items():
        print(f"{name} = {value:.4f}")

    if args.trace:
        from utils.rule_trace import trace_rules

        context = controller.fuzzify(values)
        trace_rules(controller.engine, context)

    if args.sweep:
        from utils.response_curve import sweep

        for output in controller.outputs:
            xs, ys = sweep(controller, args.sweep, output, fixed=values, steps=args.steps)
            for x, y in zip(xs, ys):
                print(f"{args.sweep}={x:.3f} {output}={y:.4f}")

    if args.plot:
        from utils.plot_membership_shapes import plot_controller

        plot_controller(controller)

    main_log.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
