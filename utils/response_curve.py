"""
Input/output response of a fuzzy controller.

Sweeps one input variable across its domain while the other inputs are held
fixed and records one output variable. Useful for checking that a rule table
is monotonic and for plotting it.
"""

from typing import Mapping, Optional, Tuple

import numpy as np

from fis.controller import FuzzyController


def sweep(
    controller: FuzzyController,
    input_name: str,
    output_name: str,
    points: int = 41,
    fixed: Optional[Mapping[str, float]] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    steps: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Args:
        controller (FuzzyController): The controller to probe.
        input_name (str): Input variable to sweep.
        output_name (str): Output variable to record.
        points (int): Number of input samples.
        fixed (Mapping[str, float], optional): Values of the other inputs;
            missing ones are held at the middle of their domain.
        lower, upper (float, optional): Sweep range, defaults to the domain.
        steps (int, optional): Discretisation passed to the controller.

    Returns:
        Tuple[np.ndarray, np.ndarray]: Input samples and the matching outputs.
    """
    var = controller.inputs[input_name]
    lower = var.lower if lower is None else lower
    upper = var.upper if upper is None else upper

    values = {name: (v.lower + v.upper) / 2.0 for name, v in controller.inputs.items()}
    values.update(fixed or {})

    xs = np.linspace(lower, upper, points)
    ys = np.empty_like(xs)
    for i, x in enumerate(xs):
        values[input_name] = float(x)
        ys[i] = controller.decide_one(output_name, values, steps)
    return xs, ys


def is_non_decreasing(ys: np.ndarray, tol: float = 1e-9) -> bool:
    return bool(np.all(np.diff(ys) >= -tol))
