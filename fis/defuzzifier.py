"""
Computes the crisp output of an output group from the aggregated rule outputs.

This module implements centroid (center-of-gravity) defuzzification over a
discretised output range: the output axis [out_min, out_max] is sampled at
steps + 1 evenly spaced points and the crisp output is the average of the
sample points weighted by their aggregated output strength.
"""

import logging
import numbers
from typing import Callable

import numpy as np

defuzzifier_log = logging.getLogger("defuzzifier")

DEFAULT_STEPS = 8


def check_steps(steps) -> int:
    """
    Validates a discretisation step count and returns it as an int.

    Raises:
        ValueError: If steps is not a positive integer.
    """
    if isinstance(steps, bool) or not isinstance(steps, numbers.Real) or not float(steps).is_integer() or steps < 1:
        raise ValueError(f"steps must be a positive integer, got {steps!r}")
    return int(steps)


def sample_points(out_min: float, out_max: float, steps: int) -> np.ndarray:
    """
    Sample grid out_min, out_min + delta, ..., out_max with delta = range / steps.

    Raises:
        ValueError: If steps is not a positive integer or out_min > out_max.
    """
    steps = check_steps(steps)
    if out_min > out_max:
        raise ValueError(f"Empty output range [{out_min}, {out_max}]")
    return np.linspace(out_min, out_max, steps + 1)


class Defuzzifier:
    """Performs centroid defuzzification on a sampled output axis."""

    def centroid(
        self,
        aggregate: Callable[[float], float],
        out_min: float,
        out_max: float,
        steps: int = DEFAULT_STEPS,
    ) -> float:
        """
        Calculates the crisp output value.

        The output is the weighted average of the sample points:
        output = (Σ(p * μ(p))) / (Σ μ(p))
        where μ(p) is the aggregated output strength at sample point p.

        Args:
            aggregate (Callable[[float], float]): Aggregated output strength at
                a sample point.
            out_min (float): Lowest output value sampled.
            out_max (float): Highest output value sampled (always included).
            steps (int): Number of intervals the output range is divided into.

        Returns:
            float: The crisp output. Returns 0 if no rule contributes at any
                sample point, which may lie outside [out_min, out_max]; callers
                should read it as "no decision support".
        """
        numerator = 0.0
        denominator = 0.0
        for p in sample_points(out_min, out_max, steps):
            p = float(p)
            w = aggregate(p)
            numerator += p * w
            denominator += w

        if denominator == 0:
            defuzzifier_log.warning(
                "No rule fires on [%.3f, %.3f]. Outputting 0.", out_min, out_max
            )
            return 0.0

        output = numerator / denominator
        defuzzifier_log.debug(
            "Defuzzified output: %.4f (numerator=%.4f, denominator=%.4f, steps=%d)",
            output,
            numerator,
            denominator,
            steps,
        )
        return output
