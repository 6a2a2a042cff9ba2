"""
Orchestrates one fuzzy decision variable.

A FuzzyController owns a private InferenceEngine together with the domains
of its input and output variables. It clamps raw inputs into their domains,
fuzzifies them and defuzzifies every output group, producing one crisp value
per output variable. Each decision runs on a fresh evaluation context, so a
configured controller can be shared between callers.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from fis.context import EvaluationContext
from fis.defuzzifier import DEFAULT_STEPS, check_steps
from fis.engine import InferenceEngine
from fis.errors import ConfigurationError
from fis.membership import FIRST_GROUP
from fis.numeric import clamp

controller_log = logging.getLogger("controller")


@dataclass(frozen=True)
class Variable:
    """
    A named numeric variable bound to one group of membership functions.

    Attributes:
        name (str): Variable name (e.g. 'distance').
        group_index (int): Group of its membership functions (1-based).
        lower (float): Lowest value of its domain.
        upper (float): Highest value of its domain.
        clamp (bool): Inputs only; clamp raw values into the domain.
    """

    name: str
    group_index: int
    lower: float
    upper: float
    clamp: bool = True

    def __post_init__(self) -> None:
        if self.group_index < FIRST_GROUP:
            raise ConfigurationError(f"Variable '{self.name}' needs a group index >= 1")
        if self.lower > self.upper:
            raise ConfigurationError(
                f"Variable '{self.name}' has an empty domain [{self.lower}, {self.upper}]"
            )


class FuzzyController:
    """
    The decision front end of one fuzzy inference engine.

    Attributes:
        engine (InferenceEngine): The configured engine.
        inputs (Dict[str, Variable]): Input variables, ordered by group index.
        outputs (Dict[str, Variable]): Output variables, ordered by group index.
        steps (int): Default discretisation of the output ranges.
    """

    def __init__(
        self,
        engine: InferenceEngine,
        inputs: Iterable[Variable],
        outputs: Iterable[Variable],
        steps: int = DEFAULT_STEPS,
    ):
        ordered_inputs = sorted(inputs, key=lambda v: v.group_index)
        groups = [v.group_index for v in ordered_inputs]
        if groups != list(range(FIRST_GROUP, len(groups) + FIRST_GROUP)):
            raise ConfigurationError(
                f"Input variables of '{engine.name}' must use groups 1..N, got {groups}"
            )
        ordered_outputs = sorted(outputs, key=lambda v: v.group_index)
        if not ordered_outputs:
            raise ConfigurationError(f"'{engine.name}' declares no output variable")
        self._check_unique(ordered_inputs, "input")
        self._check_unique(ordered_outputs, "output")
        try:
            steps = check_steps(steps)
        except ValueError as e:
            raise ConfigurationError(f"'{engine.name}': {e}") from None

        self.engine = engine
        self.inputs = {v.name: v for v in ordered_inputs}
        self.outputs = {v.name: v for v in ordered_outputs}
        self.steps = steps
        controller_log.info(
            "Controller '%s' initialized: %d inputs, %d outputs, %d rules.",
            engine.name,
            len(self.inputs),
            len(self.outputs),
            len(engine.rules),
        )

    @staticmethod
    def _check_unique(variables, kind: str) -> None:
        names = [v.name for v in variables]
        groups = [v.group_index for v in variables]
        if len(set(names)) != len(names) or len(set(groups)) != len(groups):
            raise ConfigurationError(f"Duplicate {kind} variable names or groups: {names} {groups}")

    @property
    def name(self) -> str:
        return self.engine.name

    def crisp_inputs(self, values: Mapping[str, float]) -> list:
        """
        Clamped crisp inputs in group order.

        Raises:
            KeyError: If an input variable is missing from values.
        """
        crisp = []
        for name, var in self.inputs.items():
            if name not in values:
                raise KeyError(f"Missing input '{name}' for '{self.name}'")
            value = float(values[name])
            if var.clamp:
                value = clamp(value, var.lower, var.upper)
            crisp.append(value)
        return crisp

    def fuzzify(self, values: Mapping[str, float]) -> EvaluationContext:
        """Clamps and fuzzifies named inputs into a fresh context."""
        context = self.engine.new_context()
        self.engine.fuzzify(self.crisp_inputs(values), context)
        return context

    def decide(self, values: Mapping[str, float], steps: Optional[int] = None) -> Dict[str, float]:
        """
        Executes one full inference cycle.

        Args:
            values (Mapping[str, float]): Raw input per input variable name.
            steps (int, optional): Overrides the default discretisation.

        Returns:
            Dict[str, float]: Crisp value per output variable name.
        """
        steps = self.steps if steps is None else steps
        controller_log.debug("--- '%s' cycle start %s ---", self.name, dict(values))
        context = self.fuzzify(values)
        result = {
            name: self.engine.defuzzify_centroid(var.group_index, var.lower, var.upper, steps, context)
            for name, var in self.outputs.items()
        }
        controller_log.debug("--- '%s' cycle end %s ---", self.name, result)
        return result

    def decide_one(self, output: str, values: Mapping[str, float], steps: Optional[int] = None) -> float:
        """Crisp value of a single output variable."""
        var = self.outputs[output]
        steps = self.steps if steps is None else steps
        context = self.fuzzify(values)
        return self.engine.defuzzify_centroid(var.group_index, var.lower, var.upper, steps, context)
