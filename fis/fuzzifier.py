"""
Fuzzifies crisp input values into membership degrees.

Inputs are bound to membership functions by position: the i-th crisp input
(1-based) feeds every enabled input function whose group index is i. Input
functions of other groups are left untouched in the evaluation context.
"""

import logging
from typing import Dict, Mapping, Sequence

from fis.context import EvaluationContext
from fis.membership import FIRST_GROUP, MembershipFunction

fuzzifier_log = logging.getLogger("fuzzifier")


class Fuzzifier:
    """
    Calculates membership degrees for crisp inputs.

    Attributes:
        membership_functions (Mapping[str, MembershipFunction]): The input
            registry of the owning engine. Held by reference so functions added
            or replaced later are picked up.
    """

    def __init__(self, membership_functions: Mapping[str, MembershipFunction]) -> None:
        self.membership_functions = membership_functions
        fuzzifier_log.debug(
            "Fuzzifier bound to %d input functions.", len(self.membership_functions)
        )

    def fuzzify_group(
        self, group_index: int, crisp_value: float, context: EvaluationContext
    ) -> Dict[str, float]:
        """
        Fuzzifies one crisp value against every input function of its group.

        Args:
            group_index (int): The group the value belongs to (1-based).
            crisp_value (float): The (already clamped) crisp value.
            context (EvaluationContext): Receives the computed degrees.

        Returns:
            Dict[str, float]: Degrees computed for this group, keyed by name.
        """
        fuzzified = {}
        for name, mf in self.membership_functions.items():
            if mf.group_index == group_index:
                fuzzified[name] = mf.degree(crisp_value)
        context.degrees.update(fuzzified)

        formatted = {k: f"{v:.3f}" for k, v in fuzzified.items()}
        fuzzifier_log.debug(
            "Fuzzified group %d = %.3f -> %s", group_index, crisp_value, formatted
        )
        return fuzzified

    def fuzzify(self, inputs: Sequence[float], context: EvaluationContext) -> Dict[str, float]:
        """
        Fuzzifies a positional list of crisp inputs.

        Args:
            inputs (Sequence[float]): inputs[0] feeds group 1, inputs[1] group 2, ...
            context (EvaluationContext): Receives the computed degrees.

        Returns:
            Dict[str, float]: Every degree computed by this call.
        """
        fuzzified = {}
        for group_index, crisp_value in enumerate(inputs, start=FIRST_GROUP):
            fuzzified.update(self.fuzzify_group(group_index, float(crisp_value), context))
        return fuzzified
