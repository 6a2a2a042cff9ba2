"""
Evaluates the rule base against an evaluation context.

For each rule it calculates the firing strength (fuzzy AND, the minimum of the
antecedent degrees) and, for a given output group and sample point, the
aggregated output strength: the maximum over all rules of the rule's capped
consequent degree.
"""

import logging
from typing import List, Sequence

from fis.context import EvaluationContext
from fis.rule import Rule, describe

rule_engine_log = logging.getLogger("rule_engine")


class RuleEngine:
    """
    Evaluates a Mamdani-type fuzzy rule base.

    Attributes:
        rules (Sequence[Rule]): The rule list of the owning engine, held by
            reference.
    """

    def __init__(self, rules: Sequence[Rule]):
        self.rules = rules
        rule_engine_log.debug("Rule Engine bound to %d rules.", len(self.rules))

    def evaluate(self, context: EvaluationContext) -> List[float]:
        """
        Recomputes the firing strength of every rule.

        Args:
            context (EvaluationContext): Holds the degrees produced by the most
                recent fuzzification; receives the firing strengths.

        Returns:
            List[float]: Firing strength per rule, in rule order.
        """
        strengths = [rule.firing_strength(context.degrees) for rule in self.rules]
        context.firing_strengths = strengths

        if rule_engine_log.isEnabledFor(logging.DEBUG):
            for i, (rule, w) in enumerate(zip(self.rules, strengths)):
                rule_engine_log.debug("Rule# %d %s W= %.3f", i, describe(rule), w)
        return strengths

    def aggregate(self, output_group: int, value: float, context: EvaluationContext) -> float:
        """
        Aggregated (max) output strength of an output group at one sample point.

        Uses the firing strengths already stored in the context by evaluate().
        """
        strength = 0.0
        for rule, w in zip(self.rules, context.firing_strengths):
            strength = max(strength, rule.output_strength(output_group, value, w))
        return strength
