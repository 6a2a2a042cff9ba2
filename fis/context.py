"""
Per-call evaluation state.

Membership functions and rules are immutable configuration. Everything that
changes while a decision is computed (the degree of every input function and
the firing strength of every rule) lives in an EvaluationContext, so two
callers holding their own contexts can evaluate the same engine concurrently.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List


@dataclass
class EvaluationContext:
    """
    Attributes:
        degrees (Dict[str, float]): Current degree of each input membership
            function, keyed by name.
        firing_strengths (List[float]): Firing strength of each rule, in rule order.
    """

    degrees: Dict[str, float] = field(default_factory=dict)
    firing_strengths: List[float] = field(default_factory=list)

    @classmethod
    def for_functions(cls, names: Iterable[str], rule_count: int = 0) -> "EvaluationContext":
        return cls({name: 0.0 for name in names}, [0.0] * rule_count)

    def degree(self, name: str) -> float:
        return self.degrees.get(name, 0.0)

    def reset(self) -> None:
        for name in self.degrees:
            self.degrees[name] = 0.0
        self.firing_strengths = [0.0] * len(self.firing_strengths)
