"""
Fuzzy rules of the form IF a AND b THEN x AND y.

A rule binds input membership functions (antecedents) to output membership
functions (consequents). Its firing strength is the fuzzy AND (minimum) of
the antecedent degrees; its contribution to an output group at a sample point
is the output function's degree capped by that firing strength.
"""

from dataclasses import dataclass
from typing import Mapping, NamedTuple, Optional, Tuple

from fis.errors import ConfigurationError
from fis.membership import DISABLED_GROUP, MembershipFunction


class RuleDefinition(NamedTuple):
    """Names of a rule's antecedents and consequents, before resolution."""

    antecedents: Tuple[str, ...]
    consequents: Tuple[str, ...]


class RuleBuilder:
    """
    Small builder for rule definitions.

    Example:
        definition = RuleBuilder().when("weatherHot", "sunny").then("curtainsDown", "coolerOn")
        engine.add_rule(definition)
    """

    def __init__(self):
        self._antecedents = []
        self._consequents = []

    def when(self, *names: str) -> "RuleBuilder":
        self._antecedents.extend(names)
        return self

    and_ = when

    def then(self, *names: str) -> RuleDefinition:
        self._consequents.extend(names)
        return self.build()

    def also(self, *names: str) -> "RuleBuilder":
        self._consequents.extend(names)
        return self

    def build(self) -> RuleDefinition:
        return RuleDefinition(tuple(self._antecedents), tuple(self._consequents))


@dataclass(frozen=True)
class Rule:
    """
    A resolved rule.

    Attributes:
        antecedents (Tuple[MembershipFunction, ...]): Input functions, AND-ed.
        consequents (Tuple[MembershipFunction, ...]): Output functions, at most
            one per output group.
    """

    antecedents: Tuple[MembershipFunction, ...]
    consequents: Tuple[MembershipFunction, ...]

    def __post_init__(self) -> None:
        if not self.antecedents:
            raise ConfigurationError("A rule needs at least one antecedent")
        if not self.consequents:
            raise ConfigurationError("A rule needs at least one consequent")
        seen = {}
        for consequent in self.consequents:
            if consequent.group_index == DISABLED_GROUP:
                continue
            other = seen.get(consequent.group_index)
            if other is not None:
                raise ConfigurationError(
                    f"Consequents '{other}' and '{consequent.name}' share output "
                    f"group {consequent.group_index}"
                )
            seen[consequent.group_index] = consequent.name

    @property
    def antecedent_names(self) -> Tuple[str, ...]:
        return tuple(mf.name for mf in self.antecedents)

    @property
    def consequent_names(self) -> Tuple[str, ...]:
        return tuple(mf.name for mf in self.consequents)

    def references(self, name: str) -> bool:
        return name in self.antecedent_names or name in self.consequent_names

    def firing_strength(self, degrees: Mapping[str, float]) -> float:
        """Minimum of the antecedents' current degrees (fuzzy AND)."""
        return min(degrees.get(mf.name, 0.0) for mf in self.antecedents)

    def consequent_for(self, group_index: int) -> Optional[MembershipFunction]:
        for consequent in self.consequents:
            if consequent.group_index == group_index:
                return consequent
        return None

    def output_strength(self, group_index: int, value: float, firing_strength: float) -> float:
        """
        Contribution of this rule to an output group at one sample point.

        Args:
            group_index (int): Output group being defuzzified.
            value (float): Sample point on the output axis.
            firing_strength (float): This rule's firing strength.

        Returns:
            float: min(firing_strength, consequent degree), or 0.0 when the
                rule has no consequent in that group.
        """
        consequent = self.consequent_for(group_index)
        if consequent is None:
            return 0.0
        return min(firing_strength, consequent.degree(value))


def describe(rule: Rule) -> str:
    """Human-readable IF/THEN form, used in logs and traces."""
    return "IF {} THEN {}".format(
        " AND ".join(rule.antecedent_names), " AND ".join(rule.consequent_names)
    )


def as_definition(antecedents, consequents=None) -> RuleDefinition:
    """Normalizes add_rule arguments to a RuleDefinition."""
    if consequents is None:
        if isinstance(antecedents, RuleBuilder):
            return antecedents.build()
        if isinstance(antecedents, RuleDefinition):
            return antecedents
        raise ConfigurationError("add_rule needs consequents or a RuleDefinition")
    if isinstance(antecedents, str) or isinstance(consequents, str):
        raise ConfigurationError("Rule antecedents and consequents must be sequences of names")
    return RuleDefinition(tuple(antecedents), tuple(consequents))
