"""
Generic fuzzy inference engine.

The engine owns two registries of membership functions (inputs and outputs,
independent namespaces keyed by name) and an ordered rule list. It is
configured once and then evaluated repeatedly:

    engine = InferenceEngine("direct_pass_speed")
    engine.add_membership_function("distanceLow", 1, 1, 1, 21, 1, MembershipKind.INPUT)
    ...
    engine.add_rule(["distanceLow"], ["speedLow"])

    engine.fuzzify([clamp(distance, 1.0, 21.0)])
    speed = engine.defuzzify_centroid(1, 0.81, 3.31, steps=8)

fuzzify() followed by defuzzify_centroid() is a two-step protocol over an
evaluation context. Without an explicit context the engine's own default
context is used, which must not be shared between threads; pass a context
from new_context() to evaluate reentrantly.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from fis.context import EvaluationContext
from fis.defuzzifier import DEFAULT_STEPS, Defuzzifier
from fis.errors import ConfigurationError, UnknownMembershipFunctionError
from fis.fuzzifier import Fuzzifier
from fis.membership import DISABLED_GROUP, FIRST_GROUP, MembershipFunction, MembershipKind
from fis.rule import Rule, as_definition, describe
from fis.rule_engine import RuleEngine

engine_log = logging.getLogger("engine")


class InferenceEngine:
    """
    Registries, rule base, fuzzification and centroid defuzzification.

    Attributes:
        name (str): Label used in log records.
        fuzzifier (Fuzzifier): Bound to the input registry.
        rule_engine (RuleEngine): Bound to the rule list.
        defuzzifier (Defuzzifier): Centroid defuzzifier.
    """

    def __init__(self, name: str = "engine"):
        self.name = name
        self._inputs: Dict[str, MembershipFunction] = {}
        self._outputs: Dict[str, MembershipFunction] = {}
        self._rules: List[Rule] = []

        self.fuzzifier = Fuzzifier(self._inputs)
        self.rule_engine = RuleEngine(self._rules)
        self.defuzzifier = Defuzzifier()
        self._context = EvaluationContext()
        engine_log.info("Inference engine '%s' created.", self.name)

    # ------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------
    def _registry(self, kind: MembershipKind) -> Dict[str, MembershipFunction]:
        kind = MembershipKind(kind)
        return self._inputs if kind is MembershipKind.INPUT else self._outputs

    def add_membership_function(
        self,
        name: str,
        start: float,
        top_left: float,
        top_right: float,
        end: float,
        group_index: int,
        kind: MembershipKind,
    ) -> MembershipFunction:
        """
        Adds a membership function, replacing any previous one with that name.

        Replacing is intentional (iterative tuning): rules that reference the
        name are rebound to the new definition.

        Raises:
            ConfigurationError: If the shape or group index is invalid, or if a
                rebound rule would become invalid. The engine is left unchanged.
        """
        mf = MembershipFunction(name, start, top_left, top_right, end, group_index, kind)
        return self._store(mf)

    def add(self, mf: MembershipFunction) -> MembershipFunction:
        """Adds an already built membership function."""
        return self._store(mf)

    def _store(self, mf: MembershipFunction) -> MembershipFunction:
        registry = self._registry(mf.kind)
        replaced = mf.name in registry
        # Rebound rules are validated before anything is committed.
        rebound = self._rebound_rules(mf) if replaced else None
        registry[mf.name] = mf
        if mf.kind is MembershipKind.INPUT:
            self._context.degrees.setdefault(mf.name, 0.0)
        if replaced:
            # In place: the rule engine holds a live reference to this list.
            self._rules[:] = rebound
            engine_log.debug("[%s] Replaced %s function '%s'.", self.name, mf.kind.value, mf.name)
        else:
            engine_log.debug(
                "[%s] Added %s function '%s' %s group %d.",
                self.name, mf.kind.value, mf.name, mf.points, mf.group_index,
            )
        return mf

    def _rebound_rules(self, mf: MembershipFunction) -> List[Rule]:
        """
        The rule list with every reference to mf.name pointing at mf.

        Raises:
            ConfigurationError: If a rebound rule is invalid, e.g. two of its
                consequents now share an output group.
        """
        registry = self._registry(mf.kind)

        def lookup(name: str) -> MembershipFunction:
            return mf if name == mf.name else registry[name]

        rules = []
        for rule in self._rules:
            if not rule.references(mf.name):
                rules.append(rule)
            elif mf.kind is MembershipKind.INPUT:
                rules.append(Rule(tuple(lookup(n) for n in rule.antecedent_names), rule.consequents))
            else:
                rules.append(Rule(rule.antecedents, tuple(lookup(n) for n in rule.consequent_names)))
        return rules

    def update_membership_function(self, name: str, kind: MembershipKind, **changes) -> MembershipFunction:
        """
        Reshapes a registered membership function.

        Args:
            name (str): Function to update.
            kind (MembershipKind): Its namespace.
            **changes: Any of start, top_left, top_right, end, group_index.

        Raises:
            UnknownMembershipFunctionError: If the name is not registered.
            ConfigurationError: If the new shape is invalid.
        """
        registry = self._registry(kind)
        if name not in registry:
            raise UnknownMembershipFunctionError(name, MembershipKind(kind).value)
        unknown = set(changes) - {"start", "top_left", "top_right", "end", "group_index"}
        if unknown:
            raise ConfigurationError(f"Cannot update {sorted(unknown)} of '{name}'")
        return self._store(registry[name].reshaped(**changes))

    def _resolve(self, names: Sequence[str], kind: MembershipKind) -> Tuple[MembershipFunction, ...]:
        registry = self._registry(kind)
        resolved = []
        for name in names:
            if name not in registry:
                raise UnknownMembershipFunctionError(name, kind.value)
            resolved.append(registry[name])
        return tuple(resolved)

    def add_rule(self, antecedents, consequents=None) -> Rule:
        """
        Adds a rule IF antecedents... THEN consequents...

        Args:
            antecedents (Sequence[str] | RuleDefinition | RuleBuilder): Input function
                names, or a complete rule definition.
            consequents (Sequence[str], optional): Output function names.

        Raises:
            UnknownMembershipFunctionError: If a name is not registered in its
                namespace.
            ConfigurationError: If either side is empty or two consequents
                share an output group.
        """
        definition = as_definition(antecedents, consequents)
        rule = Rule(
            self._resolve(definition.antecedents, MembershipKind.INPUT),
            self._resolve(definition.consequents, MembershipKind.OUTPUT),
        )
        self._rules.append(rule)
        self._context.firing_strengths.append(0.0)
        engine_log.debug("[%s] Rule# %d %s", self.name, len(self._rules) - 1, describe(rule))
        return rule

    # ------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------
    @property
    def input_functions(self) -> Mapping[str, MembershipFunction]:
        return MappingProxyType(self._inputs)

    @property
    def output_functions(self) -> Mapping[str, MembershipFunction]:
        return MappingProxyType(self._outputs)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def context(self) -> EvaluationContext:
        """The default context used when none is passed."""
        return self._context

    def input_groups(self) -> List[int]:
        return sorted({mf.group_index for mf in self._inputs.values() if mf.group_index != DISABLED_GROUP})

    def output_groups(self) -> List[int]:
        return sorted({mf.group_index for mf in self._outputs.values() if mf.group_index != DISABLED_GROUP})

    def new_context(self) -> EvaluationContext:
        """A fresh context with every degree and firing strength at 0."""
        return EvaluationContext.for_functions(self._inputs, len(self._rules))

    # ------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------
    def fuzzify(self, inputs: Sequence[float], context: Optional[EvaluationContext] = None) -> EvaluationContext:
        """
        Computes the degree of every input function from crisp inputs.

        Args:
            inputs (Sequence[float]): inputs[0] feeds group 1, inputs[1] group 2, ...
                Values are expected to be clamped already.
            context (EvaluationContext, optional): Defaults to the engine's own.

        Returns:
            EvaluationContext: The context that received the degrees.
        """
        context = self._context if context is None else context
        self.fuzzifier.fuzzify(inputs, context)
        return context

    def defuzzify_centroid(
        self,
        output_group: int,
        out_min: float,
        out_max: float,
        steps: int = DEFAULT_STEPS,
        context: Optional[EvaluationContext] = None,
    ) -> float:
        """
        Crisp value of one output group by the centroid method.

        Firing strengths are recomputed from the context's current degrees, then
        the output range is sampled at steps + 1 points.

        Args:
            output_group (int): Output group to defuzzify (1-based).
            out_min (float): Lowest output value.
            out_max (float): Highest output value.
            steps (int): Discretisation of the output range.
            context (EvaluationContext, optional): Defaults to the engine's own.

        Returns:
            float: The centroid, or 0.0 when no rule fires for this group.

        Raises:
            ValueError: On an invalid group, range or step count.
        """
        if int(output_group) != output_group or output_group < FIRST_GROUP:
            raise ValueError(f"Output group must be >= {FIRST_GROUP}, got {output_group!r}")
        context = self._context if context is None else context
        self.rule_engine.evaluate(context)
        output = self.defuzzifier.centroid(
            lambda p: self.rule_engine.aggregate(output_group, p, context),
            out_min,
            out_max,
            steps,
        )
        engine_log.debug("[%s] Output group %d -> %.4f", self.name, output_group, output)
        return output
