import pytest

from fis.context import EvaluationContext
from fis.membership import MembershipFunction, MembershipKind
from fis.rule import Rule
from fis.rule_engine import RuleEngine

OUT = MembershipKind.OUTPUT


@pytest.fixture
def functions():
    return {
        "near": MembershipFunction("near", 0, 0, 0, 10, 1),
        "far": MembershipFunction("far", 0, 10, 10, 10, 1),
        "open": MembershipFunction("open", 0, 0, 0, 4, 2),
        "slow": MembershipFunction("slow", 0, 0, 0, 10, 1, OUT),
        "fast": MembershipFunction("fast", 0, 10, 10, 10, 1, OUT),
        "small": MembershipFunction("small", 0, 0, 0, 1, 2, OUT),
    }


@pytest.fixture
def engine(functions):
    f = functions
    rules = [
        Rule((f["near"],), (f["slow"],)),
        Rule((f["far"], f["open"]), (f["fast"], f["small"])),
    ]
    return RuleEngine(rules)


def test_evaluate_sets_firing_strengths(engine):
    context = EvaluationContext({"near": 0.7, "far": 0.3, "open": 0.9})
    strengths = engine.evaluate(context)
    assert strengths == [pytest.approx(0.7), pytest.approx(0.3)]
    assert context.firing_strengths == strengths


def test_and_is_minimum(engine):
    context = EvaluationContext({"near": 0.0, "far": 1.0, "open": 0.4})
    assert engine.evaluate(context)[1] == pytest.approx(0.4)


def test_aggregate_is_max_over_rules(engine):
    context = EvaluationContext({"near": 0.7, "far": 0.3, "open": 1.0})
    engine.evaluate(context)
    # At 5.0: slow = 0.5 capped by 0.7 -> 0.5; fast = 0.5 capped by 0.3 -> 0.3
    assert engine.aggregate(1, 5.0, context) == pytest.approx(0.5)
    # At 9.0: slow = 0.1; fast = 0.9 capped by 0.3 -> 0.3
    assert engine.aggregate(1, 9.0, context) == pytest.approx(0.3)


def test_aggregate_only_uses_matching_group(engine):
    context = EvaluationContext({"near": 1.0, "far": 0.0, "open": 1.0})
    engine.evaluate(context)
    # Only rule 2 has a group-2 consequent and it does not fire.
    assert engine.aggregate(2, 0.0, context) == 0.0


def test_no_rules_aggregate_to_zero():
    engine = RuleEngine([])
    context = EvaluationContext()
    assert engine.evaluate(context) == []
    assert engine.aggregate(1, 0.0, context) == 0.0
