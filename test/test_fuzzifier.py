import pytest

from fis.context import EvaluationContext
from fis.fuzzifier import Fuzzifier
from fis.membership import MembershipFunction


@pytest.fixture
def basic_fuzzifier():
    """Returns a Fuzzifier with two groups of simple membership functions."""
    functions = {
        "ZERO": MembershipFunction("ZERO", -0.5, 0.0, 0.0, 0.5, 1),
        "POS": MembershipFunction("POS", 0.0, 0.5, 0.5, 1.0, 1),
        "NEAR": MembershipFunction("NEAR", 0.0, 0.0, 0.0, 10.0, 2),
        "OFF": MembershipFunction("OFF", -100.0, -100.0, 100.0, 100.0, 0),
    }
    return Fuzzifier(functions)


def test_fuzzify_single_group(basic_fuzzifier):
    context = EvaluationContext()
    result = basic_fuzzifier.fuzzify_group(1, -0.25, context)
    assert result == {"ZERO": pytest.approx(0.5), "POS": 0.0}
    assert context.degree("ZERO") == pytest.approx(0.5)
    assert "NEAR" not in context.degrees


def test_fuzzify_multiple_activation(basic_fuzzifier):
    context = EvaluationContext()
    basic_fuzzifier.fuzzify([0.25], context)
    assert context.degree("ZERO") == pytest.approx(0.5)
    assert context.degree("POS") == pytest.approx(0.5)


def test_inputs_bind_to_groups_by_position(basic_fuzzifier):
    context = EvaluationContext()
    basic_fuzzifier.fuzzify([0.5, 2.5], context)
    assert context.degree("ZERO") == 0.0
    assert context.degree("POS") == pytest.approx(1.0)
    assert context.degree("NEAR") == pytest.approx(0.75)


def test_disabled_group_is_never_fuzzified(basic_fuzzifier):
    context = EvaluationContext()
    basic_fuzzifier.fuzzify([0.0, 0.0], context)
    assert "OFF" not in context.degrees


def test_unsupplied_groups_keep_previous_degrees(basic_fuzzifier):
    context = EvaluationContext()
    basic_fuzzifier.fuzzify([0.0, 5.0], context)
    assert context.degree("NEAR") == pytest.approx(0.5)

    # Only group 1 this time; group 2 carries over.
    basic_fuzzifier.fuzzify([0.5], context)
    assert context.degree("POS") == pytest.approx(1.0)
    assert context.degree("NEAR") == pytest.approx(0.5)


def test_functions_added_later_are_seen():
    functions = {}
    fuzzifier = Fuzzifier(functions)
    functions["LATE"] = MembershipFunction("LATE", 0, 1, 1, 2, 1)
    context = EvaluationContext()
    fuzzifier.fuzzify([1.5], context)
    assert context.degree("LATE") == pytest.approx(0.5)
