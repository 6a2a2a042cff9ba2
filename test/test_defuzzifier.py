import pytest

from fis.defuzzifier import Defuzzifier, sample_points


@pytest.fixture
def defuzzifier():
    return Defuzzifier()


def test_sample_points_include_both_ends():
    points = sample_points(0.81, 3.31, 8)
    assert len(points) == 9
    assert points[0] == 0.81
    assert points[-1] == 3.31
    assert points[1] - points[0] == pytest.approx(0.3125)


def test_constant_strength_gives_midpoint(defuzzifier):
    assert defuzzifier.centroid(lambda p: 0.5, 0.0, 10.0, 8) == pytest.approx(5.0)


def test_weighted_average(defuzzifier):
    # Samples 0, 5, 10 with weights 1, 0, 0.5 -> (0 + 0 + 5) / 1.5
    weights = {0.0: 1.0, 5.0: 0.0, 10.0: 0.5}
    result = defuzzifier.centroid(lambda p: weights[p], 0.0, 10.0, 2)
    assert result == pytest.approx(10.0 / 3.0)


def test_no_support_returns_zero(defuzzifier):
    # 0 lies outside [5, 10]; that is the documented fallback.
    assert defuzzifier.centroid(lambda p: 0.0, 5.0, 10.0, 8) == 0.0


def test_degenerate_range(defuzzifier):
    assert defuzzifier.centroid(lambda p: 1.0, 4.0, 4.0, 8) == pytest.approx(4.0)


@pytest.mark.parametrize("steps", [0, -1, 2.5, True])
def test_invalid_steps(defuzzifier, steps):
    with pytest.raises(ValueError):
        defuzzifier.centroid(lambda p: 1.0, 0.0, 1.0, steps)


def test_empty_range(defuzzifier):
    with pytest.raises(ValueError):
        defuzzifier.centroid(lambda p: 1.0, 2.0, 1.0, 8)


def test_convergence_towards_analytic_centroid(defuzzifier):
    # Right-angled triangle 1 -> 0 over [0, 10]: analytic centroid 10 / 3.
    # The sampled centroid is (10 / 3) * (1 - 1 / steps).
    analytic = 10.0 / 3.0
    errors = []
    for steps in (4, 8, 16, 32, 64, 128):
        result = defuzzifier.centroid(lambda p: (10.0 - p) / 10.0, 0.0, 10.0, steps)
        error = abs(analytic - result)
        assert error * steps == pytest.approx(10.0 / 3.0, rel=1e-6)
        errors.append(error)
    assert all(e1 > e2 for e1, e2 in zip(errors, errors[1:]))
