import math

import numpy as np
import pytest

from asciigrapher.errors import ParseError
from asciigrapher.expression import clean_expression, compile_expression


def test_clean_strips_whitespace_and_prefix():
    assert clean_expression(" y = x ^ 2 ") == "x^2"
    assert clean_expression("Y=2x") == "2x"
    assert clean_expression("x + y") == "x+y"


def test_explicit_expression():
    ce = compile_expression("y = x^2 + 1")
    assert ce.free_variables == frozenset({"x"})
    assert not ce.uses_dependent_variable
    assert ce.evaluate({"x": 3.0}).value == pytest.approx(10)


def test_implicit_expression():
    ce = compile_expression("x^2 + y^2 - 4")
    assert ce.uses_dependent_variable
    assert ce.kind == "implicit"
    assert ce.evaluate({"x": 2.0, "y": 0.0}).value == pytest.approx(0)


def test_equation_is_compiled_as_residual():
    ce = compile_expression("x^2 + y^2 = 4")
    assert ce.uses_dependent_variable
    assert ce.evaluate({"x": 0.0, "y": 2.0}).value == pytest.approx(0)
    assert ce.evaluate({"x": 1.0, "y": 1.0}).value == pytest.approx(-2)


def test_implicit_multiplication_and_constants():
    assert compile_expression("2x").evaluate({"x": 4.0}).value == pytest.approx(8)
    ce = compile_expression("pi + e")
    assert ce.free_variables == frozenset()
    assert ce.evaluate({}).value == pytest.approx(math.pi + math.e)


@pytest.mark.parametrize("text", ["(x+", "x +", "", "   ", "x < 2"])
def test_parse_errors(text):
    with pytest.raises(ParseError):
        compile_expression(text)


def test_unbound_variable_is_a_failure_value():
    result = compile_expression("x + t").evaluate({"x": 1.0})
    assert not result.ok
    assert "t" in result.error


def test_domain_errors_are_not_finite():
    assert not compile_expression("1/x").evaluate({"x": 0.0}).finite
    assert not compile_expression("log(x)").evaluate({"x": 0.0}).finite
    assert not compile_expression("sqrt(x)").evaluate({"x": -1.0}).finite


def test_evaluate_array_masks_failures_as_nan():
    out = compile_expression("sqrt(x)").evaluate_array(x=np.array([-1.0, 4.0]))
    assert math.isnan(out[0])
    assert out[1] == pytest.approx(2)

    out = compile_expression("1/x").evaluate_array(x=np.array([0.0, 2.0]))
    assert math.isnan(out[0])
    assert out[1] == pytest.approx(0.5)


def test_evaluate_array_falls_back_to_per_sample_evaluation():
    # gamma lambdifies to math.gamma, which rejects arrays
    out = compile_expression("gamma(x)").evaluate_array(x=np.array([0.0, 3.0, 0.5]))
    assert math.isnan(out[0])
    assert out[1] == pytest.approx(2)
    assert out[2] == pytest.approx(math.sqrt(math.pi))


def test_evaluate_array_broadcasts_constants():
    out = compile_expression("5").evaluate_array(x=np.zeros(3))
    assert out.shape == (3,)
    assert np.all(out == 5)


def test_evaluate_array_unbound_variable_gives_all_nan():
    out = compile_expression("x*t").evaluate_array(x=np.arange(4.0))
    assert np.all(np.isnan(out))
