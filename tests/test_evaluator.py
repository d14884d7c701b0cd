from __future__ import annotations

import pytest
from formula_kit.errors import (
    ArityError,
    DivisionByZeroError,
    DomainError,
    InvalidTokenError,
    MalformedExpressionError,
    NestingDepthError,
    ParseError,
    UnbalancedParensError,
    UnknownFunctionError,
)
from formula_kit.evaluator import evaluate_tokens
from formula_kit.resolver import MAX_CALL_DEPTH, EvaluationContext, evaluate_subexpression, resolve_token
from formula_kit.tokenizer import tokenize
from formula_kit.tokens import AlphaRef, Call, LParen, Number, Operator, RParen, Variable


def _eval(text: str, x: float = 0.0, alpha: float = 0.5, reduction: str = "precedence") -> float:
    return evaluate_tokens(tokenize(text), EvaluationContext(x=x, alpha=alpha, reduction=reduction))


@pytest.mark.parametrize(
    ("text", "expected"),
    (
        ("2 + 3 * 4", 14.0),
        ("(2 + 3) * 4", 20.0),
        ("10 - 4 - 3", 3.0),
        ("24 / 4 / 2", 3.0),
        ("2 * 3 + 4 * 5", 26.0),
        ("8 - 2 * 3 / 6", 7.0),
        ("((1 + 2) * (3 + 4))", 21.0),
    ),
)
def test_precedence_and_left_associativity(text: str, expected: float):
    assert _eval(text) == pytest.approx(expected)


def test_naive_reduction_mode_reduces_left_to_right():
    assert _eval("2 + 3 * 4", reduction="naive") == 20.0
    assert _eval("(2 + 3) * 4", reduction="naive") == 20.0


def test_unknown_reduction_mode_is_rejected():
    with pytest.raises(ValueError):
        _eval("1", reduction="rpn")


@pytest.mark.parametrize(
    ("text", "x", "expected"),
    (
        ("-x", 2.0, -2.0),
        ("-2 * 3", 0.0, -6.0),
        ("2 * -x", 3.0, -6.0),
        ("1 - -x", 1.0, 2.0),
        ("+x + 1", 1.0, 2.0),
        ("-(x + 1)", 1.0, -2.0),
        ("exp(-x)", 0.0, 1.0),
        ("max(x, -x)", -4.0, 4.0),
    ),
)
def test_unary_signs(text: str, x: float, expected: float):
    assert _eval(text, x=x) == pytest.approx(expected)


def test_variable_and_alpha_are_resolved_from_context():
    assert _eval("alpha * x", x=4.0, alpha=0.25) == 1.0


@pytest.mark.parametrize(
    ("x", "expected"),
    ((5.0, 1.0), (-5.0, -1.0), (0.0, 0.0)),
)
def test_nested_calls_resolve(x: float, expected: float):
    assert _eval("min(max(x,-1),1)", x=x) == expected


def test_pow_with_nested_argument():
    assert _eval("pow(x, min(x, 2))", x=3.0) == 9.0
    assert _eval("pow(fabs(x), 0.5)", x=-4.0) == 2.0


def test_call_failures():
    with pytest.raises(UnknownFunctionError):
        _eval("foo(x)")
    with pytest.raises(ArityError):
        _eval("pow(x)")
    with pytest.raises(ArityError):
        _eval("pow(x, 1, 2)")
    with pytest.raises(ArityError):
        _eval("sin(x, 1)")
    with pytest.raises(ParseError):
        _eval("sin()")
    with pytest.raises(DomainError):
        _eval("sqrt(x)", x=-1.0)
    with pytest.raises(DomainError):
        _eval("log(x + 1)", x=-1.0)


def test_failing_subexpression_aborts_whole_evaluation():
    with pytest.raises(DivisionByZeroError):
        _eval("1 + sin(x / 0)", x=2.0)


@pytest.mark.parametrize(
    ("tokens", "error"),
    (
        ((Number(1.0), RParen()), UnbalancedParensError),
        ((LParen(), Number(1.0)), UnbalancedParensError),
        ((Number(1.0), Number(2.0)), MalformedExpressionError),
        ((Number(1.0), Operator("+")), MalformedExpressionError),
        ((Operator("*"), Number(1.0)), MalformedExpressionError),
        ((LParen(), RParen()), MalformedExpressionError),
        ((), MalformedExpressionError),
        ((Number(1.0), LParen(), Number(2.0), RParen()), MalformedExpressionError),
        (("x",), InvalidTokenError),
    ),
)
def test_stack_discipline_failures(tokens, error):
    with pytest.raises(error):
        evaluate_tokens(tokens, EvaluationContext(x=0.0))


def test_evaluation_does_not_mutate_tokens():
    tokens = tokenize("x * (1 + sin(x))")
    snapshot = tuple(tokens)
    evaluate_tokens(tokens, EvaluationContext(x=1.0))
    evaluate_tokens(tokens, EvaluationContext(x=-1.0))
    assert tokens == snapshot


def test_resolve_token_shapes():
    context = EvaluationContext(x=3.0, alpha=0.75)
    assert resolve_token(Number(2.5), context) == 2.5
    assert resolve_token(Variable(), context) == 3.0
    assert resolve_token(AlphaRef(), context) == 0.75
    assert resolve_token(Call("pow", "x, 2"), context) == 9.0
    with pytest.raises(InvalidTokenError):
        resolve_token(Operator("+"), context)
    with pytest.raises(InvalidTokenError):
        resolve_token(LParen(), context)


def test_evaluate_subexpression_runs_full_pipeline():
    assert evaluate_subexpression("1 + 2 * x", EvaluationContext(x=2.0)) == 5.0


def test_deeply_nested_calls_raise_typed_error():
    depth = MAX_CALL_DEPTH * 5
    deep = "sin(" * depth + "x" + ")" * depth
    with pytest.raises(NestingDepthError):
        _eval(deep)


def test_nesting_up_to_the_limit_evaluates():
    nested = "fabs(" * MAX_CALL_DEPTH + "x" + ")" * MAX_CALL_DEPTH
    assert _eval(nested, x=-2.0) == 2.0
