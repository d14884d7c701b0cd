from __future__ import annotations

import logging

import pytest
from formula_kit.errors import ParseError
from formula_kit.tokenizer import find_matching_paren, split_arguments, tokenize
from formula_kit.tokens import AlphaRef, Call, LParen, Number, Operator, RParen, Variable, format_tokens


def test_tokenize_mixed_formula():
    tokens = tokenize("alpha * sin(x) + (1 - alpha) * cos(x)")
    assert tokens == (
        AlphaRef(),
        Operator("*"),
        Call("sin", "x"),
        Operator("+"),
        LParen(),
        Number(1.0),
        Operator("-"),
        AlphaRef(),
        RParen(),
        Operator("*"),
        Call("cos", "x"),
    )


def test_tokenize_returns_immutable_sequence():
    assert isinstance(tokenize("x + 1"), tuple)


def test_nested_call_is_captured_as_one_fragment():
    tokens = tokenize("min(max(x,-1),1)")
    assert tokens == (Call("min", "max(x,-1),1"),)


def test_call_fragment_allows_whitespace_before_paren():
    assert tokenize("exp (-fabs(x))") == (Call("exp", "-fabs(x)"),)


@pytest.mark.parametrize(
    ("text", "expected"),
    (("42", 42.0), ("3.25", 3.25), ("7.", 7.0), ("0.01", 0.01)),
)
def test_number_literals(text: str, expected: float):
    assert tokenize(text) == (Number(expected),)


def test_unknown_function_is_tokenized_and_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="formula_kit.tokenizer"):
        tokens = tokenize("foo(x) + 1")
    assert tokens[0] == Call("foo", "x")
    assert "foo" in caplog.text


@pytest.mark.parametrize(
    "text",
    ("", "   ", "sin(x", "min(max(x, 1)", "x $ 2", "y + 1", "alphabet", ".5"),
)
def test_tokenize_failures_raise_parse_error(text: str):
    with pytest.raises(ParseError):
        tokenize(text)


def test_find_matching_paren_tracks_nesting():
    text = "pow(x, min(x, 2)) + 1"
    assert find_matching_paren(text, 3) == 16
    assert find_matching_paren("((x)", 0) == -1


def test_split_arguments_respects_nested_parentheses():
    assert split_arguments("x, min(x,2)") == ["x", "min(x,2)"]
    assert split_arguments("max(x, -1), 1") == ["max(x, -1)", "1"]
    assert split_arguments("x") == ["x"]
    assert split_arguments("a, b, c") == ["a", "b", "c"]
    with pytest.raises(ParseError):
        split_arguments("x), (1")


def test_format_tokens_renders_readable_text():
    assert format_tokens(tokenize("2 * (x + sin(x))")) == "2.0 * ( x + sin(x) )"


@pytest.mark.parametrize("text", ("٣ + 1", "x + ١٠", "été(x)", "x²"))
def test_non_ascii_digits_and_identifiers_are_rejected(text: str):
    with pytest.raises(ParseError):
        tokenize(text)
