"""Token resolution: map one token plus the current inputs to a number."""

from __future__ import annotations

import importlib
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Literal

from .errors import ArityError, InvalidTokenError, NestingDepthError, UnknownFunctionError
from .registry import lookup
from .tokenizer import split_arguments, tokenize
from .tokens import AlphaRef, Call, Number, Token, Variable

ReductionMode = Literal["precedence", "naive"]

MAX_CALL_DEPTH = 64


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Inputs shared by every token resolved during one evaluation."""

    x: float
    alpha: float = 0.5
    reduction: ReductionMode = "precedence"
    depth: int = 0


@lru_cache(maxsize=1)
def _evaluator_module():
    return importlib.import_module("formula_kit.evaluator")


@lru_cache(maxsize=512)
def _tokenize_argument(text: str) -> tuple[Token, ...]:
    return tokenize(text)


def evaluate_subexpression(text: str, context: EvaluationContext) -> float:
    """Run ``text`` through the full tokenizer -> evaluator pipeline."""
    tokens = _tokenize_argument(text)
    return _evaluator_module().evaluate_tokens(tokens, context)


def _resolve_call(token: Call, context: EvaluationContext) -> float:
    spec = lookup(token.name)
    if spec is None:
        raise UnknownFunctionError(f"Unknown function: {token.name}")
    if context.depth >= MAX_CALL_DEPTH:
        raise NestingDepthError(f"Function calls nested deeper than {MAX_CALL_DEPTH} levels: {token.name}")
    arguments = split_arguments(token.argument_text)
    if len(arguments) != spec.arity:
        raise ArityError(
            f"{token.name} expects {spec.arity} argument(s), got {len(arguments)}: {token}"
        )
    inner = replace(context, depth=context.depth + 1)
    values = [evaluate_subexpression(argument, inner) for argument in arguments]
    return spec.apply(*values)


def resolve_token(token: Token, context: EvaluationContext) -> float:
    if isinstance(token, Number):
        return float(token.value)
    if isinstance(token, Variable):
        return float(context.x)
    if isinstance(token, AlphaRef):
        return float(context.alpha)
    if isinstance(token, Call):
        return _resolve_call(token, context)
    raise InvalidTokenError(f"Invalid token: {token!r}")


__all__ = ["MAX_CALL_DEPTH", "EvaluationContext", "ReductionMode", "evaluate_subexpression", "resolve_token"]
