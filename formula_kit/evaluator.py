"""Stack-based expression evaluator with conventional operator precedence.

Operands are resolved through :mod:`formula_kit.resolver`; infix operators are
reduced with two explicit stacks. ``*`` and ``/`` bind tighter than ``+`` and
``-``; equal precedence associates left to right. A ``+``/``-`` appearing where
an operand is expected is a unary sign and binds tighter than any infix
operator.

The ``"naive"`` reduction mode reduces every pending operator before pushing a
new one, which reproduces strict left-to-right evaluation (``2 + 3 * 4 == 20``).
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import InvalidTokenError, MalformedExpressionError, UnbalancedParensError
from .registry import lookup_binary
from .resolver import EvaluationContext, resolve_token
from .tokens import OPERAND_TYPES, LParen, Operator, RParen, Token

_PAREN_MARKER = "("
_UNARY_MINUS = "neg"
_UNARY_PLUS = "pos"
_UNARY_OPS = frozenset({_UNARY_MINUS, _UNARY_PLUS})

PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    _UNARY_MINUS: 3,
    _UNARY_PLUS: 3,
}

REDUCTION_MODES = ("precedence", "naive")


def _reduce_once(values: list[float], ops: list[str]) -> None:
    op = ops.pop()
    if op in _UNARY_OPS:
        if not values:
            raise MalformedExpressionError("Unary sign without an operand")
        operand = values.pop()
        values.append(-operand if op == _UNARY_MINUS else operand)
        return
    if len(values) < 2:
        raise MalformedExpressionError(f"Operator {op!r} is missing an operand")
    right = values.pop()
    left = values.pop()
    spec = lookup_binary(op)
    if spec is None:
        raise MalformedExpressionError(f"Unsupported operation: {op}")
    values.append(spec.apply(left, right))


def _should_reduce(pending: str, incoming: str, reduction: str) -> bool:
    if pending == _PAREN_MARKER:
        return False
    if reduction == "naive":
        return True
    return PRECEDENCE[pending] >= PRECEDENCE[incoming]


def evaluate_tokens(tokens: Sequence[Token], context: EvaluationContext) -> float:
    """Reduce ``tokens`` to a single number for the inputs in ``context``."""
    if context.reduction not in REDUCTION_MODES:
        raise ValueError(f"reduction must be one of: {', '.join(REDUCTION_MODES)}")

    values: list[float] = []
    ops: list[str] = []
    expect_operand = True

    for token in tokens:
        if isinstance(token, OPERAND_TYPES):
            if not expect_operand:
                raise MalformedExpressionError(f"Unexpected operand {token} without an operator")
            values.append(resolve_token(token, context))
            expect_operand = False
        elif isinstance(token, LParen):
            if not expect_operand:
                raise MalformedExpressionError("Unexpected '(' without an operator")
            ops.append(_PAREN_MARKER)
        elif isinstance(token, RParen):
            if expect_operand:
                raise MalformedExpressionError("Unexpected ')' where an operand was expected")
            while ops and ops[-1] != _PAREN_MARKER:
                _reduce_once(values, ops)
            if not ops:
                raise UnbalancedParensError("Unmatched ')'")
            ops.pop()
        elif isinstance(token, Operator):
            if expect_operand:
                if token.symbol == "-":
                    ops.append(_UNARY_MINUS)
                elif token.symbol == "+":
                    ops.append(_UNARY_PLUS)
                else:
                    raise MalformedExpressionError(f"Operator {token.symbol!r} is missing its left operand")
                continue
            while ops and _should_reduce(ops[-1], token.symbol, context.reduction):
                _reduce_once(values, ops)
            ops.append(token.symbol)
            expect_operand = True
        else:
            raise InvalidTokenError(f"Invalid token: {token!r}")

    if expect_operand:
        raise MalformedExpressionError("Expression ends where an operand was expected")
    while ops:
        if ops[-1] == _PAREN_MARKER:
            raise UnbalancedParensError("Unmatched '('")
        _reduce_once(values, ops)
    if len(values) != 1:
        raise MalformedExpressionError(f"Expression reduced to {len(values)} values")
    return values[0]


__all__ = ["PRECEDENCE", "REDUCTION_MODES", "evaluate_tokens"]
