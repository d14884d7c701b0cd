"""Typed failures raised while parsing or evaluating formulas."""

from __future__ import annotations


class FormulaError(ValueError):
    """Base class for every formula failure."""


class AlphaRangeError(FormulaError):
    """Raised when alpha is set outside the closed interval [0, 1]."""


class ParseError(FormulaError):
    """Raised when a formula cannot be turned into a non-empty token sequence."""


class EvaluationError(FormulaError):
    """Base class for failures raised while evaluating a parsed formula."""


class NotParsedError(EvaluationError):
    """Raised when evaluate is called before a successful parse."""


class UnknownFunctionError(EvaluationError):
    """Raised when a call names a function missing from the registry."""


class ArityError(EvaluationError):
    """Raised when a call receives the wrong number of arguments."""


class DomainError(EvaluationError):
    """Raised when a guarded primitive receives an out-of-domain input."""


class NumericOverflowError(EvaluationError, OverflowError):
    """Raised when a primitive would overflow the double range."""


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """Raised on division by an exact zero."""


class UnbalancedParensError(EvaluationError):
    """Raised when a closing parenthesis has no matching opening one (or vice versa)."""


class MalformedExpressionError(EvaluationError):
    """Raised when the operator/value stacks do not reduce to a single value."""


class InvalidTokenError(EvaluationError):
    """Raised when a token cannot be resolved to a number."""


class NestingDepthError(EvaluationError):
    """Raised when function calls are nested deeper than the evaluator allows."""


__all__ = [
    "AlphaRangeError",
    "ArityError",
    "DivisionByZeroError",
    "DomainError",
    "EvaluationError",
    "FormulaError",
    "InvalidTokenError",
    "MalformedExpressionError",
    "NestingDepthError",
    "NotParsedError",
    "NumericOverflowError",
    "ParseError",
    "UnbalancedParensError",
    "UnknownFunctionError",
]
