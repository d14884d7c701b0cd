"""Parse single-variable formulas once and evaluate them at many inputs."""

from formula_kit.errors import (
    AlphaRangeError,
    ArityError,
    DivisionByZeroError,
    DomainError,
    EvaluationError,
    FormulaError,
    InvalidTokenError,
    MalformedExpressionError,
    NestingDepthError,
    NotParsedError,
    NumericOverflowError,
    ParseError,
    UnbalancedParensError,
    UnknownFunctionError,
)
from formula_kit.formula import Formula, Outcome
from formula_kit.tokenizer import tokenize

__all__ = [
    "AlphaRangeError",
    "ArityError",
    "DivisionByZeroError",
    "DomainError",
    "EvaluationError",
    "Formula",
    "FormulaError",
    "InvalidTokenError",
    "MalformedExpressionError",
    "NestingDepthError",
    "NotParsedError",
    "NumericOverflowError",
    "Outcome",
    "ParseError",
    "UnbalancedParensError",
    "UnknownFunctionError",
    "tokenize",
]
