"""Lexical token shapes produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class Variable:
    def __str__(self) -> str:
        return "x"


@dataclass(frozen=True, slots=True)
class AlphaRef:
    def __str__(self) -> str:
        return "alpha"


@dataclass(frozen=True, slots=True)
class Operator:
    symbol: str

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class LParen:
    def __str__(self) -> str:
        return "("


@dataclass(frozen=True, slots=True)
class RParen:
    def __str__(self) -> str:
        return ")"


@dataclass(frozen=True, slots=True)
class Call:
    """A whole function invocation; ``argument_text`` is re-parsed lazily."""

    name: str
    argument_text: str

    def __str__(self) -> str:
        return f"{self.name}({self.argument_text})"


Token = Number | Variable | AlphaRef | Operator | LParen | RParen | Call

OPERAND_TYPES = (Number, Variable, AlphaRef, Call)


def format_tokens(tokens) -> str:
    return " ".join(str(token) for token in tokens)


__all__ = [
    "OPERAND_TYPES",
    "AlphaRef",
    "Call",
    "LParen",
    "Number",
    "Operator",
    "RParen",
    "Token",
    "Variable",
    "format_tokens",
]
