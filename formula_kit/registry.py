"""Fixed registry of guarded unary/binary numeric primitives."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import (
    ArityError,
    DivisionByZeroError,
    DomainError,
    FormulaError,
    NumericOverflowError,
)

MAX_EXP_INPUT = math.log(sys.float_info.max)

Guard = Callable[..., None]


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    """One registry entry: a named primitive with its arity and domain guard."""

    name: str
    arity: int
    func: Callable[..., float]
    guard: Guard | None = None

    def apply(self, *args: float) -> float:
        if len(args) != self.arity:
            raise ArityError(f"{self.name} expects {self.arity} argument(s), got {len(args)}")
        values = tuple(float(arg) for arg in args)
        if self.guard is not None:
            self.guard(*values)
        try:
            result = float(self.func(*values))
        except FormulaError:
            raise
        except OverflowError as exc:
            raise NumericOverflowError(f"{self.name}{values} overflows the double range") from exc
        except ValueError as exc:
            raise DomainError(f"{self.name}{values} is undefined: {exc}") from exc
        if math.isnan(result):
            raise DomainError(f"{self.name}{values} is undefined")
        return result


def _guard_sqrt(value: float) -> None:
    if value < 0.0:
        raise DomainError(f"Square root of a negative number is undefined: {value}")


def _guard_exp(value: float) -> None:
    if value > MAX_EXP_INPUT:
        raise NumericOverflowError(f"Exponential result too large to handle: exp({value})")


def _guard_log(value: float) -> None:
    if value <= 0.0:
        raise DomainError(f"Logarithm of non-positive number is undefined: {value}")


def _guard_divide(_numerator: float, denominator: float) -> None:
    if denominator == 0.0:
        raise DivisionByZeroError("Division by zero")


def _guard_pow(base: float, exponent: float) -> None:
    if base == 0.0 and exponent < 0.0:
        raise DomainError("Invalid input for pow: zero to a negative power")
    if base < 0.0 and math.isfinite(exponent) and not float(exponent).is_integer():
        raise DomainError(f"Invalid input for pow: negative base {base} with fractional exponent")


def _round_half_away(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _sigmoid(value: float) -> float:
    # Branch on sign so exp() only ever sees non-positive inputs.
    if value >= 0.0:
        return 1.0 / (1.0 + math.exp(-value))
    shifted = math.exp(value)
    return shifted / (1.0 + shifted)


def _as_float_op(func: Callable[..., float]) -> Callable[..., float]:
    return lambda *args: float(func(*args))


_UNARY_SPECS = (
    FunctionSpec("sin", 1, math.sin),
    FunctionSpec("cos", 1, math.cos),
    FunctionSpec("tanh", 1, math.tanh),
    FunctionSpec("fabs", 1, math.fabs),
    FunctionSpec("atan", 1, math.atan),
    FunctionSpec("ceil", 1, _as_float_op(math.ceil)),
    FunctionSpec("floor", 1, _as_float_op(math.floor)),
    FunctionSpec("round", 1, _round_half_away),
    FunctionSpec("sqrt", 1, math.sqrt, _guard_sqrt),
    FunctionSpec("exp", 1, math.exp, _guard_exp),
    FunctionSpec("log", 1, math.log, _guard_log),
    FunctionSpec("sigmoid", 1, _sigmoid),
)

_BINARY_SPECS = (
    FunctionSpec("+", 2, lambda left, right: left + right),
    FunctionSpec("-", 2, lambda left, right: left - right),
    FunctionSpec("*", 2, lambda left, right: left * right),
    FunctionSpec("/", 2, lambda left, right: left / right, _guard_divide),
    FunctionSpec("min", 2, min),
    FunctionSpec("max", 2, max),
    FunctionSpec("pow", 2, math.pow, _guard_pow),
)

UNARY_FUNCTIONS: Mapping[str, FunctionSpec] = MappingProxyType({spec.name: spec for spec in _UNARY_SPECS})
BINARY_FUNCTIONS: Mapping[str, FunctionSpec] = MappingProxyType({spec.name: spec for spec in _BINARY_SPECS})

OPERATOR_SYMBOLS = frozenset({"+", "-", "*", "/"})


def lookup_unary(name: str) -> FunctionSpec | None:
    return UNARY_FUNCTIONS.get(name)


def lookup_binary(name: str) -> FunctionSpec | None:
    return BINARY_FUNCTIONS.get(name)


def lookup(name: str) -> FunctionSpec | None:
    """Return the entry registered under ``name`` exactly, or ``None``."""
    spec = UNARY_FUNCTIONS.get(name)
    if spec is not None:
        return spec
    return BINARY_FUNCTIONS.get(name)


_CALLABLE_NAMES = frozenset(
    [*UNARY_FUNCTIONS, *(name for name in BINARY_FUNCTIONS if name not in OPERATOR_SYMBOLS)]
)


def function_names() -> frozenset[str]:
    """Names callable as ``name(...)`` in formula text (operators excluded)."""
    return _CALLABLE_NAMES


__all__ = [
    "BINARY_FUNCTIONS",
    "MAX_EXP_INPUT",
    "OPERATOR_SYMBOLS",
    "UNARY_FUNCTIONS",
    "FunctionSpec",
    "function_names",
    "lookup",
    "lookup_binary",
    "lookup_unary",
]
