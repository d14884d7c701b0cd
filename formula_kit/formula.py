"""Public formula type: parse once, evaluate many times."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AlphaRangeError, FormulaError, NotParsedError, ParseError
from .evaluator import REDUCTION_MODES, evaluate_tokens
from .resolver import EvaluationContext, ReductionMode
from .tokenizer import tokenize
from .tokens import Token

LOGGER = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.5


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result-or-failure value returned by the ``try_*`` methods."""

    value: float | None = None
    error: FormulaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> str | None:
        return None if self.error is None else type(self.error).__name__

    def unwrap(self) -> float | None:
        if self.error is not None:
            raise self.error
        return self.value


def _validate_alpha(value) -> float:
    try:
        alpha = float(value)
    except (TypeError, ValueError) as exc:
        raise AlphaRangeError(f"Alpha must be a number, got {value!r}") from exc
    if not 0.0 <= alpha <= 1.0:
        raise AlphaRangeError(f"Alpha must be between 0 and 1, got {alpha}")
    return alpha


class Formula:
    """A single-variable formula over ``x`` and the blending constant ``alpha``.

    >>> formula = Formula("2 + 3 * x")
    >>> formula.parse()
    >>> formula.evaluate(4.0)
    14.0
    """

    def __init__(
        self,
        source: str,
        alpha: float = DEFAULT_ALPHA,
        reduction: ReductionMode = "precedence",
    ):
        if reduction not in REDUCTION_MODES:
            raise ValueError(f"reduction must be one of: {', '.join(REDUCTION_MODES)}")
        self.source = str(source)
        self.reduction = reduction
        self._alpha = _validate_alpha(alpha)
        self._tokens: tuple[Token, ...] | None = None

    def __repr__(self) -> str:
        return f"Formula({self.source!r}, alpha={self._alpha}, parsed={self.is_parsed})"

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def tokens(self) -> tuple[Token, ...] | None:
        return self._tokens

    @property
    def is_parsed(self) -> bool:
        return self._tokens is not None

    def set_alpha(self, value: float) -> None:
        """Replace alpha; out-of-range values raise and leave the prior value."""
        self._alpha = _validate_alpha(value)

    def parse(self) -> None:
        """Tokenize the source, replacing any previously cached tokens."""
        LOGGER.debug("Parsing formula: %s", self.source)
        try:
            tokens = tokenize(self.source)
        except ParseError:
            self._tokens = None
            LOGGER.warning("Formula parsing failed for %s", self.source)
            raise
        self._tokens = tokens

    def evaluate(self, x: float) -> float:
        if self._tokens is None:
            raise NotParsedError(f"Formula has not been parsed: {self.source!r}")
        context = EvaluationContext(x=float(x), alpha=self._alpha, reduction=self.reduction)
        return evaluate_tokens(self._tokens, context)

    def try_parse(self) -> Outcome:
        try:
            self.parse()
        except ParseError as exc:
            return Outcome(error=exc)
        return Outcome()

    def try_evaluate(self, x: float) -> Outcome:
        try:
            return Outcome(value=self.evaluate(x))
        except FormulaError as exc:
            return Outcome(error=exc)


__all__ = ["DEFAULT_ALPHA", "Formula", "Outcome"]
