"""Sample-input harness: evaluate formula lists and aggregate in-range stats."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from .config import DEFAULT_SAMPLE_INPUTS
from .formula import DEFAULT_ALPHA, Formula

LOGGER = logging.getLogger(__name__)


def _finite_or_none(value: float) -> float | None:
    value_f = float(value)
    return value_f if math.isfinite(value_f) else None


DEFAULT_FORMULAS = (
    "sin(x)",
    "cos(x)",
    "tanh(x)",
    "atan(x)",
    "exp(x) - 1",
    "1 / (1 + exp(-x))",
    "log(x + 1)",
    "fabs(x) - 0.5",
    "sqrt(fabs(x))",
    "pow(x, 2)",
    "pow(fabs(x), 0.5)",
    "alpha * sin(x) + (1 - alpha) * cos(x)",
    "sin(x) * cos(x)",
    "(x + 1) * sin(x)",
    "sin(x) / (1 + fabs(x))",
    "x / (1 + fabs(x))",
    "sin(x) + x / (1 + fabs(x))",
    "exp(-fabs(x))",
    "min(max(x, -1), 1)",
    "2 * atan(x)",
    "atan(2 * x)",
    "pow(x, 3)",
    "pow(x, -1)",
    "log(fabs(x) + 1)",
    "1 / (1 + exp(-fabs(x)))",
    "(x - 1) * log(x + 1)",
    "fabs(x) * sin(x)",
    "sqrt(x * x + 1)",
    "max(x, -x)",
    "min(x + 1, 2 * x)",
    "x * atan(x)",
    "exp(x) / (1 + exp(x))",
    "alpha * pow(x, 2) + (1 - alpha) * exp(-x)",
    "cos(x) + tanh(x)",
    "atan(x) * exp(x)",
)


@dataclass(frozen=True, slots=True)
class SampleResult:
    x: float
    value: float | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class FormulaReport:
    source: str
    parsed: bool
    parse_error: str | None = None
    samples: list[SampleResult] = field(default_factory=list)
    range_low: float = -1.0
    range_high: float = 1.0

    def _values(self) -> np.ndarray:
        return np.asarray([sample.value for sample in self.samples if sample.ok], dtype=float)

    @property
    def evaluated(self) -> int:
        return int(sum(1 for sample in self.samples if sample.ok))

    @property
    def failed(self) -> int:
        return int(sum(1 for sample in self.samples if not sample.ok))

    @property
    def in_range(self) -> int:
        values = self._values()
        if values.size == 0:
            return 0
        return int(np.count_nonzero((values >= self.range_low) & (values <= self.range_high)))

    @property
    def percentage(self) -> float:
        evaluated = self.evaluated
        if evaluated == 0:
            return 0.0
        return 100.0 * self.in_range / evaluated

    def value_stats(self) -> dict[str, float | None]:
        values = self._values()
        if values.size == 0:
            return {"min": None, "max": None, "mean": None}
        return {
            "min": _finite_or_none(np.min(values)),
            "max": _finite_or_none(np.max(values)),
            "mean": _finite_or_none(np.mean(values)),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "parsed": self.parsed,
            "parse_error": self.parse_error,
            "evaluated": self.evaluated,
            "failed": self.failed,
            "in_range": self.in_range,
            "percentage": self.percentage,
            **self.value_stats(),
        }


@dataclass(slots=True)
class SuiteReport:
    reports: list[FormulaReport] = field(default_factory=list)

    @property
    def total_evaluated(self) -> int:
        return sum(report.evaluated for report in self.reports)

    @property
    def total_in_range(self) -> int:
        return sum(report.in_range for report in self.reports)

    @property
    def parse_failures(self) -> int:
        return sum(1 for report in self.reports if not report.parsed)

    @property
    def overall_percentage(self) -> float:
        total = self.total_evaluated
        if total == 0:
            return 0.0
        return 100.0 * self.total_in_range / total

    def summary(self) -> dict[str, Any]:
        return {
            "formulas": len(self.reports),
            "parse_failures": self.parse_failures,
            "total_evaluated": self.total_evaluated,
            "total_in_range": self.total_in_range,
            "overall_percentage": self.overall_percentage,
        }

    def sample_rows(self) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        for report in self.reports:
            for sample in report.samples:
                rows.append(
                    {
                        "formula": report.source,
                        "x": sample.x,
                        "value": sample.value,
                        "error_kind": sample.error_kind,
                        "error": sample.error,
                    }
                )
        return rows


def load_formulas(path: str | Path) -> list[str]:
    """Read one formula per line, skipping blank lines."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Could not open formula file: {file_path}")
    with file_path.open(encoding="utf-8") as handle:
        formulas = [line.strip() for line in handle if line.strip()]
    if not formulas:
        LOGGER.error("No formulas found in %s (file is empty)", file_path)
    return formulas


def evaluate_formula(
    source: str,
    inputs: Sequence[float] = DEFAULT_SAMPLE_INPUTS,
    *,
    alpha: float = DEFAULT_ALPHA,
    reduction: str = "precedence",
    range_low: float = -1.0,
    range_high: float = 1.0,
) -> FormulaReport:
    formula = Formula(source, alpha=alpha, reduction=reduction)
    parsed = formula.try_parse()
    report = FormulaReport(
        source=formula.source,
        parsed=parsed.ok,
        parse_error=None if parsed.ok else str(parsed.error),
        range_low=float(range_low),
        range_high=float(range_high),
    )
    if not parsed.ok:
        LOGGER.info("Failed to parse formula: %s (%s)", source, parsed.error)
        return report

    for x in inputs:
        outcome = formula.try_evaluate(x)
        if outcome.ok:
            report.samples.append(SampleResult(x=float(x), value=outcome.value))
        else:
            LOGGER.debug("Error: %s for input %s in %s", outcome.error, x, source)
            report.samples.append(
                SampleResult(x=float(x), error=str(outcome.error), error_kind=outcome.error_kind)
            )
    return report


def run_suite(
    sources: Iterable[str],
    inputs: Sequence[float] = DEFAULT_SAMPLE_INPUTS,
    *,
    alpha: float = DEFAULT_ALPHA,
    reduction: str = "precedence",
    range_low: float = -1.0,
    range_high: float = 1.0,
) -> SuiteReport:
    suite = SuiteReport()
    for source in sources:
        suite.reports.append(
            evaluate_formula(
                source,
                inputs,
                alpha=alpha,
                reduction=reduction,
                range_low=range_low,
                range_high=range_high,
            )
        )
    LOGGER.info(
        "Evaluated %d formulas: %d in range out of %d evaluations (%.2f%%)",
        len(suite.reports),
        suite.total_in_range,
        suite.total_evaluated,
        suite.overall_percentage,
    )
    return suite


__all__ = [
    "DEFAULT_FORMULAS",
    "FormulaReport",
    "SampleResult",
    "SuiteReport",
    "evaluate_formula",
    "load_formulas",
    "run_suite",
]
