"""Console and on-disk reporting for harness runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import polars as pl
import yaml

from .harness import FormulaReport, SuiteReport

_RULE = "-" * 52

_SAMPLE_SCHEMA = {
    "formula": pl.Utf8,
    "x": pl.Float64,
    "value": pl.Float64,
    "error_kind": pl.Utf8,
    "error": pl.Utf8,
}


def format_formula_report(report: FormulaReport) -> str:
    lines = [f"Testing formula: {report.source}"]
    if not report.parsed:
        lines.append(f"Failed to parse formula: {report.source} ({report.parse_error})")
        lines.append(_RULE)
        return "\n".join(lines)
    for sample in report.samples:
        if sample.ok:
            lines.append(f"Input: {sample.x:g} -> Evaluated Result: {sample.value:.6g}")
        else:
            lines.append(f"Error: {sample.error} for input {sample.x:g}")
    lines.append(
        f"Percentage of outputs within range ({report.range_low:g} to {report.range_high:g}) "
        f"for {report.source}: {report.percentage:.2f}%"
    )
    lines.append(_RULE)
    return "\n".join(lines)


def format_suite_summary(suite: SuiteReport) -> str:
    summary = suite.summary()
    return "\n".join(
        [
            f"Formulas: {summary['formulas']} (parse failures: {summary['parse_failures']})",
            f"Evaluations in range: {summary['total_in_range']} / {summary['total_evaluated']}",
            "",
            f"          YOU GET {summary['overall_percentage']:.2f}%",
            _RULE,
        ]
    )


def write_report_bundle(
    *,
    run_id: str,
    output_root: str | Path,
    resolved_config: dict[str, Any],
    suite: SuiteReport,
) -> Path:
    """Write summary.json, samples.csv and config_resolved.yaml."""
    report_dir = Path(output_root) / run_id
    report_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "summary": suite.summary(),
        "formulas": [report.to_dict() for report in suite.reports],
    }
    with (report_dir / "summary.json").open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, allow_nan=False)

    rows = suite.sample_rows()
    table = pl.DataFrame(rows, schema=_SAMPLE_SCHEMA) if rows else pl.DataFrame(schema=_SAMPLE_SCHEMA)
    table.write_csv(report_dir / "samples.csv")

    with (report_dir / "config_resolved.yaml").open("w", encoding="utf-8") as handle:
        yaml.safe_dump(resolved_config, handle, sort_keys=False)

    return report_dir


__all__ = ["format_formula_report", "format_suite_summary", "write_report_bundle"]
