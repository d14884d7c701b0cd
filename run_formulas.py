"""Evaluate a list of formulas at sample inputs and report in-range statistics."""

from __future__ import annotations

import argparse
import uuid
from datetime import datetime

from formula_kit.config import load_settings
from formula_kit.harness import DEFAULT_FORMULAS, load_formulas, run_suite
from formula_kit.reports import format_formula_report, format_suite_summary, write_report_bundle
from formula_kit.utils.logging_utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the formula evaluation harness.")
    parser.add_argument(
        "--formulas",
        default="",
        help="Text file with one formula per line (defaults to the built-in catalogue).",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file.")
    parser.add_argument("--alpha", type=float, default=None, help="Blending constant in [0, 1].")
    parser.add_argument(
        "--inputs",
        type=float,
        nargs="+",
        default=None,
        help="Sample x values (defaults to harness.sample_inputs).",
    )
    parser.add_argument(
        "--reduction",
        choices=("precedence", "naive"),
        default=None,
        help="Operator reduction strategy.",
    )
    parser.add_argument("--output-dir", default=None, help="Write a report bundle under this directory.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...).")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_settings(args.config)

    if args.alpha is not None:
        if not 0.0 <= args.alpha <= 1.0:
            print(f"[ERROR] --alpha must be within [0, 1], got {args.alpha}")
            return 2
        config.alpha = float(args.alpha)
    if args.inputs:
        config.sample_inputs = [float(value) for value in args.inputs]
    if args.reduction:
        config.reduction = args.reduction
    if args.log_level:
        config.log_level = str(args.log_level).upper()
    if args.json_logs:
        config.log_json = True
    if args.output_dir:
        config.output_dir = args.output_dir

    setup_logging(config.log_level, json_format=config.log_json)

    if args.formulas:
        try:
            formulas = load_formulas(args.formulas)
        except FileNotFoundError as exc:
            print(f"[ERROR] {exc}")
            return 1
    else:
        formulas = list(DEFAULT_FORMULAS)
    if not formulas:
        print("[ERROR] No formulas to evaluate.")
        return 1

    suite = run_suite(
        formulas,
        config.sample_inputs,
        alpha=config.alpha,
        reduction=config.reduction,
        range_low=config.range_low,
        range_high=config.range_high,
    )
    for report in suite.reports:
        print(format_formula_report(report))
    print(format_suite_summary(suite))

    if config.output_dir:
        run_id = f"{datetime.now().strftime('%Y%m%dT%H%M%S')}_{uuid.uuid4().hex[:8]}"
        report_dir = write_report_bundle(
            run_id=run_id,
            output_root=config.output_dir,
            resolved_config=config.to_dict(),
            suite=suite,
        )
        print(f"Saved: {report_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
