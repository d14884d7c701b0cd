"""YAML + environment configuration for formula evaluation runs."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .evaluator import REDUCTION_MODES
from .formula import DEFAULT_ALPHA

DEFAULT_CONFIG_NAME = "config.yaml"
DEFAULT_SAMPLE_INPUTS = (-1.0, -0.5, 0.0, 0.5, 1.0, -0.01)

ENV_LOG_LEVEL = "FORMULA_KIT_LOG_LEVEL"
ENV_ALPHA = "FORMULA_KIT_ALPHA"
ENV_REDUCTION = "FORMULA_KIT_REDUCTION"


def _as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_float(value, default):
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load raw configuration from a YAML file.

    Without an explicit path, ``config.yaml`` is looked up at the project root
    and then in the current directory; if neither exists an empty mapping is
    returned. An explicit path that does not exist raises FileNotFoundError.
    """
    if config_path is None:
        project_root = Path(__file__).resolve().parent.parent
        for candidate in (project_root / DEFAULT_CONFIG_NAME, Path(DEFAULT_CONFIG_NAME)):
            if candidate.exists():
                path = candidate
                break
        else:
            return {}
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path.absolute()}")

    with open(path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config at {path} must be a mapping")
    return loaded


@dataclass(slots=True)
class FormulaKitConfig:
    log_level: str = "INFO"
    log_json: bool = False
    alpha: float = DEFAULT_ALPHA
    reduction: str = "precedence"
    sample_inputs: list[float] = field(default_factory=lambda: list(DEFAULT_SAMPLE_INPUTS))
    range_low: float = -1.0
    range_high: float = 1.0
    output_dir: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormulaKitConfig:
        system = data.get("system") or {}
        formula = data.get("formula") or {}
        harness = data.get("harness") or {}

        alpha = _as_float(formula.get("alpha", DEFAULT_ALPHA), DEFAULT_ALPHA)
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"formula.alpha must be within [0, 1], got {alpha}")

        reduction = str(formula.get("reduction") or "precedence").strip().lower()
        if reduction not in REDUCTION_MODES:
            raise ValueError(
                f"formula.reduction must be one of: {', '.join(REDUCTION_MODES)} (got {reduction!r})"
            )

        raw_inputs = harness.get("sample_inputs")
        if raw_inputs is None:
            sample_inputs = list(DEFAULT_SAMPLE_INPUTS)
        else:
            sample_inputs = [float(value) for value in list(raw_inputs)]
        if not sample_inputs:
            raise ValueError("harness.sample_inputs must contain at least one value")

        range_low = _as_float(harness.get("range_low", -1.0), -1.0)
        range_high = _as_float(harness.get("range_high", 1.0), 1.0)
        if range_low > range_high:
            raise ValueError("harness.range_low must not exceed harness.range_high")

        output_dir = str(harness.get("output_dir") or "").strip() or None

        return cls(
            log_level=str(system.get("log_level") or "INFO").upper(),
            log_json=_as_bool(system.get("log_json"), False),
            alpha=alpha,
            reduction=reduction,
            sample_inputs=sample_inputs,
            range_low=range_low,
            range_high=range_high,
            output_dir=output_dir,
        )

    def with_env_overrides(self, environ=None) -> FormulaKitConfig:
        env = os.environ if environ is None else environ
        data = self.to_dict()
        if env.get(ENV_LOG_LEVEL):
            data["system"]["log_level"] = env[ENV_LOG_LEVEL]
        if env.get(ENV_ALPHA):
            data["formula"]["alpha"] = env[ENV_ALPHA]
        if env.get(ENV_REDUCTION):
            data["formula"]["reduction"] = env[ENV_REDUCTION]
        return FormulaKitConfig.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        raw = asdict(self)
        return {
            "system": {"log_level": raw["log_level"], "log_json": raw["log_json"]},
            "formula": {"alpha": raw["alpha"], "reduction": raw["reduction"]},
            "harness": {
                "sample_inputs": list(raw["sample_inputs"]),
                "range_low": raw["range_low"],
                "range_high": raw["range_high"],
                "output_dir": raw["output_dir"],
            },
        }


def load_settings(config_path: str | Path | None = None, *, use_env: bool = True) -> FormulaKitConfig:
    """Load ``config.yaml`` (if any), then apply ``.env``/environment overrides."""
    config = FormulaKitConfig.from_dict(load_config(config_path))
    if not use_env:
        return config
    load_dotenv()
    return config.with_env_overrides()


__all__ = [
    "DEFAULT_SAMPLE_INPUTS",
    "ENV_ALPHA",
    "ENV_LOG_LEVEL",
    "ENV_REDUCTION",
    "FormulaKitConfig",
    "load_config",
    "load_settings",
]
