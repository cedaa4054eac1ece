from __future__ import annotations

"""Configuration loading and validation for mathtrainer.

This module loads YAML configuration, applies defaults, and validates that
enumerations and numeric settings are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..arithmetic import Difficulty, Operation

ALLOWED_OPERATIONS = {op.value for op in Operation}
ALLOWED_PRESETS = {"elementary", "intermediate", "advanced"}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or package defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown enum values print a warning and fall back to a default.
    """
    cfg.setdefault("learner", {})
    cfg.setdefault("storage", {})
    cfg.setdefault("practice", {})
    cfg.setdefault("progress", {})
    cfg.setdefault("report", {})
    cfg.setdefault("worksheet", {})

    learner = cfg["learner"]
    storage = cfg["storage"]
    practice = cfg["practice"]
    progress = cfg["progress"]
    report = cfg["report"]
    worksheet = cfg["worksheet"]

    learner.setdefault("id", "default")
    storage.setdefault("data_dir", "./mathtrainer_data")

    practice.setdefault("difficulty", 1)
    practice.setdefault("operations", ["addition", "subtraction"])
    practice.setdefault("questions", None)
    practice.setdefault("follow_recommendations", True)

    progress.setdefault("smoothing_factor", 0.5)

    report.setdefault("trend_window", 5)
    report.setdefault("trend_threshold", 5.0)
    report.setdefault("smoothing_span", 5)

    worksheet.setdefault("preset", "elementary")
    worksheet.setdefault("output_dir", "./worksheets")

    # Enum validations
    try:
        practice["difficulty"] = int(Difficulty(int(practice["difficulty"])))
    except (TypeError, ValueError):
        print(f"WARNING: Unsupported difficulty '{practice['difficulty']}', using 1.")
        practice["difficulty"] = 1

    ops = [str(op).lower() for op in (practice.get("operations") or [])]
    bad = [op for op in ops if op not in ALLOWED_OPERATIONS]
    if bad:
        print(f"WARNING: Unsupported operations {bad}, ignoring them.")
    ops = [op for op in ops if op in ALLOWED_OPERATIONS]
    if not ops:
        print("WARNING: No usable operations configured, using addition.")
        ops = ["addition"]
    practice["operations"] = ops

    q = practice.get("questions")
    if q is not None:
        try:
            q = int(q)
        except (TypeError, ValueError):
            q = 0
        if q < 1:
            print(f"WARNING: Invalid questions '{practice['questions']}', using learner settings.")
            q = None
        practice["questions"] = q

    try:
        factor = float(progress["smoothing_factor"])
    except (TypeError, ValueError):
        factor = -1.0
    if not 0.0 < factor <= 1.0:
        print(f"WARNING: smoothing_factor must be in (0, 1], got '{progress['smoothing_factor']}', using 0.5.")
        factor = 0.5
    progress["smoothing_factor"] = factor

    for name, cast, default, low in (
        ("trend_window", int, 5, 1),
        ("trend_threshold", float, 5.0, 0),
        ("smoothing_span", int, 5, 2),
    ):
        try:
            value = cast(report[name])
        except (TypeError, ValueError):
            value = None
        if value is None or not value >= low:
            print(f"WARNING: report.{name} must be >= {low}, got '{report[name]}', using {default}.")
            value = default
        report[name] = value

    preset = worksheet.get("preset")
    if preset not in ALLOWED_PRESETS:
        print(f"WARNING: Unsupported worksheet preset '{preset}', using 'elementary'.")
        worksheet["preset"] = "elementary"

    return cfg
