from __future__ import annotations

"""CLI for mathtrainer using SessionManager and the learner repository."""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from analytics import (
    AnalyticsConfig,
    build_report,
    ewma_by_session,
    export_ndjson,
    export_parquet,
    format_report,
    operation_breakdown,
    plot_accuracy_trend,
    plot_strengths,
    problems_frame,
    sessions_frame,
)

from .. import __version__
from ..arithmetic import Difficulty, Operation, describe_difficulty, describe_operation
from ..config.config import load_config, validate_config
from ..drills.generator import InvalidConfiguration, InvalidOperation, ProblemGenerator
from ..policy.assessment import build_assessment
from ..stats.stats import format_summary
from ..storage import JsonFileStore, LearnerRepository
from ..util.randomness import make_rng
from ..worksheet import LayoutConfig, build_worksheet, preset_layout, render_worksheet
from . import explain
from .session_manager import SessionManager


def _build_ui() -> Dict[str, Any]:
    def ask(prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return "q"

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _repository(cfg: Dict[str, Any]) -> LearnerRepository:
    return LearnerRepository(JsonFileStore(Path(cfg["storage"]["data_dir"])))


def _learner(cfg: Dict[str, Any], args: argparse.Namespace) -> str:
    return getattr(args, "learner", None) or cfg["learner"]["id"]


def _split_ops(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [v.strip().lower() for v in value.split(",") if v.strip()]


def _cmd_practice(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    repo = _repository(cfg)
    mgr = SessionManager(
        cfg,
        repo,
        ProblemGenerator(make_rng(args.seed)),
        learner_id=_learner(cfg, args),
    )
    try:
        problems = mgr.start_session(args.difficulty, _split_ops(args.operations), args.questions)
    except (InvalidOperation, InvalidConfiguration) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    assert mgr.ctx is not None
    ops = ", ".join(describe_operation(op) for op in mgr.ctx.operations)
    print(f"Starting {len(problems)} problems: {describe_difficulty(mgr.ctx.difficulty)} ({ops}). Type 'q' to stop.\n")
    session = mgr.run(_build_ui())
    if session is None:
        print("No answers recorded.")
        return 0
    print("\nSession Summary:")
    print(format_summary(session))
    progress = mgr.progress.current()
    if progress is not None:
        focus = ", ".join(op.value for op in progress.recommended_operations)
        print(f"\nNext: {describe_difficulty(progress.recommended_difficulty)}; focus on {focus}.")
    return 0


def _cmd_progress(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    repo = _repository(cfg)
    learner = _learner(cfg, args)
    progress = repo.load_progress(learner)
    if progress is None:
        print("No progress yet. Run 'mathtrainer practice' first.")
        return 0
    print(f"Sessions: {progress.total_sessions}  Problems: {progress.total_problems}  Accuracy: {progress.overall_accuracy:.1f}%")
    for op in Operation:
        print(
            f"{describe_operation(op):<15} strength {progress.strength_by_operation[op]:5.1f}"
            f"  avg {progress.avg_time_by_operation[op]:.1f}s"
        )
    for d in Difficulty:
        print(f"{describe_difficulty(d):<32} {progress.strength_by_difficulty[d]:5.1f}")
    print(f"Recommended: {describe_difficulty(progress.recommended_difficulty)}")
    if args.assess:
        assessment = build_assessment(progress, repo.session_history(learner), config=AnalyticsConfig(**cfg["report"]))
        repo.append_assessment(learner, assessment)
        print(f"\nAssessment score {assessment.overall_score} ({assessment.progress_trend})")
        for rec in assessment.recommendations:
            print(f"  [{rec.priority}] {rec.type}: {rec.reason}")
    return 0


def _cmd_report(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    repo = _repository(cfg)
    learner = _learner(cfg, args)
    sessions = repo.session_history(learner)
    acfg = AnalyticsConfig(**cfg["report"])
    print(format_report(build_report(sessions, config=acfg, today=date.today())))
    breakdown = operation_breakdown(problems_frame(sessions))
    if not breakdown.empty:
        print()
        print(breakdown.round(1).to_string())
    if args.out:
        outdir = Path(args.out)
        outdir.mkdir(parents=True, exist_ok=True)
        df = ewma_by_session(sessions_frame(sessions), value_col="accuracy", span=acfg.smoothing_span)
        plot_accuracy_trend(df, save_path=outdir / "accuracy_trend.png")
        progress = repo.load_progress(learner)
        if progress is not None:
            plot_strengths(
                {op.value: v for op, v in progress.strength_by_operation.items()},
                save_path=outdir / "strengths.png",
            )
        if not df.empty:
            export_parquet(df, outdir / "sessions.parquet")
        problems = problems_frame(sessions)
        if not problems.empty:
            export_ndjson(problems, outdir / "problems.ndjson")
        print(f"Reports saved to: {outdir.resolve()}")
    return 0


def _cmd_worksheet(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    try:
        layout = _worksheet_layout(cfg, args)
    except ValidationError as e:
        print(f"ERROR: invalid worksheet layout: {e.error_count()} problem(s)", file=sys.stderr)
        return 2
    problems = build_worksheet(layout, ProblemGenerator(make_rng(args.seed)))
    out = Path(args.out) if args.out else Path(cfg["worksheet"]["output_dir"]) / f"worksheet_{date.today().isoformat()}.pdf"
    out.parent.mkdir(parents=True, exist_ok=True)
    pages = render_worksheet(problems, layout, out)
    print(f"Wrote {len(problems)} problems on {pages} page(s) to {out}")
    return 0


def _worksheet_layout(cfg: Dict[str, Any], args: argparse.Namespace) -> LayoutConfig:
    return preset_layout(
        args.preset or cfg["worksheet"]["preset"],
        difficulty=args.difficulty,
        operations=_split_ops(args.operations),
        problem_count=args.count,
        problems_per_row=args.per_row,
        show_answers=True if args.show_answers else None,
        student_name=args.student,
        date=args.date,
    )


def _cmd_export(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    text = _repository(cfg).export_data(_learner(cfg, args))
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
    else:
        print(text)
    return 0


def _cmd_import(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: cannot read {args.path}: {e}", file=sys.stderr)
        return 1
    if not _repository(cfg).import_data(_learner(cfg, args), text):
        print(f"ERROR: {args.path} is not a valid export.", file=sys.stderr)
        return 1
    print("Import complete.")
    return 0


def _cmd_reset(cfg: Dict[str, Any], args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to delete data without --yes.")
        return 1
    _repository(cfg).clear_all(_learner(cfg, args))
    print("All data cleared.")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="mathtrainer")
    p.add_argument("--version", action="version", version=f"mathtrainer {__version__}")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--learner", default=None)
    p.add_argument("--explain", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    rp = sub.add_parser("practice")
    rp.add_argument("--difficulty", type=int, default=None, help="1 (beginner) .. 5 (expert)")
    rp.add_argument("--operations", default=None, help="Comma-separated, e.g. addition,division")
    rp.add_argument("--questions", type=int, default=None)
    rp.add_argument("--seed", type=int, default=None)

    pp = sub.add_parser("progress")
    pp.add_argument("--assess", action="store_true", help="Build and store an assessment")

    rep = sub.add_parser("report")
    rep.add_argument("--out", default=None, help="Directory for plots and Parquet export")

    wp = sub.add_parser("worksheet")
    wp.add_argument("--preset", default=None, choices=["elementary", "intermediate", "advanced"])
    wp.add_argument("--difficulty", type=int, default=None)
    wp.add_argument("--operations", default=None)
    wp.add_argument("--count", type=int, default=None)
    wp.add_argument("--per-row", dest="per_row", type=int, choices=[1, 2, 3], default=None)
    wp.add_argument("--show-answers", dest="show_answers", action="store_true")
    wp.add_argument("--student", default=None)
    wp.add_argument("--date", default=None)
    wp.add_argument("--seed", type=int, default=None)
    wp.add_argument("--out", default=None)

    ep = sub.add_parser("export")
    ep.add_argument("--out", default=None)

    ip = sub.add_parser("import")
    ip.add_argument("path")

    xp = sub.add_parser("reset")
    xp.add_argument("--yes", action="store_true")

    args = p.parse_args(argv)
    explain.enable(args.explain)
    cfg = validate_config(load_config(args.config))

    handlers = {
        "practice": _cmd_practice,
        "progress": _cmd_progress,
        "report": _cmd_report,
        "worksheet": _cmd_worksheet,
        "export": _cmd_export,
        "import": _cmd_import,
        "reset": _cmd_reset,
    }
    return handlers[args.cmd](cfg, args)


if __name__ == "__main__":
    raise SystemExit(main())
