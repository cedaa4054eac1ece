from __future__ import annotations

"""Turn session history into pandas frames, and export them."""

from pathlib import Path
from typing import List

import pandas as pd

from mathtrainer.results.schema import Session

SESSION_COLUMNS = [
    "session_id",
    "start_time",
    "end_time",
    "duration_s",
    "difficulty",
    "operation",
    "problems",
    "correct",
    "accuracy",
    "score",
    "avg_time_s",
]


def sessions_frame(sessions: List[Session]) -> pd.DataFrame:
    """One row per session, in the order given (most recent first).

    Adds a chronological ``session_idx`` (0 = oldest) for plotting and
    smoothing. Sessions without an end time get NaT and a zero duration.
    """
    if not sessions:
        df = pd.DataFrame({c: pd.Series(dtype="object") for c in SESSION_COLUMNS})
        df["session_idx"] = pd.Series(dtype="int64")
        return df
    rows = [
        {
            "session_id": s.id,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "difficulty": int(s.difficulty),
            "operation": s.operation_type.value,
            "problems": len(s.problems),
            "correct": s.correct_count,
            "accuracy": float(s.accuracy),
            "score": int(s.score),
            "avg_time_s": float(s.average_time_seconds),
        }
        for s in sessions
    ]
    df = pd.DataFrame(rows)
    df["start_time"] = pd.to_datetime(df["start_time"])
    df["end_time"] = pd.to_datetime(df["end_time"])
    df["duration_s"] = (df["end_time"] - df["start_time"]).dt.total_seconds().fillna(0.0)
    df["session_idx"] = range(len(df) - 1, -1, -1)
    return df[SESSION_COLUMNS + ["session_idx"]]


def problems_frame(sessions: List[Session]) -> pd.DataFrame:
    """One row per answered problem across all sessions."""
    rows = []
    for s in sessions:
        by_id = {p.id: p for p in s.problems}
        for a in s.answers:
            p = by_id.get(a.problem_id)
            if p is None:
                continue
            rows.append(
                {
                    "session_id": s.id,
                    "operation": p.operation.value,
                    "difficulty": int(p.difficulty),
                    "correct": bool(a.is_correct),
                    "elapsed_ms": int(a.elapsed_millis),
                }
            )
    return pd.DataFrame(rows, columns=["session_id", "operation", "difficulty", "correct", "elapsed_ms"])


def export_parquet(df: pd.DataFrame, out_path: Path) -> None:
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, engine="pyarrow", compression="zstd", index=False)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")
