from __future__ import annotations

"""Learning report: rollups over session history (most recent first)."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Literal, Optional

import numpy as np

from mathtrainer.arithmetic import Operation
from mathtrainer.results.schema import Session

from .config import AnalyticsConfig
from .prepare import sessions_frame

Trend = Literal["improving", "stable", "declining"]


@dataclass(frozen=True)
class LearningReport:
    total_practice_seconds: float
    most_practiced_operation: Operation
    improvement_trend: Trend
    streak_days: int


def total_practice_seconds(sessions: List[Session]) -> float:
    """Sum of end - start; sessions with no end time add nothing."""
    if not sessions:
        return 0.0
    return float(sessions_frame(sessions)["duration_s"].sum())


def most_practiced_operation(sessions: List[Session]) -> Operation:
    """Mode of each session's primary operation; ties go to the first seen."""
    counts: Dict[Operation, int] = {}
    for s in sessions:
        counts[s.operation_type] = counts.get(s.operation_type, 0) + 1
    if not counts:
        return Operation.ADDITION
    # max() keeps the first key among equal counts
    return max(counts, key=lambda op: counts[op])


def _window_mean(values: List[float]) -> float:
    return float(np.mean(values)) if values else 0.0


def improvement_trend(sessions: List[Session], config: Optional[AnalyticsConfig] = None) -> Trend:
    """Compare mean accuracy of the latest window with the one before it.

    A missing window counts as 0 accuracy.
    """
    cfg = config or AnalyticsConfig()
    w = cfg.trend_window
    acc = [float(s.accuracy) for s in sessions]
    recent = _window_mean(acc[:w])
    older = _window_mean(acc[w : 2 * w])
    if recent > older + cfg.trend_threshold:
        return "improving"
    if recent < older - cfg.trend_threshold:
        return "declining"
    return "stable"


def streak_days(sessions: List[Session], today: Optional[date] = None) -> int:
    """Consecutive calendar days ending today with at least one session start."""
    days = {s.start_time.date() for s in sessions}
    day = today or date.today()
    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def build_report(
    sessions: List[Session],
    *,
    config: Optional[AnalyticsConfig] = None,
    today: Optional[date] = None,
) -> LearningReport:
    return LearningReport(
        total_practice_seconds=total_practice_seconds(sessions),
        most_practiced_operation=most_practiced_operation(sessions),
        improvement_trend=improvement_trend(sessions, config),
        streak_days=streak_days(sessions, today),
    )


def format_report(report: LearningReport) -> str:
    minutes, seconds = divmod(int(round(report.total_practice_seconds)), 60)
    return "\n".join(
        [
            f"Practice time: {minutes}m {seconds:02d}s",
            f"Most practiced: {report.most_practiced_operation.value}",
            f"Trend: {report.improvement_trend}",
            f"Streak: {report.streak_days} day(s)",
        ]
    )
