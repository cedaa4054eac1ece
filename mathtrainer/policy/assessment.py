from __future__ import annotations

"""Assessment: strengths, weaknesses and prioritized next steps."""

from datetime import datetime
from typing import List, Optional

from analytics.config import AnalyticsConfig
from analytics.report import improvement_trend

from ..arithmetic import Difficulty, Operation
from ..results.schema import Assessment, ProgressRecord, Recommendation, Session

STRONG_AT = 80.0
WEAK_BELOW = 60.0
REVIEW_BELOW = 30.0


def _recommendations(progress: ProgressRecord, strengths: List[Operation], weaknesses: List[Operation]) -> List[Recommendation]:
    tier = Difficulty(progress.recommended_difficulty)
    recs: List[Recommendation] = []
    for op in weaknesses:
        strength = progress.strength_by_operation[op]
        if strength < REVIEW_BELOW:
            recs.append(
                Recommendation(
                    type="review",
                    operation=op,
                    difficulty=tier.demoted(),
                    reason=f"{op.value} strength is {strength:.0f}; rebuild it one tier down",
                    priority=5,
                )
            )
        else:
            recs.append(
                Recommendation(
                    type="practice",
                    operation=op,
                    difficulty=tier,
                    reason=f"{op.value} strength is {strength:.0f}; keep practicing at this tier",
                    priority=4,
                )
            )
    for op in strengths:
        recs.append(
            Recommendation(
                type="challenge",
                operation=op,
                difficulty=tier.promoted(),
                reason=f"{op.value} strength is {progress.strength_by_operation[op]:.0f}; try a harder tier",
                priority=2,
            )
        )
    recs.sort(key=lambda r: r.priority, reverse=True)
    return recs


def build_assessment(
    progress: ProgressRecord,
    sessions: List[Session],
    *,
    config: Optional[AnalyticsConfig] = None,
    now: Optional[datetime] = None,
) -> Assessment:
    strengths_by_op = progress.strength_by_operation
    values = [strengths_by_op.get(op, 0.0) for op in Operation]
    overall = round(sum(values) / len(values))
    strengths = [op for op in Operation if strengths_by_op.get(op, 0.0) >= STRONG_AT]
    weaknesses = [op for op in Operation if strengths_by_op.get(op, 0.0) < WEAK_BELOW]
    return Assessment(
        date=now or datetime.now(),
        overall_score=max(0, min(100, overall)),
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=_recommendations(progress, strengths, weaknesses),
        progress_trend=improvement_trend(sessions, config or AnalyticsConfig()),
    )
