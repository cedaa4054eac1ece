from __future__ import annotations

"""Progress model: folds one completed session into the learner's record."""

from datetime import datetime
from typing import TYPE_CHECKING, Dict, Optional

from ..app.explain import trace as xtrace
from ..policy.recommendation import recommend_difficulty, recommend_operations
from ..results.schema import STRENGTH_MAX, STRENGTH_MIN, ProgressRecord, Session

if TYPE_CHECKING:  # pragma: no cover
    from ..storage.repository import LearnerRepository

CORRECT_STEP = 5.0
INCORRECT_STEP = 2.0
RECENT_CAPACITY = 10
DEFAULT_SMOOTHING = 0.5


def clamp_strength(value: float) -> float:
    return max(STRENGTH_MIN, min(STRENGTH_MAX, value))


def step_strength(current: float, correct: bool) -> float:
    """+5 when correct, -2 otherwise, always kept within [0, 100]."""
    return clamp_strength(current + (CORRECT_STEP if correct else -INCORRECT_STEP))


def smooth(old: float, new: float, factor: float = DEFAULT_SMOOTHING) -> float:
    """Exponential moving average step. factor=0.5 is the equal-weight blend."""
    if not 0.0 < factor <= 1.0:
        raise ValueError(f"smoothing factor must be in (0, 1], got {factor}")
    return old + factor * (new - old)


def apply_session(
    progress: ProgressRecord,
    session: Session,
    *,
    smoothing_factor: float = DEFAULT_SMOOTHING,
    now: Optional[datetime] = None,
) -> ProgressRecord:
    """Mutate ``progress`` with the outcome of ``session`` and return it."""
    problems_by_id = {p.id: p for p in session.problems}
    correct = session.correct_count

    progress.total_sessions += 1
    progress.total_problems += len(session.problems)
    progress.total_correct += correct
    if progress.total_problems > 0:
        progress.overall_accuracy = progress.total_correct / progress.total_problems * 100.0
    else:
        progress.overall_accuracy = 0.0

    for answer in session.answers:
        problem = problems_by_id.get(answer.problem_id)
        if problem is None:
            continue
        op = problem.operation
        progress.strength_by_operation[op] = step_strength(
            progress.strength_by_operation.get(op, 0.0), answer.is_correct
        )
        seconds = answer.elapsed_millis / 1000.0
        prior = progress.avg_time_by_operation.get(op, 0.0)
        progress.avg_time_by_operation[op] = seconds if not prior else smooth(prior, seconds, smoothing_factor)

    tier = session.difficulty
    progress.strength_by_difficulty[tier] = clamp_strength(
        smooth(progress.strength_by_difficulty.get(tier, 0.0), session.accuracy, smoothing_factor)
    )

    progress.recommended_difficulty = recommend_difficulty(progress)
    progress.recommended_operations = recommend_operations(progress)
    progress.recent_sessions = [session, *progress.recent_sessions][:RECENT_CAPACITY]
    progress.last_active_date = now or datetime.now()

    xtrace(
        "progress_updated",
        {
            "session": session.id,
            "accuracy": session.accuracy,
            "recommended_difficulty": int(progress.recommended_difficulty),
            "recommended_operations": [op.value for op in progress.recommended_operations],
        },
    )
    return progress


class ProgressModel:
    """Loads, updates and saves one learner's progress through a repository."""

    def __init__(
        self,
        repository: "LearnerRepository",
        learner_id: str,
        smoothing_factor: float = DEFAULT_SMOOTHING,
    ) -> None:
        self.repository = repository
        self.learner_id = learner_id
        self.smoothing_factor = smoothing_factor

    def current(self) -> Optional[ProgressRecord]:
        return self.repository.load_progress(self.learner_id)

    def record_session(self, session: Session, now: Optional[datetime] = None) -> ProgressRecord:
        # lazily created on the first completed session; last write wins
        progress = self.current() or ProgressRecord()
        apply_session(progress, session, smoothing_factor=self.smoothing_factor, now=now)
        self.repository.save_progress(self.learner_id, progress)
        return progress

    def strengths(self) -> Dict[str, float]:
        progress = self.current()
        if progress is None:
            return {}
        return {op.value: v for op, v in progress.strength_by_operation.items()}
