from __future__ import annotations

"""Session scoring and human-readable summaries."""

from collections import OrderedDict
from typing import Dict, List

from ..arithmetic import describe_operation
from ..results.schema import AnswerRecord, Session

TIME_WEIGHT = 0.3
ACCURACY_WEIGHT = 0.7

_GRADES = [(90, "A+"), (80, "A"), (70, "B+"), (60, "B")]


def score_answers(answers: List[AnswerRecord]) -> Dict[str, float]:
    """Accuracy (percent), mean seconds per answer and composite score.

    score = 0.7 * accuracy + 0.3 * max(0, 100 - 2 * avg_seconds)
    """
    total = len(answers)
    if total == 0:
        return {"accuracy": 0, "average_time_seconds": 0, "score": 0}
    correct = sum(1 for a in answers if a.is_correct)
    accuracy = round(correct / total * 100)
    avg_seconds = round(sum(a.elapsed_millis for a in answers) / total / 1000)
    time_bonus = max(0, 100 - avg_seconds * 2)
    score = round(accuracy * ACCURACY_WEIGHT + time_bonus * TIME_WEIGHT)
    return {"accuracy": accuracy, "average_time_seconds": avg_seconds, "score": score}


def letter_grade(score: float) -> str:
    for floor, grade in _GRADES:
        if score >= floor:
            return grade
    return "C"


def per_operation(session: Session) -> Dict[str, Dict[str, int]]:
    """Asked/correct counts per operation, in first-seen order."""
    by_id = {p.id: p for p in session.problems}
    out: Dict[str, Dict[str, int]] = OrderedDict()
    for a in session.answers:
        p = by_id.get(a.problem_id)
        if p is None:
            continue
        bucket = out.setdefault(p.operation.value, {"asked": 0, "correct": 0})
        bucket["asked"] += 1
        bucket["correct"] += 1 if a.is_correct else 0
    return out


def format_summary(session: Session) -> str:
    """Return a human-readable summary of a finished session."""
    lines = [
        f"Total: {session.correct_count}/{len(session.problems)} correct",
        f"Accuracy: {session.accuracy:.0f}%  Avg time: {session.average_time_seconds:.0f}s",
        f"Score: {session.score} ({letter_grade(session.score)})",
    ]
    for op, bucket in per_operation(session).items():
        lines.append(f"{describe_operation(op)}: {bucket['correct']}/{bucket['asked']}")
    return "\n".join(lines)
