from __future__ import annotations

"""Recommendation policy: next difficulty tier and operations to reinforce."""

from typing import List

from ..arithmetic import Difficulty, Operation
from ..results.schema import ProgressRecord

PROMOTE_AT = 80.0
DEMOTE_BELOW = 60.0
FOCUS_COUNT = 2


def recommend_difficulty(progress: ProgressRecord) -> Difficulty:
    """Move at most one tier from the currently recommended one.

    Promote when its strength is >= 80, demote when < 60, else keep.
    """
    current = Difficulty(progress.recommended_difficulty)
    strength = float(progress.strength_by_difficulty.get(current, 0.0))
    if strength >= PROMOTE_AT and current < Difficulty.EXPERT:
        return current.promoted()
    if strength < DEMOTE_BELOW and current > Difficulty.BEGINNER:
        return current.demoted()
    return current


def recommend_operations(progress: ProgressRecord) -> List[Operation]:
    """The two weakest operations, weakest first; ties keep enum order."""
    ranked = sorted(
        (op for op in Operation if op in progress.strength_by_operation),
        key=lambda op: progress.strength_by_operation[op],
    )
    weakest = ranked[:FOCUS_COUNT]
    return weakest if weakest else [Operation.ADDITION]
