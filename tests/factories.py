from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from mathtrainer.arithmetic import OPERATOR_SYMBOLS, Difficulty, Operation, apply_operation
from mathtrainer.results.schema import AnswerRecord, Problem, Session

T0 = datetime(2024, 3, 10, 9, 0, 0)


class ScriptedRandom(random.Random):
    """Random whose randint() replays a script; other draws stay seeded."""

    def __init__(self, script: Iterable[int], seed: int = 0) -> None:
        super().__init__(seed)
        self.script = list(script)
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.script.pop(0)
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value


_counter = {"n": 0}


def make_problem(op: Operation, a: int, b: int, difficulty: Difficulty = Difficulty.BEGINNER) -> Problem:
    _counter["n"] += 1
    return Problem(
        id=f"p-{_counter['n']}",
        operation=op,
        difficulty=difficulty,
        operand1=a,
        operand2=b,
        operator_symbol=OPERATOR_SYMBOLS[op],
        correct_answer=apply_operation(op, a, b),
        created_at=T0,
    )


def make_session(
    outcomes: Sequence[bool] = (True,),
    *,
    op: Operation = Operation.ADDITION,
    operations: Optional[List[Operation]] = None,
    difficulty: Difficulty = Difficulty.BEGINNER,
    start: datetime = T0,
    minutes: Optional[float] = 5,
    accuracy: Optional[float] = None,
    elapsed_ms: int = 3000,
) -> Session:
    problems = [make_problem(op, 3, 2, difficulty) for _ in outcomes]
    answers = [
        AnswerRecord(
            problem_id=p.id,
            submitted_value=float(p.correct_answer if ok else p.correct_answer + 1),
            correct_answer=p.correct_answer,
            is_correct=ok,
            elapsed_millis=elapsed_ms,
            submitted_at=start,
        )
        for p, ok in zip(problems, outcomes)
    ]
    if accuracy is None:
        accuracy = round(sum(outcomes) / len(outcomes) * 100) if outcomes else 0
    _counter["n"] += 1
    return Session(
        id=f"s-{_counter['n']}",
        start_time=start,
        end_time=start + timedelta(minutes=minutes) if minutes is not None else None,
        difficulty=difficulty,
        operations=operations or [op],
        problems=problems,
        answers=answers,
        score=int(accuracy),
        accuracy=float(accuracy),
        average_time_seconds=elapsed_ms / 1000,
    )
