from __future__ import annotations

"""Practice drill: asks generated problems through UI callbacks and grades them."""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..app.explain import trace as xtrace
from ..results.schema import AnswerRecord, Problem


@dataclass
class DrillResult:
    """Answers in problem order plus the wall-clock span of the run."""

    answers: List[AnswerRecord]
    started_at: datetime
    ended_at: datetime

    @property
    def correct(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)


def parse_answer(text: str) -> Optional[float]:
    try:
        return float(text.strip())
    except ValueError:
        return None


def grade(submitted: Optional[float], correct_answer: int) -> bool:
    return submitted is not None and submitted == correct_answer


class PracticeDrill:
    """Runs one pass over a fixed problem list.

    ``ui_callbacks`` needs ``ask(prompt) -> str`` and ``inform(msg)``; typing
    ``q`` at a prompt ends the run early.
    """

    def __init__(
        self,
        problems: List[Problem],
        *,
        timer: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.problems = list(problems)
        self.timer = timer
        self.now = now

    def answer(self, problem: Problem, text: str, elapsed_millis: int) -> AnswerRecord:
        submitted = parse_answer(text)
        return AnswerRecord(
            problem_id=problem.id,
            submitted_value=submitted,
            correct_answer=problem.correct_answer,
            is_correct=grade(submitted, problem.correct_answer),
            elapsed_millis=max(0, int(elapsed_millis)),
            submitted_at=self.now(),
        )

    def run(self, ui_callbacks: Dict[str, Callable]) -> DrillResult:
        ask = ui_callbacks["ask"]
        inform = ui_callbacks["inform"]

        started_at = self.now()
        answers: List[AnswerRecord] = []
        total = len(self.problems)

        for i, problem in enumerate(self.problems, start=1):
            t0 = self.timer()
            text = ask(f"Q{i}/{total}: {problem.prompt()}")
            if text.strip().lower() == "q":
                break
            record = self.answer(problem, text, round((self.timer() - t0) * 1000))
            answers.append(record)
            xtrace("graded", {"index": i, "answer": text, "truth": problem.correct_answer, "correct": record.is_correct})
            if record.is_correct:
                inform("Correct!\n")
            else:
                inform(f"Incorrect. Answer was {problem.correct_answer}.\n")

        return DrillResult(
            answers=answers,
            started_at=started_at,
            ended_at=self.now(),
        )
