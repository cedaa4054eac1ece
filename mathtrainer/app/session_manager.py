from __future__ import annotations

"""Session Manager: orchestrates generation, the drill loop and persistence.

A completed session is handed, as the same object, to the progress model and
to the session history so aggregate and per-operation statistics agree.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..arithmetic import Difficulty, Operation
from ..drills.generator import ProblemGenerator, coerce_difficulty, coerce_operation
from ..drills.practice_drill import DrillResult, PracticeDrill
from ..progress.model import DEFAULT_SMOOTHING, ProgressModel
from ..results.schema import Problem, ProgressRecord, Session
from ..stats.stats import score_answers
from ..storage.repository import LearnerRepository
from ..util.randomness import new_id
from .explain import trace as xtrace


@dataclass(frozen=True)
class SessionContext:
    learner_id: str
    started_at: datetime
    difficulty: Difficulty
    operations: List[Operation]
    questions: int


class SessionManager:
    def __init__(
        self,
        cfg: Dict[str, Any],
        repository: LearnerRepository,
        generator: Optional[ProblemGenerator] = None,
        *,
        learner_id: Optional[str] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.cfg = cfg
        self.repository = repository
        self.generator = generator or ProblemGenerator()
        self.learner_id = learner_id or cfg.get("learner", {}).get("id", "default")
        self.now = now
        smoothing = float(cfg.get("progress", {}).get("smoothing_factor", DEFAULT_SMOOTHING))
        self.progress = ProgressModel(repository, self.learner_id, smoothing_factor=smoothing)
        self.ctx: Optional[SessionContext] = None
        self.problems: List[Problem] = []

    def _resolve(
        self,
        difficulty: Optional[int],
        operations: Optional[Sequence[str]],
        questions: Optional[int],
    ) -> SessionContext:
        # explicit args → stored recommendation → config defaults
        practice = self.cfg.get("practice", {})
        progress: Optional[ProgressRecord] = self.progress.current()
        use_recs = bool(practice.get("follow_recommendations", True)) and progress is not None

        if difficulty is None:
            difficulty = int(progress.recommended_difficulty) if use_recs else int(practice.get("difficulty", 1))
        if not operations:
            if use_recs:
                operations = [op.value for op in progress.recommended_operations]
            else:
                operations = list(practice.get("operations", ["addition", "subtraction"]))
        if questions is None:
            settings = self.repository.settings_or_default(self.learner_id)
            questions = int(practice.get("questions") or settings.questions_per_session)

        return SessionContext(
            learner_id=self.learner_id,
            started_at=self.now(),
            difficulty=coerce_difficulty(difficulty),
            operations=[coerce_operation(op) for op in operations],
            questions=int(questions),
        )

    def start_session(
        self,
        difficulty: Optional[int] = None,
        operations: Optional[Sequence[str]] = None,
        questions: Optional[int] = None,
    ) -> List[Problem]:
        ctx = self._resolve(difficulty, operations, questions)
        if len(ctx.operations) == 1:
            self.problems = self.generator.generate(ctx.operations[0], ctx.difficulty, ctx.questions)
        else:
            self.problems = self.generator.generate_mixed(ctx.difficulty, ctx.questions, ctx.operations)
        self.ctx = ctx
        xtrace(
            "session_started",
            {"learner": ctx.learner_id, "difficulty": int(ctx.difficulty), "operations": [o.value for o in ctx.operations]},
        )
        return self.problems

    def build_session(self, result: DrillResult) -> Session:
        assert self.ctx is not None
        # only answered problems belong to the session
        answered = {a.problem_id for a in result.answers}
        problems = [p for p in self.problems if p.id in answered]
        scores = score_answers(result.answers)
        return Session(
            id=new_id(self.generator.rng, "s"),
            start_time=result.started_at,
            end_time=result.ended_at,
            difficulty=self.ctx.difficulty,
            operations=self.ctx.operations,
            problems=problems,
            answers=result.answers,
            score=int(scores["score"]),
            accuracy=float(scores["accuracy"]),
            average_time_seconds=float(scores["average_time_seconds"]),
        )

    def complete(self, session: Session) -> ProgressRecord:
        """Fold the session into progress and history; both receive the same object."""
        progress = self.progress.record_session(session, now=self.now())
        self.repository.append_session(self.learner_id, session)
        xtrace("session_completed", {"session": session.id, "score": session.score, "accuracy": session.accuracy})
        return progress

    def run(self, ui: Dict[str, Callable[..., Any]]) -> Optional[Session]:
        """Drive the drill and persist the outcome. Returns None if nothing was answered."""
        assert self.ctx is not None, "start_session() first"
        drill = PracticeDrill(self.problems, now=self.now)
        result = drill.run(ui)
        if not result.answers:
            xtrace("session_discarded", {"reason": "no answers"})
            return None
        session = self.build_session(result)
        self.complete(session)
        return session
