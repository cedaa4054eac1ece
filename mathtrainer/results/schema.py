from __future__ import annotations

"""Pydantic models for problems, answers, sessions and learner progress.

Everything that is persisted goes through these models, so a record that
fails validation on load is treated as missing by the storage layer.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..arithmetic import Difficulty, Operation, apply_operation

STRENGTH_MIN = 0.0
STRENGTH_MAX = 100.0


class Problem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    operation: Operation
    difficulty: Difficulty
    operand1: int
    operand2: int
    operator_symbol: str
    correct_answer: int
    created_at: datetime

    @model_validator(mode="after")
    def _answer_matches_operands(self) -> "Problem":
        if self.operation is Operation.SUBTRACTION and self.operand1 < self.operand2:
            raise ValueError("subtraction requires operand1 >= operand2")
        if self.operation is Operation.DIVISION and self.operand2 * self.correct_answer != self.operand1:
            raise ValueError("division must be exact")
        if self.operation is not Operation.DIVISION:
            if apply_operation(self.operation, self.operand1, self.operand2) != self.correct_answer:
                raise ValueError("correct_answer does not match operands")
        return self

    def prompt(self) -> str:
        return f"{self.operand1} {self.operator_symbol} {self.operand2} = "


class AnswerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    problem_id: str
    submitted_value: Optional[float] = None
    correct_answer: int
    is_correct: bool
    elapsed_millis: int = Field(ge=0)
    submitted_at: datetime


class Session(BaseModel):
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    difficulty: Difficulty
    operations: List[Operation] = Field(min_length=1)
    problems: List[Problem] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)
    score: int = 0
    accuracy: float = Field(0.0, ge=0, le=100)
    average_time_seconds: float = 0.0

    @property
    def operation_type(self) -> Operation:
        """Primary operation of the session, used for practice rollups."""
        return self.operations[0]

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)


def _zero_by_operation() -> Dict[Operation, float]:
    return {op: 0.0 for op in Operation}


def _zero_by_difficulty() -> Dict[Difficulty, float]:
    return {d: 0.0 for d in Difficulty}


class ProgressRecord(BaseModel):
    total_sessions: int = 0
    total_problems: int = 0
    total_correct: int = 0
    overall_accuracy: float = 0.0
    strength_by_operation: Dict[Operation, float] = Field(default_factory=_zero_by_operation)
    strength_by_difficulty: Dict[Difficulty, float] = Field(default_factory=_zero_by_difficulty)
    avg_time_by_operation: Dict[Operation, float] = Field(default_factory=_zero_by_operation)
    recent_sessions: List[Session] = Field(default_factory=list, max_length=10)
    recommended_difficulty: Difficulty = Difficulty.BEGINNER
    recommended_operations: List[Operation] = Field(default_factory=lambda: [Operation.ADDITION])
    last_active_date: datetime = Field(default_factory=datetime.now)

    @field_validator("strength_by_difficulty", mode="before")
    @classmethod
    def _difficulty_keys(cls, v: Any) -> Any:
        # JSON object keys arrive as strings ("1".."5")
        if isinstance(v, dict):
            return {Difficulty(int(k)): val for k, val in v.items()}
        return v

    @field_validator("strength_by_operation", "strength_by_difficulty")
    @classmethod
    def _strengths_in_range(cls, v: Dict[Any, float]) -> Dict[Any, float]:
        for key, strength in v.items():
            if not STRENGTH_MIN <= strength <= STRENGTH_MAX:
                raise ValueError(f"strength for {key} must be within [0, 100], got {strength}")
        return v

    @model_validator(mode="after")
    def _fill_missing(self) -> "ProgressRecord":
        for op in Operation:
            self.strength_by_operation.setdefault(op, 0.0)
            self.avg_time_by_operation.setdefault(op, 0.0)
        for d in Difficulty:
            self.strength_by_difficulty.setdefault(d, 0.0)
        return self


class UserSettings(BaseModel):
    name: str = "Learner"
    grade: int = Field(1, ge=1, le=12)
    questions_per_session: int = Field(10, ge=1)
    time_limit_seconds: int = Field(60, ge=0)
    enable_sound: bool = True
    enable_animation: bool = True
    theme: Literal["light", "dark", "colorful"] = "colorful"


class Recommendation(BaseModel):
    type: Literal["practice", "review", "challenge"]
    operation: Operation
    difficulty: Difficulty
    reason: str
    priority: int = Field(ge=1, le=5)


class Assessment(BaseModel):
    date: datetime
    overall_score: int = Field(ge=0, le=100)
    strengths: List[Operation] = Field(default_factory=list)
    weaknesses: List[Operation] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    progress_trend: Literal["improving", "stable", "declining"] = "stable"
