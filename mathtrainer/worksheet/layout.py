from __future__ import annotations

"""Worksheet layout configuration and curated presets.

Presets help users print a sensible sheet quickly without many flags.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..arithmetic import Difficulty, Operation


class LayoutConfig(BaseModel):
    title: str = "Math Practice"
    student_name: Optional[str] = None
    class_name: Optional[str] = None
    date: Optional[str] = None
    difficulty: Difficulty = Difficulty.BEGINNER
    operations: List[Operation] = Field(default_factory=lambda: [Operation.ADDITION, Operation.SUBTRACTION], min_length=1)
    problem_count: int = Field(20, ge=1)
    problems_per_row: Literal[1, 2, 3] = 2
    font_size: int = Field(14, ge=6, le=36)
    margin_mm: float = Field(20.0, ge=5, le=60)
    show_answers: bool = False
    include_answer_sheet: bool = True


WORKSHEET_PRESETS: Dict[str, Dict[str, Any]] = {
    "elementary": {
        "title": "Elementary Math Practice",
        "difficulty": Difficulty.BEGINNER,
        "operations": [Operation.ADDITION, Operation.SUBTRACTION],
        "problem_count": 20,
        "problems_per_row": 2,
        "font_size": 14,
    },
    "intermediate": {
        "title": "Math Practice (Intermediate)",
        "difficulty": Difficulty.INTERMEDIATE,
        "operations": [Operation.ADDITION, Operation.SUBTRACTION, Operation.MULTIPLICATION],
        "problem_count": 25,
        "problems_per_row": 2,
        "font_size": 13,
    },
    "advanced": {
        "title": "Math Practice (Advanced)",
        "difficulty": Difficulty.ADVANCED,
        "operations": list(Operation),
        "problem_count": 30,
        "problems_per_row": 3,
        "font_size": 12,
    },
}


def preset_layout(name: str, **overrides: Any) -> LayoutConfig:
    """Preset values, then any non-None overrides."""
    if name not in WORKSHEET_PRESETS:
        raise KeyError(f"Unknown worksheet preset: {name}")
    params = {**WORKSHEET_PRESETS[name], **{k: v for k, v in overrides.items() if v is not None}}
    return LayoutConfig(**params)
