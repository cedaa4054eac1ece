from .schema import (
    AnswerRecord,
    Assessment,
    Problem,
    ProgressRecord,
    Recommendation,
    Session,
    UserSettings,
)

__all__ = [
    "AnswerRecord",
    "Assessment",
    "Problem",
    "ProgressRecord",
    "Recommendation",
    "Session",
    "UserSettings",
]
