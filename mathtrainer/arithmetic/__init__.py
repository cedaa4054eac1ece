from .operations import Operation, OPERATOR_SYMBOLS, apply_operation, describe_operation
from .difficulty import Difficulty, NumberRange, RANGES, describe_difficulty, number_range

__all__ = [
    "Operation",
    "OPERATOR_SYMBOLS",
    "apply_operation",
    "describe_operation",
    "Difficulty",
    "NumberRange",
    "RANGES",
    "describe_difficulty",
    "number_range",
]
