from __future__ import annotations

"""The four arithmetic operations and their symbols."""

from enum import Enum
from typing import Dict


class Operation(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"


OPERATOR_SYMBOLS: Dict[Operation, str] = {
    Operation.ADDITION: "+",
    Operation.SUBTRACTION: "-",
    Operation.MULTIPLICATION: "×",
    Operation.DIVISION: "÷",
}

_DESCRIPTIONS: Dict[Operation, str] = {
    Operation.ADDITION: "Addition",
    Operation.SUBTRACTION: "Subtraction",
    Operation.MULTIPLICATION: "Multiplication",
    Operation.DIVISION: "Division",
}


def apply_operation(op: Operation, a: int, b: int) -> int:
    """Exact integer result of ``a op b``. Division must be exact."""
    if op is Operation.ADDITION:
        return a + b
    if op is Operation.SUBTRACTION:
        return a - b
    if op is Operation.MULTIPLICATION:
        return a * b
    if op is Operation.DIVISION:
        q, r = divmod(a, b)
        if r:
            raise ValueError(f"{a} is not divisible by {b}")
        return q
    raise ValueError(f"Unknown operation: {op}")


def describe_operation(op: Operation) -> str:
    return _DESCRIPTIONS[Operation(op)]
