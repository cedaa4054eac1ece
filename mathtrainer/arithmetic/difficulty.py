from __future__ import annotations

"""Difficulty tiers and the per-tier numeric range table."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from .operations import Operation


class Difficulty(IntEnum):
    BEGINNER = 1
    BASIC = 2
    INTERMEDIATE = 3
    ADVANCED = 4
    EXPERT = 5

    def promoted(self) -> "Difficulty":
        return Difficulty(min(int(self) + 1, int(Difficulty.EXPERT)))

    def demoted(self) -> "Difficulty":
        return Difficulty(max(int(self) - 1, int(Difficulty.BEGINNER)))


@dataclass(frozen=True)
class NumberRange:
    """Inclusive operand bounds. For division these bound the quotient."""

    min: int
    max: int


A, S, M, D = Operation.ADDITION, Operation.SUBTRACTION, Operation.MULTIPLICATION, Operation.DIVISION

RANGES: Dict[Difficulty, Dict[Operation, NumberRange]] = {
    Difficulty.BEGINNER: {A: NumberRange(1, 10), S: NumberRange(1, 10), M: NumberRange(1, 5), D: NumberRange(2, 10)},
    Difficulty.BASIC: {A: NumberRange(1, 20), S: NumberRange(1, 20), M: NumberRange(1, 10), D: NumberRange(2, 20)},
    Difficulty.INTERMEDIATE: {A: NumberRange(10, 100), S: NumberRange(10, 100), M: NumberRange(2, 12), D: NumberRange(2, 100)},
    Difficulty.ADVANCED: {A: NumberRange(100, 1000), S: NumberRange(100, 1000), M: NumberRange(10, 99), D: NumberRange(10, 1000)},
    Difficulty.EXPERT: {A: NumberRange(100, 9999), S: NumberRange(100, 9999), M: NumberRange(10, 999), D: NumberRange(10, 9999)},
}

_DESCRIPTIONS: Dict[Difficulty, str] = {
    Difficulty.BEGINNER: "Beginner - within 10",
    Difficulty.BASIC: "Basic - within 20",
    Difficulty.INTERMEDIATE: "Intermediate - within 100",
    Difficulty.ADVANCED: "Advanced - large numbers",
    Difficulty.EXPERT: "Expert - four-digit / complex",
}


def number_range(difficulty: Difficulty, op: Operation) -> NumberRange:
    return RANGES[Difficulty(difficulty)][Operation(op)]


def describe_difficulty(difficulty: Difficulty) -> str:
    return _DESCRIPTIONS[Difficulty(difficulty)]
