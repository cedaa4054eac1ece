from __future__ import annotations

"""Constrained arithmetic problem generator.

Every problem is built in a constant number of draws. Subtraction bounds the
subtrahend by the minuend, and division draws the quotient and divisor first
and derives the dividend, so no draw is ever rejected.
"""

import random
import time
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from ..app.explain import trace as xtrace
from ..arithmetic import OPERATOR_SYMBOLS, Difficulty, Operation, number_range
from ..results.schema import Problem
from ..util.randomness import make_rng, new_id

MAX_DIVISOR = 12


class InvalidOperation(ValueError):
    """Raised for an operation outside the supported four."""


class InvalidConfiguration(ValueError):
    """Raised for an unusable generation request (count, tier, operation set)."""


def coerce_operation(op: Operation | str) -> Operation:
    try:
        return Operation(op)
    except ValueError:
        raise InvalidOperation(f"Unsupported operation: {op!r}") from None


def coerce_difficulty(difficulty: Difficulty | int) -> Difficulty:
    try:
        return Difficulty(difficulty)
    except ValueError:
        raise InvalidConfiguration(f"Unknown difficulty: {difficulty!r}") from None


def _check_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise InvalidConfiguration(f"count must be a non-negative integer, got {count!r}")
    return count


class ProblemGenerator:
    """Generates well-formed problems from an injected random source.

    Pass a seeded ``random.Random`` for reproducible sets; the default reads
    the SEED env var or falls back to OS entropy.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rng = rng if rng is not None else make_rng()
        self.clock = clock

    def _draw(self, lo: int, hi: int) -> int:
        return self.rng.randint(lo, hi)

    def _build(self, op: Operation, difficulty: Difficulty, a: int, b: int, answer: int) -> Problem:
        return Problem(
            id=new_id(self.rng, "p", self.clock),
            operation=op,
            difficulty=difficulty,
            operand1=a,
            operand2=b,
            operator_symbol=OPERATOR_SYMBOLS[op],
            correct_answer=answer,
            created_at=datetime.fromtimestamp(self.clock()),
        )

    def generate_one(self, operation: Operation | str, difficulty: Difficulty | int) -> Problem:
        op = coerce_operation(operation)
        tier = coerce_difficulty(difficulty)
        bounds = number_range(tier, op)

        if op is Operation.ADDITION:
            a = self._draw(bounds.min, bounds.max)
            b = self._draw(bounds.min, bounds.max)
            return self._build(op, tier, a, b, a + b)
        if op is Operation.SUBTRACTION:
            a = self._draw(bounds.min, bounds.max)
            b = self._draw(bounds.min, min(a, bounds.max))
            return self._build(op, tier, a, b, a - b)
        if op is Operation.MULTIPLICATION:
            a = self._draw(bounds.min, bounds.max)
            b = self._draw(bounds.min, bounds.max)
            return self._build(op, tier, a, b, a * b)
        # division: quotient and divisor first, dividend derived
        quotient = self._draw(bounds.min, bounds.max)
        divisor = self._draw(2, min(bounds.max, MAX_DIVISOR))
        return self._build(op, tier, quotient * divisor, divisor, quotient)

    def generate(self, operation: Operation | str, difficulty: Difficulty | int, count: int) -> List[Problem]:
        """Return exactly ``count`` problems of a single operation."""
        op = coerce_operation(operation)
        tier = coerce_difficulty(difficulty)
        n = _check_count(count)
        problems = [self.generate_one(op, tier) for _ in range(n)]
        xtrace("problems_generated", {"operation": op.value, "difficulty": int(tier), "count": n})
        return problems

    def generate_mixed(
        self,
        difficulty: Difficulty | int,
        count: int,
        operations: Iterable[Operation | str],
    ) -> List[Problem]:
        """Return exactly ``count`` problems, each operation drawn uniformly, interleaved."""
        ops: Sequence[Operation] = [coerce_operation(op) for op in operations]
        if not ops:
            raise InvalidConfiguration("operations must not be empty")
        tier = coerce_difficulty(difficulty)
        n = _check_count(count)
        problems = [self.generate_one(self.rng.choice(ops), tier) for _ in range(n)]
        # random.shuffle is an in-place Fisher-Yates permutation
        self.rng.shuffle(problems)
        xtrace(
            "mixed_problems_generated",
            {"operations": [op.value for op in ops], "difficulty": int(tier), "count": n},
        )
        return problems
