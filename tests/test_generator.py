import random
import unittest
from collections import Counter

from mathtrainer.arithmetic import Difficulty, Operation, number_range
from mathtrainer.drills.generator import InvalidConfiguration, InvalidOperation, ProblemGenerator

from tests.factories import ScriptedRandom


def _fixed_clock() -> float:
    return 1_700_000_000.0


class ScenarioTests(unittest.TestCase):
    def test_beginner_addition(self) -> None:
        rng = ScriptedRandom([7, 4])
        p = ProblemGenerator(rng, clock=_fixed_clock).generate_one(Operation.ADDITION, Difficulty.BEGINNER)
        self.assertEqual((p.operand1, p.operand2, p.correct_answer), (7, 4, 11))
        self.assertEqual(p.operator_symbol, "+")
        self.assertEqual(rng.calls, [(1, 10), (1, 10)])

    def test_beginner_division_derives_dividend(self) -> None:
        rng = ScriptedRandom([5, 3])
        p = ProblemGenerator(rng, clock=_fixed_clock).generate_one(Operation.DIVISION, Difficulty.BEGINNER)
        self.assertEqual((p.operand1, p.operand2, p.correct_answer), (15, 3, 5))
        self.assertEqual(p.operand1, p.operand2 * p.correct_answer)
        # quotient from the tier range, divisor from [2, min(max, 12)]
        self.assertEqual(rng.calls, [(2, 10), (2, 10)])

    def test_subtraction_upper_bound_follows_operand1(self) -> None:
        rng = ScriptedRandom([4, 4])
        p = ProblemGenerator(rng).generate_one(Operation.SUBTRACTION, Difficulty.BEGINNER)
        self.assertEqual(rng.calls, [(1, 10), (1, 4)])
        self.assertEqual(p.correct_answer, 0)

    def test_expert_divisor_capped_at_twelve(self) -> None:
        rng = ScriptedRandom([9999, 12])
        p = ProblemGenerator(rng).generate_one(Operation.DIVISION, Difficulty.EXPERT)
        self.assertEqual(rng.calls[1], (2, 12))
        self.assertEqual(p.operand1, 119988)


class InvariantTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gen = ProblemGenerator(random.Random(1234))

    def test_subtraction_never_negative(self) -> None:
        for tier in Difficulty:
            for p in self.gen.generate(Operation.SUBTRACTION, tier, 200):
                self.assertGreaterEqual(p.operand1, p.operand2)
                self.assertGreaterEqual(p.operand2, 0)
                self.assertEqual(p.correct_answer, p.operand1 - p.operand2)
                self.assertGreaterEqual(p.correct_answer, 0)

    def test_division_is_exact(self) -> None:
        for tier in Difficulty:
            bounds = number_range(tier, Operation.DIVISION)
            for p in self.gen.generate(Operation.DIVISION, tier, 200):
                self.assertEqual(p.operand1, p.operand2 * p.correct_answer)
                self.assertGreaterEqual(p.operand2, 2)
                self.assertLessEqual(p.operand2, 12)
                self.assertTrue(bounds.min <= p.correct_answer <= bounds.max)

    def test_addition_and_multiplication_operands_in_range(self) -> None:
        for op in (Operation.ADDITION, Operation.MULTIPLICATION):
            for tier in Difficulty:
                bounds = number_range(tier, op)
                for p in self.gen.generate(op, tier, 100):
                    self.assertTrue(bounds.min <= p.operand1 <= bounds.max)
                    self.assertTrue(bounds.min <= p.operand2 <= bounds.max)

    def test_generate_returns_exact_count(self) -> None:
        self.assertEqual(len(self.gen.generate("multiplication", 3, 17)), 17)
        self.assertEqual(self.gen.generate(Operation.ADDITION, Difficulty.BASIC, 0), [])

    def test_ids_unique_within_a_set(self) -> None:
        problems = self.gen.generate_mixed(Difficulty.BASIC, 200, list(Operation))
        self.assertEqual(len({p.id for p in problems}), 200)


class MixedTests(unittest.TestCase):
    def test_count_and_operation_subset(self) -> None:
        gen = ProblemGenerator(random.Random(7))
        for _ in range(50):
            problems = gen.generate_mixed(Difficulty.INTERMEDIATE, 10, [Operation.ADDITION, Operation.DIVISION])
            self.assertEqual(len(problems), 10)
            self.assertTrue({p.operation for p in problems} <= {Operation.ADDITION, Operation.DIVISION})

    def test_operations_are_interleaved(self) -> None:
        problems = ProblemGenerator(random.Random(3)).generate_mixed(Difficulty.BASIC, 400, ["addition", "subtraction"])
        counts = Counter(p.operation for p in problems)
        self.assertGreater(counts[Operation.ADDITION], 120)
        self.assertGreater(counts[Operation.SUBTRACTION], 120)
        runs = sum(1 for a, b in zip(problems, problems[1:]) if a.operation != b.operation)
        self.assertGreater(runs, 50)

    def test_seeded_generation_is_reproducible(self) -> None:
        a = ProblemGenerator(random.Random(99), clock=_fixed_clock).generate_mixed(2, 20, list(Operation))
        b = ProblemGenerator(random.Random(99), clock=_fixed_clock).generate_mixed(2, 20, list(Operation))
        self.assertEqual([p.model_dump() for p in a], [p.model_dump() for p in b])


class ErrorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gen = ProblemGenerator(random.Random(0))

    def test_unknown_operation_fails_fast(self) -> None:
        with self.assertRaises(InvalidOperation):
            self.gen.generate("modulo", Difficulty.BEGINNER, 3)
        with self.assertRaises(InvalidOperation):
            self.gen.generate_mixed(Difficulty.BEGINNER, 3, ["addition", "power"])

    def test_empty_operation_set(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            self.gen.generate_mixed(Difficulty.BEGINNER, 10, [])

    def test_bad_count_and_tier(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            self.gen.generate(Operation.ADDITION, Difficulty.BEGINNER, -1)
        with self.assertRaises(InvalidConfiguration):
            self.gen.generate(Operation.ADDITION, 9, 1)

    def test_errors_are_value_errors(self) -> None:
        self.assertTrue(issubclass(InvalidOperation, ValueError))
        self.assertTrue(issubclass(InvalidConfiguration, ValueError))


if __name__ == "__main__":
    unittest.main()
