import unittest
from datetime import datetime

from mathtrainer.arithmetic import Difficulty, Operation
from mathtrainer.policy.assessment import build_assessment
from mathtrainer.results.schema import ProgressRecord

from tests.factories import make_session


class AssessmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.progress = ProgressRecord(recommended_difficulty=Difficulty.BASIC)
        self.progress.strength_by_operation.update(
            {Operation.ADDITION: 90, Operation.SUBTRACTION: 70, Operation.MULTIPLICATION: 45, Operation.DIVISION: 10}
        )

    def test_strengths_weaknesses_and_score(self) -> None:
        a = build_assessment(self.progress, [], now=datetime(2024, 1, 1))
        self.assertEqual(a.overall_score, 54)
        self.assertEqual(a.strengths, [Operation.ADDITION])
        self.assertEqual(a.weaknesses, [Operation.MULTIPLICATION, Operation.DIVISION])
        self.assertEqual(a.progress_trend, "stable")

    def test_recommendations_sorted_by_priority(self) -> None:
        recs = build_assessment(self.progress, []).recommendations
        self.assertEqual([r.priority for r in recs], [5, 4, 2])
        review, practice, challenge = recs
        self.assertEqual((review.type, review.operation, review.difficulty), ("review", Operation.DIVISION, Difficulty.BEGINNER))
        self.assertEqual((practice.type, practice.difficulty), ("practice", Difficulty.BASIC))
        self.assertEqual((challenge.type, challenge.difficulty), ("challenge", Difficulty.INTERMEDIATE))

    def test_trend_comes_from_history(self) -> None:
        history = [make_session(accuracy=95) for _ in range(5)] + [make_session(accuracy=50) for _ in range(5)]
        self.assertEqual(build_assessment(self.progress, history).progress_trend, "improving")


if __name__ == "__main__":
    unittest.main()
