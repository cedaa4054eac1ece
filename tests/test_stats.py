import unittest
from datetime import datetime

from mathtrainer.results.schema import AnswerRecord
from mathtrainer.stats.stats import format_summary, letter_grade, per_operation, score_answers

from tests.factories import make_session


def _answer(ok: bool, ms: int) -> AnswerRecord:
    return AnswerRecord(
        problem_id="p",
        submitted_value=1.0,
        correct_answer=1,
        is_correct=ok,
        elapsed_millis=ms,
        submitted_at=datetime(2024, 1, 1),
    )


class ScoreTests(unittest.TestCase):
    def test_score_blends_accuracy_and_speed(self) -> None:
        answers = [_answer(True, 5000), _answer(True, 5000), _answer(False, 5000), _answer(True, 5000)]
        scores = score_answers(answers)
        self.assertEqual(scores["accuracy"], 75)
        self.assertEqual(scores["average_time_seconds"], 5)
        # 0.7 * 75 + 0.3 * (100 - 10)
        self.assertEqual(scores["score"], 80)

    def test_slow_answers_get_no_time_bonus(self) -> None:
        scores = score_answers([_answer(True, 90_000)])
        self.assertEqual(scores["score"], 70)

    def test_empty(self) -> None:
        self.assertEqual(score_answers([]), {"accuracy": 0, "average_time_seconds": 0, "score": 0})

    def test_letter_grades(self) -> None:
        self.assertEqual(letter_grade(95), "A+")
        self.assertEqual(letter_grade(80), "A")
        self.assertEqual(letter_grade(72), "B+")
        self.assertEqual(letter_grade(60), "B")
        self.assertEqual(letter_grade(59), "C")


class SummaryTests(unittest.TestCase):
    def test_summary_lists_operations(self) -> None:
        session = make_session([True, False, True])
        self.assertEqual(per_operation(session), {"addition": {"asked": 3, "correct": 2}})
        text = format_summary(session)
        self.assertIn("Total: 2/3 correct", text)
        self.assertIn("Addition: 2/3", text)


if __name__ == "__main__":
    unittest.main()
