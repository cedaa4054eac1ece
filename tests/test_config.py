import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from analytics import AnalyticsConfig
from mathtrainer.config.config import load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["learner"]["id"], "default")
        self.assertEqual(cfg["practice"]["operations"], ["addition", "subtraction"])
        self.assertIsNone(cfg["practice"]["questions"])
        self.assertEqual(cfg["progress"]["smoothing_factor"], 0.5)
        self.assertEqual(cfg["report"]["trend_window"], 5)

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["practice"]["difficulty"], 1)
        self.assertEqual(cfg["worksheet"]["preset"], "elementary")

    def test_invalid_values_warn_and_fall_back(self) -> None:
        raw = {
            "practice": {"difficulty": 9, "operations": ["addition", "modulo"], "questions": -3},
            "progress": {"smoothing_factor": 2},
            "worksheet": {"preset": "huge"},
        }
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config(raw)
        out = buf.getvalue()
        self.assertEqual(cfg["practice"]["difficulty"], 1)
        self.assertEqual(cfg["practice"]["operations"], ["addition"])
        self.assertIsNone(cfg["practice"]["questions"])
        self.assertEqual(cfg["progress"]["smoothing_factor"], 0.5)
        self.assertEqual(cfg["worksheet"]["preset"], "elementary")
        self.assertEqual(out.count("WARNING:"), 5)

    def test_invalid_report_values_warn_and_fall_back(self) -> None:
        raw = {"report": {"trend_window": 0, "trend_threshold": "lots", "smoothing_span": 1}}
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config(raw)
        self.assertEqual(cfg["report"], {"trend_window": 5, "trend_threshold": 5.0, "smoothing_span": 5})
        self.assertEqual(buf.getvalue().count("WARNING: report."), 3)
        self.assertEqual(AnalyticsConfig(**cfg["report"]).trend_window, 5)

    def test_valid_report_values_are_kept(self) -> None:
        cfg = validate_config({"report": {"trend_window": "3", "trend_threshold": 0, "smoothing_span": 2}})
        self.assertEqual(cfg["report"], {"trend_window": 3, "trend_threshold": 0.0, "smoothing_span": 2})

    def test_yaml_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("learner:\n  id: ada\npractice:\n  operations: [division]\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["learner"]["id"], "ada")
        self.assertEqual(cfg["practice"]["operations"], ["division"])

    def test_missing_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            load_config("/nonexistent/mathtrainer.yml")


if __name__ == "__main__":
    unittest.main()
