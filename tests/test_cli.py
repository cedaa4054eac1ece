import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from mathtrainer.app.cli import main
from mathtrainer.storage import JsonFileStore, LearnerRepository

from tests.factories import make_session


class ImportExportCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.data_dir = self.tmp / "data"
        self.cfg_path = self.tmp / "cfg.yml"
        self.cfg_path.write_text(f"storage:\n  data_dir: {self.data_dir.as_posix()}\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(["--config", str(self.cfg_path), *argv])
        return code, out.getvalue(), err.getvalue()

    def test_missing_import_file_is_an_error(self) -> None:
        code, _, err = self._run("import", str(self.tmp / "nope.json"))
        self.assertEqual(code, 1)
        self.assertIn("ERROR: cannot read", err)
        self.assertFalse(self.data_dir.exists())

    def test_invalid_import_file_is_an_error(self) -> None:
        path = self.tmp / "bad.json"
        path.write_text("{", encoding="utf-8")
        code, _, err = self._run("import", str(path))
        self.assertEqual(code, 1)
        self.assertIn("is not a valid export", err)

    def test_export_then_import_for_another_learner(self) -> None:
        LearnerRepository(JsonFileStore(self.data_dir)).append_session("ada", make_session([True, False]))
        dump = self.tmp / "ada.json"
        self.assertEqual(self._run("--learner", "ada", "export", "--out", str(dump))[0], 0)
        code, out, _ = self._run("--learner", "bob", "import", str(dump))
        self.assertEqual(code, 0)
        self.assertIn("Import complete.", out)
        history = LearnerRepository(JsonFileStore(self.data_dir)).session_history("bob")
        self.assertEqual(len(history), 1)


if __name__ == "__main__":
    unittest.main()
