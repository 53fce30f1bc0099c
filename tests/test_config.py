import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

from dailyquiz.config.config import load_config, validate_config


def _validated(cfg):
    with redirect_stdout(StringIO()) as out:
        result = validate_config(cfg)
    return result, out.getvalue()


class ConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg, warnings = _validated(load_config())
        self.assertEqual(warnings, "")
        self.assertEqual(cfg["api"]["amount"], 5)
        self.assertEqual(cfg["api"]["category"], 9)
        self.assertEqual(cfg["api"]["difficulty"], "easy")
        self.assertIsNone(cfg["api"]["timeout_s"])
        self.assertEqual(cfg["storage"]["history_key"], "quizHistory")
        self.assertFalse(cfg["session"]["strict"])

    def test_empty_config_gets_defaults(self) -> None:
        cfg, _ = _validated({})
        self.assertEqual(cfg["api"]["endpoint"], "https://opentdb.com/api.php")
        self.assertTrue(cfg["ui"]["show_feedback"])

    def test_invalid_values_fall_back(self) -> None:
        cfg, warnings = _validated(
            {"api": {"amount": 500, "category": "films", "difficulty": "extreme", "timeout_s": -2}}
        )
        self.assertEqual(cfg["api"]["amount"], 5)
        self.assertEqual(cfg["api"]["category"], 9)
        self.assertEqual(cfg["api"]["difficulty"], "easy")
        self.assertIsNone(cfg["api"]["timeout_s"])
        self.assertEqual(warnings.count("WARNING"), 4)

    def test_difficulty_is_normalized(self) -> None:
        cfg, _ = _validated({"api": {"difficulty": "HARD", "timeout_s": "10"}})
        self.assertEqual(cfg["api"]["difficulty"], "hard")
        self.assertEqual(cfg["api"]["timeout_s"], 10.0)

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "quiz.yml"
            p.write_text("api:\n  amount: 10\nsession:\n  strict: true\n", encoding="utf-8")
            cfg, _ = _validated(load_config(str(p)))
        self.assertEqual(cfg["api"]["amount"], 10)
        self.assertTrue(cfg["session"]["strict"])

    def test_missing_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            with redirect_stdout(StringIO()):
                load_config("/nonexistent/quiz.yml")


if __name__ == "__main__":
    unittest.main()
