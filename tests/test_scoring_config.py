import os
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.scoring import (  # noqa: E402
    _scoring_config_path,
    clear_scoring_config_cache,
    get_scoring_config,
    get_scoring_value,
)


class ScoringConfigTests(unittest.TestCase):
    def tearDown(self):
        os.environ.pop("SCORING_CONFIG_PATH", None)
        clear_scoring_config_cache()

    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("ats_score.weights.required"), 0.6)
        self.assertEqual(get_scoring_value("ats_score.weights.general"), 0.4)
        self.assertEqual(get_scoring_value("ats_score.max_candidates"), 25)
        self.assertEqual(get_scoring_value("ats_score.max_required"), 15)

    def test_missing_path_returns_default(self):
        self.assertEqual(get_scoring_value("ats_score.nope.deeper", 7), 7)
        self.assertIsNone(get_scoring_value(""))

    def test_override_path_and_invalid_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            os.environ["SCORING_CONFIG_PATH"] = str(path)
            clear_scoring_config_cache()
            with self.assertRaises(RuntimeError):
                get_scoring_config()

            path.write_text("ats_score:\n  keyword_points: 50\n", encoding="utf-8")
            clear_scoring_config_cache()
            self.assertEqual(get_scoring_value("ats_score.keyword_points"), 50)

    def test_default_config_ships_inside_package(self):
        package_dir = PROJECT_ROOT / "resume_tailor"
        self.assertEqual(_scoring_config_path(), package_dir / "config" / "scoring.yaml")
        self.assertTrue(_scoring_config_path().is_file())

    def test_missing_file_raises(self):
        os.environ["SCORING_CONFIG_PATH"] = str(PROJECT_ROOT / "config" / "does-not-exist.yaml")
        clear_scoring_config_cache()
        with self.assertRaises(RuntimeError):
            get_scoring_config()


if __name__ == "__main__":
    unittest.main()
