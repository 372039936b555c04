import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.normalize import capitalize_with_acronyms, normalize_text  # noqa: E402
from resume_tailor.normalize.utils import dedupe_casefold, split_segments, strip_bullet_prefix  # noqa: E402


class TextNormalizerTests(unittest.TestCase):
    def test_dashes_become_hyphens(self):
        self.assertEqual(normalize_text("2019 — 2021 – remote"), "2019 - 2021 - remote")

    def test_acronyms_get_canonical_casing(self):
        for raw in ("api", "Api", "aPI"):
            self.assertEqual(normalize_text(f"Built an {raw} gateway"), "Built an API gateway")
        self.assertEqual(normalize_text("Shipped rest apis on aws"), "Shipped REST APIs on AWS")

    def test_substrings_inside_words_are_untouched(self):
        self.assertEqual(normalize_text("rapid email campaigns"), "rapid email campaigns")

    def test_punctuated_keys(self):
        self.assertEqual(normalize_text("ci/cd with nodejs"), "CI/CD with Node.js")

    def test_total_over_any_input(self):
        self.assertEqual(normalize_text(None), "")
        self.assertEqual(normalize_text(""), "")
        self.assertEqual(normalize_text(42), "42")
        self.assertEqual(normalize_text("plain words"), "plain words")

    def test_idempotent(self):
        once = normalize_text("aws — sql and llms")
        self.assertEqual(normalize_text(once), once)

    def test_capitalize_with_acronyms(self):
        self.assertEqual(capitalize_with_acronyms("machine learning"), "Machine learning")
        self.assertEqual(capitalize_with_acronyms("nlp"), "NLP")
        self.assertEqual(capitalize_with_acronyms(""), "")


class LineUtilsTests(unittest.TestCase):
    def test_split_segments_on_sentences_and_semicolons(self):
        self.assertEqual(
            split_segments("Required: Python. Nice to have: Docker; Kafka"),
            ["Required: Python.", "Nice to have: Docker", "Kafka"],
        )

    def test_strip_bullet_prefix(self):
        self.assertEqual(strip_bullet_prefix("• Built pipelines"), "Built pipelines")
        self.assertEqual(strip_bullet_prefix("2) Shipped"), "Shipped")

    def test_dedupe_casefold_keeps_first(self):
        self.assertEqual(dedupe_casefold(["SQL", "sql ", "Go", ""]), ["SQL", "Go"])


if __name__ == "__main__":
    unittest.main()
