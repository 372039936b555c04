import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.errors import InsufficientInputError, MalformedDraftError  # noqa: E402
from resume_tailor.features.keyword_extractor import build_job_posting  # noqa: E402
from resume_tailor.schemas import ResumeDocument  # noqa: E402
from resume_tailor.services.tailoring_service import (  # noqa: E402
    ensure_scorable,
    finalize_tailoring,
    preview_score,
)

JOB_TEXT = (
    "Position: Data Engineer\n"
    "Requirements:\n"
    "- Python, SQL and Airflow\n"
    "- Experience with AWS and Terraform\n"
    "Nice to have: Docker, Kafka.\n"
)


def _resume():
    return ResumeDocument.model_validate(
        {
            "summary": "Data engineer building batch pipelines in Python and SQL for analytics teams.",
            "experience": [
                {"id": "exp-1", "title": "Data Engineer", "company": "Acme", "bullets": ["Built Airflow DAGs"]},
            ],
            "skills": ["Python", "SQL", "Airflow"],
        }
    )


class TailoringServiceTests(unittest.TestCase):
    def test_ensure_scorable_rejects_short_text(self):
        with self.assertRaises(InsufficientInputError) as ctx:
            ensure_scorable("too short", "x" * 200)
        self.assertEqual(ctx.exception.code, "insufficient_input")
        with self.assertRaises(InsufficientInputError):
            ensure_scorable(JOB_TEXT, "tiny resume")
        ensure_scorable(JOB_TEXT, "x" * 200)

    def test_preview_score_unavailable_for_short_inputs(self):
        self.assertIsNone(preview_score("Python please", _resume()))
        self.assertIsNone(preview_score(JOB_TEXT, ResumeDocument(summary="Python")))
        self.assertIsNone(preview_score(None, None))

    def test_preview_score_matches_direct_scoring(self):
        result = preview_score(JOB_TEXT, _resume())
        self.assertIsNotNone(result)
        self.assertIn("Python", result.matched_keywords)
        self.assertIn("AWS", result.missing_keywords)
        self.assertTrue(0 <= result.score <= 100)

    def test_finalize_tailoring_scores_before_and_after(self):
        posting = build_job_posting(JOB_TEXT)
        draft = {
            "summary": "Data engineer shipping Python, SQL and Terraform on AWS.",
            "experience": [{"company": "Acme", "bullets": ["Built Airflow DAGs on AWS"]}],
            "skillCategories": [{"name": "Cloud", "skills": "AWS, Terraform"}],
        }
        result = finalize_tailoring(_resume(), posting, draft)
        self.assertEqual(result.resume.experience[0].id, "exp-1")
        self.assertGreaterEqual(result.after.score, result.before.score)
        self.assertIn("AWS", result.after.matched_keywords)
        self.assertTrue(result.resume.core_competencies)
        self.assertEqual(result.resume.core_competencies, result.keyword_analysis.suggested_competencies)
        highlighted = result.highlighted_resume
        self.assertTrue(highlighted.experience[0].bullets[0].startswith("<strong>Built</strong>"))
        self.assertEqual(result.resume.experience[0].bullets, ["Built Airflow DAGs on AWS"])
        self.assertTrue(all("<strong>" not in keyword for keyword in result.after.matched_keywords))

    def test_finalize_accepts_job_text(self):
        result = finalize_tailoring(_resume(), JOB_TEXT, {"summary": "Python and SQL engineer."})
        self.assertTrue(result.before.matched_keywords)

    def test_finalize_propagates_malformed_draft(self):
        with self.assertRaises(MalformedDraftError):
            finalize_tailoring(_resume(), JOB_TEXT, {})


if __name__ == "__main__":
    unittest.main()
