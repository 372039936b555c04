import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.features.ats_scorer import score_resume  # noqa: E402
from resume_tailor.features.keyword_extractor import build_job_posting  # noqa: E402
from resume_tailor.features.score_suggestions import (  # noqa: E402
    COMPETENCIES_MESSAGE,
    DASHES_MESSAGE,
    LOW_MATCH_MESSAGE,
    SUMMARY_MESSAGE,
)
from resume_tailor.schemas import JobPosting, ResumeDocument  # noqa: E402

STRONG_SUMMARY = (
    "Backend engineer running Python services on AWS, modelling SQL warehouses and "
    "shipping Docker based deployments for analytics and product teams."
)


class ScoreSuggestionTests(unittest.TestCase):
    def setUp(self):
        self.posting = build_job_posting("Required: Python, AWS, SQL. Nice to have: Docker.")

    def test_weak_resume_gets_every_hint_in_order(self):
        resume = ResumeDocument.model_validate(
            {
                "summary": "Java developer",
                "experience": [{"company": "Acme", "bullets": ["Led a migration — on time"]}],
                "skills": ["Java"],
            }
        )
        result = score_resume(resume, self.posting)
        self.assertEqual(
            result.suggestions,
            [
                "Add these missing keywords from the job description: Python, AWS, SQL",
                LOW_MATCH_MESSAGE,
                DASHES_MESSAGE,
                SUMMARY_MESSAGE,
                COMPETENCIES_MESSAGE,
            ],
        )

    def test_partial_match_lists_only_missing_required_skills(self):
        resume = ResumeDocument(summary="Python and SQL developer", skills=["Python", "SQL"])
        result = score_resume(resume, self.posting)
        self.assertEqual(result.suggestions[0], "Add these missing keywords from the job description: AWS")
        self.assertIn(LOW_MATCH_MESSAGE, result.suggestions)
        self.assertNotIn(DASHES_MESSAGE, result.suggestions)

    def test_missing_skill_list_is_capped(self):
        posting = build_job_posting("Required: Python, Kafka, Spark, Airflow, Terraform, Kubernetes, Snowflake.")
        result = score_resume(ResumeDocument(summary="Accountant"), posting)
        hint = result.suggestions[0]
        self.assertTrue(hint.startswith("Add these missing keywords"))
        self.assertEqual(len(hint.split(": ", 1)[1].split(", ")), 5)

    def test_complete_resume_gets_no_hints(self):
        resume = ResumeDocument(
            summary=STRONG_SUMMARY,
            core_competencies=["Python", "AWS", "SQL", "Docker", "Data Modeling"],
            skills=["Python", "AWS", "SQL", "Docker"],
        )
        self.assertGreaterEqual(len(resume.summary), 100)
        self.assertEqual(score_resume(resume, self.posting).suggestions, [])

    def test_keyword_hints_need_candidates(self):
        resume = ResumeDocument(summary="Java developer")
        result = score_resume(resume, JobPosting())
        self.assertEqual(result.suggestions, [SUMMARY_MESSAGE, COMPETENCIES_MESSAGE])

    def test_missing_resume_has_no_suggestions(self):
        self.assertEqual(score_resume(None, self.posting).suggestions, [])


if __name__ == "__main__":
    unittest.main()
