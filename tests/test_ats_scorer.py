import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.features.ats_scorer import (  # noqa: E402
    candidate_keywords,
    flatten_resume_text,
    score_resume,
    score_resume_text,
)
from resume_tailor.features.keyword_extractor import build_job_posting  # noqa: E402
from resume_tailor.schemas import JobPosting, ResumeDocument  # noqa: E402


def _posting(required, keywords=()):
    return JobPosting(title="Engineer", company_name="Acme", required_skills=list(required), extracted_keywords=list(keywords))


class AtsScorerTests(unittest.TestCase):
    def setUp(self):
        self.posting = build_job_posting("Required: Python, AWS, SQL. Nice to have: Docker.")

    def test_concrete_scenario(self):
        result = score_resume_text("experienced python and sql developer", self.posting)
        self.assertEqual(result.matched_keywords, ["Python", "SQL"])
        self.assertEqual(result.missing_keywords, ["AWS", "Docker"])
        self.assertAlmostEqual(result.breakdown.required_match_ratio, 2 / 3)
        self.assertAlmostEqual(result.breakdown.match_ratio, 0.5)
        self.assertAlmostEqual(result.breakdown.keyword_score, 36.0)
        self.assertAlmostEqual(result.breakdown.content_score, 36 / 150)
        self.assertEqual(result.breakdown.structure_bonus, 5)
        self.assertEqual(result.breakdown.skill_category_bonus, 0)
        self.assertEqual(result.score, 41)

    def test_scenario_score_between_extremes(self):
        none_matched = score_resume_text("experienced java and ruby developer", self.posting)
        some_matched = score_resume_text("experienced python and sql developer", self.posting)
        all_matched = score_resume_text("experienced python aws sql docker developer", self.posting)
        self.assertLess(none_matched.score, some_matched.score)
        self.assertLess(some_matched.score, all_matched.score)

    def test_adding_missing_required_skill_never_lowers_score(self):
        base_text = "experienced python and sql developer"
        before = score_resume_text(base_text, self.posting)
        after = score_resume_text(base_text + " aws", self.posting)
        self.assertGreaterEqual(after.score, before.score)
        self.assertIn("AWS", after.matched_keywords)

    def test_score_is_bounded(self):
        posting = _posting(["python"], ["docker"])
        huge = "python docker " * 2000
        result = score_resume_text(huge, posting, core_competency_count=12, skill_category_count=4)
        self.assertEqual(result.score, 95)
        self.assertLessEqual(result.score, 100)
        self.assertGreaterEqual(score_resume_text("x", posting).score, 0)

    def test_empty_inputs_degrade_to_zero(self):
        for text, posting in (("", self.posting), ("   ", self.posting), ("python", None), ("python", _posting([]))):
            result = score_resume_text(text, posting)
            self.assertEqual(result.score, 0)
            self.assertEqual(result.matched_keywords, [])
            self.assertEqual(result.missing_keywords, [])
        self.assertEqual(score_resume(None, self.posting).score, 0)

    def test_candidates_capped_and_required_first(self):
        required = [f"skill{index:02d}" for index in range(20)]
        keywords = [f"tool{index:02d}" for index in range(20)] + ["Skill00"]
        candidates = candidate_keywords(_posting(required, keywords))
        self.assertEqual(candidates[:20], required)
        self.assertEqual(len(candidates), 40)

        result = score_resume_text("nothing relevant here", _posting(required, keywords))
        self.assertEqual(len(result.matched_keywords) + len(result.missing_keywords), 25)

    def test_required_ratio_uses_top_fifteen(self):
        required = [f"skill{index:02d}" for index in range(20)]
        text = " ".join(required[:15])
        result = score_resume_text(text, _posting(required))
        self.assertAlmostEqual(result.breakdown.required_match_ratio, 1.0)
        self.assertAlmostEqual(result.breakdown.match_ratio, 15 / 20)

    def test_structure_and_category_bonuses(self):
        resume = ResumeDocument(
            summary="Python engineer",
            core_competencies=["Python", "SQL", "AWS", "ETL", "Airflow"],
            skill_categories=[{"name": "Languages", "skills": ["Python"]}, {"name": "Empty", "skills": []}],
        )
        result = score_resume(resume, self.posting)
        self.assertEqual(result.breakdown.structure_bonus, 10)
        self.assertEqual(result.breakdown.skill_category_bonus, 5)

    def test_display_lists_truncate_without_changing_result(self):
        required = [f"skill{index:02d}" for index in range(10)]
        result = score_resume_text(" ".join(required), _posting(required))
        self.assertEqual(len(result.matched_keywords), 10)
        self.assertEqual(result.display_matched(), required[:6])
        self.assertEqual(result.display_missing(), [])


class FlattenResumeTests(unittest.TestCase):
    def test_flatten_covers_scored_sections_lowercased(self):
        resume = ResumeDocument.model_validate(
            {
                "summary": "Data Engineer",
                "skills": ["Python"],
                "skillCategories": [{"name": "Cloud", "skills": ["AWS"]}],
                "experience": [{"title": "Engineer", "company": "Globex", "bullets": ["Built ETL"]}],
                "education": [{"degree": "BSc", "institution": "MIT"}],
                "projects": [{"name": "Secret Project"}],
                "certifications": ["CKA"],
                "coreCompetencies": ["Kafka"],
            }
        )
        text = flatten_resume_text(resume)
        for fragment in ("data engineer", "python", "aws", "globex", "built etl", "bsc", "mit", "cka", "kafka"):
            self.assertIn(fragment, text)
        self.assertNotIn("secret project", text)
        self.assertEqual(text, text.lower())
        self.assertEqual(flatten_resume_text(None), "")


if __name__ == "__main__":
    unittest.main()
