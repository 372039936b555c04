from __future__ import annotations

from resume_tailor.core.scoring import get_scoring_value
from resume_tailor.normalize.text import capitalize_with_acronyms, replace_dashes
from resume_tailor.normalize.utils import dedupe_casefold
from resume_tailor.schemas import JobPosting, ResumeDocument, ScoreResult

MISSING_KEYWORDS_MESSAGE = "Add these missing keywords from the job description: {keywords}"
LOW_MATCH_MESSAGE = "Your keyword match is low. Reframe bullet points to use more of the job description's terminology."
DASHES_MESSAGE = "Replace em dashes and en dashes with hyphens for cleaner ATS parsing."
SUMMARY_MESSAGE = "Add a professional summary of at least 150 characters that highlights your fit for this role."
COMPETENCIES_MESSAGE = "Add 5-8 core competencies that match the job requirements."


def _setting(path: str, default: float) -> float:
    return float(get_scoring_value(f"suggestions.{path}", default))


def generate_suggestions(
    resume: ResumeDocument,
    posting: JobPosting | None,
    result: ScoreResult,
    resume_text: str,
) -> list[str]:
    """Improvement hints for a scored resume, most valuable first.

    ``resume_text`` is the flattened text the score was computed from. Keyword
    hints only appear when the posting produced candidates to match.
    """
    suggestions: list[str] = []
    text = (resume_text or "").lower()
    has_candidates = bool(result.matched_keywords or result.missing_keywords)

    if has_candidates and result.breakdown.match_ratio < _setting("missing_keyword_ratio", 0.85):
        missing = [
            skill
            for skill in dedupe_casefold(posting.required_skills if posting else [])
            if skill.lower() not in text
        ][: int(_setting("max_missing_skills", 5))]
        if missing:
            keywords = ", ".join(capitalize_with_acronyms(skill) for skill in missing)
            suggestions.append(MISSING_KEYWORDS_MESSAGE.format(keywords=keywords))

    if has_candidates and result.breakdown.match_ratio < _setting("low_match_ratio", 0.7):
        suggestions.append(LOW_MATCH_MESSAGE)

    if replace_dashes(resume_text or "") != (resume_text or ""):
        suggestions.append(DASHES_MESSAGE)

    if len(resume.summary.strip()) < _setting("min_summary_chars", 100):
        suggestions.append(SUMMARY_MESSAGE)

    if len(resume.core_competencies) < _setting("min_core_competencies", 5):
        suggestions.append(COMPETENCIES_MESSAGE)

    return suggestions
