from __future__ import annotations

import re

from resume_tailor.core.scoring import get_scoring_value
from resume_tailor.features.ats_scorer import flatten_resume_text
from resume_tailor.normalize.text import capitalize_with_acronyms
from resume_tailor.normalize.utils import dedupe_casefold
from resume_tailor.schemas import JobPosting, KeywordAnalysis, ResumeDocument

_YEARS_RE = re.compile(r"\d+\s*(?:years?|yrs?|\+)|years?\s*(?:of\s*)?(?:experience|exp)")
_NUMBER_RE = re.compile(r"^\d+$")
_STOP_WORDS = {
    "the", "and", "or", "for", "with", "from", "into", "this", "that",
    "have", "has", "will", "can", "may", "must", "should",
}
_SOFT_SKILL_PREFIXES = (
    "communication", "leadership", "teamwork", "collaborat", "problem", "analysis", "thinking",
    "creative", "flexible", "time", "detail", "self", "motivated", "hard", "soft", "skill",
    "innovation", "creativity", "adaptability", "resilience", "integrity", "professionalism",
    "accountability", "ownership", "initiative", "proactive", "organized", "mentoring",
    "coaching", "negotiation", "presentation", "influence", "persuasion", "diplomacy",
    "empathy", "patience",
)
_GENERIC_TERMS = {
    "development", "programming", "coding", "software", "excel", "word", "powerpoint",
    "outlook", "manufacturing", "automation", "safety", "maintenance", "reliability",
    "environmental", "diversity", "inclusion", "procurement", "logistics", "operations",
    "compensation", "qualification", "recruiting", "benefits",
}


def is_valid_competency(keyword: str) -> bool:
    """Whether a keyword is specific enough to show as a core competency."""
    lowered = (keyword or "").strip().lower()
    min_chars = int(get_scoring_value("keyword_analysis.min_competency_chars", 4))
    if len(lowered) < min_chars:
        return False
    if _YEARS_RE.search(lowered) or "experience" in lowered:
        return False
    if _NUMBER_RE.match(lowered) or lowered in _STOP_WORDS:
        return False
    if lowered.startswith(_SOFT_SKILL_PREFIXES):
        return False
    return lowered not in _GENERIC_TERMS


def analyze_keywords(resume: ResumeDocument | None, posting: JobPosting | None) -> KeywordAnalysis:
    if posting is None:
        return KeywordAnalysis()

    min_chars = int(get_scoring_value("keyword_analysis.min_keyword_chars", 3))
    all_keywords = [
        keyword
        for keyword in dedupe_casefold([*posting.required_skills, *posting.extracted_keywords])
        if len(keyword.strip()) >= min_chars
    ]
    resume_text = flatten_resume_text(resume)
    matched = [keyword for keyword in all_keywords if keyword.lower() in resume_text]
    missing = [keyword for keyword in all_keywords if keyword.lower() not in resume_text]

    matched_limit = int(get_scoring_value("keyword_analysis.matched_competencies", 6))
    missing_limit = int(get_scoring_value("keyword_analysis.missing_competencies", 4))
    max_competencies = int(get_scoring_value("keyword_analysis.max_competencies", 10))
    suggested = [
        *[keyword for keyword in matched if is_valid_competency(keyword)][:matched_limit],
        *[keyword for keyword in missing if is_valid_competency(keyword)][:missing_limit],
    ]
    suggested = dedupe_casefold([capitalize_with_acronyms(keyword) for keyword in suggested])

    return KeywordAnalysis(
        all_keywords=all_keywords,
        matched_keywords=matched,
        missing_keywords=missing,
        suggested_competencies=suggested[:max_competencies],
    )
