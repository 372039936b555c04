from __future__ import annotations

import math

from resume_tailor.core.scoring import get_scoring_value
from resume_tailor.features.score_suggestions import generate_suggestions
from resume_tailor.normalize.utils import casefold_key, dedupe_casefold
from resume_tailor.schemas import JobPosting, ResumeDocument, ScoreBreakdown, ScoreResult


def _setting(path: str, default: float) -> float:
    return float(get_scoring_value(f"ats_score.{path}", default))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def flatten_resume_text(resume: ResumeDocument | None) -> str:
    """Lower-cased text the scorer matches keywords against."""
    if resume is None:
        return ""
    parts: list[str] = [resume.summary]
    parts.extend(resume.skills)
    for category in resume.skill_categories:
        parts.extend(category.skills)
    for entry in resume.experience:
        parts.append(entry.title)
        parts.append(entry.company)
        parts.extend(entry.bullets)
    for entry in resume.education:
        parts.append(entry.degree)
        parts.append(entry.institution)
    parts.extend(resume.certifications)
    parts.extend(resume.core_competencies)
    return " ".join(part.strip() for part in parts if part and part.strip()).lower()


def candidate_keywords(posting: JobPosting | None) -> list[str]:
    """Required skills first, then general keywords, case-insensitively unique."""
    if posting is None:
        return []
    return dedupe_casefold([*posting.required_skills, *posting.extracted_keywords])


def score_resume_text(
    resume_text: str,
    posting: JobPosting | None,
    *,
    core_competency_count: int = 0,
    skill_category_count: int = 0,
) -> ScoreResult:
    text = (resume_text or "").lower()
    max_candidates = int(_setting("max_candidates", 25))
    candidates = candidate_keywords(posting)[:max_candidates]
    if not text.strip() or not candidates:
        return ScoreResult()

    matched = [keyword for keyword in candidates if keyword.lower() in text]
    missing = [keyword for keyword in candidates if keyword.lower() not in text]
    match_ratio = len(matched) / len(candidates)

    max_required = int(_setting("max_required", 15))
    required_subset = {casefold_key(skill) for skill in dedupe_casefold(posting.required_skills)[:max_required]}
    if required_subset:
        required_hits = sum(1 for keyword in matched if casefold_key(keyword) in required_subset)
        required_match_ratio = required_hits / len(required_subset)
    else:
        required_match_ratio = 0.0

    keyword_score = (
        match_ratio * _setting("weights.general", 0.4)
        + required_match_ratio * _setting("weights.required", 0.6)
    ) * _setting("keyword_points", 60)
    content_score = min(
        _setting("content.max_points", 20),
        len(text) / _setting("content.chars_per_point", 150),
    )
    if core_competency_count >= _setting("structure.min_core_competencies", 5):
        structure_bonus = _setting("structure.full_bonus", 10)
    else:
        structure_bonus = _setting("structure.base_bonus", 5)
    skill_category_bonus = _setting("skill_category_bonus", 5) if skill_category_count > 0 else 0.0

    total = min(100.0, keyword_score + content_score + structure_bonus + skill_category_bonus)
    return ScoreResult(
        score=max(0, _round_half_up(total)),
        matched_keywords=matched,
        missing_keywords=missing,
        breakdown=ScoreBreakdown(
            match_ratio=match_ratio,
            required_match_ratio=required_match_ratio,
            keyword_score=keyword_score,
            content_score=content_score,
            structure_bonus=structure_bonus,
            skill_category_bonus=skill_category_bonus,
        ),
    )


def score_resume(resume: ResumeDocument | None, posting: JobPosting | None) -> ScoreResult:
    if resume is None:
        return ScoreResult()
    populated_categories = sum(1 for category in resume.skill_categories if category.skills)
    text = flatten_resume_text(resume)
    result = score_resume_text(
        text,
        posting,
        core_competency_count=len(resume.core_competencies),
        skill_category_count=populated_categories,
    )
    return result.model_copy(update={"suggestions": generate_suggestions(resume, posting, result, text)})
