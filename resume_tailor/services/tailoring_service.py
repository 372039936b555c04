from __future__ import annotations

import logging
from typing import Any

from resume_tailor.core.config import settings
from resume_tailor.core.errors import InsufficientInputError
from resume_tailor.features.ats_scorer import flatten_resume_text, score_resume
from resume_tailor.features.keyword_analysis import analyze_keywords
from resume_tailor.features.keyword_extractor import build_job_posting
from resume_tailor.features.keyword_highlighter import highlight_keywords
from resume_tailor.features.reconciler import reconcile
from resume_tailor.schemas import JobPosting, ResumeDocument, ScoreResult, TailoringResult

logger = logging.getLogger(__name__)


def ensure_scorable(job_text: str | None, resume_text: str | None) -> None:
    job_chars = len((job_text or "").strip())
    resume_chars = len((resume_text or "").strip())
    if job_chars < settings.min_job_text_chars:
        raise InsufficientInputError("Job description is too short to score.")
    if resume_chars < settings.min_resume_text_chars:
        raise InsufficientInputError("Resume is too short to score.")


def _as_posting(posting: JobPosting | str) -> JobPosting:
    if isinstance(posting, JobPosting):
        return posting
    return build_job_posting(posting or "")


def preview_score(job_text: str | None, resume: ResumeDocument | None) -> ScoreResult | None:
    """Live match score for the editor; ``None`` means no score is available yet."""
    resume_text = flatten_resume_text(resume)
    try:
        ensure_scorable(job_text, resume_text)
    except InsufficientInputError as exc:
        logger.debug(
            "preview_score_skipped reason=%s job_chars=%s resume_chars=%s",
            exc.code,
            len((job_text or "").strip()),
            len(resume_text),
        )
        return None

    posting = build_job_posting(job_text or "")
    result = score_resume(resume, posting)
    logger.info(
        "preview_score_computed score=%s matched=%s missing=%s",
        result.score,
        len(result.matched_keywords),
        len(result.missing_keywords),
    )
    return result


def finalize_tailoring(
    base: ResumeDocument,
    posting: JobPosting | str,
    draft: Any,
) -> TailoringResult:
    """Score the base, reconcile the draft onto it and score the result.

    The highlighted copy is built from the plain tailored resume after scoring.

    ``MalformedDraftError`` from the reconciler propagates unchanged.
    """
    job = _as_posting(posting)
    before = score_resume(base, job)
    tailored = reconcile(base, draft)

    analysis = analyze_keywords(tailored, job)
    if not tailored.core_competencies and analysis.suggested_competencies:
        tailored = tailored.model_copy(update={"core_competencies": list(analysis.suggested_competencies)})

    after = score_resume(tailored, job)
    logger.info(
        "tailoring_finalized before=%s after=%s categories=%s skills=%s",
        before.score,
        after.score,
        len(tailored.skill_categories),
        len(tailored.skills),
    )
    return TailoringResult(
        resume=tailored,
        keyword_analysis=analysis,
        before=before,
        after=after,
        highlighted_resume=highlight_keywords(tailored, job),
    )
