from .ats_scorer import candidate_keywords, flatten_resume_text, score_resume, score_resume_text
from .draft_payload import parse_draft_response
from .keyword_analysis import analyze_keywords, is_valid_competency
from .keyword_extractor import (
    build_job_posting,
    extract_company_name,
    extract_job_title,
    extract_keywords,
    is_valid_keyword,
)
from .keyword_highlighter import bold_keywords_in_text, highlight_keywords, strip_highlight_tags
from .reconciler import clean_resume, dedupe_categories, reconcile, reconcile_resume
from .score_suggestions import generate_suggestions

__all__ = [
    "extract_keywords",
    "extract_job_title",
    "extract_company_name",
    "build_job_posting",
    "is_valid_keyword",
    "candidate_keywords",
    "flatten_resume_text",
    "score_resume",
    "score_resume_text",
    "generate_suggestions",
    "analyze_keywords",
    "is_valid_competency",
    "bold_keywords_in_text",
    "highlight_keywords",
    "strip_highlight_tags",
    "parse_draft_response",
    "clean_resume",
    "dedupe_categories",
    "reconcile",
    "reconcile_resume",
]
