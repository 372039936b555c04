"""Bold impact verbs, metrics and job keywords in a tailored resume.

Highlighting is markup for display and export only. Scoring and keyword
analysis always run on the plain resume.
"""

from __future__ import annotations

import re
from typing import Sequence

from resume_tailor.core.scoring import get_scoring_value
from resume_tailor.normalize.utils import dedupe_casefold
from resume_tailor.schemas import JobPosting, ResumeDocument

OPEN_TAG = "<strong>"
CLOSE_TAG = "</strong>"

IMPACT_VERBS = (
    "achieved", "accelerated", "accomplished", "administered", "advanced",
    "boosted", "built", "championed", "collaborated", "consolidated",
    "created", "decreased", "delivered", "designed", "developed",
    "directed", "drove", "eliminated", "engineered", "enhanced",
    "established", "exceeded", "executed", "expanded", "generated",
    "grew", "implemented", "improved", "increased", "initiated",
    "introduced", "launched", "led", "managed", "maximized",
    "mentored", "negotiated", "optimized", "orchestrated", "outperformed",
    "pioneered", "produced", "reduced", "reengineered", "restructured",
    "revamped", "scaled", "simplified", "spearheaded", "streamlined",
    "strengthened", "succeeded", "surpassed", "transformed", "tripled",
)

_VERB_RE = re.compile(
    r"(?:^|(?<=[.;])\s*)(" + "|".join(IMPACT_VERBS) + r")\b",
    re.IGNORECASE,
)
_METRIC_PATTERNS = (
    re.compile(r"\d+%"),
    re.compile(r"\$[\d,.]+[KMB]?", re.IGNORECASE),
    re.compile(r"\b\d+x\b", re.IGNORECASE),
    re.compile(r"\d+\+"),
    re.compile(r"\b\d{2,}\+?\s*(?:users?|customers?|clients?|employees?|teams?|projects?|accounts?)\b", re.IGNORECASE),
)
_TAG_RE = re.compile(r"</?strong>", re.IGNORECASE)


def _setting(path: str, default: int) -> int:
    return int(get_scoring_value(f"highlighting.{path}", default))


def strip_highlight_tags(text: str) -> str:
    return _TAG_RE.sub("", text or "")


def _keyword_patterns(keywords: Sequence[str]) -> list[re.Pattern[str]]:
    min_chars = _setting("min_keyword_chars", 5)
    significant = [keyword for keyword in dedupe_casefold(keywords) if len(keyword.strip()) >= min_chars]
    return [
        re.compile(rf"(?<![A-Za-z0-9]){re.escape(keyword.strip())}(?![A-Za-z0-9])", re.IGNORECASE)
        for keyword in significant[: _setting("max_keywords", 15)]
    ]


def _merge_spans(spans: list[tuple[int, int]]) -> list[tuple[int, int]]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def _bold(text: str, patterns: Sequence[re.Pattern[str]]) -> str:
    plain = strip_highlight_tags(text)
    spans: list[tuple[int, int]] = [match.span(1) for match in _VERB_RE.finditer(plain)]
    for pattern in (*_METRIC_PATTERNS, *patterns):
        spans.extend(match.span() for match in pattern.finditer(plain))

    pieces: list[str] = []
    cursor = 0
    for start, end in _merge_spans([span for span in spans if span[1] > span[0]]):
        pieces.append(plain[cursor:start])
        pieces.append(f"{OPEN_TAG}{plain[start:end]}{CLOSE_TAG}")
        cursor = end
    pieces.append(plain[cursor:])
    return "".join(pieces)


def bold_keywords_in_text(text: str, keywords: Sequence[str] = ()) -> str:
    """Wrap impact verbs, metrics and significant keywords in ``<strong>`` tags.

    Overlapping matches share one tag pair, and existing tags are dropped
    first, so applying this twice gives the same string.
    """
    return _bold(text or "", _keyword_patterns(keywords))


def highlight_keywords(resume: ResumeDocument, posting: JobPosting | None) -> ResumeDocument:
    """Copy of ``resume`` with experience bullets and the summary highlighted."""
    keywords = [*posting.extracted_keywords, *posting.required_skills] if posting else []
    patterns = _keyword_patterns(keywords)
    return resume.model_copy(
        update={
            "summary": _bold(resume.summary, patterns) if resume.summary else resume.summary,
            "experience": [
                entry.model_copy(update={"bullets": [_bold(bullet, patterns) for bullet in entry.bullets]})
                for entry in resume.experience
            ],
        }
    )
