from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator

from resume_tailor.core.scoring import get_scoring_value
from resume_tailor.normalize.text import normalize_text
from resume_tailor.normalize.utils import (
    casefold_key,
    contains_any,
    enumerate_lines,
    normalize_line,
    split_segments,
    strip_bullet_prefix,
)
from resume_tailor.schemas import ExtractedKeywords, JobPosting
from resume_tailor.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

_REQUIRED_MARKERS = (
    "required",
    "requirement",
    "must have",
    "must-have",
    "qualification",
    "you have",
    "what you'll need",
    "what you will need",
    "what we're looking for",
    "what we are looking for",
    "essential",
    "proficiency in",
    "proficient in",
    "experience with",
    "knowledge of",
    "the ideal candidate",
)
_NICE_MARKERS = ("nice to have", "nice-to-have", "preferred", "bonus", "a plus", "desirable")
_REQUIREMENT_HEADERS = (
    "requirements",
    "requirement",
    "qualifications",
    "minimum qualifications",
    "basic qualifications",
    "required skills",
    "must have",
    "must-have",
    "what you'll need",
    "what you will need",
    "what we're looking for",
    "what we are looking for",
    "who you are",
    "essential",
)
_SECTION_END_HEADERS = (
    "responsibilities",
    "key responsibilities",
    "what you'll do",
    "what you will do",
    "about us",
    "about the role",
    "benefits",
    "what we offer",
    "perks",
    "compensation",
)
_LIST_LABEL_HINTS = ("skill", "stack", "tools", "technologies", "tech")

_ACRONYM_RE = re.compile(r"(?<![A-Za-z0-9])[A-Z][A-Z0-9]{1,}(?:/[A-Z]{2,})?(?![A-Za-z0-9])")
_STOP_ACRONYMS = {
    "US", "USA", "EU", "UK", "EOE", "HQ", "PTO", "FAQ", "CEO", "CTO", "CFO", "VP", "OR", "AND",
    "THE", "WE", "YOU", "OUR", "NYC", "SF", "II", "III", "IV", "TBD", "ASAP", "FTE", "OTE",
}
_YEARS_RE = re.compile(r"\d+\s*(?:\+|years?|yrs?)|years?\s*(?:of\s*)?(?:experience|exp)", re.IGNORECASE)
_LIST_SPLIT_RE = re.compile(r",|\s+and\s+|\s+or\s+|\s*&\s*", re.IGNORECASE)
_JOB_TITLE_RE = re.compile(
    r"\b(specialist|manager|director|coordinator|analyst|engineer|lead|officer|associate|consultant|administrator|developer)s?\b",
    re.IGNORECASE,
)
_ALLOWED_TITLE_PHRASES = {
    "project management",
    "change management",
    "risk management",
    "data management",
    "lead generation",
}
_LEVEL_PREFIX_RE = re.compile(r"^(sr|jr|junior|senior|mid|entry|principal|staff)\b\.?\s", re.IGNORECASE)
_LEADING_FILLER_RE = re.compile(r"^(the|a|an|at|in|on|for|to|of|and|or|with|including)\s", re.IGNORECASE)

_SHORT_WHITELIST = {
    "sql", "aws", "gcp", "etl", "api", "ml", "ai", "nlp", "rag", "css", "php", "seo", "sem",
    "ppc", "crm", "erp", "sap", "rpa", "fda", "gxp", "gmp", "glp", "cmc", "sop", "cad", "plc",
    "sox", "cpa", "cfa", "pmp", "kyc", "aml", "roi", "iso", "cnn", "rnn", "gan", "dnn", "gpt",
    "llm", "ner", "asr", "tts", "ocr", "dbt", "sre", "go", "r", "c", "c#", "c++", "qa", "ux", "ui",
}
_GARBAGE_WORDS = {
    "what", "how", "why", "when", "where", "who", "which",
    "you", "your", "our", "their", "my", "we", "us",
    "the", "this", "that", "these", "those",
    "will", "can", "may", "should", "would", "could", "must",
    "expect", "offer", "provide", "looking", "seeking", "hiring",
    "company", "corporation", "inc", "llc", "corp",
    "background", "qualifications", "requirements", "responsibilities",
    "bachelor", "master", "degree", "education", "university", "college",
    "experience", "knowledge", "ability", "strong", "excellent", "familiarity",
}
_GENERIC_BLACKLIST = {
    "qualification", "compensation", "benefits", "salary", "recruiting", "recruitment",
    "onboarding", "retention", "logistics", "operations", "duties", "tasks", "environment",
    "culture", "values", "mission", "vision", "opportunity", "opportunities", "growth",
    "career", "position", "team", "teams", "department", "organization", "workplace",
    "performance", "reviews", "feedback", "goals", "objectives", "travel", "remote",
    "hybrid", "onsite", "location", "candidate", "applicant", "employee", "employer", "staff",
    "innovation", "creativity", "leadership", "collaboration", "teamwork", "communication",
    "presentation", "negotiation", "mentoring", "coaching", "flexibility", "adaptability",
    "resilience", "integrity", "professionalism", "accountability", "ownership", "initiative",
    "proactive", "organized", "prioritization", "multitasking", "patience", "empathy",
    "persuasion", "influence", "diplomacy", "excel", "word", "powerpoint", "outlook",
    "manufacturing", "automation", "safety", "maintenance", "reliability", "environmental",
    "diversity", "inclusion", "procurement", "skills", "tools", "technologies",
}

_TITLE_PATTERNS = (
    re.compile(r"(?:position|role|title|job)\s*:\s*([^\n]+)", re.IGNORECASE),
    re.compile(
        r"(?:hiring|seeking|looking for)\s+(?:an?\s+)?([^\n,.]+?)(?=\s+(?:to|who|with|in|at)\b|[\n,.]|$)",
        re.IGNORECASE,
    ),
    re.compile(
        r"^([A-Z][A-Za-z ]+(?:Engineer|Developer|Manager|Analyst|Architect|Lead|Director|Specialist"
        r"|Scientist|Designer|Officer|Coordinator|Associate|Consultant))",
        re.MULTILINE,
    ),
)
_COMPANY_PATTERNS = (
    re.compile(r"(?:company|organization|employer)\s*:\s*([^\n,]+)", re.IGNORECASE),
    re.compile(r"^([A-Z][A-Za-z&.]+(?:\s+[A-Z][A-Za-z&.]+){0,3})\s+is\s", re.MULTILINE),
    re.compile(r"\b(?:about|join)\s+([A-Z][A-Za-z&.]+(?:\s+[A-Z][A-Za-z&.]+){0,3})"),
)
_COMPANY_STOP_WORDS = {"this", "it", "there", "here", "that", "what", "who", "our", "the", "we", "you", "us"}


@dataclass(slots=True)
class _TermStats:
    display: str
    first_position: int
    salience: int = 0
    required: bool = False


def _extraction_setting(name: str, default: int) -> int:
    return int(get_scoring_value(f"extraction.{name}", default))


def _term_pattern(term: str) -> str:
    pieces: list[str] = []
    for char in term:
        if char == " ":
            pieces.append(r"[\s-]+")
        elif char == "-":
            pieces.append(r"[\s-]?")
        else:
            pieces.append(re.escape(char))
    return "".join(pieces)


@lru_cache(maxsize=4)
def _catalog_regex(terms: tuple[str, ...]) -> re.Pattern[str]:
    ordered = sorted(terms, key=lambda term: (-len(term), term))
    alternation = "|".join(_term_pattern(term) for term in ordered)
    return re.compile(rf"(?<![A-Za-z0-9])(?:{alternation})(?![A-Za-z0-9+#])", re.IGNORECASE)


def _header_kind(line: str) -> str | None:
    label, _, rest = line.partition(":")
    if rest.strip():
        return None
    header = label.strip().lower()
    if not header or len(header.split()) > 5:
        return None
    if contains_any(header, _NICE_MARKERS):
        return "end"
    if any(header.startswith(item) for item in _REQUIREMENT_HEADERS):
        return "required"
    if any(header.startswith(item) for item in _SECTION_END_HEADERS):
        return "end"
    return None


def _segment_is_required(segment: str, in_required_section: bool) -> bool:
    if contains_any(segment, _NICE_MARKERS):
        return False
    return in_required_section or contains_any(segment, _REQUIRED_MARKERS)


def _iter_segments(text: str) -> Iterator[tuple[str, bool]]:
    in_required_section = False
    for _, raw_line in enumerate_lines(text):
        stripped = normalize_line(raw_line)
        if not stripped:
            in_required_section = False
            continue
        header = _header_kind(strip_bullet_prefix(stripped) or stripped)
        if header == "required":
            in_required_section = True
            continue
        if header == "end":
            in_required_section = False
            continue
        content = strip_bullet_prefix(stripped) or stripped
        for segment in split_segments(content):
            yield segment, _segment_is_required(segment, in_required_section)


def _is_shouting(segment: str) -> bool:
    letters = [char for char in segment if char.isalpha()]
    if len(segment.split()) <= 3 or not letters:
        return False
    return sum(1 for char in letters if char.isupper()) / len(letters) > 0.8


def is_valid_keyword(term: str, *, known_terms: frozenset[str] = frozenset()) -> bool:
    lower = normalize_line(term).lower()
    if not lower:
        return False
    if len(lower) > _extraction_setting("max_phrase_chars", 40):
        return False
    words = lower.split()
    if len(words) > _extraction_setting("max_phrase_words", 4):
        return False
    if _YEARS_RE.search(lower) or lower.isdigit():
        return False
    if len(words) == 1 and len(lower) < 4:
        written_in_caps = term.strip().isupper() and len(lower) >= 2
        if lower not in _SHORT_WHITELIST and lower not in known_terms and not written_in_caps:
            return False
    if any(word.strip(".,;:()") in _GARBAGE_WORDS for word in words):
        return False
    if lower in _GENERIC_BLACKLIST:
        return False
    if _JOB_TITLE_RE.search(lower) and lower not in _ALLOWED_TITLE_PHRASES:
        return False
    if _LEVEL_PREFIX_RE.match(lower) or _LEADING_FILLER_RE.match(lower):
        return False
    return True


def _list_items(segment: str) -> list[str]:
    label, sep, rest = segment.rpartition(":")
    body = rest if sep else segment
    items: list[str] = []
    for part in _LIST_SPLIT_RE.split(body):
        item = strip_bullet_prefix(part.strip()).strip(" .;()[]")
        if item:
            items.append(normalize_line(item))
    if not sep and len(items) < 2:
        return []
    return items


def _collects_list_items(segment: str, required: bool) -> bool:
    if required or contains_any(segment, _NICE_MARKERS):
        return True
    label, sep, _ = segment.partition(":")
    return bool(sep) and contains_any(label, _LIST_LABEL_HINTS)


def _segment_candidates(
    segment: str,
    *,
    required: bool,
    catalog: re.Pattern[str],
    known_terms: frozenset[str],
) -> list[str]:
    found: list[tuple[int, str]] = []
    covered: list[tuple[int, int]] = []

    for match in catalog.finditer(segment):
        found.append((match.start(), match.group(0)))
        covered.append(match.span())

    shouting = _is_shouting(segment)
    if not shouting:
        for match in _ACRONYM_RE.finditer(segment):
            if match.group(0) in _STOP_ACRONYMS:
                continue
            if any(start <= match.start() < end for start, end in covered):
                continue
            found.append((match.start(), match.group(0)))

    if _collects_list_items(segment, required):
        lowered_segment = segment.lower()
        for item in _list_items(segment):
            if catalog.search(item) or (not shouting and _ACRONYM_RE.search(item)):
                continue
            position = lowered_segment.find(item.lower())
            found.append((position if position >= 0 else len(segment), item))

    found.sort(key=lambda entry: entry[0])
    return [term for _, term in found if is_valid_keyword(term, known_terms=known_terms)]


def extract_keywords(
    job_text: str,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> ExtractedKeywords:
    """Rank required skills and general keywords found in a job posting.

    Output is a pure function of ``job_text``: the same text always yields the
    same lists in the same order.
    """
    text = job_text or ""
    if len(text.strip()) < _extraction_setting("min_text_chars", 20):
        return ExtractedKeywords()

    provider = taxonomy_provider or get_default_taxonomy_provider()
    terms = provider.skill_terms()
    known_terms = frozenset(terms) | frozenset(provider.acronyms())
    catalog = _catalog_regex(terms)
    required_weight = _extraction_setting("weights.required", 3)
    general_weight = _extraction_setting("weights.general", 1)

    stats: dict[str, _TermStats] = {}
    position = 0
    for segment, required in _iter_segments(text):
        seen_in_segment: set[str] = set()
        for term in _segment_candidates(segment, required=required, catalog=catalog, known_terms=known_terms):
            key = casefold_key(normalize_text(term))
            if key in seen_in_segment:
                continue
            seen_in_segment.add(key)
            entry = stats.get(key)
            if entry is None:
                entry = _TermStats(display=normalize_text(normalize_line(term)), first_position=position)
                stats[key] = entry
            entry.salience += required_weight if required else general_weight
            entry.required = entry.required or required
            position += 1

    ranked = sorted(stats.values(), key=lambda item: (-item.salience, item.first_position))
    required_skills = [item.display for item in ranked if item.required]
    keywords = [item.display for item in ranked if not item.required]
    return ExtractedKeywords(
        required_skills=required_skills[: _extraction_setting("max_required_skills", 25)],
        extracted_keywords=keywords[: _extraction_setting("max_keywords", 40)],
    )


def _clean_label(value: str) -> str:
    cleaned = re.sub(r"[^\w\s&.]", "", value)
    return normalize_line(cleaned)[:80].strip(" .")


def extract_job_title(job_text: str) -> str:
    for pattern in _TITLE_PATTERNS:
        match = pattern.search(job_text or "")
        if match:
            title = _clean_label(match.group(1))
            if title:
                return title
    return "Position"


def extract_company_name(job_text: str) -> str:
    for pattern in _COMPANY_PATTERNS:
        for match in pattern.finditer(job_text or ""):
            company = _clean_label(match.group(1))
            if company and company.split()[0].lower() not in _COMPANY_STOP_WORDS:
                return company
    return "Company"


def build_job_posting(
    job_text: str,
    *,
    title: str | None = None,
    company_name: str | None = None,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> JobPosting:
    extracted = extract_keywords(job_text, taxonomy_provider=taxonomy_provider)
    return JobPosting(
        title=(title or "").strip() or extract_job_title(job_text),
        company_name=(company_name or "").strip() or extract_company_name(job_text),
        text=job_text or "",
        required_skills=extracted.required_skills,
        extracted_keywords=extracted.extracted_keywords,
    )
