"""Merge a generated resume draft back onto the base resume.

The draft comes from a text-generation service and is untrusted: sections may
be missing, strings may stand in for lists and unknown keys show up. Every
step type-checks then coerces, and only a draft with no resume fields at all
is rejected.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Mapping
from functools import reduce
from typing import Any, Callable, Sequence, TypeVar

from pydantic import BaseModel

from resume_tailor.core.errors import MalformedDraftError
from resume_tailor.features.draft_payload import parse_draft_response
from resume_tailor.normalize.text import normalize_text
from resume_tailor.normalize.utils import casefold_key
from resume_tailor.schemas import (
    EducationEntry,
    ExperienceEntry,
    KeywordInsight,
    ProjectEntry,
    ResumeDocument,
    SkillCategory,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_NAME = "Technical Skills"
_CATCH_ALL_NAMES = {"technical skills", "skills"}
_MAX_OTHER_CATEGORIES = 3
_MISC_CATEGORY_RE = re.compile(
    r"^(?:tools|technical skills|technologies|other|other skills|additional skills|misc|miscellaneous"
    r"|tools\s*(?:&|and)\s*(?:platforms|technologies)|analytical\s*(?:&|and)\s*development tools)$",
    re.IGNORECASE,
)
_DRAFT_FIELDS = (
    ("experience",),
    ("education",),
    ("projects",),
    ("summary",),
    ("skills",),
    ("skillCategories", "skill_categories"),
    ("certifications",),
    ("coreCompetencies", "core_competencies"),
)

EntryT = TypeVar("EntryT", ExperienceEntry, EducationEntry, ProjectEntry)


def _skill_key(skill: str) -> str:
    return casefold_key(normalize_text(skill))


def _dedupe_skills(skills: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for skill in skills:
        key = _skill_key(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        output.append(skill)
    return output


def _coerce_skill_list(value: Any) -> list[str]:
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []
    skills = []
    for item in items:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        text = normalize_text(str(item)).strip()
        if text:
            skills.append(text)
    return skills


def _field(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _records(payload: Mapping[str, Any], *keys: str) -> list[Mapping[str, Any]]:
    value = _field(payload, *keys)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _load_draft(draft: Any) -> Mapping[str, Any]:
    if isinstance(draft, (str, bytes)):
        text = draft.decode("utf-8", errors="replace") if isinstance(draft, bytes) else draft
        draft = parse_draft_response(text)
    if isinstance(draft, BaseModel):
        draft = draft.model_dump(by_alias=True)
    if not isinstance(draft, Mapping):
        logger.info("reconcile_rejected reason=not_object type=%s", type(draft).__name__)
        raise MalformedDraftError()
    if not any(_field(draft, *keys) is not None for keys in _DRAFT_FIELDS):
        logger.info("reconcile_rejected reason=no_resume_fields keys=%s", len(draft))
        raise MalformedDraftError()
    return draft


# Entity matching


def _generated_id(prefix: str, seed: str, taken: set[str]) -> str:
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()
    candidate = f"{prefix}-{digest[:10]}"
    suffix = 2
    while candidate in taken:
        candidate = f"{prefix}-{digest[:10]}-{suffix}"
        suffix += 1
    return candidate


def _match_entries(
    drafts: Sequence[EntryT],
    bases: Sequence[EntryT],
    key_of: Callable[[EntryT], str],
) -> list[int | None]:
    """Index of the base entry each draft entry continues, or None for new entries.

    Name matches are assigned first so a positional fallback can never take a
    base entry that another draft entry matches by name. A draft entry naming a
    base entry that is already claimed is new, not a positional match.
    """
    matches: list[int | None] = [None] * len(drafts)
    used: set[int] = set()
    named: set[int] = set()
    base_keys = [casefold_key(key_of(base)) for base in bases]
    for draft_index, draft in enumerate(drafts):
        key = casefold_key(key_of(draft))
        if not key or key not in base_keys:
            continue
        named.add(draft_index)
        for base_index, base_key in enumerate(base_keys):
            if base_index not in used and base_key == key:
                matches[draft_index] = base_index
                used.add(base_index)
                break
    for draft_index in range(len(drafts)):
        if draft_index in named:
            continue
        if matches[draft_index] is None and draft_index < len(bases) and draft_index not in used:
            matches[draft_index] = draft_index
            used.add(draft_index)
    return matches


def _merge_value(draft_value: Any, base_value: Any, empty: Any) -> Any:
    if draft_value:
        return draft_value
    if base_value:
        return base_value
    return empty


def _merge_entry(draft: EntryT, base: EntryT | None) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for name in type(draft).model_fields:
        if name in {"id", "current"}:
            continue
        empty: Any = [] if isinstance(getattr(draft, name), list) else ""
        merged[name] = _merge_value(getattr(draft, name), getattr(base, name) if base else None, empty)
    return merged


def _reconcile_entries(
    raw_entries: list[Mapping[str, Any]],
    bases: Sequence[EntryT],
    model: type[EntryT],
    key_of: Callable[[EntryT], str],
    prefix: str,
) -> list[EntryT]:
    drafts = [model.model_validate(dict(raw)) for raw in raw_entries]
    if not drafts:
        drafts = [base.model_copy() for base in bases]
    matches = _match_entries(drafts, bases, key_of)

    taken = {base.id for base in bases if base.id}
    result: list[EntryT] = []
    assigned: set[str] = set()
    for index, (draft, match) in enumerate(zip(drafts, matches)):
        base = bases[match] if match is not None else None
        fields = _merge_entry(draft, base)
        entry_id = base.id if base is not None and base.id and base.id not in assigned else ""
        if not entry_id:
            seed = f"{prefix}|{index}|{casefold_key(key_of(draft))}"
            entry_id = _generated_id(prefix, seed, taken | assigned)
            logger.debug("reconcile_id_generated prefix=%s index=%s", prefix, index)
        assigned.add(entry_id)
        if model is ExperienceEntry:
            end_date = fields.get("end_date", "")
            if end_date:
                fields["current"] = "present" in end_date.lower()
            else:
                fields["current"] = draft.current or bool(base and base.current)
        result.append(model(id=entry_id, **fields))
    return result


# Skill categories


def _raw_categories(payload: Mapping[str, Any]) -> list[SkillCategory]:
    categories = []
    for raw in _records(payload, "skillCategories", "skill_categories"):
        name = _field(raw, "name", "category")
        name = normalize_text(name if isinstance(name, str) else "").strip().rstrip(":").strip()
        categories.append(SkillCategory(name=name, skills=_coerce_skill_list(raw.get("skills"))))
    return categories


def _drop_catch_all(categories: list[SkillCategory]) -> list[SkillCategory]:
    others = [category for category in categories if casefold_key(category.name) not in _CATCH_ALL_NAMES]
    if len(others) <= _MAX_OTHER_CATEGORIES:
        return categories
    if len(others) != len(categories):
        logger.debug(
            "reconcile_catch_all_dropped dropped=%s kept=%s",
            len(categories) - len(others),
            len(others),
        )
    return others


def _keep_first_occurrences(
    state: tuple[frozenset[str], tuple[SkillCategory, ...]],
    category: SkillCategory,
) -> tuple[frozenset[str], tuple[SkillCategory, ...]]:
    seen, kept = state
    unique: list[str] = []
    for skill in category.skills:
        key = _skill_key(skill)
        if not key or key in seen:
            continue
        seen = seen | {key}
        unique.append(skill)
    if not unique:
        return seen, kept
    return seen, (*kept, category.model_copy(update={"skills": unique}))


def dedupe_categories(categories: Sequence[SkillCategory]) -> list[SkillCategory]:
    """Keep the first occurrence of each skill across categories, dropping emptied ones."""
    _, kept = reduce(_keep_first_occurrences, categories, (frozenset(), ()))
    return list(kept)


def _backfill_base_skills(categories: list[SkillCategory], base_skills: Sequence[str]) -> list[SkillCategory]:
    present = {_skill_key(skill) for category in categories for skill in category.skills}
    missing = [skill for skill in _dedupe_skills(base_skills) if _skill_key(skill) not in present]
    if not missing:
        return categories

    logger.debug("reconcile_base_skills_backfilled count=%s", len(missing))
    for index, category in enumerate(categories):
        if _MISC_CATEGORY_RE.match(category.name.strip()):
            merged = _dedupe_skills([*category.skills, *missing])
            return [*categories[:index], category.model_copy(update={"skills": merged}), *categories[index + 1 :]]
    return [*categories, SkillCategory(name=DEFAULT_CATEGORY_NAME, skills=missing)]


def reconcile_skill_categories(payload: Mapping[str, Any], base_skills: Sequence[str]) -> list[SkillCategory]:
    categories = _drop_catch_all(_raw_categories(payload))
    categories = [category for category in categories if category.skills]
    categories = dedupe_categories(categories)
    categories = _backfill_base_skills(categories, base_skills)
    categories = [category for category in categories if category.skills]
    base_flat = _dedupe_skills([skill.strip() for skill in base_skills])
    if not categories and base_flat:
        logger.debug("reconcile_safety_net_category skills=%s", len(base_flat))
        categories = [SkillCategory(name=DEFAULT_CATEGORY_NAME, skills=base_flat)]
    return categories


# Text cleanup


def _clean_list(values: Sequence[str]) -> list[str]:
    return [normalize_text(value) for value in values]


def clean_resume(resume: ResumeDocument) -> ResumeDocument:
    """Run every free-text field through the text normalizer."""
    return resume.model_copy(
        update={
            "summary": normalize_text(resume.summary),
            "core_competencies": _clean_list(resume.core_competencies),
            "experience": [
                entry.model_copy(
                    update={
                        "title": normalize_text(entry.title),
                        "company": normalize_text(entry.company),
                        "location": normalize_text(entry.location),
                        "bullets": _clean_list(entry.bullets),
                    }
                )
                for entry in resume.experience
            ],
            "education": [
                entry.model_copy(
                    update={
                        "degree": normalize_text(entry.degree),
                        "institution": normalize_text(entry.institution),
                    }
                )
                for entry in resume.education
            ],
            "projects": [
                entry.model_copy(
                    update={
                        "name": normalize_text(entry.name),
                        "description": normalize_text(entry.description),
                        "bullets": _clean_list(entry.bullets),
                    }
                )
                for entry in resume.projects
            ],
            "skills": _clean_list(resume.skills),
            "skill_categories": [
                category.model_copy(
                    update={"name": normalize_text(category.name), "skills": _clean_list(category.skills)}
                )
                for category in resume.skill_categories
            ],
            "certifications": _clean_list(resume.certifications),
            "keyword_insights": [
                KeywordInsight(
                    keyword=normalize_text(insight.keyword),
                    section=normalize_text(insight.section),
                    context=normalize_text(insight.context),
                )
                for insight in resume.keyword_insights
            ],
        }
    )


def _text_list(payload: Mapping[str, Any], *keys: str, separator: str | None = ",") -> list[str]:
    """String values split on ``separator``, or on line breaks when it is ``None``."""
    value = _field(payload, *keys)
    if isinstance(value, str):
        value = value.split(separator) if separator else value.splitlines()
    if not isinstance(value, list):
        return []
    return [
        str(item).strip()
        for item in value
        if isinstance(item, (str, int, float)) and not isinstance(item, bool) and str(item).strip()
    ]


def reconcile(base: ResumeDocument | Mapping[str, Any] | None, draft: Any) -> ResumeDocument:
    """Reconcile a generated draft against the base resume.

    Raises ``MalformedDraftError`` when the draft is not an object or carries
    no resume fields. Every other irregularity is repaired.
    """
    payload = _load_draft(draft)
    if base is None:
        base = ResumeDocument()
    elif not isinstance(base, ResumeDocument):
        base = ResumeDocument.model_validate(base)

    experience = _reconcile_entries(
        _records(payload, "experience"), base.experience, ExperienceEntry, lambda entry: entry.company, "exp"
    )
    education = _reconcile_entries(
        _records(payload, "education"), base.education, EducationEntry, lambda entry: entry.institution, "edu"
    )
    projects = _reconcile_entries(
        _records(payload, "projects"), base.projects, ProjectEntry, lambda entry: entry.name, "proj"
    )

    categories = reconcile_skill_categories(payload, base.skills)
    skills = _dedupe_skills(
        [
            *(skill.strip() for skill in base.skills),
            *_coerce_skill_list(payload.get("skills")),
            *(skill for category in categories for skill in category.skills),
        ]
    )

    summary = payload.get("summary")
    insights = [
        KeywordInsight.model_validate(dict(raw))
        for raw in _records(payload, "keywordInsights", "keyword_insights")
    ]
    reconciled = ResumeDocument(
        personal=base.personal,
        summary=summary.strip() if isinstance(summary, str) and summary.strip() else base.summary,
        core_competencies=_text_list(payload, "coreCompetencies", "core_competencies") or list(base.core_competencies),
        experience=experience,
        education=education,
        projects=projects,
        skills=skills,
        skill_categories=categories,
        certifications=_text_list(payload, "certifications", separator=None) or list(base.certifications),
        keyword_insights=insights,
    )
    logger.debug(
        "reconcile_completed experience=%s education=%s projects=%s categories=%s skills=%s",
        len(experience),
        len(education),
        len(projects),
        len(categories),
        len(skills),
    )
    return clean_resume(reconciled)


reconcile_resume = reconcile
