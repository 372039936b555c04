from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from resume_tailor.taxonomy import get_default_taxonomy_provider

_DASH_RE = re.compile("[—–]")


@lru_cache(maxsize=1)
def _acronym_pattern() -> tuple[re.Pattern[str], dict[str, str]]:
    acronyms = get_default_taxonomy_provider().acronyms()
    # Longest keys first so "vue.js" wins over "vue" inside one alternation.
    keys = sorted(acronyms, key=lambda key: (-len(key), key))
    alternation = "|".join(re.escape(key) for key in keys)
    pattern = re.compile(rf"(?<![A-Za-z0-9])(?:{alternation})(?![A-Za-z0-9])", re.IGNORECASE)
    return pattern, acronyms


def replace_dashes(text: str) -> str:
    return _DASH_RE.sub("-", text)


def normalize_acronyms(text: str) -> str:
    if not text:
        return ""
    pattern, acronyms = _acronym_pattern()
    return pattern.sub(lambda match: acronyms.get(match.group(0).lower(), match.group(0)), text)


def normalize_text(text: Any) -> str:
    """Replace em/en dashes with hyphens and fix acronym casing.

    Total over any input: ``None`` and non-strings become ``""`` and ``str(value)``.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return normalize_acronyms(replace_dashes(text))


def capitalize_with_acronyms(text: str) -> str:
    if not text:
        return ""
    return normalize_acronyms(text[0].upper() + text[1:])
