from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+(?=[A-Z0-9])|;\s*")


def enumerate_lines(text: str) -> list[tuple[int, str]]:
    return [(index + 1, line) for index, line in enumerate(text.splitlines())]


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line or "").strip()


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def split_segments(line: str) -> list[str]:
    """Split one line into sentence and clause segments."""
    parts = _SENTENCE_SPLIT_RE.split(line)
    return [part.strip() for part in parts if part and part.strip()]


def casefold_key(value: str) -> str:
    return normalize_line(value).casefold()


def dedupe_casefold(values: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        key = casefold_key(value)
        if not key or key in seen:
            continue
        seen.add(key)
        output.append(value)
    return output
