from __future__ import annotations

import json
import logging
import re
from typing import Any

from resume_tailor.core.errors import MalformedDraftError

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json|JSON)?")
_TRUNCATED_MESSAGE = "The generated resume was cut off before it finished. Please regenerate and try again."


def _strip_code_fences(text: str) -> str:
    return _CODE_FENCE_RE.sub("", text).strip()


def parse_draft_response(raw_text: Any) -> dict[str, Any]:
    """Pull the JSON object out of raw text-generation output.

    Generation output often wraps the object in prose or Markdown fences, so
    everything between the first ``{`` and the last ``}`` is decoded.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise MalformedDraftError()

    content = _strip_code_fences(raw_text)
    start = content.find("{")
    end = content.rfind("}")
    if start == -1:
        logger.info("draft_parse_failed reason=no_object chars=%s", len(content))
        raise MalformedDraftError()
    if end < start:
        logger.info("draft_parse_failed reason=truncated chars=%s", len(content))
        raise MalformedDraftError(_TRUNCATED_MESSAGE)

    candidate = content[start : end + 1]
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        truncated = exc.pos >= len(candidate) - 1
        logger.info(
            "draft_parse_failed reason=%s pos=%s chars=%s",
            "truncated" if truncated else "invalid_json",
            exc.pos,
            len(candidate),
        )
        raise MalformedDraftError(_TRUNCATED_MESSAGE if truncated else None) from exc

    if not isinstance(parsed, dict):
        raise MalformedDraftError()
    return parsed
