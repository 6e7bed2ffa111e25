"""Lenient JSON parsing for chat-model output.

Models asked for JSON still wrap it in markdown fences, prepend chatter, or
leak raw control characters into strings.  :func:`parse_ai_json` peels those
layers off one at a time before giving up.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from convaudit.analysis.errors import AnalysisError

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F]")


def _extract_fenced_json(content: str) -> str | None:
    """Return the body of the first ```json (or bare ```) fence, if any."""
    lines = content.splitlines()
    start_idx = None
    for idx, line in enumerate(lines):
        if line.strip().startswith("```"):
            start_idx = idx + 1
            break
    if start_idx is None:
        return None
    for idx in range(start_idx, len(lines)):
        if lines[idx].strip().startswith("```"):
            snippet = "\n".join(lines[start_idx:idx]).strip()
            return snippet or None
    return None


def _outer_braces(content: str) -> str | None:
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return content[start : end + 1]


def parse_ai_json(content: str) -> dict[str, Any]:
    """Parse a JSON object out of *content*.

    Tries, in order: the fenced block (or the whole text), the outermost
    ``{...}`` slice, and that slice with control characters removed.

    Raises:
        AnalysisError: If no attempt produces a JSON object.
    """
    cleaned = (content or "").strip()
    cleaned = _extract_fenced_json(cleaned) or cleaned

    candidates = [cleaned]
    sliced = _outer_braces(cleaned)
    if sliced is not None:
        candidates.append(sliced)
        candidates.append(_CONTROL_CHARS.sub("", sliced))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.error("[analyze] Unparseable model output: %.200s", cleaned)
    raise AnalysisError("AI returned invalid JSON format")
