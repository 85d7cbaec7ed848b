"""Turns free-form model output into title/author fields.

Vision models wrap their answer in markdown fences, prose or commentary, so
parsing is two-tiered: a strict JSON read first, then independent regex
recovery of each quoted field. Parsing never fails; whatever cannot be found
comes back as an empty string.
"""

import json
import re
from typing import Any

from coverscan.processor.models import ExtractedMetadata

_TITLE_PATTERN = re.compile(r'"title":\s*"([^"]+)"')
_AUTHOR_PATTERN = re.compile(r'"author":\s*"([^"]+)"')


def parse_cover_metadata(raw: str) -> ExtractedMetadata:
    """Extract title and author from a model response. Total and pure."""
    parsed = _parse_strict(raw)
    if parsed is not None:
        return ExtractedMetadata(
            title=_as_text(parsed.get("title")),
            author=_as_text(parsed.get("author")),
        )
    return ExtractedMetadata(
        title=_search(_TITLE_PATTERN, raw),
        author=_search(_AUTHOR_PATTERN, raw),
    )


def _parse_strict(raw: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(_strip_code_fences(raw))
    except (ValueError, RecursionError):
        # JSONDecodeError is a ValueError; deep nesting exhausts the decoder stack
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def _strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned


def _as_text(value: Any) -> str:
    # null, numbers and nested objects all count as not detected
    return value if isinstance(value, str) else ""


def _search(pattern: re.Pattern[str], raw: str) -> str:
    match = pattern.search(raw)
    return match.group(1) if match else ""
