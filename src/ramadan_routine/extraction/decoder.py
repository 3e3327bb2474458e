"""Decoding of recognition-service replies into row dicts.

Chat models wrap JSON in markdown fences, prepend prose ("Here is the
table:"), or occasionally return ``{"rows": [...]}`` instead of a bare array.
``decode`` tolerates all of these and fails loudly on anything else.
"""

import json
import logging
import re

from ramadan_routine.extraction.errors import EmptyResponse, MalformedResponse

logger = logging.getLogger(__name__)

# Opening fence with optional language tag, e.g. "```json"
_LEADING_FENCE_RE = re.compile(r"^```[\w+-]*\s*")
_TRAILING_FENCE_RE = re.compile(r"\s*```\s*$")


def strip_fences(raw_text: str) -> str:
    """Remove a leading code fence (with optional language tag) and a trailing fence, then trim."""
    content = raw_text.strip()
    content = _LEADING_FENCE_RE.sub("", content)
    content = _TRAILING_FENCE_RE.sub("", content)
    return content.strip()


def _rows_object(content: str) -> list | None:
    """Return the ``rows`` array if *content* is a JSON object carrying one, else None."""
    if not content.startswith("{"):
        return None
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        return None
    if isinstance(parsed, dict) and isinstance(parsed.get("rows"), list):
        return parsed["rows"]
    return None


def _coerce_rows(items: list, payload: str) -> list[dict[str, str]]:
    """Check every element is an object and stringify its keys and values."""
    rows: list[dict[str, str]] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise MalformedResponse(f"Element {i} of the array is {type(item).__name__}, expected an object", payload)
        rows.append({str(key): "" if value is None else str(value) for key, value in item.items()})
    return rows


def decode(raw_text: str | None) -> list[dict[str, str]]:
    """Extract the JSON array of row objects from a recognition-service reply.

    Raises EmptyResponse for blank input and MalformedResponse (carrying an
    excerpt of the offending text) when no array can be located or parsed.
    """
    if raw_text is None or not raw_text.strip():
        raise EmptyResponse("Recognition service returned empty content")

    content = strip_fences(raw_text)

    wrapped = _rows_object(content)
    if wrapped is not None:
        logger.debug("Decoded %d rows from a {\"rows\": [...]} object", len(wrapped))
        return _coerce_rows(wrapped, content)

    # Slice from the first "[" to the last "]" in case prose surrounds the array
    start = content.find("[")
    end = content.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise MalformedResponse("Could not locate JSON array in response", content)
    snippet = content[start : end + 1]

    try:
        parsed = json.loads(snippet)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"JSON parse failed: {exc}", snippet) from exc

    if not isinstance(parsed, list):
        raise MalformedResponse(f"Expected a JSON array, got {type(parsed).__name__}", snippet)

    rows = _coerce_rows(parsed, snippet)
    logger.debug("Decoded %d rows", len(rows))
    return rows
