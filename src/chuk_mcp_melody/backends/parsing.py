"""
Parsing of model replies into raw note records.

Model replies are untrusted text. The note array is taken from the first
'[' to the last ']', which tolerates commentary and code fences around
it. Field values are not checked here; the validator repairs them.
"""

from __future__ import annotations

import json
from typing import Any

from chuk_mcp_melody.constants import ErrorMessages
from chuk_mcp_melody.errors import MalformedOutputError


def extract_json_array(text: str) -> str:
    """
    Get the JSON-array-shaped substring of a reply.

    Raises:
        MalformedOutputError: If the text holds no '[' ... ']' span
    """
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise MalformedOutputError(ErrorMessages.MALFORMED_OUTPUT)
    return text[start : end + 1]


def parse_note_records(text: str) -> list[dict[str, Any]]:
    """
    Parse a reply into a list of note-like records.

    Raises:
        MalformedOutputError: If the array cannot be decoded, or is not a
            list of objects
    """
    candidate = extract_json_array(text)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"{ErrorMessages.MALFORMED_OUTPUT}: {exc}") from exc

    if not isinstance(parsed, list):
        raise MalformedOutputError(ErrorMessages.MALFORMED_OUTPUT)
    for index, record in enumerate(parsed):
        if not isinstance(record, dict):
            raise MalformedOutputError(
                f"{ErrorMessages.MALFORMED_OUTPUT}: note[{index}] is not an object"
            )
    return parsed


def summarize_text(text: str, limit: int = 120) -> str:
    """Shorten text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"
