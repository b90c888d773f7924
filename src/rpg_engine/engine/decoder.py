"""Structured-change decoder.

Turns the raw STATE_CHANGES text into a DecodedChanges record. The
strict path is a JSON parse after removing trailing commas and any
markdown code fence; when that fails the per-field regex recovery in
``rpg_engine.engine.recovery`` takes over. Decoding never raises.
"""

from __future__ import annotations

import json
import re
from typing import Any

from rpg_engine.core.logging import get_logger
from rpg_engine.engine.recovery import recover_fields
from rpg_engine.models.changes import DecodedChanges


logger = get_logger(__name__)


_TRAILING_COMMA_OBJECT = re.compile(r",\s*}")
_TRAILING_COMMA_ARRAY = re.compile(r",\s*]")

_json_decoder = json.JSONDecoder()


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around a JSON payload.

    Args:
        text: Raw text, possibly starting with ```json.

    Returns:
        The text inside the fence, or the input unchanged.
    """
    text = text.strip()
    if not text.startswith("```"):
        return text

    lines = text.split("\n")
    lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def remove_trailing_commas(text: str) -> str:
    """Remove commas directly before a closing brace or bracket."""
    text = _TRAILING_COMMA_OBJECT.sub("}", text)
    return _TRAILING_COMMA_ARRAY.sub("]", text)


def parse_strict(text: str) -> Any:
    """Parse the first JSON value in the text after cosmetic repair.

    Trailing prose after the JSON value is ignored.

    Raises:
        json.JSONDecodeError: If no JSON value can be parsed.
        ValueError: If an integer exceeds the interpreter's digit limit.
        RecursionError: If the value is nested too deeply.
    """
    cleaned = remove_trailing_commas(strip_code_fence(text))
    start = cleaned.find("{")
    if start == -1:
        return json.loads(cleaned)
    value, _ = _json_decoder.raw_decode(cleaned, start)
    return value


def decode_state_changes(text: str) -> DecodedChanges:
    """Decode the state-changes section of a reply.

    Args:
        text: Raw text following the STATE_CHANGES marker.

    Returns:
        The decoded change record; empty when nothing is recoverable.
    """
    if not text or not text.strip():
        return DecodedChanges.empty()

    try:
        data = parse_strict(text)
    except (ValueError, RecursionError) as exc:
        logger.warning(
            "State changes are not valid JSON, recovering fields",
            error=str(exc),
            preview=text[:200],
        )
        data = recover_fields(text)

    return DecodedChanges.from_mapping(data)


__all__ = [
    "decode_state_changes",
    "parse_strict",
    "remove_trailing_commas",
    "strip_code_fence",
]
