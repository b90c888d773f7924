"""Text extractor: split a model reply into narrative and state changes.

Replies are expected to look like::

    NARRATIVE: You step into the clearing...
    STATE_CHANGES: {"experience": 5}

Neither marker is required. Without a NARRATIVE marker the whole reply
is the narrative; without a STATE_CHANGES marker the change text is empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rpg_engine.core.constants import NARRATIVE_MARKER, STATE_CHANGES_MARKER


_NARRATIVE_SECTION = re.compile(
    re.escape(NARRATIVE_MARKER) + r"(.*?)(?=" + re.escape(STATE_CHANGES_MARKER) + r"|\Z)",
    re.DOTALL,
)
_STATE_CHANGES_SECTION = re.compile(re.escape(STATE_CHANGES_MARKER) + r"(.*)", re.DOTALL)

_HEADING_PREFIX = re.compile(r"^#+\s+", re.MULTILINE)
_CODE_FENCE_BLOCK = re.compile(r"```[^`]*```")
_MARKER_TOKENS = re.compile(
    "|".join(re.escape(marker) for marker in (NARRATIVE_MARKER, STATE_CHANGES_MARKER)),
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ExtractedSections:
    """The two sections of a model reply.

    Attributes:
        narrative: Sanitized narrative text (may be empty).
        state_changes_text: Raw text after the STATE_CHANGES marker.
    """

    narrative: str
    state_changes_text: str


def sanitize_narrative(narrative: str) -> str:
    """Clean narrative text before it is shown to the player.

    Strips markdown heading markers, removes fenced code blocks, and
    removes echoed format markers (case-insensitive).

    Args:
        narrative: Raw narrative text.

    Returns:
        The cleaned, trimmed narrative.
    """
    sanitized = _HEADING_PREFIX.sub("", narrative)
    sanitized = _CODE_FENCE_BLOCK.sub("", sanitized)
    sanitized = _MARKER_TOKENS.sub("", sanitized)
    return sanitized.strip()


def extract_sections(raw_response: str) -> ExtractedSections:
    """Isolate the narrative and state-changes sections of a reply.

    Never raises: a reply without markers is treated as pure narrative.

    Args:
        raw_response: The model's reply text.

    Returns:
        The sanitized narrative and the raw state-changes text.
    """
    raw_response = raw_response or ""

    narrative_match = _NARRATIVE_SECTION.search(raw_response)
    narrative = narrative_match.group(1).strip() if narrative_match else raw_response

    changes_match = _STATE_CHANGES_SECTION.search(raw_response)
    changes_text = changes_match.group(1).strip() if changes_match else ""

    return ExtractedSections(
        narrative=sanitize_narrative(narrative),
        state_changes_text=changes_text,
    )


__all__ = [
    "ExtractedSections",
    "extract_sections",
    "sanitize_narrative",
]
