"""Best-effort field recovery for state changes that are not valid JSON.

Each known field has its own pattern and is recovered independently, so
one broken field does not cost the others. This is deliberately not a
JSON repair tool: values that do not fit the simple shapes below are
simply not recovered.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from rpg_engine.core.logging import get_logger


logger = get_logger(__name__)


_HEALTH = re.compile(r'"health"\s*:\s*(-?\d+(?:\.\d+)?)')
_EXPERIENCE = re.compile(r'"experience"\s*:\s*(\d+)')
_NEW_LOCATION = re.compile(r'"newLocation"\s*:\s*\{(.*?)\}', re.DOTALL)
_NPC_RELATIONSHIPS = re.compile(r'"npcRelationships"\s*:\s*\{(.*?)\}', re.DOTALL)
_NPC_PAIR = re.compile(r'"([^"]*)"\s*:\s*([^,}]*)')


def _string_field(name: str) -> re.Pattern[str]:
    return re.compile(rf'"{name}"\s*:\s*"([^"]*)"')


def _array_field(name: str) -> re.Pattern[str]:
    return re.compile(rf'"{name}"\s*:\s*\[(.*?)\]', re.DOTALL)


_LOCATION_FIELDS = {key: _string_field(key) for key in ("id", "name", "description")}
_ADD_ITEMS = _array_field("addItems")
_REMOVE_ITEMS = _array_field("removeItems")
_ADD_QUESTS = _array_field("addQuests")


def _parse_number(text: str) -> int | float | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _split_string_list(body: str) -> list[str]:
    """Split the inside of a JSON-ish array into bare strings."""
    items = (part.replace('"', "").strip() for part in body.split(","))
    return [item for item in items if item]


def recover_health(text: str) -> int | float | None:
    """Recover ``"health": <number>``."""
    match = _HEALTH.search(text)
    return _parse_number(match.group(1)) if match else None


def recover_experience(text: str) -> int | None:
    """Recover ``"experience": <non-negative integer>``."""
    match = _EXPERIENCE.search(text)
    return int(match.group(1)) if match else None


def recover_add_items(text: str) -> list[str] | None:
    """Recover ``"addItems": [...]`` as a list of bare strings."""
    match = _ADD_ITEMS.search(text)
    return _split_string_list(match.group(1)) if match else None


def recover_remove_items(text: str) -> list[str] | None:
    """Recover ``"removeItems": [...]`` as a list of bare strings."""
    match = _REMOVE_ITEMS.search(text)
    return _split_string_list(match.group(1)) if match else None


def recover_add_quests(text: str) -> list[str] | None:
    """Recover ``"addQuests": [...]``.

    Only plain string quests are recovered; structured quests are too
    irregular to split reliably.
    """
    match = _ADD_QUESTS.search(text)
    return _split_string_list(match.group(1)) if match else None


def recover_new_location(text: str) -> dict[str, str] | None:
    """Recover ``"newLocation": {...}`` when id, name and description are all present."""
    match = _NEW_LOCATION.search(text)
    if not match:
        return None

    body = match.group(1)
    location: dict[str, str] = {}
    for key, pattern in _LOCATION_FIELDS.items():
        field_match = pattern.search(body)
        if not field_match:
            return None
        location[key] = field_match.group(1)
    return location


def recover_npc_relationships(text: str) -> dict[str, int | float | str] | None:
    """Recover ``"npcRelationships": {...}`` as name to number or text."""
    match = _NPC_RELATIONSHIPS.search(text)
    if not match:
        return None

    relationships: dict[str, int | float | str] = {}
    for name, raw_value in _NPC_PAIR.findall(match.group(1)):
        value = raw_value.strip()
        if not value:
            continue
        number = _parse_number(value)
        relationships[name] = number if number is not None else value.replace('"', "")
    return relationships


# Keyed by the document field name the recovered value belongs to
FIELD_RECOVERERS: dict[str, Callable[[str], Any]] = {
    "health": recover_health,
    "addItems": recover_add_items,
    "removeItems": recover_remove_items,
    "newLocation": recover_new_location,
    "addQuests": recover_add_quests,
    "npcRelationships": recover_npc_relationships,
    "experience": recover_experience,
}


def recover_fields(text: str) -> dict[str, Any]:
    """Recover every known field that can be matched in malformed text.

    Never raises. An empty dict is a valid result.

    Args:
        text: The raw state-changes text.

    Returns:
        Document-keyed mapping of the fields that were recovered.
    """
    recovered: dict[str, Any] = {}
    for key, recoverer in FIELD_RECOVERERS.items():
        try:
            value = recoverer(text)
        except Exception:
            logger.exception("Field recovery failed", field=key)
            continue
        if value is not None:
            recovered[key] = value

    logger.debug("Recovered fields from malformed state changes", fields=list(recovered))
    return recovered


__all__ = [
    "FIELD_RECOVERERS",
    "recover_fields",
    "recover_health",
    "recover_experience",
    "recover_add_items",
    "recover_remove_items",
    "recover_add_quests",
    "recover_new_location",
    "recover_npc_relationships",
]
