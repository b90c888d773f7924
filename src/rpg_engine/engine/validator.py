"""Change validator: turn decoded changes into a safe, bounded change set.

Every field is validated on its own. A field that has the wrong shape,
is out of range, or refers to something the player does not have is
dropped on its own; it never fails the rest of the change set.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from rpg_engine.core.constants import (
    DEFAULT_EFFECT_DURATION,
    MAX_HEALTH,
    MAX_RELATIONSHIP,
    MIN_HEALTH,
    MIN_RELATIONSHIP,
)
from rpg_engine.core.logging import get_logger
from rpg_engine.models.base import Location
from rpg_engine.models.changes import DecodedChanges, ValidatedChangeSet
from rpg_engine.models.game_state import GameState, Quest, QuestEntry, StatusEffect


logger = get_logger(__name__)


# =============================================================================
# Coercion Helpers
# =============================================================================


def coerce_number(value: Any) -> float | None:
    """Coerce a number or numeric string to a finite float.

    Booleans, blank strings, non-finite values and everything else yield
    None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
    else:
        return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into the inclusive range [low, high]."""
    return max(low, min(high, value))


def _trimmed_strings(raw: Any) -> list[str] | None:
    """Accept a string or a list of strings; trim, and drop blanks."""
    if isinstance(raw, str):
        candidates = [raw]
    elif isinstance(raw, list):
        candidates = [item for item in raw if isinstance(item, str)]
    else:
        return None
    items = [item.strip() for item in candidates if item.strip()]
    return items or None


def _text(value: Any) -> str:
    return str(value).strip() if value else ""


# =============================================================================
# Field Validators
# =============================================================================


def validate_health(raw: Any) -> int | None:
    """Numeric health clamped to 0-100.

    Only a value at or below zero becomes zero; any positive health
    rounds to at least 1.
    """
    number = coerce_number(raw)
    if number is None:
        return None
    if number <= MIN_HEALTH:
        return MIN_HEALTH
    return max(1, round(min(number, MAX_HEALTH)))


def validate_add_items(raw: Any) -> tuple[str, ...] | None:
    """Item names to add; duplicates are resolved by the reducer."""
    items = _trimmed_strings(raw)
    return tuple(items) if items else None


def validate_remove_items(raw: Any, inventory: tuple[str, ...]) -> tuple[str, ...] | None:
    """Item names to remove, keeping only items currently held."""
    items = _trimmed_strings(raw)
    if not items:
        return None
    held = tuple(item for item in items if item in inventory)
    return held or None


def validate_new_location(raw: Any) -> Location | None:
    """A complete destination; partial locations are rejected whole."""
    if not isinstance(raw, Mapping):
        return None
    if not (raw.get("id") and raw.get("name") and raw.get("description")):
        return None
    return Location(
        id=str(raw["id"]),
        name=str(raw["name"]).strip(),
        description=str(raw["description"]).strip(),
    )


def _normalize_quest(raw: Any) -> QuestEntry | None:
    if isinstance(raw, str):
        return raw.strip() or None
    if isinstance(raw, Mapping) and raw.get("title"):
        objectives = raw.get("objectives")
        return Quest(
            title=str(raw["title"]).strip(),
            description=_text(raw.get("description")),
            objectives=tuple(objectives) if isinstance(objectives, list) else (),
        )
    return None


def validate_add_quests(raw: Any) -> tuple[QuestEntry, ...] | None:
    """Quests from a list, a single string, or a single quest object."""
    candidates = raw if isinstance(raw, list) else [raw]
    quests: list[QuestEntry] = []
    for candidate in candidates:
        try:
            quest = _normalize_quest(candidate)
        except ValidationError:
            continue
        if quest is not None:
            quests.append(quest)
    return tuple(quests) or None


def validate_npc_relationships(raw: Any) -> dict[str, int | str] | None:
    """Relationship updates: numbers clamped to 0-100, text trimmed."""
    if not isinstance(raw, Mapping):
        return None

    relationships: dict[str, int | str] = {}
    for npc, value in raw.items():
        name = str(npc).strip()
        if not name or isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            number = coerce_number(value)
            if number is not None:
                relationships[name] = round(clamp(number, MIN_RELATIONSHIP, MAX_RELATIONSHIP))
        elif isinstance(value, str) and value.strip():
            relationships[name] = value.strip()
    return relationships or None


def validate_experience(raw: Any) -> int | None:
    """Experience award clamped to be non-negative."""
    number = coerce_number(raw)
    if number is None:
        return None
    return round(max(0.0, number))


def validate_status_effects(
    raw: Any,
    default_duration: int = DEFAULT_EFFECT_DURATION,
) -> tuple[StatusEffect, ...] | None:
    """Named effects with description, duration and effect payload defaults."""
    if not isinstance(raw, list):
        return None

    effects: list[StatusEffect] = []
    for candidate in raw:
        if not isinstance(candidate, Mapping) or not candidate.get("name"):
            continue
        duration = coerce_number(candidate.get("duration"))
        payload = candidate.get("effect")
        try:
            effects.append(
                StatusEffect(
                    name=str(candidate["name"]).strip(),
                    description=_text(candidate.get("description")),
                    duration=round(duration) if duration else default_duration,
                    effect=dict(payload) if isinstance(payload, Mapping) else {},
                )
            )
        except ValidationError:
            continue
    return tuple(effects) or None


# =============================================================================
# Change Set Validation
# =============================================================================


def validate_changes(
    decoded: DecodedChanges,
    state: GameState,
    *,
    default_effect_duration: int = DEFAULT_EFFECT_DURATION,
) -> ValidatedChangeSet:
    """Validate decoded changes against the current state.

    Args:
        decoded: Raw changes recovered from the reply.
        state: The snapshot the changes will be applied to.
        default_effect_duration: Duration for effects without a usable one.

    Returns:
        A change set whose present fields all satisfy the state invariants.
    """
    field_validators: dict[str, Callable[[Any], Any]] = {
        "health": validate_health,
        "add_items": validate_add_items,
        "remove_items": lambda raw: validate_remove_items(raw, state.player.inventory),
        "new_location": validate_new_location,
        "add_quests": validate_add_quests,
        "npc_relationships": validate_npc_relationships,
        "experience": validate_experience,
        "status_effects": lambda raw: validate_status_effects(raw, default_effect_duration),
    }

    validated: dict[str, Any] = {}
    for field_name, validate in field_validators.items():
        raw = getattr(decoded, field_name)
        if raw is None:
            continue
        try:
            value = validate(raw)
        except (ValidationError, TypeError, ValueError) as exc:
            logger.warning("Dropping invalid state change", field=field_name, error=str(exc))
            continue
        if value is None:
            logger.debug("Dropping unusable state change", field=field_name)
            continue
        validated[field_name] = value

    return ValidatedChangeSet(**validated)


__all__ = [
    "coerce_number",
    "clamp",
    "validate_changes",
    "validate_health",
    "validate_add_items",
    "validate_remove_items",
    "validate_new_location",
    "validate_add_quests",
    "validate_npc_relationships",
    "validate_experience",
    "validate_status_effects",
]
