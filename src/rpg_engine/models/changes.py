"""Change set models: what the model asked for, and what is safe to apply.

The decoder produces a DecodedChanges record whose fields are all
optional and untyped: it holds whatever the model emitted under each
known key. Only the validator reads it, and the validator produces a
ValidatedChangeSet whose present fields already satisfy every state
invariant. Absent (None) fields mean "no change this turn".
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import Field

from rpg_engine.models.base import DocumentModel, Location
from rpg_engine.models.game_state import Health, QuestEntry, RelationshipValue, StatusEffect


class DecodedChanges(DocumentModel):
    """Raw state changes recovered from a model reply.

    Unknown keys are dropped at construction; the known keys keep their
    raw, unchecked values.
    """

    health: Any = None
    add_items: Any = None
    remove_items: Any = None
    new_location: Any = None
    add_quests: Any = None
    npc_relationships: Any = None
    experience: Any = None
    status_effects: Any = None

    @classmethod
    def empty(cls) -> Self:
        """A record with no recovered fields."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Any) -> Self:
        """Build from a decoded JSON value; non-objects yield an empty record."""
        if not isinstance(data, dict):
            return cls.empty()
        return cls.model_validate(data)

    def present_fields(self) -> list[str]:
        """Names of the fields that carry a value."""
        return [name for name, value in self if value is not None]


class ValidatedChangeSet(DocumentModel):
    """Per-turn change set that is safe to hand to the reducer.

    Attributes:
        health: New health value, already clamped to 0-100.
        add_items: Trimmed item names to add.
        remove_items: Item names currently held that should be removed.
        new_location: Complete, normalized destination.
        add_quests: Plain or structured quests to accept.
        npc_relationships: Relationship updates, numbers clamped to 0-100.
        experience: Non-negative experience award.
        status_effects: Normalized effects to apply.
    """

    health: Health | None = None
    add_items: tuple[str, ...] | None = None
    remove_items: tuple[str, ...] | None = None
    new_location: Location | None = None
    add_quests: tuple[QuestEntry, ...] | None = None
    npc_relationships: dict[str, RelationshipValue] | None = None
    experience: int | None = Field(default=None, ge=0)
    status_effects: tuple[StatusEffect, ...] | None = None

    @property
    def is_empty(self) -> bool:
        """Whether the change set requests no changes at all."""
        return not self.present_fields()

    def present_fields(self) -> list[str]:
        """Names of the fields that request a change."""
        return [name for name, value in self if value is not None]


__all__ = [
    "DecodedChanges",
    "ValidatedChangeSet",
]
