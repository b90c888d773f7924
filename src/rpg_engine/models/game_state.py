"""Game state models for the AI RPG engine.

A GameState is one immutable snapshot of a player's game. Every turn
produces a new snapshot; nothing here is ever mutated in place.

Models:
    HistoryEntry: One line of the game log.
    Quest: A structured quest.
    StatusEffect: A timed effect on the player.
    LastAction: The last submitted action and when it happened.
    PlayerState: Health, inventory, quests, progression.
    WorldInfo: The immutable identity of the world.
    GameState: The root aggregate.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from collections.abc import Iterable
from typing import Annotated, Any, Self

from pydantic import Field, field_validator, model_validator

from rpg_engine.core.constants import (
    MAX_HEALTH,
    MAX_RELATIONSHIP,
    MIN_HEALTH,
    MIN_RELATIONSHIP,
)
from rpg_engine.core.exceptions import InvalidGameStateError
from rpg_engine.models.base import DocumentModel, Location
from rpg_engine.models.world import Environment, NPCProfile


Health = Annotated[int, Field(ge=MIN_HEALTH, le=MAX_HEALTH, description="Health (0-100)")]
RelationshipValue = int | str


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# Log & Progress Components
# =============================================================================


class HistoryEntryType(StrEnum):
    """Kinds of game log entries."""

    ACTION = "action"
    """Text the player submitted."""

    NARRATIVE = "narrative"
    """Narrative produced by the model."""

    SYSTEM = "system"
    """Engine notification (items, levels, days...)."""


class HistoryEntry(DocumentModel):
    """One entry of the game history log."""

    kind: HistoryEntryType = Field(alias="type")
    text: str

    @classmethod
    def action(cls, text: str) -> Self:
        """Create a player action entry."""
        return cls(kind=HistoryEntryType.ACTION, text=text)

    @classmethod
    def narrative(cls, text: str) -> Self:
        """Create a narrative entry."""
        return cls(kind=HistoryEntryType.NARRATIVE, text=text)

    @classmethod
    def system(cls, text: str) -> Self:
        """Create a system notification entry."""
        return cls(kind=HistoryEntryType.SYSTEM, text=text)


class Quest(DocumentModel):
    """A structured quest.

    Attributes:
        title: Quest title; quests are identified by it.
        description: What the quest is about.
        objectives: Objectives as given by the model (opaque).
    """

    title: str = Field(min_length=1)
    description: str = ""
    objectives: tuple[Any, ...] = ()


QuestEntry = str | Quest


def quest_title(quest: QuestEntry) -> str:
    """Return the identifying title of a plain or structured quest."""
    return quest if isinstance(quest, str) else quest.title


def contains_quest(quests: Iterable[QuestEntry], quest: QuestEntry) -> bool:
    """Check whether an equal quest is already among the given quests.

    Plain quests compare by string, structured quests by title.
    """
    if isinstance(quest, str):
        return quest in quests
    return any(
        isinstance(existing, Quest) and existing.title == quest.title
        for existing in quests
    )


class StatusEffect(DocumentModel):
    """A timed effect on the player.

    Attributes:
        name: Effect name; at most one effect per name is active.
        description: Human readable description.
        duration: Remaining turns.
        effect: Opaque mechanical payload chosen by the model.
    """

    name: str = Field(min_length=1)
    description: str = ""
    duration: int
    effect: dict[str, Any] = Field(default_factory=dict)


class LastAction(DocumentModel):
    """The most recently submitted action."""

    text: str
    timestamp: datetime


# =============================================================================
# Player & World
# =============================================================================


class PlayerState(DocumentModel):
    """Everything about the player character.

    Attributes:
        name: Character name.
        health: Current health, always within 0-100.
        inventory: Ordered item names without duplicates.
        quests: Plain or structured quests in acceptance order.
        experience: Experience towards the next level.
        level: Current level, starting at 1.
        status_effects: Active timed effects.
    """

    name: str = "Adventurer"
    health: Health = MAX_HEALTH
    inventory: tuple[str, ...] = ()
    quests: tuple[QuestEntry, ...] = ()
    experience: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    status_effects: tuple[StatusEffect, ...] = ()

    @model_validator(mode="after")
    def validate_unique_inventory(self) -> "PlayerState":
        """Ensure the inventory holds no duplicate items.

        Raises:
            InvalidGameStateError: If an item appears twice.
        """
        if len(set(self.inventory)) != len(self.inventory):
            raise InvalidGameStateError(
                "Inventory must not contain duplicate items",
                field_name="inventory",
                details={"inventory": list(self.inventory)},
            )
        return self


class WorldInfo(DocumentModel):
    """Identity of the world a game takes place in."""

    name: str
    world_type: str = Field(alias="type")
    description: str = ""


# =============================================================================
# Game State Container
# =============================================================================


class GameState(DocumentModel):
    """The complete state of one player's game.

    The world and starting content are fixed at creation; everything
    else is replaced snapshot by snapshot through the reducer.

    Attributes:
        player: The player character.
        world: World identity, immutable after creation.
        current_location: Where the player is.
        game_history: Most recent log entries, oldest first.
        discovered_locations: Location ids in discovery order.
        npc_relationships: NPC name to value (0-100) or free text.
        time_elapsed: Abstract time units since the start.
        last_action: Last submitted action, if any.
        game_over: Whether the game has ended; never resets.
        created_at: When the game was created (serialized as ``created``).
        potential_plot_hooks: Adventure seeds from world generation.
        nearby_locations: Locations near the start.
        available_npcs: NPCs available at the start.
        environment: Starting ambient conditions.
    """

    player: PlayerState = Field(default_factory=PlayerState)
    world: WorldInfo
    current_location: Location
    game_history: tuple[HistoryEntry, ...] = ()
    discovered_locations: tuple[str, ...] = ()
    npc_relationships: dict[str, RelationshipValue] = Field(default_factory=dict)
    time_elapsed: int = Field(default=0, ge=0)
    last_action: LastAction | None = None
    game_over: bool = False
    created_at: datetime = Field(default_factory=utc_now, alias="created")
    potential_plot_hooks: tuple[str, ...] = ()
    nearby_locations: tuple[Location, ...] = ()
    available_npcs: tuple[NPCProfile, ...] = ()
    environment: Environment | None = None

    @field_validator("npc_relationships", mode="after")
    @classmethod
    def validate_relationship_range(
        cls, value: dict[str, RelationshipValue]
    ) -> dict[str, RelationshipValue]:
        """Ensure numeric relationships stay within 0-100.

        Raises:
            InvalidGameStateError: If a numeric value is out of range.
        """
        for npc, relationship in value.items():
            if isinstance(relationship, int) and not (
                MIN_RELATIONSHIP <= relationship <= MAX_RELATIONSHIP
            ):
                raise InvalidGameStateError(
                    f"Relationship with {npc} is out of range",
                    field_name="npc_relationships",
                    details={"npc": npc, "value": relationship},
                )
        return value

    @model_validator(mode="after")
    def validate_invariants(self) -> "GameState":
        """Check cross-field invariants of a snapshot.

        Raises:
            InvalidGameStateError: If locations repeat or a dead player
                is still marked as playing.
        """
        if len(set(self.discovered_locations)) != len(self.discovered_locations):
            raise InvalidGameStateError(
                "Discovered locations must not repeat",
                field_name="discovered_locations",
            )
        if self.player.health <= MIN_HEALTH and not self.game_over:
            raise InvalidGameStateError(
                "A player with no health must be game over",
                field_name="game_over",
            )
        return self

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Load a snapshot from its persisted camelCase document."""
        return cls.model_validate(document)


__all__ = [
    "HistoryEntryType",
    "HistoryEntry",
    "Quest",
    "QuestEntry",
    "quest_title",
    "contains_quest",
    "StatusEffect",
    "LastAction",
    "PlayerState",
    "WorldInfo",
    "GameState",
    "utc_now",
]
