"""Immutable pydantic models for game state, change sets and worlds.

Exports:
    Base:
        DocumentModel, Location, normalize_location_id

    Game state:
        GameState, PlayerState, WorldInfo, HistoryEntry, HistoryEntryType,
        Quest, StatusEffect, LastAction

    Change sets:
        DecodedChanges, ValidatedChangeSet

    Worlds:
        WorldData, Faction, KeyItem, NPCProfile, Environment
"""

from __future__ import annotations

from rpg_engine.models.base import DocumentModel, Location, normalize_location_id
from rpg_engine.models.changes import DecodedChanges, ValidatedChangeSet
from rpg_engine.models.game_state import (
    GameState,
    HistoryEntry,
    HistoryEntryType,
    LastAction,
    PlayerState,
    Quest,
    QuestEntry,
    StatusEffect,
    WorldInfo,
    contains_quest,
    quest_title,
    utc_now,
)
from rpg_engine.models.world import (
    Environment,
    Faction,
    KeyItem,
    NPCProfile,
    WorldData,
)


__all__ = [
    # Base
    "DocumentModel",
    "Location",
    "normalize_location_id",
    # Game state
    "GameState",
    "PlayerState",
    "WorldInfo",
    "HistoryEntry",
    "HistoryEntryType",
    "Quest",
    "QuestEntry",
    "StatusEffect",
    "LastAction",
    "quest_title",
    "contains_quest",
    "utc_now",
    # Change sets
    "DecodedChanges",
    "ValidatedChangeSet",
    # Worlds
    "WorldData",
    "Faction",
    "KeyItem",
    "NPCProfile",
    "Environment",
]
