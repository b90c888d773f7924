"""World models produced by the world generation pipeline.

Models:
    Faction: A named group in the world.
    KeyItem: A notable item seeded into the world's lore.
    NPCProfile: A non-player character available at the start.
    Environment: Time of day, weather and season.
    WorldData: The complete generated world.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from rpg_engine.core.constants import MAX_RELATIONSHIP, MIN_RELATIONSHIP
from rpg_engine.models.base import DocumentModel, Location


class Faction(DocumentModel):
    """A named faction."""

    name: str = Field(min_length=1)
    description: str = ""


class KeyItem(DocumentModel):
    """A notable item from the world's lore."""

    name: str = Field(min_length=1)
    description: str = ""


class NPCProfile(DocumentModel):
    """A non-player character seeded into a new world.

    Attributes:
        id: Slug identifying the NPC.
        name: Display name.
        description: Who the NPC is.
        relationship: Starting relationship with the player (0-100).
    """

    id: str
    name: str = Field(min_length=1)
    description: str = ""
    relationship: Annotated[int, Field(ge=MIN_RELATIONSHIP, le=MAX_RELATIONSHIP)] = 50


class Environment(DocumentModel):
    """Ambient conditions at the start of a game."""

    time: str
    weather: str
    season: str


class WorldData(DocumentModel):
    """A fully generated world, ready to seed a new game.

    Attributes:
        world_type: Declared world type (serialized as ``type``).
        name: World name.
        description: History and current state of the world.
        starting_location: Where the player begins.
        intro_text: Opening narrative shown to the player.
        potential_plot_hooks: Adventure seeds for the model to pick up.
        factions: Factions active in the world.
        key_items: Notable items of the world.
        nearby_locations: Locations near the start, keyed off the world type.
        npcs: NPCs available at the start, keyed off the world type.
        environment: Starting time of day, weather and season.
    """

    world_type: str = Field(alias="type", min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    starting_location: Location
    intro_text: str = ""
    potential_plot_hooks: tuple[str, ...] = ()
    factions: tuple[Faction, ...] = ()
    key_items: tuple[KeyItem, ...] = ()
    nearby_locations: tuple[Location, ...] = ()
    npcs: tuple[NPCProfile, ...] = ()
    environment: Environment | None = None


__all__ = [
    "Faction",
    "KeyItem",
    "NPCProfile",
    "Environment",
    "WorldData",
]
