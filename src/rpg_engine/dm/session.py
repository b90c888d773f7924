"""Game Master service - the game loop around the turn pipeline.

Each turn follows the same path:
1. LOAD: Fetch the player's snapshot from the store (or start a game)
2. PROMPT: Build the message sequence from the snapshot and action
3. CALL: Ask the language model for a reply
4. PIPELINE: Extract, decode, validate and apply the reply
5. SAVE: Persist the new snapshot

The model only ever proposes changes. The engine decides what is
applied, and a failed model call leaves the saved game untouched.
"""

from __future__ import annotations

import json
import random
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rpg_engine.core.config import Settings, get_settings
from rpg_engine.core.exceptions import (
    AIControlError,
    GameEngineError,
    GameNotFoundError,
    GameOverError,
)
from rpg_engine.core.logging import bind_context, clear_context, get_logger
from rpg_engine.dm.client import ChatClient
from rpg_engine.dm.prompts import build_content_prompt, build_game_prompt, build_world_prompt
from rpg_engine.engine.reducer import TurnRules
from rpg_engine.engine.turn import TurnResult, apply_turn
from rpg_engine.models.game_state import (
    GameState,
    HistoryEntry,
    HistoryEntryType,
    LastAction,
    PlayerState,
    QuestEntry,
    RelationshipValue,
    WorldInfo,
    utc_now,
)
from rpg_engine.models.world import Environment, WorldData
from rpg_engine.storage.base import GameStore
from rpg_engine.world.generator import fallback_world, generate_world


logger = get_logger(__name__)

DEFAULT_ENVIRONMENT = Environment(time="day", weather="clear", season="summer")


# =============================================================================
# Action Classification
# =============================================================================


class ActionType(StrEnum):
    """Broad categories of player actions."""

    COMBAT = "combat"
    DIALOGUE = "dialogue"
    ITEM = "item"
    MOVEMENT = "movement"
    OBSERVATION = "observation"
    INTERACTION = "interaction"
    OTHER = "other"


_ACTION_KEYWORDS: tuple[tuple[ActionType, tuple[str, ...]], ...] = (
    (ActionType.COMBAT, ("attack", "fight", "kill")),
    (ActionType.DIALOGUE, ("talk", "speak", "ask")),
    (ActionType.ITEM, ("take", "grab", "pick up")),
    (ActionType.MOVEMENT, ("go", "move", "walk")),
    (ActionType.OBSERVATION, ("look", "examine", "inspect")),
    (ActionType.INTERACTION, ("use", "activate", "open")),
)


def classify_action(action: str) -> ActionType:
    """Classify an action by the first keyword group it contains.

    Example:
        >>> classify_action("Attack the goblin")
        <ActionType.COMBAT: 'combat'>
    """
    text = action.lower()
    for action_type, keywords in _ACTION_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return action_type
    return ActionType.OTHER


# =============================================================================
# Game Statistics
# =============================================================================


class NPCRelationship(BaseModel):
    """One NPC relationship in the statistics view."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: RelationshipValue


class GameStats(BaseModel):
    """Summary view of a player's game."""

    model_config = ConfigDict(frozen=True)

    health: int
    level: int
    experience: int
    inventory_size: int
    inventory: tuple[str, ...]
    active_quests: int
    quests: tuple[QuestEntry, ...]
    world_name: str
    world_type: str
    current_location: str
    discovered_locations: int
    npc_relationships: tuple[NPCRelationship, ...]
    actions_taken: int = Field(ge=0)
    days_elapsed: int = Field(ge=0)
    time_elapsed: int = Field(ge=0)
    game_started: datetime
    last_action: LastAction | None = None


def initialize_game_state(
    world: WorldData,
    *,
    character_name: str,
    starting_inventory: list[str] | tuple[str, ...],
    created_at: datetime | None = None,
) -> GameState:
    """Create the first snapshot of a game in a generated world."""
    return GameState(
        player=PlayerState(name=character_name, inventory=tuple(starting_inventory)),
        world=WorldInfo(
            name=world.name,
            world_type=world.world_type,
            description=world.description,
        ),
        current_location=world.starting_location,
        game_history=(HistoryEntry.narrative(world.intro_text),),
        discovered_locations=(world.starting_location.id,),
        created_at=created_at or utc_now(),
        potential_plot_hooks=world.potential_plot_hooks,
        nearby_locations=world.nearby_locations,
        available_npcs=world.npcs,
        environment=world.environment or DEFAULT_ENVIRONMENT,
    )


# =============================================================================
# Game Master
# =============================================================================


@dataclass
class _PlayerLock:
    """A player's turn lock and the number of callers holding or awaiting it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class GameMaster:
    """Runs games for many players over one store and one model client.

    Turns for the same player are serialized; turns for different
    players run independently.

    Example:
        ```python
        master = GameMaster(MemoryGameStore(), LLMClient())
        master.new_game("player-1", world_type="cyberpunk")
        result = master.take_turn("player-1", "look around")
        print(result.narrative)
        ```
    """

    def __init__(
        self,
        store: GameStore,
        client: ChatClient,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the Game Master.

        Args:
            store: Where snapshots are kept.
            client: Language model client.
            settings: Application settings. If None, uses global settings.
            rng: Random source for world environment synthesis.
        """
        self.store = store
        self.client = client
        self.settings = settings or get_settings()
        self.rules = TurnRules.from_settings(self.settings.game)
        self._rng = rng
        self._locks: dict[str, _PlayerLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _player_lock(self, player_id: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(player_id)
            if entry is None:
                entry = self._locks[player_id] = _PlayerLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[player_id]

    # -------------------------------------------------------------------------
    # Games
    # -------------------------------------------------------------------------

    def _generate_world(self, world_type: str | None) -> WorldData:
        ai = self.settings.ai
        try:
            reply = self.client.chat(
                build_world_prompt(world_type),
                temperature=ai.world_temperature,
                max_tokens=ai.world_max_tokens,
            )
        except AIControlError as exc:
            logger.warning("World generation failed, using fallback world", error=str(exc))
            return fallback_world()
        return generate_world(world_type, reply, rng=self._rng)

    def _create_game(
        self,
        player_id: str,
        world_type: str | None,
        character_name: str | None,
    ) -> GameState:
        world = self._generate_world(world_type)
        state = initialize_game_state(
            world,
            character_name=character_name or self.settings.game.default_character_name,
            starting_inventory=self.settings.game.starting_inventory,
        )
        self.store.save(player_id, state)
        logger.info("New game created", world=world.name, world_type=world.world_type)
        return state

    def new_game(
        self,
        player_id: str,
        world_type: str | None = None,
        character_name: str | None = None,
    ) -> GameState:
        """Generate a world and start a new game, replacing any saved one.

        Args:
            player_id: Player to start the game for.
            world_type: Preferred world type, such as "sci-fi".
            character_name: Name of the player character.

        Returns:
            The initial snapshot, already saved.
        """
        with self._player_lock(player_id):
            bind_context(player_id=player_id)
            try:
                return self._create_game(player_id, world_type, character_name)
            finally:
                clear_context()

    def take_turn(self, player_id: str, action: str) -> TurnResult:
        """Play one turn for a player.

        A player without a saved game gets a new one first.

        Args:
            player_id: Player taking the turn.
            action: Free-text action.

        Returns:
            The narrative, the new saved snapshot and the applied changes.

        Raises:
            GameEngineError: If the action is empty.
            GameOverError: If the player's game has ended.
            AIControlError: If the model call fails; nothing is saved.
        """
        action = action.strip()
        if not action:
            raise GameEngineError("Action must not be empty", details={"player_id": player_id})

        with self._player_lock(player_id):
            bind_context(player_id=player_id)
            try:
                state = self.store.load(player_id)
                if state is None:
                    state = self._create_game(player_id, None, None)
                if state.game_over:
                    raise GameOverError(
                        "This adventure has ended. Please start a new game.",
                        player_id=player_id,
                    )

                messages = build_game_prompt(
                    action,
                    state,
                    self.settings.game.prompt_history_window,
                    time_units_per_day=self.rules.time_units_per_day,
                )
                reply = self.client.chat(
                    messages,
                    temperature=self.settings.ai.temperature,
                    max_tokens=self.settings.ai.max_tokens,
                )

                result = apply_turn(
                    state,
                    action,
                    reply,
                    rules=self.rules,
                    default_effect_duration=self.settings.game.default_effect_duration,
                )
                self.store.save(player_id, result.state)

                logger.info(
                    "Turn completed",
                    action_type=classify_action(action),
                    changes=result.changes.present_fields(),
                    location=result.state.current_location.id,
                    game_over=result.state.game_over,
                )
                return result
            finally:
                clear_context()

    def load_game(self, player_id: str) -> GameState:
        """Load a player's saved game.

        Raises:
            GameNotFoundError: If the player has no saved game.
        """
        state = self.store.load(player_id)
        if state is None:
            raise GameNotFoundError("No game found for this player", player_id=player_id)
        return state

    def save_game(self, player_id: str, state: GameState) -> bool:
        """Save a snapshot for a player."""
        with self._player_lock(player_id):
            return self.store.save(player_id, state)

    # -------------------------------------------------------------------------
    # Views & Content
    # -------------------------------------------------------------------------

    def game_stats(self, player_id: str) -> GameStats:
        """Summarize a player's game.

        Raises:
            GameNotFoundError: If the player has no saved game.
        """
        state = self.load_game(player_id)
        player = state.player
        return GameStats(
            health=player.health,
            level=player.level,
            experience=player.experience,
            inventory_size=len(player.inventory),
            inventory=player.inventory,
            active_quests=len(player.quests),
            quests=player.quests,
            world_name=state.world.name,
            world_type=state.world.world_type,
            current_location=state.current_location.name,
            discovered_locations=len(state.discovered_locations),
            npc_relationships=tuple(
                NPCRelationship(name=name, value=value)
                for name, value in state.npc_relationships.items()
            ),
            actions_taken=sum(
                1 for entry in state.game_history if entry.kind == HistoryEntryType.ACTION
            ),
            days_elapsed=state.time_elapsed // self.rules.time_units_per_day,
            time_elapsed=state.time_elapsed,
            game_started=state.created_at,
            last_action=state.last_action,
        )

    def generate_content(self, player_id: str, content_type: str, **parameters: Any) -> Any:
        """Generate a piece of content (NPC, location, item, quest...) for a game.

        The world type, world name and current location of the player's
        game are passed to the prompt alongside the given parameters.

        Returns:
            The decoded JSON reply, or ``{"text": ..., "error": ...}``
            when the reply is not JSON.

        Raises:
            GameNotFoundError: If the player has no saved game.
        """
        state = self.load_game(player_id)
        messages = build_content_prompt(
            content_type,
            **{
                **parameters,
                "world_type": state.world.world_type,
                "world_name": state.world.name,
                "current_location": state.current_location.name,
            },
        )
        reply = self.client.chat(
            messages,
            temperature=self.settings.ai.world_temperature,
            max_tokens=self.settings.ai.max_tokens,
        )
        try:
            return json.loads(reply)
        except (ValueError, RecursionError):
            logger.debug("Generated content is not JSON", content_type=content_type)
            return {"text": reply, "error": "Could not parse as JSON"}


__all__ = [
    "ActionType",
    "classify_action",
    "NPCRelationship",
    "GameStats",
    "initialize_game_state",
    "GameMaster",
    "DEFAULT_ENVIRONMENT",
]
