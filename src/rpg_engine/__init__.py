"""AI RPG Engine - backend for LLM-driven text adventures.

The language model writes the story; the engine owns the game state.
Every model reply is parsed into a narrative and a set of proposed
changes, and only changes that pass validation are applied.

Example:
    >>> from rpg_engine import GameMaster, LLMClient, MemoryGameStore
    >>>
    >>> master = GameMaster(MemoryGameStore(), LLMClient())
    >>> state = master.new_game("player-1", world_type="fantasy")
    >>> result = master.take_turn("player-1", "I follow the path into the forest")
    >>> print(result.narrative)

Modules:
    core: Configuration, logging, exceptions and constants.
    models: Immutable pydantic models for game state, changes and worlds.
    engine: Turn pipeline (extractor, decoder, validator, reducer).
    world: World generation pipeline and lookup tables.
    dm: Prompt builder, model client and the Game Master service.
    storage: SQLite and in-memory game stores.
"""

from __future__ import annotations

# Core
from rpg_engine.core.config import Settings, get_settings
from rpg_engine.core.exceptions import RpgEngineError
from rpg_engine.core.logging import configure_logging, get_logger

# Models
from rpg_engine.models.game_state import GameState
from rpg_engine.models.world import WorldData

# Pipelines
from rpg_engine.engine.turn import TurnResult, apply_turn
from rpg_engine.world.generator import generate_world

# Game Master
from rpg_engine.dm.client import LLMClient
from rpg_engine.dm.session import GameMaster, GameStats

# Storage
from rpg_engine.storage import GameStore, MemoryGameStore, SQLiteGameStore, create_store


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "RpgEngineError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "GameState",
    "WorldData",
    # Pipelines
    "TurnResult",
    "apply_turn",
    "generate_world",
    # Game Master
    "LLMClient",
    "GameMaster",
    "GameStats",
    # Storage
    "GameStore",
    "MemoryGameStore",
    "SQLiteGameStore",
    "create_store",
]
