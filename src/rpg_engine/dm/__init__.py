"""Model-facing collaborators: prompts, model client and the Game Master."""

from rpg_engine.dm.client import ChatClient, LLMClient
from rpg_engine.dm.prompts import build_content_prompt, build_game_prompt, build_world_prompt
from rpg_engine.dm.session import (
    ActionType,
    GameMaster,
    GameStats,
    NPCRelationship,
    classify_action,
    initialize_game_state,
)


__all__ = [
    # Client
    "ChatClient",
    "LLMClient",
    # Prompts
    "build_game_prompt",
    "build_world_prompt",
    "build_content_prompt",
    # Session
    "ActionType",
    "GameMaster",
    "GameStats",
    "NPCRelationship",
    "classify_action",
    "initialize_game_state",
]
