"""Game Master prompts - message sequences sent to the language model."""

from __future__ import annotations

import json
from typing import Any

from rpg_engine.core.constants import TIME_UNITS_PER_DAY
from rpg_engine.models.game_state import GameState, HistoryEntryType, quest_title


# =============================================================================
# Game Turn Prompt
# =============================================================================


GAME_SYSTEM_PROMPT = """You are the AI game master for an interactive text-based RPG set in {world_name}, a {world_type} world.

GAME CONTEXT:
- The player is currently at {location_name}.
- Location description: {location_description}
- Player health: {health}/100
- Player inventory: {inventory}
- Discovered locations: {locations}
- Active quests: {quests}
- NPC relationships: {relationships}
- Day in game: {day}

YOUR ROLE:
As the game master, respond to the player's actions with rich, immersive descriptions. Create an engaging experience with:
1. Vivid sensory details (sights, sounds, smells, tactile sensations)
2. Dynamic NPCs with distinct personalities and motivations
3. Meaningful consequences to player choices
4. Occasional surprises, discoveries, or plot developments
5. Consistent world-building that makes sense within the {world_type} setting

RESPONSE FORMAT:
Your response must follow this exact format:

NARRATIVE: [Your narrative response to the player's action. Keep this engaging but concise (100-150 words). Make the world feel alive and responsive to the player's choices.]

STATE_CHANGES: {{
  "health": [optional: new health value],
  "addItems": [optional: array of new items to add to inventory],
  "removeItems": [optional: array of items to remove from inventory],
  "newLocation": {{
    "id": [optional: location_id_with_underscores],
    "name": [optional: Location Name],
    "description": [optional: Brief location description]
  }},
  "addQuests": [optional: array of quest objects or strings],
  "npcRelationships": {{
    [optional: "npc_name": relationship_value]
  }},
  "experience": [optional: experience points to award],
  "statusEffects": [optional: array of {{"name", "description", "duration", "effect"}} objects]
}}

Remember, you are not just describing what happens but actively creating a world for the player to explore. Respond directly to their actions but also advance the story in interesting ways."""


FEW_SHOT_EXAMPLES = """Here are example responses:

Example 1 - Player explores:
NARRATIVE: You venture deeper into the forest, pushing aside hanging vines and stepping carefully over gnarled roots. The canopy thickens overhead, dappling the ground with small patches of light. A small clearing opens before you, where a crystal-clear spring bubbles up from beneath mossy stones. Beside it sits an elderly man in tattered clothing, carving something from a piece of wood.

STATE_CHANGES: {
  "newLocation": {
    "id": "forest_spring",
    "name": "Forest Spring",
    "description": "A small clearing with a bubbling spring and mossy stones."
  },
  "experience": 5
}

Example 2 - Player interacts with NPC:
NARRATIVE: "Greetings, traveler," the old man says without looking up from his carving. "Few wander this deep into Whisperwood." He introduces himself as Thorne, once a royal guard, now a hermit. When you mention the strange symbols you saw earlier, his hands go still. "The Awakening signs," he mutters. He offers you a freshly carved amulet. "You'll need protection."

STATE_CHANGES: {
  "addItems": ["Wooden Protection Amulet"],
  "npcRelationships": {
    "Thorne": 60
  },
  "addQuests": [{
    "title": "Investigate the Awakening Signs",
    "description": "Find more of the strange symbols Thorne mentioned"
  }],
  "experience": 10
}

Example 3 - Player faces danger:
NARRATIVE: You attempt to cross the rickety bridge spanning the ravine. Halfway across, several planks splinter beneath your feet! You lunge forward, scrambling for safety as the bridge collapses behind you. You make it to the other side, but not without injury.

STATE_CHANGES: {
  "health": 85,
  "newLocation": {
    "id": "ravine_overlook",
    "name": "Ravine Overlook",
    "description": "A cliff edge overlooking a deep ravine, the bridge now collapsed."
  },
  "experience": 15
}"""


def _title_case(location_id: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in location_id.split("_"))


def _format_relationship(value: int | str) -> str:
    return f"{value}/100" if isinstance(value, int) else value


def build_game_prompt(
    action: str,
    state: GameState,
    history_window: int = 15,
    *,
    time_units_per_day: int = TIME_UNITS_PER_DAY,
) -> list[dict[str, str]]:
    """Build the message sequence for one game turn.

    Args:
        action: The player's action text.
        state: Current game state.
        history_window: Number of recent history entries to include.
        time_units_per_day: Time units per in-game day.

    Returns:
        System instructions, a few-shot assistant message and the user
        message with recent history followed by the action.
    """
    player = state.player
    recent = state.game_history[-history_window:] if history_window > 0 else ()
    history_text = "\n".join(
        f"Player: {entry.text}" if entry.kind == HistoryEntryType.ACTION else f"Game: {entry.text}"
        for entry in recent
    )

    system = GAME_SYSTEM_PROMPT.format(
        world_name=state.world.name,
        world_type=state.world.world_type,
        location_name=state.current_location.name,
        location_description=state.current_location.description,
        health=player.health,
        inventory=", ".join(player.inventory) or "No items",
        locations=", ".join(_title_case(loc) for loc in state.discovered_locations)
        or "Starting location only",
        quests=", ".join(quest_title(quest) for quest in player.quests) or "No active quests",
        relationships=", ".join(
            f"{npc}: {_format_relationship(value)}"
            for npc, value in state.npc_relationships.items()
        )
        or "No NPC relationships established",
        day=state.time_elapsed // time_units_per_day + 1,
    )

    return [
        {"role": "system", "content": system},
        {"role": "assistant", "content": FEW_SHOT_EXAMPLES},
        {"role": "user", "content": f"{history_text}\n\nPlayer: {action}"},
    ]


# =============================================================================
# World Generation Prompt
# =============================================================================


WORLD_SYSTEM_PROMPT = """You are a world-building AI for a text-based RPG game. Create {setting} with rich lore and an immersive starting location. The world should be engaging, unique, and have potential for adventure.

Your response must be in the following JSON format:

{{
  "type": "[world type: fantasy, sci-fi, post-apocalyptic, steampunk, etc.]",
  "name": "[name of the world]",
  "description": "[brief description of the world's history and current state]",
  "startingLocation": {{
    "id": "[location_id_with_underscores]",
    "name": "[Name of Location]",
    "description": "[Detailed sensory description of the location]"
  }},
  "introText": "[The opening narrative text that introduces the player to the world, 100-150 words]",
  "potentialPlotHooks": [
    "[brief description of potential adventure hooks]",
    "[another potential plot element]"
  ],
  "factions": [
    {{
      "name": "[Faction name]",
      "description": "[Brief faction description]"
    }}
  ],
  "keyItems": [
    {{
      "name": "[Item name]",
      "description": "[Item description]"
    }}
  ]
}}

Make the world feel alive, mysterious, and full of adventure potential. Be creative and original."""


def build_world_prompt(world_type: str | None = None) -> list[dict[str, str]]:
    """Build the message sequence that asks for a new world.

    Args:
        world_type: Preferred setting, such as "fantasy" or "sci-fi".
    """
    setting = f"a {world_type} setting" if world_type else "any unique and interesting setting"
    request = f" with a {world_type} setting" if world_type else ""
    return [
        {"role": "system", "content": WORLD_SYSTEM_PROMPT.format(setting=setting)},
        {
            "role": "user",
            "content": (
                f"Create a new game world{request}. Make it unique and interesting "
                "with detailed lore, factions, and geography!"
            ),
        },
    ]


# =============================================================================
# Specialized Content Prompts
# =============================================================================


def _npc_prompt(
    world_type: str = "fantasy",
    current_location: str = "",
    importance: str = "minor",
    **_: Any,
) -> list[dict[str, str]]:
    return [
        {
            "role": "system",
            "content": (
                f"Generate a unique NPC for a {world_type} setting. The NPC should fit in "
                f"the location: {current_location}. This is a {importance} character."
            ),
        },
        {
            "role": "user",
            "content": (
                f"Create an NPC that would be found in {current_location}. Include name, "
                "appearance, personality, background, and possible interactions with the "
                "player. Return in JSON format."
            ),
        },
    ]


def _location_prompt(
    world_type: str = "fantasy",
    current_location: str = "",
    location_type: str = "any",
    **_: Any,
) -> list[dict[str, str]]:
    return [
        {
            "role": "system",
            "content": (
                f"Generate a unique location for a {world_type} setting. This location is "
                f"connected to or part of: {current_location}. It should be a "
                f"{location_type} location."
            ),
        },
        {
            "role": "user",
            "content": (
                f"Create a detailed location that would be found near or in {current_location}. "
                "Include name, description, notable features, potential encounters, and any "
                "items/secrets that might be found there. Return in JSON format."
            ),
        },
    ]


def _item_prompt(
    world_type: str = "fantasy",
    rarity: str = "common",
    item_type: str = "any",
    **_: Any,
) -> list[dict[str, str]]:
    return [
        {
            "role": "system",
            "content": f"Generate a unique {rarity} {item_type} item for a {world_type} setting.",
        },
        {
            "role": "user",
            "content": (
                f"Create a {rarity} {item_type} that would exist in a {world_type} world. "
                "Include name, description, properties, and any special abilities or lore. "
                "Return in JSON format."
            ),
        },
    ]


def _quest_prompt(
    world_type: str = "fantasy",
    current_location: str = "",
    difficulty: str = "medium",
    quest_type: str = "any",
    **_: Any,
) -> list[dict[str, str]]:
    return [
        {
            "role": "system",
            "content": (
                f"Generate a unique {difficulty} {quest_type} quest for a {world_type} "
                f"setting. The quest should start in or relate to: {current_location}."
            ),
        },
        {
            "role": "user",
            "content": (
                f"Create a {quest_type} quest that would begin in {current_location}. Include "
                "title, description, objectives, potential rewards, and any NPCs involved. "
                f"The difficulty should be {difficulty}. Return in JSON format."
            ),
        },
    ]


CONTENT_PROMPTS = {
    "npc": _npc_prompt,
    "location": _location_prompt,
    "item": _item_prompt,
    "quest": _quest_prompt,
}


def build_content_prompt(content_type: str, **parameters: Any) -> list[dict[str, str]]:
    """Build a targeted prompt for one piece of game content.

    Args:
        content_type: One of "npc", "location", "item" or "quest"; any
            other value produces a generic content request.
        **parameters: Prompt parameters such as ``world_type``,
            ``current_location``, ``rarity`` or ``difficulty``.

    Example:
        >>> messages = build_content_prompt("item", world_type="steampunk", rarity="rare")
        >>> messages[0]["content"]
        'Generate a unique rare any item for a steampunk setting.'
    """
    builder = CONTENT_PROMPTS.get(content_type)
    if builder is not None:
        return builder(**parameters)
    return [
        {"role": "system", "content": "Generate content for an RPG game."},
        {
            "role": "user",
            "content": (
                f"Generate {content_type} content with these parameters: "
                f"{json.dumps(parameters, default=str)}"
            ),
        },
    ]


__all__ = [
    "GAME_SYSTEM_PROMPT",
    "FEW_SHOT_EXAMPLES",
    "WORLD_SYSTEM_PROMPT",
    "CONTENT_PROMPTS",
    "build_game_prompt",
    "build_world_prompt",
    "build_content_prompt",
]
