"""Engine-wide constants for the AI RPG engine.

Default rule values mirror the defaults of GameSettings; the parsing
pipeline uses the marker and fallback text constants directly.
"""

from __future__ import annotations

# =============================================================================
# Response Format Markers
# =============================================================================

NARRATIVE_MARKER = "NARRATIVE:"
"""Marker preceding the visible narrative in a model reply."""

STATE_CHANGES_MARKER = "STATE_CHANGES:"
"""Marker preceding the JSON state changes in a model reply."""

FALLBACK_NARRATIVE = "The magical forces seem confused. Please try another action."
"""Narrative shown when a reply yields no usable text."""

# =============================================================================
# Player Limits
# =============================================================================

MIN_HEALTH = 0
"""Lowest possible health; reaching it ends the game."""

MAX_HEALTH = 100
"""Highest possible health; level ups restore to this value."""

MIN_RELATIONSHIP = 0
"""Lowest numeric NPC relationship value."""

MAX_RELATIONSHIP = 100
"""Highest numeric NPC relationship value."""

# =============================================================================
# Turn Rules
# =============================================================================

HISTORY_LIMIT = 50
"""Number of history entries retained after each turn."""

TIME_UNITS_PER_DAY = 24
"""Time units that make up one in-game day."""

LEVEL_XP_STEP = 100
"""Experience needed to level up, multiplied by the current level."""

DISCOVERY_XP = 10
"""Experience awarded for discovering a new location."""

QUEST_XP = 15
"""Experience awarded for accepting a new quest."""

DAY_HEAL = 10
"""Health restored at the start of each new day."""

DEFAULT_EFFECT_DURATION = 5
"""Duration given to status effects that arrive without a usable one."""

# =============================================================================
# World Defaults
# =============================================================================

DEFAULT_WORLD_TYPE = "fantasy"
"""World type used when none is declared or the declared one is unknown."""

DEFAULT_LOCATION_ID = "starting_point"
"""Starting location id used when the model omits one."""


__all__ = [
    # Markers
    "NARRATIVE_MARKER",
    "STATE_CHANGES_MARKER",
    "FALLBACK_NARRATIVE",
    # Player limits
    "MIN_HEALTH",
    "MAX_HEALTH",
    "MIN_RELATIONSHIP",
    "MAX_RELATIONSHIP",
    # Turn rules
    "HISTORY_LIMIT",
    "TIME_UNITS_PER_DAY",
    "LEVEL_XP_STEP",
    "DISCOVERY_XP",
    "QUEST_XP",
    "DAY_HEAL",
    "DEFAULT_EFFECT_DURATION",
    # World
    "DEFAULT_WORLD_TYPE",
    "DEFAULT_LOCATION_ID",
]
