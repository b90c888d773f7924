"""World generation pipeline.

Turns a one-shot world-building reply into a complete ``WorldData``:

1. The first ``{`` to the last ``}`` of the reply is decoded as JSON.
   If that fails outright, the canonical fallback world is returned.
2. Missing or malformed fields are filled with fixed defaults.
3. Nearby locations, NPCs and the environment are synthesized from the
   lookup table of the declared world type.

Only step 3 is random, and its source of randomness can be injected.

Example:
    ```python
    import random

    from rpg_engine.world import generate_world

    world = generate_world("steampunk", reply_text, rng=random.Random(7))
    print(world.name, world.environment)
    ```
"""

from __future__ import annotations

import json
import random
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from rpg_engine.core.constants import DEFAULT_LOCATION_ID, DEFAULT_WORLD_TYPE
from rpg_engine.core.logging import get_logger
from rpg_engine.models.base import Location, normalize_location_id
from rpg_engine.models.world import Environment, Faction, KeyItem, WorldData
from rpg_engine.world.tables import (
    DEFAULT_FACTIONS,
    DEFAULT_KEY_ITEMS,
    DEFAULT_PLOT_HOOKS,
    DEFAULT_STARTING_DESCRIPTION,
    DEFAULT_STARTING_NAME,
    DEFAULT_WORLD_DESCRIPTION,
    DEFAULT_WORLD_NAME,
    FALLBACK_WORLD,
    LOCATION_SETS,
    NPC_SETS,
    SEASONS,
    TIME_OPTIONS,
    WEATHER_SETS,
    table_key,
)


logger = get_logger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def fallback_world() -> WorldData:
    """Return the canonical fallback world."""
    return FALLBACK_WORLD


def _text(value: Any, default: str) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value).strip()
        if text:
            return text
    return default


def _named_entries(raw: Any, model: type[Faction] | type[KeyItem]) -> list[Faction | KeyItem]:
    if not isinstance(raw, list):
        return []
    entries = []
    for entry in raw:
        if isinstance(entry, Mapping) and _text(entry.get("name"), ""):
            entries.append(
                model(
                    name=_text(entry["name"], ""),
                    description=_text(entry.get("description"), ""),
                )
            )
    return entries


def _starting_location(raw: Any) -> Location:
    if not isinstance(raw, Mapping):
        return Location(
            id=DEFAULT_LOCATION_ID,
            name=DEFAULT_STARTING_NAME,
            description=DEFAULT_STARTING_DESCRIPTION,
        )
    location_id = normalize_location_id(_text(raw.get("id"), ""))
    return Location(
        id=location_id or DEFAULT_LOCATION_ID,
        name=_text(raw.get("name"), DEFAULT_STARTING_NAME),
        description=_text(raw.get("description"), DEFAULT_STARTING_DESCRIPTION),
    )


def validate_world_data(data: Mapping[str, Any], world_type: str | None = None) -> WorldData:
    """Build a world from decoded JSON, filling every missing field.

    Args:
        data: Decoded world object.
        world_type: Requested world type, used when the reply declares none.

    Returns:
        A world without the synthesized sections.
    """
    declared_type = _text(data.get("type"), _text(world_type, DEFAULT_WORLD_TYPE))
    name = _text(data.get("name"), DEFAULT_WORLD_NAME)
    starting_location = _starting_location(data.get("startingLocation"))

    hooks = data.get("potentialPlotHooks")
    plot_hooks = (
        [_text(hook, "") for hook in hooks if _text(hook, "")]
        if isinstance(hooks, list)
        else []
    )

    return WorldData(
        world_type=declared_type,
        name=name,
        description=_text(data.get("description"), DEFAULT_WORLD_DESCRIPTION),
        starting_location=starting_location,
        intro_text=_text(
            data.get("introText"),
            f"Welcome to {name}, a {declared_type} world waiting to be explored. "
            f"Your adventure begins at {starting_location.name}.",
        ),
        potential_plot_hooks=tuple(plot_hooks) or DEFAULT_PLOT_HOOKS,
        factions=tuple(_named_entries(data.get("factions"), Faction)) or DEFAULT_FACTIONS,
        key_items=tuple(_named_entries(data.get("keyItems"), KeyItem)) or DEFAULT_KEY_ITEMS,
    )


def generate_environment(world_type: str, rng: random.Random) -> Environment:
    """Pick a random time of day, weather and season for a world type."""
    return Environment(
        time=rng.choice(TIME_OPTIONS),
        weather=rng.choice(WEATHER_SETS[table_key(world_type)]),
        season=rng.choice(SEASONS),
    )


def enhance_world(world: WorldData, rng: random.Random | None = None) -> WorldData:
    """Add nearby locations, NPCs and environment for the world's type."""
    rng = rng or random.Random()
    key = table_key(world.world_type)
    return world.evolve(
        nearby_locations=LOCATION_SETS[key],
        npcs=NPC_SETS[key],
        environment=generate_environment(world.world_type, rng),
    )


def parse_world_response(
    model_response_text: str,
    world_type: str | None = None,
) -> WorldData | None:
    """Decode and validate a world reply.

    Returns:
        The validated world, or None when the reply cannot be parsed.
    """
    match = _JSON_OBJECT.search(model_response_text or "")
    if match is None:
        logger.warning("No JSON object in world response")
        return None

    try:
        data = json.loads(match.group(0))
    except (ValueError, RecursionError) as exc:
        logger.warning("Invalid JSON in world response", error=str(exc))
        return None
    if not isinstance(data, dict):
        logger.warning("World response is not an object", kind=type(data).__name__)
        return None

    try:
        return validate_world_data(data, world_type)
    except ValidationError as exc:
        logger.warning("World response failed validation", error=str(exc))
        return None


def generate_world(
    world_type: str | None,
    model_response_text: str,
    *,
    rng: random.Random | None = None,
) -> WorldData:
    """Run the world pipeline over one model reply.

    Args:
        world_type: Requested world type, if any.
        model_response_text: Raw world-building reply.
        rng: Random source for environment synthesis.

    Returns:
        The enhanced world, or the fallback world when parsing fails.
    """
    world = parse_world_response(model_response_text, world_type)
    if world is None:
        logger.info("Using fallback world", requested_type=world_type)
        return fallback_world()

    enhanced = enhance_world(world, rng)
    logger.info("Generated world", name=enhanced.name, world_type=enhanced.world_type)
    return enhanced


__all__ = [
    "fallback_world",
    "validate_world_data",
    "generate_environment",
    "enhance_world",
    "parse_world_response",
    "generate_world",
]
