"""State reducer: apply one validated change set to a game snapshot.

The reducer is deterministic and never mutates its input. It appends the
action and narrative to the history, applies each present change in a
fixed order, then advances the clock and applies the status effect,
day boundary and leveling rules.

Example:
    ```python
    from rpg_engine.engine.reducer import apply_changes

    new_state = apply_changes(state, "look around", "You see a cave.", changes)
    assert new_state.time_elapsed == state.time_elapsed + 1
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from rpg_engine.core.constants import (
    DAY_HEAL,
    DISCOVERY_XP,
    HISTORY_LIMIT,
    LEVEL_XP_STEP,
    MAX_HEALTH,
    MIN_HEALTH,
    QUEST_XP,
    TIME_UNITS_PER_DAY,
)
from rpg_engine.core.logging import get_logger
from rpg_engine.models.changes import ValidatedChangeSet
from rpg_engine.models.game_state import (
    GameState,
    HistoryEntry,
    LastAction,
    StatusEffect,
    contains_quest,
    quest_title,
    utc_now,
)


if TYPE_CHECKING:
    from rpg_engine.core.config import GameSettings


logger = get_logger(__name__)


@dataclass(frozen=True)
class TurnRules:
    """Numeric rules applied by the reducer each turn."""

    history_limit: int = HISTORY_LIMIT
    time_units_per_day: int = TIME_UNITS_PER_DAY
    level_xp_step: int = LEVEL_XP_STEP
    discovery_xp: int = DISCOVERY_XP
    quest_xp: int = QUEST_XP
    day_heal: int = DAY_HEAL

    @classmethod
    def from_settings(cls, settings: GameSettings) -> TurnRules:
        """Build the rules from game settings."""
        return cls(
            history_limit=settings.history_limit,
            time_units_per_day=settings.time_units_per_day,
            level_xp_step=settings.level_xp_step,
            discovery_xp=settings.discovery_xp,
            quest_xp=settings.quest_xp,
            day_heal=settings.day_heal,
        )


DEFAULT_RULES = TurnRules()


def apply_changes(
    state: GameState,
    action: str,
    narrative: str,
    changes: ValidatedChangeSet,
    *,
    rules: TurnRules | None = None,
    timestamp: datetime | None = None,
) -> GameState:
    """Produce the next snapshot from a previous one.

    Args:
        state: Previous snapshot; left untouched.
        action: Action text the player submitted.
        narrative: Narrative shown for this turn.
        changes: Validated changes to apply.
        rules: Turn rules; defaults to the standard rules.
        timestamp: Time of the action; defaults to now (UTC).

    Returns:
        The new snapshot.
    """
    rules = rules or DEFAULT_RULES
    player = state.player

    history = list(state.game_history)
    history.append(HistoryEntry.action(action))
    history.append(HistoryEntry.narrative(narrative))

    health = player.health
    inventory = list(player.inventory)
    quests = list(player.quests)
    experience = player.experience
    level = player.level
    effects = list(player.status_effects)
    current_location = state.current_location
    discovered = list(state.discovered_locations)
    relationships = dict(state.npc_relationships)
    game_over = state.game_over

    if changes.health is not None:
        health = changes.health
        if health <= MIN_HEALTH:
            history.append(HistoryEntry.system("You have died. Game over."))
            game_over = True

    for item in changes.add_items or ():
        if item not in inventory:
            inventory.append(item)
            history.append(HistoryEntry.system(f"Added to inventory: {item}"))

    for item in changes.remove_items or ():
        if item in inventory:
            inventory.remove(item)
            history.append(HistoryEntry.system(f"Removed from inventory: {item}"))

    if changes.new_location is not None:
        current_location = changes.new_location
        if current_location.id not in discovered:
            discovered.append(current_location.id)
            experience += rules.discovery_xp
            history.append(
                HistoryEntry.system(f"Discovered new location: {current_location.name}")
            )

    for quest in changes.add_quests or ():
        if not contains_quest(quests, quest):
            quests.append(quest)
            history.append(HistoryEntry.system(f"New quest: {quest_title(quest)}"))
            experience += rules.quest_xp

    if changes.npc_relationships:
        relationships.update(changes.npc_relationships)

    for effect in changes.status_effects or ():
        if not any(active.name == effect.name for active in effects):
            effects.append(effect)
            history.append(
                HistoryEntry.system(f"Status effect: {effect.name} - {effect.description}")
            )

    if changes.experience:
        experience += changes.experience
        history.append(HistoryEntry.system(f"Experience gained: {changes.experience}"))

    effects = _tick_effects(effects)

    time_elapsed = state.time_elapsed + 1
    if time_elapsed % rules.time_units_per_day == 0:
        health = min(MAX_HEALTH, health + rules.day_heal)
        day = time_elapsed // rules.time_units_per_day
        history.append(HistoryEntry.system(f"Day {day} begins. You feel refreshed."))

    while experience >= rules.level_xp_step * level:
        experience -= rules.level_xp_step * level
        level += 1
        health = MAX_HEALTH
        history.append(HistoryEntry.system(f"Level Up! You are now level {level}."))

    if len(history) > rules.history_limit:
        history = history[-rules.history_limit :]

    new_player = player.evolve(
        health=health,
        inventory=tuple(inventory),
        quests=tuple(quests),
        experience=experience,
        level=level,
        status_effects=tuple(effects),
    )
    new_state = state.evolve(
        player=new_player,
        current_location=current_location,
        game_history=tuple(history),
        discovered_locations=tuple(discovered),
        npc_relationships=relationships,
        time_elapsed=time_elapsed,
        last_action=LastAction(text=action, timestamp=timestamp or utc_now()),
        game_over=game_over,
    )

    logger.debug(
        "Applied turn",
        changes=changes.present_fields(),
        time_elapsed=time_elapsed,
        level=level,
        game_over=game_over,
    )
    return new_state


def _tick_effects(effects: list[StatusEffect]) -> list[StatusEffect]:
    """Count every effect down by one turn and drop the expired ones."""
    ticked = [effect.evolve(duration=effect.duration - 1) for effect in effects]
    return [effect for effect in ticked if effect.duration > 0]


__all__ = [
    "TurnRules",
    "DEFAULT_RULES",
    "apply_changes",
]
