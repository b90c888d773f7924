"""Turn pipeline facade: raw model reply in, next snapshot out.

``apply_turn`` chains the extractor, decoder, validator and reducer.
Content problems in the reply never abort the turn: they degrade to the
generic fallback narrative and an empty or partial change set.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rpg_engine.core.constants import DEFAULT_EFFECT_DURATION, FALLBACK_NARRATIVE
from rpg_engine.core.logging import get_logger
from rpg_engine.engine.decoder import decode_state_changes
from rpg_engine.engine.extractor import extract_sections
from rpg_engine.engine.reducer import TurnRules, apply_changes
from rpg_engine.engine.validator import validate_changes
from rpg_engine.models.changes import ValidatedChangeSet
from rpg_engine.models.game_state import GameState


logger = get_logger(__name__)


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one turn.

    Attributes:
        narrative: Narrative to show the player.
        state: The new snapshot.
        changes: The validated changes that were applied.
    """

    narrative: str
    state: GameState
    changes: ValidatedChangeSet


def parse_turn_response(
    model_response_text: str,
    state: GameState,
    *,
    default_effect_duration: int = DEFAULT_EFFECT_DURATION,
) -> tuple[str, ValidatedChangeSet]:
    """Extract, decode and validate a model reply.

    Args:
        model_response_text: Raw reply text.
        state: Snapshot the changes are validated against.
        default_effect_duration: Duration for effects without one.

    Returns:
        The narrative and the validated change set. Never raises for
        content problems.
    """
    try:
        sections = extract_sections(model_response_text or "")
        decoded = decode_state_changes(sections.state_changes_text)
        changes = validate_changes(
            decoded, state, default_effect_duration=default_effect_duration
        )
    except Exception:
        logger.exception("Failed to parse model response")
        return FALLBACK_NARRATIVE, ValidatedChangeSet()

    narrative = sections.narrative
    if not narrative:
        logger.warning("Model response had no narrative")
        narrative = FALLBACK_NARRATIVE
    return narrative, changes


def apply_turn(
    previous_state: GameState,
    action: str,
    model_response_text: str,
    *,
    rules: TurnRules | None = None,
    default_effect_duration: int = DEFAULT_EFFECT_DURATION,
    timestamp: datetime | None = None,
) -> TurnResult:
    """Apply one model reply to the previous snapshot.

    Args:
        previous_state: Snapshot before the turn; left untouched.
        action: Action text the player submitted.
        model_response_text: Raw reply from the model.
        rules: Turn rules for the reducer.
        default_effect_duration: Duration for effects without one.
        timestamp: Time of the action; defaults to now.

    Returns:
        The narrative, new snapshot and applied changes.

    Example:
        >>> result = apply_turn(state, "wait", "NARRATIVE: Time passes.\\nSTATE_CHANGES: {}")
        >>> result.narrative
        'Time passes.'
    """
    narrative, changes = parse_turn_response(
        model_response_text,
        previous_state,
        default_effect_duration=default_effect_duration,
    )
    new_state = apply_changes(
        previous_state,
        action,
        narrative,
        changes,
        rules=rules,
        timestamp=timestamp,
    )
    return TurnResult(narrative=narrative, state=new_state, changes=changes)


__all__ = [
    "TurnResult",
    "parse_turn_response",
    "apply_turn",
]
