"""Turn pipeline: extractor, decoder, validator and reducer."""

from rpg_engine.engine.decoder import decode_state_changes
from rpg_engine.engine.extractor import ExtractedSections, extract_sections, sanitize_narrative
from rpg_engine.engine.recovery import recover_fields
from rpg_engine.engine.reducer import DEFAULT_RULES, TurnRules, apply_changes
from rpg_engine.engine.turn import TurnResult, apply_turn, parse_turn_response
from rpg_engine.engine.validator import validate_changes


__all__ = [
    # Extraction
    "ExtractedSections",
    "extract_sections",
    "sanitize_narrative",
    # Decoding
    "decode_state_changes",
    "recover_fields",
    # Validation
    "validate_changes",
    # Reduction
    "TurnRules",
    "DEFAULT_RULES",
    "apply_changes",
    # Facade
    "TurnResult",
    "apply_turn",
    "parse_turn_response",
]
