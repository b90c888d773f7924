"""World generation pipeline and its lookup tables."""

from rpg_engine.world.generator import (
    enhance_world,
    fallback_world,
    generate_environment,
    generate_world,
    parse_world_response,
    validate_world_data,
)
from rpg_engine.world.tables import FALLBACK_WORLD, table_key


__all__ = [
    "FALLBACK_WORLD",
    "table_key",
    "fallback_world",
    "validate_world_data",
    "generate_environment",
    "enhance_world",
    "parse_world_response",
    "generate_world",
]
