"""Tests for the world generation pipeline."""

from __future__ import annotations

import json
import random
from typing import Any

import pytest

from rpg_engine.world.generator import (
    enhance_world,
    fallback_world,
    generate_environment,
    generate_world,
    parse_world_response,
    validate_world_data,
)
from rpg_engine.world.tables import (
    DEFAULT_FACTIONS,
    DEFAULT_KEY_ITEMS,
    DEFAULT_PLOT_HOOKS,
    LOCATION_SETS,
    NPC_SETS,
    SEASONS,
    TIME_OPTIONS,
    WEATHER_SETS,
    table_key,
)


@pytest.fixture
def world_document() -> dict[str, Any]:
    """A complete world as the model would return it."""
    return {
        "type": "steampunk",
        "name": "Brassholm",
        "description": "A city of gears under a smog-stained sky.",
        "startingLocation": {
            "id": "Gear Square",
            "name": "Gear Square",
            "description": "Pistons hiss around a brass fountain.",
        },
        "introText": "Steam curls around your boots.",
        "potentialPlotHooks": ["A stolen automaton"],
        "factions": [{"name": "The Cogwrights", "description": "Engineers"}],
        "keyItems": [{"name": "Aether Key", "description": "Hums softly"}],
    }


class TestValidateWorldData:
    """Tests for filling in incomplete worlds."""

    def test_complete_world_kept(self, world_document: dict[str, Any]) -> None:
        """Test supplied values survive and the location id is normalized."""
        world = validate_world_data(world_document)

        assert world.world_type == "steampunk"
        assert world.name == "Brassholm"
        assert world.starting_location.id == "gear_square"
        assert world.factions[0].name == "The Cogwrights"
        assert world.potential_plot_hooks == ("A stolen automaton",)

    def test_empty_world_defaults(self) -> None:
        """Test every field gets its default."""
        world = validate_world_data({})

        assert world.world_type == "fantasy"
        assert world.name == "Unnamed Realm"
        assert world.description == "A mysterious world awaiting exploration."
        assert world.starting_location.id == "starting_point"
        assert world.starting_location.name == "Starting Point"
        assert world.intro_text == (
            "Welcome to Unnamed Realm, a fantasy world waiting to be explored. "
            "Your adventure begins at Starting Point."
        )
        assert world.potential_plot_hooks == DEFAULT_PLOT_HOOKS
        assert world.factions == DEFAULT_FACTIONS
        assert world.key_items == DEFAULT_KEY_ITEMS

    def test_requested_type_used_when_missing(self) -> None:
        """Test the requested world type fills a missing declaration."""
        assert validate_world_data({"name": "Nova"}, "sci-fi").world_type == "sci-fi"

    def test_malformed_sections_replaced(self) -> None:
        """Test wrongly shaped lists fall back to defaults."""
        world = validate_world_data(
            {"factions": "many", "keyItems": [{"description": "nameless"}], "potentialPlotHooks": []}
        )

        assert world.factions == DEFAULT_FACTIONS
        assert world.key_items == DEFAULT_KEY_ITEMS
        assert world.potential_plot_hooks == DEFAULT_PLOT_HOOKS


class TestEnhanceWorld:
    """Tests for synthesized world sections."""

    def test_tables_for_known_type(self, world_document: dict[str, Any]) -> None:
        """Test nearby locations and NPCs come from the world type's tables."""
        world = enhance_world(validate_world_data(world_document), random.Random(1))

        assert world.nearby_locations == LOCATION_SETS["steampunk"]
        assert world.npcs == NPC_SETS["steampunk"]
        assert world.environment.weather in WEATHER_SETS["steampunk"]
        assert world.environment.time in TIME_OPTIONS
        assert world.environment.season in SEASONS

    def test_unknown_type_uses_fantasy(self) -> None:
        """Test unrecognized types use the fantasy tables."""
        world = enhance_world(validate_world_data({"type": "Underwater"}), random.Random(1))

        assert world.world_type == "Underwater"
        assert world.nearby_locations == LOCATION_SETS["fantasy"]

    def test_table_key_case_insensitive(self) -> None:
        """Test the table lookup ignores case."""
        assert table_key("Sci-Fi") == "sci-fi"
        assert table_key("noir") == "fantasy"

    def test_environment_reproducible(self) -> None:
        """Test a seeded random source gives the same environment."""
        assert generate_environment("cyberpunk", random.Random(7)) == generate_environment(
            "cyberpunk", random.Random(7)
        )


class TestGenerateWorld:
    """Tests for the whole pipeline."""

    def test_generated_world(self, world_document: dict[str, Any]) -> None:
        """Test JSON surrounded by prose is decoded and enhanced."""
        reply = f"Here is your world:\n{json.dumps(world_document)}\nEnjoy!"

        world = generate_world("steampunk", reply, rng=random.Random(3))

        assert world.name == "Brassholm"
        assert world.environment is not None
        assert len(world.npcs) == 3

    def test_unparseable_reply_uses_fallback(self) -> None:
        """Test an unparseable sci-fi reply yields the canonical fallback world."""
        world = generate_world("sci-fi", "I cannot create worlds today.")

        assert world.name == "Eldoria"
        assert world.world_type == "fantasy"
        assert world == fallback_world()

    @pytest.mark.parametrize("reply", ["{not json}", "[1, 2]", '{"name": "Half"'])
    def test_invalid_json_rejected(self, reply: str) -> None:
        """Test replies that do not decode to an object."""
        assert parse_world_response(reply) is None

    @pytest.mark.parametrize(
        "reply",
        [
            '{"name": "X", "type": "sci-fi", "seed": 1' + "0" * 5000 + "}",
            '{"name": "X", "lore": ' + "[" * 100_000 + "]" * 100_000 + "}",
        ],
        ids=["integer-digit-limit", "deep-nesting"],
    )
    def test_unparseable_numbers_and_nesting_use_fallback(self, reply: str) -> None:
        """Test JSON the interpreter refuses to parse yields the fallback world."""
        assert generate_world("sci-fi", reply) == fallback_world()

    def test_fallback_world_serializes(self) -> None:
        """Test the fallback world uses the document field names."""
        document = fallback_world().to_document()

        assert document["type"] == "fantasy"
        assert document["startingLocation"]["id"] == "forest_edge"
        assert document["environment"] == {"time": "dusk", "weather": "misty", "season": "autumn"}
