"""Tests for field-by-field recovery of malformed state changes."""

from __future__ import annotations

from rpg_engine.engine.recovery import (
    recover_add_items,
    recover_add_quests,
    recover_experience,
    recover_fields,
    recover_health,
    recover_new_location,
    recover_npc_relationships,
    recover_remove_items,
)


class TestNumberFields:
    """Tests for health and experience recovery."""

    def test_health(self) -> None:
        """Test integer, negative and decimal health."""
        assert recover_health('{"health": 50, oops') == 50
        assert recover_health('{"health": -5') == -5
        assert recover_health('{"health": 42.5') == 42.5

    def test_health_missing(self) -> None:
        """Test that a non-numeric health is not recovered."""
        assert recover_health('{"health": "full"') is None

    def test_experience(self) -> None:
        """Test experience recovery."""
        assert recover_experience('{"experience": 15 ]]') == 15
        assert recover_experience('{"experience": -3') is None


class TestListFields:
    """Tests for item and quest list recovery."""

    def test_add_items(self) -> None:
        """Test item names are unquoted and trimmed."""
        text = '{"addItems": ["rope", " lantern ", ""], "health": }'

        assert recover_add_items(text) == ["rope", "lantern"]

    def test_add_items_unterminated(self) -> None:
        """Test an unterminated array is not recovered."""
        assert recover_add_items('{"health": 50, "addItems": [oops}') is None

    def test_remove_items(self) -> None:
        """Test removeItems recovery."""
        assert recover_remove_items('"removeItems": ["torch"] broken') == ["torch"]

    def test_add_quests(self) -> None:
        """Test plain quest recovery."""
        assert recover_add_quests('"addQuests": ["Find the smith", "Light the beacon"],,') == [
            "Find the smith",
            "Light the beacon",
        ]


class TestNewLocation:
    """Tests for location recovery."""

    def test_complete_location(self) -> None:
        """Test that a location with all three fields is recovered."""
        text = '"newLocation": {"id": "old_mill", "name": "Old Mill", "description": "Creaky."} oops'

        assert recover_new_location(text) == {
            "id": "old_mill",
            "name": "Old Mill",
            "description": "Creaky.",
        }

    def test_partial_location(self) -> None:
        """Test that a location missing a field is not recovered."""
        assert recover_new_location('"newLocation": {"id": "old_mill", "name": "Old Mill"}') is None


class TestNpcRelationships:
    """Tests for relationship recovery."""

    def test_numbers_and_text(self) -> None:
        """Test numeric and textual values."""
        text = '"npcRelationships": {"Thorne": 60, "Mira": "wary"} ,,'

        assert recover_npc_relationships(text) == {"Thorne": 60, "Mira": "wary"}

    def test_empty_values_skipped(self) -> None:
        """Test that pairs without a value are skipped."""
        assert recover_npc_relationships('"npcRelationships": {"Thorne": }') == {}


class TestRecoverFields:
    """Tests for whole-text recovery."""

    def test_recovers_what_it_can(self) -> None:
        """Test that good fields survive a broken one."""
        recovered = recover_fields('{"health": 50, "addItems": [oops}, "experience": 10')

        assert recovered == {"health": 50, "experience": 10}

    def test_nothing_to_recover(self) -> None:
        """Test that unrelated text yields an empty result."""
        assert recover_fields("no changes this time") == {}
