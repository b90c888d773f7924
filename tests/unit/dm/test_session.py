"""Tests for the Game Master service."""

from __future__ import annotations

import json
import random
import threading
from typing import Any

import pytest

from rpg_engine.core.exceptions import (
    AIConnectionError,
    GameEngineError,
    GameNotFoundError,
    GameOverError,
)
from rpg_engine.dm.session import ActionType, GameMaster, classify_action, initialize_game_state
from rpg_engine.models.game_state import HistoryEntryType
from rpg_engine.world.tables import FALLBACK_WORLD


WORLD_REPLY = json.dumps(
    {
        "type": "cyberpunk",
        "name": "Neon Verge",
        "description": "A sprawl under permanent rain.",
        "startingLocation": {"id": "Rain Alley", "name": "Rain Alley", "description": "Wet."},
        "introText": "Rain hammers the neon signs.",
    }
)


@pytest.fixture
def master(memory_store: Any, fake_client: Any, settings: Any) -> GameMaster:
    """A Game Master over the in-memory store and scripted client."""
    return GameMaster(memory_store, fake_client, settings, rng=random.Random(0))


class TestClassifyAction:
    """Tests for keyword action classification."""

    @pytest.mark.parametrize(
        ("action", "expected"),
        [
            ("Attack the goblin", ActionType.COMBAT),
            ("Ask the innkeeper about rumors", ActionType.DIALOGUE),
            ("Pick up the lantern", ActionType.ITEM),
            ("Walk north", ActionType.MOVEMENT),
            ("Examine the statue", ActionType.OBSERVATION),
            ("Open the chest", ActionType.INTERACTION),
            ("Sing a song", ActionType.OTHER),
        ],
    )
    def test_keywords(self, action: str, expected: ActionType) -> None:
        """Test each keyword group."""
        assert classify_action(action) == expected


class TestInitializeGameState:
    """Tests for the first snapshot of a game."""

    def test_from_fallback_world(self) -> None:
        """Test the initial state mirrors the world."""
        state = initialize_game_state(
            FALLBACK_WORLD,
            character_name="Rook",
            starting_inventory=["torch", "water flask", "map"],
        )

        assert state.player.name == "Rook"
        assert state.player.health == 100
        assert state.player.level == 1
        assert state.player.inventory == ("torch", "water flask", "map")
        assert state.world.name == "Eldoria"
        assert state.current_location.id == "forest_edge"
        assert state.discovered_locations == ("forest_edge",)
        assert state.game_history[0].kind == HistoryEntryType.NARRATIVE
        assert state.game_history[0].text == FALLBACK_WORLD.intro_text
        assert state.available_npcs == FALLBACK_WORLD.npcs
        assert state.environment == FALLBACK_WORLD.environment
        assert state.game_over is False

    def test_default_environment(self, sample_world: Any) -> None:
        """Test worlds without an environment get the default one."""
        state = initialize_game_state(
            sample_world.evolve(environment=None),
            character_name="Rook",
            starting_inventory=[],
        )

        assert (state.environment.time, state.environment.weather) == ("day", "clear")


class TestNewGame:
    """Tests for starting games."""

    def test_generated_world(self, master: GameMaster, fake_client: Any, memory_store: Any) -> None:
        """Test a new game is created from the model's world and saved."""
        fake_client.replies = [WORLD_REPLY]

        state = master.new_game("p-1", world_type="cyberpunk", character_name="Vex")

        assert state.world.name == "Neon Verge"
        assert state.current_location.id == "rain_alley"
        assert state.player.name == "Vex"
        assert len(state.available_npcs) == 3
        assert memory_store.load("p-1") == state
        assert fake_client.calls[0]["temperature"] == 0.8
        assert fake_client.calls[0]["max_tokens"] == 1000

    def test_model_failure_uses_fallback(self, master: GameMaster, fake_client: Any) -> None:
        """Test a failed world call still starts a game in the fallback world."""
        fake_client.replies = [AIConnectionError("down")]

        state = master.new_game("p-1", world_type="sci-fi")

        assert state.world.name == "Eldoria"
        assert state.player.name == "Adventurer"


class TestTakeTurn:
    """Tests for playing turns."""

    def test_turn_saved(
        self,
        master: GameMaster,
        fake_client: Any,
        memory_store: Any,
        turn_reply: Any,
    ) -> None:
        """Test a turn applies the reply and saves the new snapshot."""
        fake_client.replies = [WORLD_REPLY, turn_reply("You find a knife.", {"addItems": ["knife"]})]
        master.new_game("p-1")

        result = master.take_turn("p-1", "  search the alley  ")

        assert result.narrative == "You find a knife."
        assert "knife" in result.state.player.inventory
        assert result.state.last_action.text == "search the alley"
        assert memory_store.load("p-1") == result.state
        assert fake_client.calls[1]["messages"][2]["content"].endswith("Player: search the alley")

    def test_first_turn_creates_game(
        self, master: GameMaster, fake_client: Any, turn_reply: Any
    ) -> None:
        """Test a player without a game gets one before the turn."""
        fake_client.replies = [WORLD_REPLY, turn_reply("You wake up.")]

        result = master.take_turn("new-player", "wake up")

        assert result.state.world.name == "Neon Verge"
        assert result.state.time_elapsed == 1

    def test_game_over_rejected(
        self, master: GameMaster, fake_client: Any, turn_reply: Any
    ) -> None:
        """Test a finished game refuses further actions."""
        fake_client.replies = [WORLD_REPLY, turn_reply("You fall.", {"health": 0})]
        master.new_game("p-1")
        master.take_turn("p-1", "jump")

        with pytest.raises(GameOverError):
            master.take_turn("p-1", "get up")

    def test_model_failure_saves_nothing(
        self, master: GameMaster, fake_client: Any, memory_store: Any
    ) -> None:
        """Test a failed model call leaves the saved game untouched."""
        fake_client.replies = [WORLD_REPLY, AIConnectionError("down")]
        before = master.new_game("p-1")

        with pytest.raises(AIConnectionError):
            master.take_turn("p-1", "look")

        assert memory_store.load("p-1") == before

    def test_empty_action(self, master: GameMaster) -> None:
        """Test blank actions are rejected."""
        with pytest.raises(GameEngineError):
            master.take_turn("p-1", "   ")


class TestViews:
    """Tests for loading, statistics and content generation."""

    def test_load_missing_game(self, master: GameMaster) -> None:
        """Test loading an unknown player."""
        with pytest.raises(GameNotFoundError):
            master.load_game("nobody")

    def test_save_and_load(self, master: GameMaster, sample_state: Any) -> None:
        """Test saving through the Game Master."""
        assert master.save_game("p-1", sample_state) is True
        assert master.load_game("p-1") == sample_state

    def test_game_stats(self, master: GameMaster, sample_state: Any, turn_reply: Any, fake_client: Any) -> None:
        """Test the statistics view."""
        master.save_game("p-1", sample_state.evolve(time_elapsed=50))
        fake_client.replies = [turn_reply("Hi.", {"npcRelationships": {"Brann": 65}})]
        master.take_turn("p-1", "greet the captain")

        stats = master.game_stats("p-1")

        assert stats.health == 100
        assert stats.inventory_size == 3
        assert stats.world_name == "Valoria"
        assert stats.current_location == "River Gate"
        assert stats.discovered_locations == 1
        assert [(npc.name, npc.value) for npc in stats.npc_relationships] == [("Brann", 65)]
        assert stats.actions_taken == 1
        assert stats.days_elapsed == 2
        assert stats.time_elapsed == 51
        assert stats.last_action.text == "greet the captain"

    def test_game_stats_missing(self, master: GameMaster) -> None:
        """Test statistics for an unknown player."""
        with pytest.raises(GameNotFoundError):
            master.game_stats("nobody")

    def test_generate_content_json(self, master: GameMaster, sample_state: Any, fake_client: Any) -> None:
        """Test JSON content is decoded and the prompt carries the game context."""
        master.save_game("p-1", sample_state)
        fake_client.replies = ['{"name": "Brass Lantern"}']

        content = master.generate_content("p-1", "item", rarity="rare")

        assert content == {"name": "Brass Lantern"}
        assert "rare any item for a fantasy setting" in fake_client.calls[0]["messages"][0]["content"]

    def test_generate_content_text(self, master: GameMaster, sample_state: Any, fake_client: Any) -> None:
        """Test non-JSON content is returned as text with an error note."""
        master.save_game("p-1", sample_state)
        fake_client.replies = ["A lantern that never dims."]

        content = master.generate_content("p-1", "item")

        assert content == {"text": "A lantern that never dims.", "error": "Could not parse as JSON"}

    @pytest.mark.parametrize(
        "reply",
        ['{"value": ' + "9" * 5000 + "}", "[" * 100_000 + "]" * 100_000],
        ids=["integer-digit-limit", "deep-nesting"],
    )
    def test_generate_content_unparseable_json(
        self, master: GameMaster, sample_state: Any, fake_client: Any, reply: str
    ) -> None:
        """Test JSON the interpreter refuses is returned as text."""
        master.save_game("p-1", sample_state)
        fake_client.replies = [reply]

        content = master.generate_content("p-1", "item")

        assert content == {"text": reply, "error": "Could not parse as JSON"}


class GatedChatClient:
    """Client whose first call blocks until released."""

    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0
        self._lock = threading.Lock()

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        with self._lock:
            self.calls += 1
            first = self.calls == 1
        if first:
            self.entered.set()
            assert self.release.wait(timeout=5)
        return self.reply


class TestPlayerLocking:
    """Tests for serialized turns."""

    def test_same_player_turns_serialized(
        self,
        memory_store: Any,
        settings: Any,
        sample_state: Any,
        turn_reply: Any,
    ) -> None:
        """Test a second turn waits and then builds on the first turn's snapshot."""
        client = GatedChatClient(turn_reply("Time passes."))
        master = GameMaster(memory_store, client, settings)
        master.save_game("p-1", sample_state)
        errors: list[Exception] = []

        def play(action: str) -> None:
            try:
                master.take_turn("p-1", action)
            except Exception as exc:
                errors.append(exc)

        first = threading.Thread(target=play, args=("first",))
        second = threading.Thread(target=play, args=("second",))
        first.start()
        assert client.entered.wait(timeout=5)
        second.start()
        second.join(timeout=0.2)

        assert second.is_alive()
        assert client.calls == 1

        client.release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert errors == []
        state = memory_store.load("p-1")
        assert state.time_elapsed == 2
        actions = [
            entry.text for entry in state.game_history if entry.kind == HistoryEntryType.ACTION
        ]
        assert actions == ["first", "second"]

    def test_locks_released_after_turns(
        self, master: GameMaster, fake_client: Any, sample_state: Any, turn_reply: Any
    ) -> None:
        """Test no per-player lock outlives the calls that used it."""
        master.save_game("p-1", sample_state)
        master.save_game("p-2", sample_state)
        fake_client.replies = [turn_reply("Hi."), AIConnectionError("down")]
        master.take_turn("p-1", "wave")

        with pytest.raises(AIConnectionError):
            master.take_turn("p-2", "wave")

        assert master._locks == {}
