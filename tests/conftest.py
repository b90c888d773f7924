"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the AI RPG engine test suite.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from rpg_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    monkeypatch.chdir(tmp_path)
    env_vars = {
        "RPG_ENGINE_OPENROUTER_API_KEY": "test-openrouter-key",
        "RPG_ENGINE_DEBUG": "true",
        "RPG_ENGINE_LOG_LEVEL": "DEBUG",
        "RPG_ENGINE_STORAGE_BACKEND": "memory",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings(mock_env_vars: dict[str, str]) -> Any:
    """Create application settings backed by the in-memory store."""
    from rpg_engine.core.config import Settings

    return Settings()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_world() -> Any:
    """A small, fully populated world.

    Returns:
        WorldData instance.
    """
    from rpg_engine.models.base import Location
    from rpg_engine.models.world import Environment, NPCProfile, WorldData

    return WorldData(
        world_type="fantasy",
        name="Valoria",
        description="A kingdom of rivers and old stone.",
        starting_location=Location(
            id="river_gate",
            name="River Gate",
            description="A fortified gate over a slow river.",
        ),
        intro_text="You arrive at the River Gate as the bells ring.",
        potential_plot_hooks=("A missing ferryman",),
        nearby_locations=(
            Location(id="old_mill", name="Old Mill", description="A creaking water mill."),
        ),
        npcs=(
            NPCProfile(id="gate_captain", name="Captain Brann", description="A tired guard."),
        ),
        environment=Environment(time="morning", weather="clear", season="spring"),
    )


@pytest.fixture
def sample_state(sample_world: Any) -> Any:
    """The first snapshot of a game in the sample world.

    Returns:
        GameState instance.
    """
    from rpg_engine.dm.session import initialize_game_state

    return initialize_game_state(
        sample_world,
        character_name="Adventurer",
        starting_inventory=["torch", "water flask", "map"],
        created_at=FIXED_TIME,
    )


@pytest.fixture
def turn_reply() -> Any:
    """Build a model reply from a narrative and a state-changes value.

    Returns:
        Callable producing reply text.
    """
    import json

    def _build(narrative: str, changes: Any = None) -> str:
        body = changes if isinstance(changes, str) else json.dumps(changes or {})
        return f"NARRATIVE: {narrative}\n\nSTATE_CHANGES: {body}"

    return _build


# =============================================================================
# Collaborator Fixtures
# =============================================================================


class FakeChatClient:
    """Scripted stand-in for the language model client.

    Replies are returned in order; an exception instance in the script
    is raised instead of returned.
    """

    def __init__(self, replies: list[str | Exception] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict[str, Any]] = []

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        if not self.replies:
            raise AssertionError("FakeChatClient ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_client() -> FakeChatClient:
    """Create an empty scripted model client."""
    return FakeChatClient()


@pytest.fixture
def memory_store() -> Any:
    """Create an in-memory game store."""
    from rpg_engine.storage.memory import MemoryGameStore

    return MemoryGameStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Any:
    """Create a SQLite game store in a temporary directory."""
    from rpg_engine.storage.database import SQLiteGameStore

    return SQLiteGameStore(tmp_path / "data" / "games.db")
