"""Tests for the exception hierarchy."""

from __future__ import annotations

from rpg_engine.core.exceptions import (
    AIConnectionError,
    AIControlError,
    AIRateLimitError,
    ConfigurationError,
    GameEngineError,
    GameNotFoundError,
    GameOverError,
    InvalidGameStateError,
    RpgEngineError,
    StorageError,
)


class TestRpgEngineError:
    """Tests for the base RpgEngineError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = RpgEngineError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = RpgEngineError("Test error", details={"key": "value", "count": 42})
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(RpgEngineError("Test", details={"x": 1}))
        assert "RpgEngineError" in repr_str
        assert "x" in repr_str


class TestGameEngineExceptions:
    """Tests for game engine exceptions."""

    def test_invalid_game_state_field(self) -> None:
        """Test InvalidGameStateError carries the offending field."""
        exc = InvalidGameStateError("Bad inventory", field_name="inventory")
        assert exc.details["field_name"] == "inventory"
        assert isinstance(exc, GameEngineError)

    def test_game_over_player(self) -> None:
        """Test GameOverError carries the player id."""
        exc = GameOverError("Ended", player_id="p-1")
        assert exc.details["player_id"] == "p-1"
        assert isinstance(exc, RpgEngineError)


class TestAIControlExceptions:
    """Tests for AI control exceptions."""

    def test_ai_control_error_with_provider(self) -> None:
        """Test AIControlError with model and provider."""
        exc = AIControlError("API failed", model="gpt-4", provider="openai")
        assert exc.details == {"model": "gpt-4", "provider": "openai"}

    def test_rate_limit_error(self) -> None:
        """Test AIRateLimitError with attempt count."""
        exc = AIRateLimitError("Rate limited", attempts=3, provider="openrouter")
        assert exc.details["attempts"] == 3
        assert exc.details["provider"] == "openrouter"
        assert isinstance(exc, AIControlError)

    def test_connection_error_inheritance(self) -> None:
        """Test AIConnectionError inheritance."""
        assert isinstance(AIConnectionError("Down"), AIControlError)


class TestOtherExceptions:
    """Tests for configuration and storage exceptions."""

    def test_configuration_error_key(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Missing", config_key="openai_api_key")
        assert exc.details["config_key"] == "openai_api_key"

    def test_game_not_found_is_storage_error(self) -> None:
        """Test GameNotFoundError inheritance and context."""
        exc = GameNotFoundError("No game", player_id="p-2")
        assert isinstance(exc, StorageError)
        assert exc.details["player_id"] == "p-2"
