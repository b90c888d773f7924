"""Custom exception hierarchy for the AI RPG engine.

All exceptions inherit from RpgEngineError so that callers can handle
engine failures at a single boundary while keeping domain context.

Only infrastructure failures are raised: content produced by the model
(narrative and state changes) never raises, it degrades instead.

Example:
    >>> from rpg_engine.core.exceptions import GameOverError
    >>> raise GameOverError("This adventure has ended", player_id="p-1")
"""

from __future__ import annotations

from typing import Any


class RpgEngineError(Exception):
    """Base exception for all engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(RpgEngineError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(RpgEngineError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when a snapshot violates a game state invariant.

    The reducer only ever receives validated change sets, so this signals
    a programming error rather than bad model output.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the offending state field.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


class GameOverError(GameEngineError):
    """Raised when an action is submitted for a game that has ended."""

    def __init__(
        self,
        message: str,
        *,
        player_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize game over error with player context.

        Args:
            message: Human-readable error description.
            player_id: The player whose game has ended.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if player_id:
            combined_details["player_id"] = player_id
        super().__init__(message, details=combined_details)


# =============================================================================
# AI Control Domain Exceptions
# =============================================================================


class AIControlError(RpgEngineError):
    """Base exception for all model-call errors.

    Raised when the language model cannot be reached or refuses the
    request. Malformed replies are NOT reported through this hierarchy.
    """

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AI control error with model context.

        Args:
            message: Human-readable error description.
            model: Name of the AI model involved.
            provider: Name of the AI provider (e.g., 'openrouter', 'openai').
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if model:
            combined_details["model"] = model
        if provider:
            combined_details["provider"] = provider
        super().__init__(message, details=combined_details)


class AIConnectionError(AIControlError):
    """Raised when connection to an AI service fails.

    This typically occurs due to network issues, invalid API keys,
    or service unavailability.
    """


class AIRateLimitError(AIControlError):
    """Raised when AI API rate limits are still exceeded after retrying."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int | None = None,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize rate limit error with retry context.

        Args:
            message: Human-readable error description.
            attempts: Number of attempts made before giving up.
            model: Name of the AI model involved.
            provider: Name of the AI provider.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if attempts is not None:
            combined_details["attempts"] = attempts
        super().__init__(message, model=model, provider=provider, details=combined_details)


# =============================================================================
# Storage Domain Exceptions
# =============================================================================


class StorageError(RpgEngineError):
    """Raised when the game store cannot read or write a snapshot."""

    def __init__(
        self,
        message: str,
        *,
        player_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with player context.

        Args:
            message: Human-readable error description.
            player_id: The player whose game was being accessed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if player_id:
            combined_details["player_id"] = player_id
        super().__init__(message, details=combined_details)


class GameNotFoundError(StorageError):
    """Raised when no saved game exists for a player."""


__all__ = [
    # Base exception
    "RpgEngineError",
    # Configuration exceptions
    "ConfigurationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "GameOverError",
    # AI control exceptions
    "AIControlError",
    "AIConnectionError",
    "AIRateLimitError",
    # Storage exceptions
    "StorageError",
    "GameNotFoundError",
]
