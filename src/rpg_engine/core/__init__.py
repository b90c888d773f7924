"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        RpgEngineError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        GameOverError: Action submitted for a finished game.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from rpg_engine.core.config import (
    AIProviderSettings,
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
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
from rpg_engine.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


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
    # Configuration
    "Settings",
    "AIProviderSettings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
