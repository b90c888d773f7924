"""Settings for the AI RPG engine.

Settings are read from ``RPG_ENGINE_*`` environment variables and an
optional ``.env`` file through pydantic-settings. They are grouped by
concern: model provider, storage backend and turn rules. API keys are
held as SecretStr and only unwrapped when the model client is built.

Example:
    >>> from rpg_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'AI RPG Engine'

Environment Variables:
    RPG_ENGINE_OPENROUTER_API_KEY: OpenRouter API key
    RPG_ENGINE_OPENAI_API_KEY: OpenAI API key
    RPG_ENGINE_STORAGE_BACKEND: Game store backend (sqlite or memory)
    RPG_ENGINE_STORAGE_DATABASE_PATH: Path to the SQLite database file
    RPG_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rpg_engine.core.exceptions import ConfigurationError


class AIProviderSettings(BaseSettings):
    """Configuration for the language model connection.

    Attributes:
        openrouter_api_key: OpenRouter API key (primary provider).
        openai_api_key: OpenAI API key for the direct provider.
        default_provider: The provider to send requests to.
        model: Model identifier used for turns and world generation.
        temperature: Sampling temperature for game turns.
        world_temperature: Sampling temperature for world generation.
        max_tokens: Response token limit for game turns.
        world_max_tokens: Response token limit for world generation.
        max_retries: Maximum number of API retry attempts.
        timeout_seconds: API request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openrouter_api_key: SecretStr | None = Field(
        default=None,
        description="OpenRouter API key (primary)",
    )
    openai_api_key: SecretStr | None = Field(
        default=None,
        description="OpenAI API key",
    )
    default_provider: Literal["openrouter", "openai"] = Field(
        default="openrouter",
        description="AI provider to use",
    )
    model: str = Field(
        default="openai/gpt-4-turbo",
        description="Model identifier",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for game turns",
    )
    world_temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for world generation",
    )
    max_tokens: int = Field(
        default=800,
        gt=0,
        description="Maximum response tokens for game turns",
    )
    world_max_tokens: int = Field(
        default=1000,
        gt=0,
        description="Maximum response tokens for world generation",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum API retry attempts",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=300,
        description="API request timeout",
    )

    @model_validator(mode="after")
    def validate_api_key_for_provider(self) -> "AIProviderSettings":
        """Ensure the selected provider has an API key configured.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the OpenAI provider is selected without a key.
        """
        # OpenRouter may start without a key; the client reports it on first call
        if self.default_provider == "openai" and not self.openai_api_key:
            raise ConfigurationError(
                "OpenAI is set as default provider but OPENAI_API_KEY is not configured",
                config_key="openai_api_key",
            )
        return self

    def active_api_key(self) -> str | None:
        """Return the plain API key for the selected provider, if any."""
        key = (
            self.openai_api_key
            if self.default_provider == "openai"
            else self.openrouter_api_key
        )
        return key.get_secret_value() if key else None


class StorageSettings(BaseSettings):
    """Configuration for game state persistence.

    Attributes:
        backend: Which game store implementation to construct at startup.
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_ENGINE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Game store backend",
    )
    database_path: Path = Field(
        default=Path("data/rpg_engine.db"),
        description="Path to SQLite database",
    )


class GameSettings(BaseSettings):
    """Configuration for the turn rules.

    Attributes:
        history_limit: Number of history entries kept on a snapshot.
        time_units_per_day: Time units that make up one in-game day.
        level_xp_step: Experience needed per level, multiplied by the level.
        discovery_xp: Experience awarded for discovering a location.
        quest_xp: Experience awarded for accepting a quest.
        day_heal: Health restored at the start of each day.
        default_effect_duration: Duration given to effects without one.
        starting_inventory: Items every new character starts with.
        default_character_name: Name used when none is supplied.
        prompt_history_window: History entries included in each prompt.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_ENGINE_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    history_limit: int = Field(default=50, ge=2, description="History entries kept")
    time_units_per_day: int = Field(default=24, ge=1, description="Time units per day")
    level_xp_step: int = Field(default=100, ge=1, description="Experience per level step")
    discovery_xp: int = Field(default=10, ge=0, description="Location discovery reward")
    quest_xp: int = Field(default=15, ge=0, description="Quest acceptance reward")
    day_heal: int = Field(default=10, ge=0, le=100, description="Health restored per day")
    default_effect_duration: int = Field(
        default=5,
        ge=1,
        description="Duration for status effects without one",
    )
    starting_inventory: list[str] = Field(
        default_factory=lambda: ["torch", "water flask", "map"],
        description="Starting inventory",
    )
    default_character_name: str = Field(
        default="Adventurer",
        min_length=1,
        description="Default character name",
    )
    prompt_history_window: int = Field(
        default=15,
        ge=1,
        description="History entries shown to the model",
    )

    @model_validator(mode="after")
    def validate_starting_inventory(self) -> "GameSettings":
        """Ensure the starting inventory holds no duplicate items.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If an item is listed twice.
        """
        if len(set(self.starting_inventory)) != len(self.starting_inventory):
            raise ConfigurationError(
                "starting_inventory must not contain duplicate items",
                config_key="starting_inventory",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON instead of console output.
        ai: AI provider settings.
        storage: Game store settings.
        game: Turn rule settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Application metadata
    app_name: str = Field(
        default="AI RPG Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    ai: AIProviderSettings = Field(default_factory=AIProviderSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "AIProviderSettings",
    "StorageSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
