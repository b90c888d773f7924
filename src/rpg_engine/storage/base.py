"""Game store interface.

A store keeps one GameState snapshot per player id. Implementations are
interchangeable; which one is used is decided once at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rpg_engine.models.game_state import GameState


class GameStore(ABC):
    """Persistence for per-player game snapshots."""

    @abstractmethod
    def load(self, player_id: str) -> GameState | None:
        """Load the saved snapshot for a player.

        Returns:
            The snapshot, or None if the player has no saved game.

        Raises:
            StorageError: If the store cannot be read.
        """

    @abstractmethod
    def save(self, player_id: str, state: GameState) -> bool:
        """Save a snapshot, replacing any previous one.

        Returns:
            True once the snapshot is stored.

        Raises:
            StorageError: If the store cannot be written.
        """

    @abstractmethod
    def delete(self, player_id: str) -> bool:
        """Delete a player's saved game.

        Returns:
            True if deleted, False if not found.
        """

    @abstractmethod
    def list_players(self) -> list[str]:
        """List the ids of players with a saved game."""


__all__ = ["GameStore"]
