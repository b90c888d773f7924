"""Storage module for game snapshots.

Provides two interchangeable stores:
- SQLiteGameStore: durable storage in a SQLite file
- MemoryGameStore: process-local storage for tests and development
"""

from __future__ import annotations

from rpg_engine.core.config import StorageSettings
from rpg_engine.storage.base import GameStore
from rpg_engine.storage.database import SQLiteGameStore
from rpg_engine.storage.memory import MemoryGameStore


def create_store(settings: StorageSettings) -> GameStore:
    """Create the game store selected by the storage settings."""
    if settings.backend == "memory":
        return MemoryGameStore()
    return SQLiteGameStore(settings.database_path)


__all__ = [
    "GameStore",
    "SQLiteGameStore",
    "MemoryGameStore",
    "create_store",
]
