"""SQLite persistence for game snapshots.

Each player has one row holding the camelCase JSON document of their
latest snapshot plus created/updated timestamps.

Storage location: data/rpg_engine.db (configurable)
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator

from pydantic import ValidationError

from rpg_engine.core.exceptions import InvalidGameStateError, StorageError
from rpg_engine.core.logging import get_logger
from rpg_engine.models.game_state import GameState
from rpg_engine.storage.base import GameStore


logger = get_logger(__name__)


class SQLiteGameStore(GameStore):
    """SQLite game store.

    Example:
        >>> store = SQLiteGameStore("data/games.db")
        >>> store.save("player-1", state)
        True
        >>> store.load("player-1") == state
        True
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the store and create the schema if needed.

        Args:
            db_path: Path to the database file.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.info("Game store initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot open game database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS games (
                    player_id TEXT PRIMARY KEY,
                    state_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_games_updated
                ON games(updated_at DESC)
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    def load(self, player_id: str) -> GameState | None:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT state_json FROM games WHERE player_id = ?",
                    (player_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to load game: {exc}", player_id=player_id) from exc

        if row is None:
            return None

        try:
            return GameState.from_document(json.loads(row["state_json"]))
        except (json.JSONDecodeError, ValidationError, InvalidGameStateError) as exc:
            raise StorageError(
                "Saved game is corrupted",
                player_id=player_id,
                details={"error": str(exc)},
            ) from exc

    def save(self, player_id: str, state: GameState) -> bool:
        now = datetime.now().isoformat()
        state_json = json.dumps(state.to_document())
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO games (player_id, state_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(player_id) DO UPDATE SET
                        state_json = excluded.state_json,
                        updated_at = excluded.updated_at
                    """,
                    (player_id, state_json, now, now),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to save game: {exc}", player_id=player_id) from exc

        logger.debug("Saved game", player_id=player_id)
        return True

    def delete(self, player_id: str) -> bool:
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM games WHERE player_id = ?", (player_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to delete game: {exc}", player_id=player_id) from exc

        if deleted:
            logger.info("Deleted game", player_id=player_id)
        return deleted

    def list_players(self) -> list[str]:
        """List players with a saved game, most recently updated first."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT player_id FROM games ORDER BY updated_at DESC"
                ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to list games: {exc}") from exc
        return [row["player_id"] for row in rows]


__all__ = ["SQLiteGameStore"]
