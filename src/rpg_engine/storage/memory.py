"""In-memory game store."""

from __future__ import annotations

import threading
from typing import Any

from rpg_engine.core.logging import get_logger
from rpg_engine.models.game_state import GameState
from rpg_engine.storage.base import GameStore


logger = get_logger(__name__)


class MemoryGameStore(GameStore):
    """Game store backed by a dict of serialized documents.

    Snapshots are stored as documents rather than objects, so a loaded
    state never shares anything with the state that was saved.
    """

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def load(self, player_id: str) -> GameState | None:
        with self._lock:
            document = self._documents.get(player_id)
        if document is None:
            return None
        return GameState.from_document(document)

    def save(self, player_id: str, state: GameState) -> bool:
        document = state.to_document()
        with self._lock:
            self._documents[player_id] = document
        logger.debug("Saved game in memory", player_id=player_id)
        return True

    def delete(self, player_id: str) -> bool:
        with self._lock:
            deleted = self._documents.pop(player_id, None) is not None
        if deleted:
            logger.info("Deleted game", player_id=player_id)
        return deleted

    def list_players(self) -> list[str]:
        with self._lock:
            return sorted(self._documents)


__all__ = ["MemoryGameStore"]
