from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import GameState


class InMemorySessionStore:
    """Thread-safe in-memory registry of game states keyed by ``game_id``.

    The store only guards its own mapping. A GameState is single-writer; the
    HTTP routes mutate it without awaiting, so requests on one event loop
    never interleave inside a move.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, GameState] = {}

    def create(self, state: Optional[GameState] = None) -> str:
        gid = str(uuid.uuid4())
        with self._lock:
            self._games[gid] = state if state is not None else GameState.new()
        return gid

    def get(self, game_id: str) -> Optional[GameState]:
        with self._lock:
            return self._games.get(game_id)

    def replace(self, game_id: str, state: GameState) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = state

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
