from __future__ import annotations

from typing import Dict

from .game import GameState
from .move import move_to_str


def perft(state: GameState, depth: int) -> int:
    """Count legal move paths of length ``depth`` from ``state``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Moves are played with ``execute_move`` and taken back with
    ``undo_last_move``, so ``state`` is restored on return.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    moves = state.legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        state.execute_move(move)
        try:
            nodes += perft(state, depth - 1)
        finally:
            state.undo_last_move()
    return nodes


def perft_divide(state: GameState, depth: int) -> Dict[str, int]:
    """Per-root-move breakdown of ``perft(state, depth)``."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    out: Dict[str, int] = {}
    for move in state.legal_moves():
        state.execute_move(move)
        try:
            out[move_to_str(move)] = perft(state, depth - 1)
        finally:
            state.undo_last_move()
    return out
