from __future__ import annotations

from typing import TYPE_CHECKING, List

from .attacks import is_attacked
from .coords import Square
from .errors import MissingKingError
from .move import Move
from .movegen import pseudo_legal_moves
from .piece import Color, PieceKind

if TYPE_CHECKING:
    from .game import GameState


def is_king_checked(state: "GameState", color: Color) -> bool:
    """Return whether the king of ``color`` is attacked.

    Raises:
        MissingKingError: If the stored king square for ``color`` does not
            hold that color's king.
    """
    sq = state.king_square(color)
    king = state.board[sq]
    if king is None or king.kind is not PieceKind.KING or king.color is not color:
        raise MissingKingError(color)
    return is_attacked(state.board, sq, color)


def legal_moves_from(state: "GameState", square: Square) -> List[Move]:
    """Moves of the piece on ``square`` that do not leave its own king in check.

    Each pseudo-legal candidate is played on a scratch copy of ``state``;
    ``state`` itself is never mutated. Turn order is not enforced here.
    """
    piece = state.board[square]
    if piece is None:
        return []
    legal: List[Move] = []
    for move in pseudo_legal_moves(state.board, square, state.last_move):
        scratch = state.copy()
        scratch.apply(move)
        if not is_king_checked(scratch, piece.color):
            legal.append(move)
    return legal


def legal_moves(state: "GameState", color: Color) -> List[Move]:
    moves: List[Move] = []
    for sq, _piece in state.board.occupied(color):
        moves.extend(legal_moves_from(state, sq))
    return moves


def has_legal_moves(state: "GameState", color: Color) -> bool:
    for sq, _piece in state.board.occupied(color):
        if legal_moves_from(state, sq):
            return True
    return False


def is_move_valid(state: "GameState", move: Move) -> bool:
    return move in legal_moves_from(state, move.from_square)
