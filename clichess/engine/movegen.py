from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board
from .coords import Square
from .move import Move, RegularMove
from .offsets import (
    BISHOP_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRECTIONS,
    ROOK_DIRECTIONS,
    Offset,
    jumps,
    ray,
)
from .piece import Color, PieceKind
from .rules import (
    castle_moves,
    en_passant_moves,
    pawn_start_rank,
    promotion_moves,
    promotion_rank,
)


_SLIDER_DIRECTIONS = {
    PieceKind.BISHOP: BISHOP_DIRECTIONS,
    PieceKind.ROOK: ROOK_DIRECTIONS,
    PieceKind.QUEEN: QUEEN_DIRECTIONS,
}


def pseudo_legal_moves(
    board: Board, square: Square, last_move: Optional[Move] = None
) -> List[Move]:
    """Return the moves of the piece on ``square`` ignoring king safety.

    Args:
        board (Board): Position to generate from.
        square (Square): Square of the moving piece. An empty square yields
            an empty list.
        last_move (Optional[Move]): Move played just before this position;
            en passant is only generated when it is the enemy pawn's
            two-square advance.

    Returns:
        List[Move]: Candidate moves. No destination ever holds a piece of the
            mover's color.
    """
    piece = board[square]
    if piece is None:
        return []
    kind = piece.kind
    if kind is PieceKind.PAWN:
        return _pawn_moves(board, square, piece.color, last_move)
    if kind is PieceKind.KNIGHT:
        return _jump_moves(board, square, piece.color, KNIGHT_OFFSETS)
    if kind is PieceKind.KING:
        moves = _jump_moves(board, square, piece.color, KING_OFFSETS)
        moves.extend(castle_moves(board, square))
        return moves
    return _slide_moves(board, square, piece.color, _SLIDER_DIRECTIONS[kind])


def _slide_moves(
    board: Board, start: Square, color: Color, directions: Tuple[Offset, ...]
) -> List[Move]:
    moves: List[Move] = []
    for direction in directions:
        for sq in ray(start, direction):
            target = board[sq]
            if target is None:
                moves.append(RegularMove(start, sq))
                continue
            if target.color is not color:
                moves.append(RegularMove(start, sq))
            break
    return moves


def _jump_moves(
    board: Board, start: Square, color: Color, offsets: Tuple[Offset, ...]
) -> List[Move]:
    moves: List[Move] = []
    for sq in jumps(start, offsets):
        target = board[sq]
        if target is None or target.color is not color:
            moves.append(RegularMove(start, sq))
    return moves


def _pawn_moves(
    board: Board, start: Square, color: Color, last_move: Optional[Move]
) -> List[Move]:
    moves: List[Move] = []
    forward = color.forward
    last_rank = promotion_rank(color)

    def add(to_sq: Square) -> None:
        if to_sq.rank == last_rank:
            moves.extend(promotion_moves(start, to_sq))
        else:
            moves.append(RegularMove(start, to_sq))

    one = start.offset(0, forward)
    if one is None:
        return moves

    if board.is_empty(one):
        add(one)
        if start.rank == pawn_start_rank(color):
            two = one.offset(0, forward)
            if two is not None and board.is_empty(two):
                moves.append(RegularMove(start, two))

    for df in (-1, 1):
        diagonal = start.offset(df, forward)
        if diagonal is None:
            continue
        target = board[diagonal]
        if target is not None and target.color is not color:
            add(diagonal)

    moves.extend(en_passant_moves(board, start, last_move))
    return moves
