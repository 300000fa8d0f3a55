from __future__ import annotations

from typing import FrozenSet, Tuple

from .board import Board
from .coords import Square
from .offsets import (
    BISHOP_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    ROOK_DIRECTIONS,
    Offset,
    jumps,
    ray,
)
from .piece import Color, PieceKind


_ORTHOGONAL_SLIDERS: FrozenSet[PieceKind] = frozenset({PieceKind.ROOK, PieceKind.QUEEN})
_DIAGONAL_SLIDERS: FrozenSet[PieceKind] = frozenset({PieceKind.BISHOP, PieceKind.QUEEN})


def is_attacked(board: Board, square: Square, defender: Color) -> bool:
    """Return whether ``square`` is attacked by any piece of ``defender.opponent()``.

    Mirror image of move generation: walk each sliding ray outward from
    ``square`` to the first piece, then check the knight, pawn and king
    offsets for an enemy piece of the matching kind. Turn order plays no
    part; this is a purely spatial query.
    """
    attacker = defender.opponent()

    if _slider_on_rays(board, square, attacker, ROOK_DIRECTIONS, _ORTHOGONAL_SLIDERS):
        return True
    if _slider_on_rays(board, square, attacker, BISHOP_DIRECTIONS, _DIAGONAL_SLIDERS):
        return True

    for sq in jumps(square, KNIGHT_OFFSETS):
        p = board[sq]
        if p is not None and p.color is attacker and p.kind is PieceKind.KNIGHT:
            return True

    # Enemy pawns capture toward the defender, so look one rank "forward"
    # from the defender's point of view.
    pawn_offsets = ((-1, defender.forward), (1, defender.forward))
    for sq in jumps(square, pawn_offsets):
        p = board[sq]
        if p is not None and p.color is attacker and p.kind is PieceKind.PAWN:
            return True

    for sq in jumps(square, KING_OFFSETS):
        p = board[sq]
        if p is not None and p.color is attacker and p.kind is PieceKind.KING:
            return True

    return False


def _slider_on_rays(
    board: Board,
    square: Square,
    attacker: Color,
    directions: Tuple[Offset, ...],
    kinds: FrozenSet[PieceKind],
) -> bool:
    for direction in directions:
        for sq in ray(square, direction):
            p = board[sq]
            if p is None:
                continue
            if p.color is attacker and p.kind in kinds:
                return True
            break
    return False
