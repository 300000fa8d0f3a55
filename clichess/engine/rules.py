from __future__ import annotations

from typing import List, Optional

from .attacks import is_attacked
from .board import Board
from .coords import File, Rank, Square, squares_between
from .errors import CastleError, PieceHasMadeMove, PiecesBetween, SquareInCheck, WrongPieces
from .move import CastleMove, EnPassantMove, Move, PromotionMove, RegularMove
from .piece import PROMOTION_KINDS, Color, Piece, PieceKind


def home_rank(color: Color) -> Rank:
    return Rank.FIRST if color is Color.WHITE else Rank.EIGHTH


def pawn_start_rank(color: Color) -> Rank:
    return Rank.SECOND if color is Color.WHITE else Rank.SEVENTH


def promotion_rank(color: Color) -> Rank:
    """Farthest rank from ``color``'s side, where its pawns promote."""
    return Rank.EIGHTH if color is Color.WHITE else Rank.FIRST


def en_passant_rank(color: Color) -> Rank:
    """Rank a pawn of ``color`` must stand on to capture en passant."""
    return Rank.FIFTH if color is Color.WHITE else Rank.FOURTH


def can_castle(board: Board, king_sq: Square, rook_sq: Square) -> CastleMove:
    """Build the castling move for the king on ``king_sq`` and rook on ``rook_sq``.

    Preconditions are checked in order: the squares hold a king and a rook of
    the same color on their original squares (king on the e-file, rook in a
    corner of that color's back rank); neither piece has moved; every
    square strictly between them is empty; no square the king stands on or
    passes through is attacked.

    Returns:
        CastleMove: King moved two files toward the rook, rook placed on the
            square the king crossed.

    Raises:
        WrongPieces: If the squares do not hold a castling king/rook pair.
        PieceHasMadeMove: If the king or the rook has moved before.
        PiecesBetween: If a square between king and rook is occupied.
        SquareInCheck: If the king's start, transit or destination square is
            attacked.
    """
    king = board[king_sq]
    rook = board[rook_sq]
    if king is None or rook is None or not _castling_pair(king, rook, king_sq, rook_sq):
        raise WrongPieces()
    color = king.color

    if king.has_moved:
        raise PieceHasMadeMove(king_sq)
    if rook.has_moved:
        raise PieceHasMadeMove(rook_sq)

    line = squares_between(king_sq, rook_sq)
    for sq in line[1:-1]:
        if not board.is_empty(sq):
            raise PiecesBetween()

    step = 1 if rook_sq.file > king_sq.file else -1
    king_to = Square(File(int(king_sq.file) + 2 * step), king_sq.rank)
    rook_to = Square(File(int(king_sq.file) + step), king_sq.rank)

    for sq in squares_between(king_sq, king_to):
        if is_attacked(board, sq, color):
            raise SquareInCheck(sq)

    return CastleMove(king_sq, king_to, rook_sq, rook_to)


def _castling_pair(king: Piece, rook: Piece, king_sq: Square, rook_sq: Square) -> bool:
    if king.kind is not PieceKind.KING or rook.kind is not PieceKind.ROOK:
        return False
    if king.color is not rook.color:
        return False
    back = home_rank(king.color)
    if king_sq.rank != back or rook_sq.rank != back:
        return False
    # Only from the original squares: king on e, rooks in the corners.
    return king_sq.file == File.E and rook_sq.file in (File.A, File.H)


def castle_moves(board: Board, king_sq: Square) -> List[CastleMove]:
    """Castling moves available to the king on ``king_sq`` (any rook on its rank)."""
    king = board[king_sq]
    if king is None or king.kind is not PieceKind.KING:
        return []
    moves: List[CastleMove] = []
    for sq, piece in board.occupied(king.color):
        if piece.kind is not PieceKind.ROOK or sq.rank != king_sq.rank:
            continue
        try:
            moves.append(can_castle(board, king_sq, sq))
        except CastleError:
            continue
    return moves


def en_passant_moves(
    board: Board, pawn_sq: Square, last_move: Optional[Move]
) -> List[EnPassantMove]:
    """En passant captures for the pawn on ``pawn_sq``.

    Only the ply right after an enemy pawn's two-square advance qualifies:
    ``last_move`` must be that advance, landing beside the capturing pawn.
    """
    pawn = board[pawn_sq]
    if pawn is None or pawn.kind is not PieceKind.PAWN:
        return []
    if pawn_sq.rank != en_passant_rank(pawn.color):
        return []
    if not isinstance(last_move, RegularMove):
        return []
    target = last_move.to_sq
    if target.rank != pawn_sq.rank or abs(int(target.file) - int(pawn_sq.file)) != 1:
        return []
    if abs(int(target.rank) - int(last_move.from_sq.rank)) != 2:
        return []
    enemy = board[target]
    if enemy is None or enemy.kind is not PieceKind.PAWN or enemy.color is pawn.color:
        return []
    if enemy.previous_square != last_move.from_sq:
        return []
    landing = target.offset(0, pawn.color.forward)
    if landing is None or not board.is_empty(landing):
        return []
    return [EnPassantMove(pawn_sq, landing, target)]


def promotion_moves(from_sq: Square, to_sq: Square) -> List[PromotionMove]:
    """One promotion move per promotable kind."""
    return [PromotionMove(from_sq, to_sq, kind) for kind in PROMOTION_KINDS]
