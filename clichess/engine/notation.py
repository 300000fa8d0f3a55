from __future__ import annotations

from typing import Optional

from .board import Board
from .coords import Square
from .errors import NoPieceAtSource, ParseMoveError
from .move import CastleMove, EnPassantMove, Move, PromotionMove, RegularMove
from .piece import PROMOTION_KINDS, PieceKind
from .rules import promotion_rank


def parse_square(text: str) -> Square:
    """Parse a coordinate such as ``"e2"`` (file letter case-insensitive)."""
    return Square.parse(text.strip())


def parse_move(text: str, board: Board) -> Move:
    """Decode a coordinate move string against ``board``.

    The variant is inferred from the moving piece: a king stepping two files
    is a castle, a pawn moving diagonally onto an empty square is en passant,
    and a pawn reaching its last rank is a promotion (the fifth character
    names the piece). The result is not checked for legality.

    Args:
        text (str): Move such as ``"e2e4"``, ``"e7e8q"`` or ``"e1g1"``.
        board (Board): Position the move is played on.

    Returns:
        Move: Decoded move.

    Raises:
        ParseSquareError: If either square is malformed.
        ParseMoveError: If the length or promotion piece is invalid.
        NoPieceAtSource: If the source square is empty.
    """
    text = text.strip()
    if len(text) not in (4, 5):
        raise ParseMoveError(f"invalid move length: {text!r}")
    from_sq = Square.parse(text[0:2])
    to_sq = Square.parse(text[2:4])
    promo: Optional[PieceKind] = None
    if len(text) == 5:
        promo = _promotion_kind(text[4])

    piece = board[from_sq]
    if piece is None:
        raise NoPieceAtSource(from_sq)

    if piece.kind is PieceKind.KING and abs(int(to_sq.file) - int(from_sq.file)) == 2:
        step = 1 if to_sq.file > from_sq.file else -1
        rook_from = _castling_rook(board, from_sq, step)
        rook_to = from_sq.offset(step, 0)
        if rook_from is None or rook_to is None:
            raise ParseMoveError(f"no rook to castle with for {text!r}")
        return CastleMove(from_sq, to_sq, rook_from, rook_to)

    if piece.kind is PieceKind.PAWN:
        if to_sq.rank == promotion_rank(piece.color):
            if promo is None:
                raise ParseMoveError(f"promotion piece required: {text!r}")
            return PromotionMove(from_sq, to_sq, promo)
        if to_sq.file != from_sq.file and board[to_sq] is None:
            captured = Square(to_sq.file, from_sq.rank)
            return EnPassantMove(from_sq, to_sq, captured)

    if promo is not None:
        raise ParseMoveError(f"only pawns reaching the last rank promote: {text!r}")
    return RegularMove(from_sq, to_sq)


def _promotion_kind(ch: str) -> PieceKind:
    try:
        kind = PieceKind(ch.lower())
    except ValueError as e:
        raise ParseMoveError(f"invalid promotion piece: {ch!r}") from e
    if kind not in PROMOTION_KINDS:
        raise ParseMoveError(f"invalid promotion piece: {ch!r}")
    return kind


def _castling_rook(board: Board, king_sq: Square, step: int) -> Optional[Square]:
    """Nearest rook past the king's destination in direction ``step``."""
    king = board[king_sq]
    sq = king_sq.offset(2 * step, 0)
    while sq is not None:
        p = board[sq]
        if p is not None:
            if king is not None and p.kind is PieceKind.ROOK and p.color is king.color:
                return sq
            return None
        sq = sq.offset(step, 0)
    return None
