from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .coords import Square
from .piece import PieceKind


@dataclass(frozen=True)
class RegularMove:
    """Plain relocation of one piece, capturing whatever stands on ``to_sq``."""

    from_sq: Square
    to_sq: Square

    @property
    def from_square(self) -> Square:
        return self.from_sq

    @property
    def to_square(self) -> Square:
        return self.to_sq


@dataclass(frozen=True)
class CastleMove:
    """King and rook relocated together; the king travels two files."""

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @property
    def from_square(self) -> Square:
        return self.king_from

    @property
    def to_square(self) -> Square:
        return self.king_to


@dataclass(frozen=True)
class PromotionMove:
    """Pawn reaching the last rank, replaced by a piece of ``kind``."""

    from_sq: Square
    to_sq: Square
    kind: PieceKind

    @property
    def from_square(self) -> Square:
        return self.from_sq

    @property
    def to_square(self) -> Square:
        return self.to_sq


@dataclass(frozen=True)
class EnPassantMove:
    """Pawn capture landing on an empty square beside ``captured_sq``."""

    from_sq: Square
    to_sq: Square
    captured_sq: Square

    @property
    def from_square(self) -> Square:
        return self.from_sq

    @property
    def to_square(self) -> Square:
        return self.to_sq


Move = Union[RegularMove, CastleMove, PromotionMove, EnPassantMove]


def move_to_str(move: Move) -> str:
    """Serialize a move into coordinate notation.

    Returns:
        str: Move encoded like ``"e2e4"``, ``"e7e8q"`` or ``"e1g1"`` for castling.
    """
    text = str(move.from_square) + str(move.to_square)
    if isinstance(move, PromotionMove):
        text += move.kind.value
    return text
