from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .coords import Square


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank delta of a pawn step for this color."""
        return 1 if self is Color.WHITE else -1

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceKind(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"

    @property
    def value_points(self) -> int:
        return _POINTS[self]

    def __str__(self) -> str:
        return self.name.capitalize()


_POINTS: Dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}

PROMOTION_KINDS: Tuple[PieceKind, ...] = (
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.ROOK,
    PieceKind.QUEEN,
)

_GLYPHS: Dict[Tuple["Color", PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}


@dataclass
class Piece:
    """A piece on the board together with the squares it has occupied.

    ``history`` is append-only. Its last element is the current square once
    the piece has been placed; a history of at most one square means the
    piece has never moved.
    """

    kind: PieceKind
    color: Color
    history: List[Square] = field(default_factory=list)

    @property
    def has_moved(self) -> bool:
        return len(self.history) > 1

    @property
    def previous_square(self) -> Optional[Square]:
        if len(self.history) < 2:
            return None
        return self.history[-2]

    def record(self, square: Square) -> None:
        self.history.append(square)

    def copy(self) -> "Piece":
        return Piece(self.kind, self.color, list(self.history))

    def glyph(self) -> str:
        return _GLYPHS[(self.color, self.kind)]

    def symbol(self) -> str:
        letter = self.kind.value
        return letter.upper() if self.color is Color.WHITE else letter

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        try:
            kind = PieceKind(ch.lower())
        except ValueError as e:
            raise ValueError(f"invalid piece symbol: {ch!r}") from e
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(kind, color)

    def __str__(self) -> str:
        return f"{self.color} {self.kind}"
