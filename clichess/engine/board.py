from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .coords import ALL_SQUARES, File, Rank, Square
from .piece import Color, Piece, PieceKind


STARTPOS_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _empty_squares() -> List[Optional[Piece]]:
    return [None] * 64


@dataclass
class Board:
    """Fixed 64-slot grid mapping each square to an optional piece.

    Notes:
    - Slots are indexed by ``Square.index`` (a1=0 .. h8=63).
    - Pure storage: no rule knowledge lives here.
    """

    squares: List[Optional[Piece]] = field(default_factory=_empty_squares)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board with the standard starting position."""
        board = cls()
        for file, kind in zip(File, _BACK_RANK):
            board.place(Square(file, Rank.FIRST), Piece(kind, Color.WHITE))
            board.place(Square(file, Rank.SECOND), Piece(PieceKind.PAWN, Color.WHITE))
            board.place(Square(file, Rank.SEVENTH), Piece(PieceKind.PAWN, Color.BLACK))
            board.place(Square(file, Rank.EIGHTH), Piece(kind, Color.BLACK))
        return board

    @classmethod
    def from_placement(cls, placement: str) -> "Board":
        """Create a board from the piece-placement field of a FEN string.

        Args:
            placement (str): Ranks 8..1 separated by ``/``, e.g.
                ``"4k3/8/8/8/8/8/8/4K2R"``.

        Returns:
            Board: Board holding the described pieces, each with a one-square
                history.

        Raises:
            ValueError: If the text does not describe exactly 8 ranks of
                8 squares or contains an unknown piece letter.
        """
        if not placement or not isinstance(placement, str):
            raise ValueError("placement must be a non-empty string")
        rows = placement.strip().split("/")
        if len(rows) != 8:
            raise ValueError("placement must have 8 ranks")
        board = cls()
        for rank_idx, row in enumerate(reversed(rows)):
            file_idx = 0
            for ch in row:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in placement rank")
                    file_idx += n
                    continue
                if file_idx >= 8:
                    raise ValueError("too many squares in placement rank")
                sq = Square(File(file_idx + 1), Rank(rank_idx + 1))
                board.place(sq, Piece.from_symbol(ch))
                file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in placement")
        return board

    def to_placement(self) -> str:
        rows: List[str] = []
        for rank in reversed(Rank):
            run = 0
            row: List[str] = []
            for file in File:
                piece = self[Square(file, rank)]
                if piece is None:
                    run += 1
                    continue
                if run:
                    row.append(str(run))
                    run = 0
                row.append(piece.symbol())
            if run:
                row.append(str(run))
            rows.append("".join(row))
        return "/".join(rows)

    def __getitem__(self, sq: Square) -> Optional[Piece]:
        return self.squares[sq.index]

    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.squares[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self.squares[sq.index] is None

    def place(self, sq: Square, piece: Piece) -> None:
        """Put ``piece`` on ``sq``, replacing any occupant.

        A piece placed for the first time has its history seeded with ``sq``.
        """
        if not piece.history:
            piece.record(sq)
        self.squares[sq.index] = piece

    def take(self, sq: Square) -> Optional[Piece]:
        piece = self.squares[sq.index]
        self.squares[sq.index] = None
        return piece

    def copy(self) -> "Board":
        return Board([p.copy() if p is not None else None for p in self.squares])

    def occupied(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        for sq in ALL_SQUARES:
            piece = self.squares[sq.index]
            if piece is not None and (color is None or piece.color is color):
                yield sq, piece

    def find_king(self, color: Color) -> Optional[Square]:
        for sq, piece in self.occupied(color):
            if piece.kind is PieceKind.KING:
                return sq
        return None

    def __str__(self) -> str:
        lines = []
        for rank in reversed(Rank):
            cells = []
            for file in File:
                piece = self[Square(file, rank)]
                cells.append(piece.glyph() if piece is not None else " ")
            lines.append(" ".join(cells))
        return "\n".join(lines)
