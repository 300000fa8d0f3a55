from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from .errors import ParseSquareError


class File(IntEnum):
    """Board column ``a``..``h`` numbered 1..8."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8

    def offset(self, delta: int) -> Optional["File"]:
        """Return the file ``delta`` columns away, or ``None`` off the board."""
        value = int(self) + delta
        if 1 <= value <= 8:
            return File(value)
        return None

    @classmethod
    def from_char(cls, ch: str) -> Optional["File"]:
        lower = ch.lower()
        if len(lower) != 1 or lower < "a" or lower > "h":
            return None
        return cls(ord(lower) - ord("a") + 1)

    def __str__(self) -> str:
        return chr(ord("a") + int(self) - 1)


class Rank(IntEnum):
    """Board row ``1``..``8``."""

    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6
    SEVENTH = 7
    EIGHTH = 8

    def offset(self, delta: int) -> Optional["Rank"]:
        """Return the rank ``delta`` rows away, or ``None`` off the board."""
        value = int(self) + delta
        if 1 <= value <= 8:
            return Rank(value)
        return None

    @classmethod
    def from_char(cls, ch: str) -> Optional["Rank"]:
        if len(ch) != 1 or ch < "1" or ch > "8":
            return None
        return cls(int(ch))

    def __str__(self) -> str:
        return str(int(self))


@dataclass(frozen=True, order=True)
class Square:
    """Immutable (file, rank) coordinate.

    Attributes:
        file (File): Column of the square.
        rank (Rank): Row of the square.
    """

    file: File
    rank: Rank

    @property
    def index(self) -> int:
        """Linear board index ``8*(rank-1) + (file-1)`` in range 0..63."""
        return 8 * (int(self.rank) - 1) + (int(self.file) - 1)

    @classmethod
    def from_index(cls, idx: int) -> "Square":
        if idx < 0 or idx > 63:
            raise ValueError(f"invalid square index: {idx}")
        return cls(File(idx % 8 + 1), Rank(idx // 8 + 1))

    @classmethod
    def parse(cls, text: str) -> "Square":
        """Parse a two-character coordinate such as ``"e2"`` or ``"E2"``.

        Args:
            text (str): File letter followed by rank digit.

        Returns:
            Square: Parsed square.

        Raises:
            ParseSquareError: If ``text`` is not exactly two characters, or the
                file or rank character is out of range.
        """
        if len(text) != 2:
            raise ParseSquareError(
                f"format should be 'xy' (x: file a-h, y: rank 1-8), got {text!r}"
            )
        file = File.from_char(text[0])
        if file is None:
            raise ParseSquareError(f"invalid file: {text[0]!r}", char=text[0], position=0)
        rank = Rank.from_char(text[1])
        if rank is None:
            raise ParseSquareError(f"invalid rank: {text[1]!r}", char=text[1], position=1)
        return cls(file, rank)

    def offset(self, file_delta: int, rank_delta: int) -> Optional["Square"]:
        """Return the square shifted by the given deltas, or ``None`` off the board."""
        file = self.file.offset(file_delta)
        rank = self.rank.offset(rank_delta)
        if file is None or rank is None:
            return None
        return Square(file, rank)

    def __str__(self) -> str:
        return str(self.file) + str(self.rank)

    def __repr__(self) -> str:
        return f"Square({self})"


def squares_between(start: Square, end: Square) -> List[Square]:
    """Squares from ``start`` to ``end`` inclusive along a shared rank or file.

    Returns an empty list when the squares are not aligned.
    """
    if start.file == end.file:
        step = 1 if end.rank >= start.rank else -1
        return [Square(start.file, Rank(r)) for r in range(start.rank, end.rank + step, step)]
    if start.rank == end.rank:
        step = 1 if end.file >= start.file else -1
        return [Square(File(f), start.rank) for f in range(start.file, end.file + step, step)]
    return []


ALL_SQUARES: List[Square] = [Square.from_index(i) for i in range(64)]

# Named squares, a1 .. h8
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[56:64]
