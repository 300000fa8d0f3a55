from __future__ import annotations

from typing import AbstractSet, List, Optional

from ..engine.board import Board
from ..engine.coords import File, Rank, Square
from ..engine.piece import Color


_TOP = " ┌───┬───┬───┬───┬───┬───┬───┬───┐\n"
_MID = " ├───┼───┼───┼───┼───┼───┼───┼───┤\n"
_BOTTOM = " └───┴───┴───┴───┴───┴───┴───┴───┘"


def render(
    board: Board, perspective: Color, highlighted: Optional[AbstractSet[Square]] = None
) -> str:
    """Draw ``board`` as a fixed-width grid of Unicode glyphs.

    White sees rank 8 at the top with files a..h left to right; Black sees
    rank 1 at the top with files h..a. Highlighted squares carry an ``X``
    beside the glyph.
    """
    marks = highlighted or frozenset()
    ranks = list(Rank) if perspective is Color.BLACK else list(reversed(Rank))
    files = list(reversed(File)) if perspective is Color.BLACK else list(File)

    lines: List[str] = []
    for rank in ranks:
        cells = []
        for file in files:
            sq = Square(file, rank)
            piece = board[sq]
            marker = "X" if sq in marks else " "
            glyph = piece.glyph() if piece is not None else " "
            cells.append(f"{marker}{glyph} ")
        lines.append(str(rank) + "│" + "│".join(cells) + "│\n")

    header = "   " + "   ".join(str(f) for f in files) + "  \n"
    return header + _TOP + _MID.join(lines) + _BOTTOM


def whites_perspective(board: Board, highlighted: Optional[AbstractSet[Square]] = None) -> str:
    return render(board, Color.WHITE, highlighted)


def blacks_perspective(board: Board, highlighted: Optional[AbstractSet[Square]] = None) -> str:
    return render(board, Color.BLACK, highlighted)
