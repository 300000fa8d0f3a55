from __future__ import annotations

from clichess.cli.render import blacks_perspective, render, whites_perspective
from clichess.engine.board import Board
from clichess.engine.coords import E4
from clichess.engine.piece import Color


def _row(*cells: str) -> str:
    return "│".join(cells)


def test_white_perspective_layout() -> None:
    lines = whites_perspective(Board.startpos()).split("\n")
    assert len(lines) == 18
    assert lines[0] == "   a   b   c   d   e   f   g   h  "
    assert lines[1].startswith(" ┌───┬")
    assert lines[2] == "8│" + _row(" ♜ ", " ♞ ", " ♝ ", " ♛ ", " ♚ ", " ♝ ", " ♞ ", " ♜ ") + "│"
    assert lines[16] == "1│" + _row(" ♖ ", " ♘ ", " ♗ ", " ♕ ", " ♔ ", " ♗ ", " ♘ ", " ♖ ") + "│"
    assert lines[17].startswith(" └───┴")


def test_black_perspective_is_rotated() -> None:
    lines = blacks_perspective(Board.startpos()).split("\n")
    assert lines[0] == "   h   g   f   e   d   c   b   a  "
    assert lines[2] == "1│" + _row(" ♖ ", " ♘ ", " ♗ ", " ♔ ", " ♕ ", " ♗ ", " ♘ ", " ♖ ") + "│"
    assert lines[16].startswith("8│")


def test_highlighted_square_is_marked() -> None:
    lines = render(Board.startpos(), Color.WHITE, {E4}).split("\n")
    rank_4 = lines[10]
    assert rank_4 == "4│" + _row("   ", "   ", "   ", "   ", "X  ", "   ", "   ", "   ") + "│"


def test_empty_board_has_blank_cells() -> None:
    lines = render(Board.empty(), Color.WHITE).split("\n")
    assert "X" not in "".join(lines)
    assert lines[2] == "8│" + _row(*["   "] * 8) + "│"
