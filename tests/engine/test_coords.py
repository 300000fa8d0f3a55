from __future__ import annotations

import pytest

from clichess.engine.coords import (
    A1,
    B2,
    D1,
    E1,
    E2,
    E4,
    F1,
    G1,
    H1,
    H8,
    File,
    Rank,
    Square,
    squares_between,
)
from clichess.engine.errors import ParseSquareError


def test_parse_square_lowercase_and_uppercase() -> None:
    assert Square.parse("e4") == Square(File.E, Rank.FOURTH)
    assert Square.parse("E2") == E2
    assert str(Square.parse("H8")) == "h8"


def test_parse_square_wrong_length_has_no_char() -> None:
    with pytest.raises(ParseSquareError) as ei:
        Square.parse("e")
    assert ei.value.char is None
    assert ei.value.position is None


def test_parse_square_reports_offending_file_char() -> None:
    with pytest.raises(ParseSquareError) as ei:
        Square.parse("i4")
    assert ei.value.char == "i"
    assert ei.value.position == 0


@pytest.mark.parametrize("text, bad", [("a9", "9"), ("a0", "0"), ("bx", "x")])
def test_parse_square_reports_offending_rank_char(text: str, bad: str) -> None:
    with pytest.raises(ParseSquareError) as ei:
        Square.parse(text)
    assert ei.value.char == bad
    assert ei.value.position == 1


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Square.parse("zz")


def test_index_layout() -> None:
    assert A1.index == 0
    assert H8.index == 63
    assert E4.index == 28
    assert Square.from_index(28) == E4


def test_offset_stays_on_board() -> None:
    assert E1.offset(0, 1) == E2
    assert H8.offset(1, 0) is None
    assert A1.offset(0, -1) is None
    assert A1.offset(1, 1) == B2


def test_file_and_rank_offsets() -> None:
    assert File.A.offset(-1) is None
    assert File.G.offset(1) is File.H
    assert Rank.EIGHTH.offset(1) is None
    assert Rank.FIRST.offset(3) is Rank.FOURTH


def test_squares_between_is_inclusive_and_ordered() -> None:
    assert squares_between(E1, H1) == [E1, F1, G1, H1]
    assert squares_between(E1, A1)[0] == E1
    assert squares_between(E1, A1)[-1] == A1
    assert len(squares_between(E1, A1)) == 5
    assert squares_between(D1, D1) == [D1]


def test_squares_between_unaligned_is_empty() -> None:
    assert squares_between(A1, B2) == []
