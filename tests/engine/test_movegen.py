from __future__ import annotations

from typing import Set

import pytest

from clichess.engine.board import STARTPOS_PLACEMENT, Board
from clichess.engine.coords import ALL_SQUARES, A1, A7, B1, C1, D3, D4, E2, E4, E5, Square
from clichess.engine.move import PromotionMove, RegularMove, move_to_str
from clichess.engine.movegen import pseudo_legal_moves
from clichess.engine.piece import PROMOTION_KINDS


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"


def targets(board: Board, square: Square) -> Set[str]:
    return {str(m.to_square) for m in pseudo_legal_moves(board, square)}


def test_knight_from_home_square() -> None:
    board = Board.startpos()
    assert targets(board, B1) == {"a3", "c3"}


def test_blocked_bishop_has_no_moves() -> None:
    assert pseudo_legal_moves(Board.startpos(), C1) == []


def test_empty_square_has_no_moves() -> None:
    assert pseudo_legal_moves(Board.startpos(), E4) == []


def test_rook_slides_to_edges() -> None:
    board = Board.from_placement("4k3/8/8/8/3R4/8/8/K7")
    assert len(pseudo_legal_moves(board, D4)) == 14


def test_queen_ray_stops_before_own_piece() -> None:
    board = Board.from_placement("4k3/8/8/8/3Q4/8/8/K7")
    ts = targets(board, D4)
    assert len(ts) == 26
    assert "b2" in ts
    assert "a1" not in ts


def test_slider_captures_first_enemy_and_stops() -> None:
    board = Board.from_placement("4k3/8/8/8/8/8/p7/R3K3")
    assert targets(board, A1) == {"a2", "b1", "c1", "d1"}


def test_pawn_single_and_double_push() -> None:
    assert targets(Board.startpos(), E2) == {"e3", "e4"}


def test_blocked_pawn_cannot_push() -> None:
    board = Board.from_placement("4k3/8/8/8/8/4n3/4P3/4K3")
    assert pseudo_legal_moves(board, E2) == []


def test_pawn_captures_diagonally_only_enemy() -> None:
    board = Board.from_placement("4k3/8/8/8/8/3nn3/4P3/4K3")
    assert pseudo_legal_moves(board, E2) == [RegularMove(E2, D3)]


def test_pawn_on_seventh_generates_each_promotion() -> None:
    board = Board.from_placement("4k3/P7/8/8/8/8/8/4K3")
    moves = pseudo_legal_moves(board, A7)
    assert all(isinstance(m, PromotionMove) for m in moves)
    assert {m.kind for m in moves if isinstance(m, PromotionMove)} == set(PROMOTION_KINDS)
    assert {move_to_str(m) for m in moves} == {"a7a8n", "a7a8b", "a7a8r", "a7a8q"}


def test_no_en_passant_without_previous_move() -> None:
    board = Board.from_placement("4k3/8/8/3pP3/8/8/8/4K3")
    assert {str(m.to_square) for m in pseudo_legal_moves(board, E5)} == {"e6"}


@pytest.mark.parametrize("placement", [STARTPOS_PLACEMENT, KIWIPETE])
def test_moves_never_land_on_own_piece(placement: str) -> None:
    board = Board.from_placement(placement)
    for sq in ALL_SQUARES:
        piece = board[sq]
        if piece is None:
            continue
        for move in pseudo_legal_moves(board, sq):
            target = board[move.to_square]
            assert target is None or target.color is not piece.color


def test_knight_in_corner() -> None:
    board = Board.from_placement("4k3/8/8/8/8/8/8/N3K3")
    assert targets(board, A1) == {"b3", "c2"}
