from __future__ import annotations

import pytest

from clichess.engine.board import STARTPOS_PLACEMENT
from clichess.engine.coords import A1, A2, D5, E1, E2, E3, E4, E8
from clichess.engine.errors import (
    MissingKingError,
    NoMovesToUndo,
    NoPieceAtSource,
    OwnPieceAtDestination,
)
from clichess.engine.game import GameState
from clichess.engine.move import RegularMove
from clichess.engine.notation import parse_move
from clichess.engine.piece import Color, PieceKind


def test_new_game_state() -> None:
    state = GameState.new()
    assert state.turn is Color.WHITE
    assert state.white_king == E1
    assert state.black_king == E8
    assert state.history == [] and state.moves == []
    assert len(state.legal_moves()) == 20


def test_execute_records_history_and_toggles_turn() -> None:
    state = GameState.new()
    state.execute_move(RegularMove(E2, E4))
    assert state.turn is Color.BLACK
    assert len(state.history) == 1
    assert state.history[-1].to_placement() == STARTPOS_PLACEMENT
    assert state.last_move == RegularMove(E2, E4)
    assert state.board[E2] is None
    pawn = state.board[E4]
    assert pawn is not None and pawn.history == [E2, E4] and pawn.has_moved


def test_undo_restores_previous_position() -> None:
    state = GameState.new()
    for text in ("e2e4", "e7e5", "g1f3", "b8c6"):
        state.execute_move(parse_move(text, state.board))
    for _ in range(4):
        state.undo_last_move()
    assert state.board.to_placement() == STARTPOS_PLACEMENT
    assert state.turn is Color.WHITE
    assert state.moves == []
    pawn = state.board[E2]
    assert pawn is not None and not pawn.has_moved


def test_undo_without_moves_raises() -> None:
    with pytest.raises(NoMovesToUndo):
        GameState.new().undo_last_move()


def test_move_from_empty_square_leaves_state_unchanged() -> None:
    state = GameState.new()
    with pytest.raises(NoPieceAtSource) as ei:
        state.execute_move(RegularMove(E3, E4))
    assert ei.value.square == E3
    assert state.board.to_placement() == STARTPOS_PLACEMENT
    assert state.history == []
    assert state.turn is Color.WHITE


def test_move_onto_own_piece_leaves_state_unchanged() -> None:
    state = GameState.new()
    with pytest.raises(OwnPieceAtDestination) as ei:
        state.execute_move(RegularMove(A1, A2))
    assert ei.value.square == A2
    assert state.board.to_placement() == STARTPOS_PLACEMENT
    assert state.history == []


def test_captures_are_tracked_and_undone() -> None:
    state = GameState.from_placement("4k3/8/8/3p4/4P3/8/8/4K3")
    state.execute_move(RegularMove(E4, D5))
    assert [p.kind for p in state.captured_by(Color.WHITE)] == [PieceKind.PAWN]
    assert state.score(Color.WHITE) == 1
    assert state.score(Color.BLACK) == 0
    state.undo_last_move()
    assert state.white_captured == []
    assert state.board[D5] is not None


def test_king_square_follows_the_king() -> None:
    state = GameState.from_placement("4k3/8/8/8/8/8/8/4K3")
    state.execute_move(RegularMove(E1, E2))
    assert state.king_square(Color.WHITE) == E2
    state.undo_last_move()
    assert state.king_square(Color.WHITE) == E1


def test_missing_king_is_rejected() -> None:
    with pytest.raises(MissingKingError) as ei:
        GameState.from_placement("8/8/8/8/8/8/8/4K3")
    assert ei.value.color is Color.BLACK


def test_check_query_on_corrupted_state_raises() -> None:
    state = GameState.new()
    state.board.take(E1)
    with pytest.raises(MissingKingError):
        state.is_king_checked(Color.WHITE)


def test_scratch_copy_does_not_touch_original() -> None:
    state = GameState.new()
    scratch = state.copy()
    scratch.apply(RegularMove(E2, E4))
    assert state.board[E2] is not None
    assert state.board[E4] is None
    pawn = state.board[E2]
    assert pawn is not None and pawn.history == [E2]
