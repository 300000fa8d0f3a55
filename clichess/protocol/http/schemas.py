from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ...engine.game import GameState
from ...engine.move import CastleMove, EnPassantMove, Move, PromotionMove, move_to_str
from ...engine.piece import Color


class CreateGameResponse(BaseModel):
    game_id: str
    placement: str
    turn: str


class SetPositionRequest(BaseModel):
    placement: str = Field(..., description="FEN piece-placement field")
    turn: Literal["w", "b"] = "w"


class MoveRequest(BaseModel):
    move: str = Field(..., min_length=4, max_length=5, description="Coordinate move, e.g. e2e4")


class PerftRequest(BaseModel):
    placement: str = Field(..., description="FEN piece-placement field")
    turn: Literal["w", "b"] = "w"
    depth: int = Field(default=1, ge=0)


class MoveView(BaseModel):
    move: str
    kind: Literal["regular", "castle", "promotion", "en_passant"]
    from_square: str
    to_square: str


class StateView(BaseModel):
    placement: str
    turn: str
    legal_moves: List[str]
    in_check: bool
    no_legal_moves: bool
    last_move: Optional[str]
    move_history: List[str]
    captured: Dict[str, List[str]]
    score: Dict[str, int]


class GameStateResponse(StateView):
    game_id: str


class RoomMessage(BaseModel):
    """Frame sent by a room member over the websocket."""

    type: Literal["move", "chat"]
    move: Optional[str] = Field(default=None, min_length=4, max_length=5)
    text: Optional[str] = Field(default=None, max_length=500)


def move_kind(move: Move) -> str:
    if isinstance(move, CastleMove):
        return "castle"
    if isinstance(move, PromotionMove):
        return "promotion"
    if isinstance(move, EnPassantMove):
        return "en_passant"
    return "regular"


def move_view(move: Move) -> MoveView:
    return MoveView(
        move=move_to_str(move),
        kind=move_kind(move),  # type: ignore[arg-type]
        from_square=str(move.from_square),
        to_square=str(move.to_square),
    )


def state_view(state: GameState) -> StateView:
    """Snapshot of ``state`` for clients; legal moves are for the side to move."""
    legal = state.legal_moves()
    history = [move_to_str(m) for m in state.moves]
    return StateView(
        placement=state.board.to_placement(),
        turn=state.turn.value,
        legal_moves=[move_to_str(m) for m in legal],
        in_check=state.in_check(),
        no_legal_moves=not legal,
        last_move=history[-1] if history else None,
        move_history=history,
        captured={
            c.value: [p.symbol() for p in state.captured_by(c)] for c in (Color.WHITE, Color.BLACK)
        },
        score={c.value: state.score(c) for c in (Color.WHITE, Color.BLACK)},
    )
