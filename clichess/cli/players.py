from __future__ import annotations

from typing import Callable, Dict, List, Optional, Protocol, TextIO

from ..engine.coords import Square
from ..engine.errors import ParseSquareError
from ..engine.game import GameState
from ..engine.move import CastleMove, EnPassantMove, Move, PromotionMove
from ..engine.piece import PieceKind
from .render import render


Writer = Callable[[str], None]


class Player(Protocol):
    """Chooses the move for the side to move."""

    def propose_move(self, state: GameState) -> Move: ...


def _captured_kind(state: GameState, move: Move) -> Optional[PieceKind]:
    if isinstance(move, EnPassantMove):
        return PieceKind.PAWN
    if isinstance(move, CastleMove):
        return None
    target = state.board[move.to_square]
    return target.kind if target is not None else None


class GreedyPlayer:
    """Deterministic opponent that grabs the most material available.

    Promotions count the promoted piece's value on top of any capture. Ties
    keep the first move in generation order.
    """

    def propose_move(self, state: GameState) -> Move:
        moves = state.legal_moves(state.turn)
        if not moves:
            raise ValueError("no legal moves to choose from")
        best = moves[0]
        best_gain = -1
        for move in moves:
            gain = 0
            kind = _captured_kind(state, move)
            if kind is not None:
                gain += kind.value_points
            if isinstance(move, PromotionMove):
                gain += move.kind.value_points - PieceKind.PAWN.value_points
            if gain > best_gain:
                best, best_gain = move, gain
        return best


class ConsolePlayer:
    """Human player entering coordinates on a text stream.

    Asks for the piece to move, shows its legal destinations highlighted and
    then asks for the destination; promotions ask for the piece kind.
    """

    def __init__(self, stream: TextIO, write: Writer = print) -> None:
        self._stream = stream
        self._write = write

    def propose_move(self, state: GameState) -> Move:
        player = state.turn
        while True:
            from_sq = self._input_square(f"{player} player, what piece do you want to move?")
            piece = state.board[from_sq]
            if piece is None or piece.color is not player:
                self._write(f"the {from_sq} square does not contain a piece that you can move")
                continue
            moves = state.legal_moves_from(from_sq)
            if not moves:
                self._write(f"your {piece.kind} on {from_sq} has no valid moves")
                continue
            self._write(f"these are the valid moves from {from_sq}")
            self._write(render(state.board, player, {m.to_square for m in moves}))
            by_target = _group_by_target(moves)
            to_sq = self._input_square(
                f"{player} player, where do you want to move your {piece.kind} on {from_sq}?"
            )
            options = by_target.get(to_sq)
            if not options:
                self._write(f"your {piece.kind} on {from_sq} can't move to {to_sq}")
                continue
            if len(options) == 1:
                return options[0]
            return self._choose_promotion(options)

    def _input_square(self, prompt: str) -> Square:
        while True:
            self._write(prompt)
            line = self._stream.readline()
            if not line:
                raise EOFError("input closed")
            try:
                return Square.parse(line.strip())
            except ParseSquareError as e:
                self._write(f"invalid format of square: {e}")

    def _choose_promotion(self, options: List[Move]) -> Move:
        by_letter: Dict[str, Move] = {}
        for move in options:
            if isinstance(move, PromotionMove):
                by_letter[move.kind.value] = move
        while True:
            self._write("promote to which piece? (n, b, r, q)")
            line = self._stream.readline()
            if not line:
                raise EOFError("input closed")
            choice = by_letter.get(line.strip().lower())
            if choice is not None:
                return choice
            self._write(f"invalid promotion piece: {line.strip()!r}")


def _group_by_target(moves: List[Move]) -> Dict[Square, List[Move]]:
    grouped: Dict[Square, List[Move]] = {}
    for move in moves:
        grouped.setdefault(move.to_square, []).append(move)
    return grouped
