from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from . import legality
from .board import Board
from .coords import Square
from .errors import (
    MissingKingError,
    MoveExecutionError,
    NoMovesToUndo,
    NoPieceAtSource,
    OwnPieceAtDestination,
)
from .move import CastleMove, EnPassantMove, Move, PromotionMove, RegularMove
from .piece import Color, Piece, PieceKind


@dataclass
class GameState:
    """Current position plus the bookkeeping needed to play and undo moves.

    Responsibility: own the board, both king squares, the per-color capture
    lists and a linear history of prior boards. ``history[-1]`` is always the
    board immediately before the current one and ``moves[-1]`` the move that
    led from it.
    """

    board: Board
    white_king: Square
    black_king: Square
    turn: Color = Color.WHITE
    white_captured: List[Piece] = field(default_factory=list)
    black_captured: List[Piece] = field(default_factory=list)
    history: List[Board] = field(default_factory=list)
    moves: List[Move] = field(default_factory=list)

    @classmethod
    def new(cls) -> "GameState":
        return cls.from_board(Board.startpos())

    @classmethod
    def from_board(cls, board: Board, turn: Color = Color.WHITE) -> "GameState":
        """Wrap ``board`` in a fresh state, locating both kings.

        Raises:
            MissingKingError: If either color has no king on ``board``.
        """
        white_king = board.find_king(Color.WHITE)
        if white_king is None:
            raise MissingKingError(Color.WHITE)
        black_king = board.find_king(Color.BLACK)
        if black_king is None:
            raise MissingKingError(Color.BLACK)
        return cls(board=board, white_king=white_king, black_king=black_king, turn=turn)

    @classmethod
    def from_placement(cls, placement: str, turn: Color = Color.WHITE) -> "GameState":
        return cls.from_board(Board.from_placement(placement), turn)

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def king_square(self, color: Color) -> Square:
        return self.white_king if color is Color.WHITE else self.black_king

    def captured_by(self, color: Color) -> List[Piece]:
        return self.white_captured if color is Color.WHITE else self.black_captured

    def score(self, color: Color) -> int:
        """Material value of the pieces ``color`` has captured."""
        return sum(p.kind.value_points for p in self.captured_by(color))

    # --- Rule queries ---
    def legal_moves_from(self, square: Square) -> List[Move]:
        return legality.legal_moves_from(self, square)

    def legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        return legality.legal_moves(self, color if color is not None else self.turn)

    def is_move_valid(self, move: Move) -> bool:
        return legality.is_move_valid(self, move)

    def is_king_checked(self, color: Color) -> bool:
        return legality.is_king_checked(self, color)

    def in_check(self) -> bool:
        return legality.is_king_checked(self, self.turn)

    def has_legal_moves(self, color: Optional[Color] = None) -> bool:
        return legality.has_legal_moves(self, color if color is not None else self.turn)

    # --- Mutation ---
    def execute_move(self, move: Move) -> None:
        """Apply ``move`` and push the prior board onto ``history``.

        Legality is not checked here; callers obtain moves from
        ``legal_moves_from`` or validate with ``is_move_valid`` first.

        Raises:
            NoPieceAtSource: If a square the move relocates from is empty.
            OwnPieceAtDestination: If the destination holds a piece of the
                mover's color.
            MoveExecutionError: If an en passant or castling move does not
                match the board.

        Notes:
            All preconditions are checked before anything is mutated, so a
            failed call leaves the state unchanged.
        """
        mover = self._check_executable(move)
        snapshot = self.board.copy()
        self.apply(move)
        self.history.append(snapshot)
        self.moves.append(move)
        self.turn = mover.color.opponent()

    def undo_last_move(self) -> None:
        """Restore the board from before the most recent move.

        Raises:
            NoMovesToUndo: If no move has been executed.
        """
        if not self.history:
            raise NoMovesToUndo()
        previous = self.history.pop()
        move = self.moves.pop()
        mover = previous[move.from_square]
        if mover is None:
            raise MoveExecutionError("history does not match the recorded move")
        captured_sq = _captured_square(move)
        if captured_sq is not None and previous[captured_sq] is not None:
            self.captured_by(mover.color).pop()
        self.board = previous
        self.turn = mover.color
        self._relocate_kings()

    def copy(self) -> "GameState":
        """Scratch copy with its own board; history is not carried over."""
        return GameState(
            board=self.board.copy(),
            white_king=self.white_king,
            black_king=self.black_king,
            turn=self.turn,
            white_captured=list(self.white_captured),
            black_captured=list(self.black_captured),
            moves=self.moves[-1:],
        )

    def apply(self, move: Move) -> None:
        """Mutate board, king squares and captures for ``move`` (no history)."""
        board = self.board
        if isinstance(move, RegularMove):
            piece = self._take(move.from_sq)
            self._capture(piece.color, board.take(move.to_sq))
            piece.record(move.to_sq)
            board.place(move.to_sq, piece)
            if piece.kind is PieceKind.KING:
                self._set_king(piece.color, move.to_sq)
        elif isinstance(move, CastleMove):
            king = self._take(move.king_from)
            rook = self._take(move.rook_from)
            king.record(move.king_to)
            rook.record(move.rook_to)
            board.place(move.king_to, king)
            board.place(move.rook_to, rook)
            self._set_king(king.color, move.king_to)
        elif isinstance(move, PromotionMove):
            pawn = self._take(move.from_sq)
            self._capture(pawn.color, board.take(move.to_sq))
            promoted = Piece(move.kind, pawn.color, pawn.history + [move.to_sq])
            board.place(move.to_sq, promoted)
        elif isinstance(move, EnPassantMove):
            pawn = self._take(move.from_sq)
            self._capture(pawn.color, board.take(move.captured_sq))
            pawn.record(move.to_sq)
            board.place(move.to_sq, pawn)
        else:
            raise TypeError(f"unknown move type: {type(move).__name__}")

    # --- Internals ---
    def _check_executable(self, move: Move) -> Piece:
        board = self.board
        mover = board[move.from_square]
        if mover is None:
            raise NoPieceAtSource(move.from_square)
        if isinstance(move, (RegularMove, PromotionMove)):
            target = board[move.to_sq]
            if target is not None and target.color is mover.color:
                raise OwnPieceAtDestination(move.to_sq)
        elif isinstance(move, CastleMove):
            if board[move.rook_from] is None:
                raise NoPieceAtSource(move.rook_from)
            for sq in (move.king_to, move.rook_to):
                if sq in (move.king_from, move.rook_from):
                    continue
                occupant = board[sq]
                if occupant is None:
                    continue
                if occupant.color is mover.color:
                    raise OwnPieceAtDestination(sq)
                raise MoveExecutionError(f"castling destination {sq} is occupied")
        elif isinstance(move, EnPassantMove):
            target = board[move.to_sq]
            if target is not None:
                if target.color is mover.color:
                    raise OwnPieceAtDestination(move.to_sq)
                raise MoveExecutionError(f"en passant destination {move.to_sq} is occupied")
            if board[move.captured_sq] is None:
                raise MoveExecutionError(f"no pawn to capture on {move.captured_sq}")
        else:
            raise TypeError(f"unknown move type: {type(move).__name__}")
        return mover

    def _take(self, square: Square) -> Piece:
        piece = self.board.take(square)
        if piece is None:
            raise NoPieceAtSource(square)
        return piece

    def _capture(self, color: Color, piece: Optional[Piece]) -> None:
        if piece is not None:
            self.captured_by(color).append(piece)

    def _set_king(self, color: Color, square: Square) -> None:
        if color is Color.WHITE:
            self.white_king = square
        else:
            self.black_king = square

    def _relocate_kings(self) -> None:
        for color in (Color.WHITE, Color.BLACK):
            sq = self.board.find_king(color)
            if sq is not None:
                self._set_king(color, sq)


def _captured_square(move: Move) -> Optional[Square]:
    if isinstance(move, CastleMove):
        return None
    if isinstance(move, EnPassantMove):
        return move.captured_sq
    return move.to_square
