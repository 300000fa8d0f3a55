from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .coords import Square
    from .piece import Color


class ChessError(Exception):
    """Base class for every rule or input violation raised by the engine."""


class ParseSquareError(ChessError, ValueError):
    """A coordinate string could not be parsed into a square.

    Attributes:
        char (Optional[str]): Offending character, ``None`` for length errors.
        position (Optional[int]): Index of ``char`` within the input.
    """

    def __init__(
        self, message: str, *, char: Optional[str] = None, position: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.char = char
        self.position = position


class ParseMoveError(ChessError, ValueError):
    """A coordinate move string was malformed or names no legal move."""


class MoveExecutionError(ChessError):
    """A move could not be applied to the current position."""


class NoPieceAtSource(MoveExecutionError):
    def __init__(self, square: "Square") -> None:
        super().__init__(f"no piece at {square}")
        self.square = square


class OwnPieceAtDestination(MoveExecutionError):
    def __init__(self, square: "Square") -> None:
        super().__init__(f"can't move to {square}, a square you occupy")
        self.square = square


class IllegalMoveError(MoveExecutionError):
    def __init__(self, move: object) -> None:
        super().__init__("illegal move")
        self.move = move


class CastleError(ChessError):
    """Castling preconditions not met; the player may choose another move."""


class WrongPieces(CastleError):
    def __init__(self) -> None:
        super().__init__("can't castle because at least one of the given squares was wrong")


class PieceHasMadeMove(CastleError):
    def __init__(self, square: "Square") -> None:
        super().__init__(f"can't castle because the piece at {square} has already moved")
        self.square = square


class PiecesBetween(CastleError):
    def __init__(self) -> None:
        super().__init__("can't castle because there are pieces between the king and rook")


class SquareInCheck(CastleError):
    def __init__(self, square: "Square") -> None:
        super().__init__(f"can't castle because {square} is attacked")
        self.square = square


class MissingKingError(ChessError):
    """The board has no king of ``color``; check detection is undefined."""

    def __init__(self, color: "Color") -> None:
        super().__init__(f"no {color.name.lower()} king on the board")
        self.color = color


class NoMovesToUndo(ChessError):
    def __init__(self) -> None:
        super().__init__("no moves to undo")
