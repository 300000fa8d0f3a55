from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..engine.errors import IllegalMoveError
from ..engine.game import GameState
from ..engine.move import move_to_str
from ..engine.piece import Color
from .players import Player, Writer
from .render import render


logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    outcome: str  # "checkmate" | "stalemate" | "unfinished"
    winner: Optional[Color]
    plies: int


class LocalGame:
    """Alternate turns between two players on one terminal.

    Notes:
    - Players are injected; the loop itself holds no rule logic.
    - The game ends when the side to move has no legal move, or after
      ``max_plies`` plies when a limit is given.
    """

    def __init__(
        self,
        white: Player,
        black: Player,
        write: Writer = print,
        state: Optional[GameState] = None,
        max_plies: Optional[int] = None,
    ) -> None:
        self.state = state if state is not None else GameState.new()
        self.players: Dict[Color, Player] = {Color.WHITE: white, Color.BLACK: black}
        self._write = write
        self._max_plies = max_plies

    def play(self) -> GameResult:
        plies = 0
        while self.state.has_legal_moves():
            if self._max_plies is not None and plies >= self._max_plies:
                return GameResult("unfinished", None, plies)
            self.single_turn()
            plies += 1
        return self._result(plies)

    def single_turn(self) -> None:
        state = self.state
        player = state.turn
        self._write(render(state.board, player))
        move = self.players[player].propose_move(state)
        if not state.is_move_valid(move):
            raise IllegalMoveError(move)
        state.execute_move(move)
        logger.info("move", extra={"color": player.name.lower(), "move": move_to_str(move)})
        self._write(f"{player} played {move_to_str(move)}")

    def _result(self, plies: int) -> GameResult:
        loser = self.state.turn
        if self.state.in_check():
            self._write(f"Checkmate, {loser.opponent()} wins")
            return GameResult("checkmate", loser.opponent(), plies)
        self._write("Stalemate")
        return GameResult("stalemate", None, plies)
