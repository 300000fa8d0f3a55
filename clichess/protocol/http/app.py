from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from .error import (
    chess_error_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .rooms import RoomRelay, create_room_router
from .schemas import (
    CreateGameResponse,
    GameStateResponse,
    MoveRequest,
    MoveView,
    PerftRequest,
    SetPositionRequest,
    move_view,
    state_view,
)
from .session import InMemorySessionStore
from ...engine.errors import ChessError, MissingKingError, ParseSquareError
from ...engine.game import GameState
from ...engine.move import move_to_str
from ...engine.notation import parse_move, parse_square
from ...engine.perft import perft as perft_nodes
from ...engine.piece import Color


logger = logging.getLogger(__name__)


def create_app(*, log_level: int = logging.INFO, max_perft_depth: int = 4) -> FastAPI:
    """Build the API.

    ``log_level`` is handed to ``logging.basicConfig``; ``max_perft_depth`` caps
    the depth ``POST /api/perft`` will search.
    """
    app = FastAPI(title="clichess API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ChessError, chess_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    relay = RoomRelay()
    app.include_router(create_room_router(relay))

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(GameState.new())
        state = _require_game(store, game_id)
        return CreateGameResponse(
            game_id=game_id, placement=state.board.to_placement(), turn=state.turn.value
        )

    @app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
    async def get_state(game_id: str) -> GameStateResponse:
        return _game_state(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/moves/{square}", response_model=List[MoveView])
    async def moves_from(game_id: str, square: str) -> List[MoveView]:
        state = _require_game(store, game_id)
        try:
            sq = parse_square(square)
        except ParseSquareError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return [move_view(m) for m in state.legal_moves_from(sq)]

    @app.post("/api/games/{game_id}/position", response_model=GameStateResponse)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameStateResponse:
        _require_game(store, game_id)
        try:
            state = GameState.from_placement(req.placement, Color(req.turn))
        except (ValueError, MissingKingError) as e:
            raise HTTPException(status_code=400, detail=f"invalid placement: {e}")
        store.replace(game_id, state)
        return _game_state(game_id, state)

    @app.post("/api/games/{game_id}/move", response_model=GameStateResponse)
    async def make_move(game_id: str, req: MoveRequest) -> GameStateResponse:
        state = _require_game(store, game_id)
        try:
            move = parse_move(req.move, state.board)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        piece = state.board.piece_at(move.from_square)
        if piece is not None and piece.color is not state.turn:
            raise HTTPException(status_code=400, detail="not your turn")
        if not state.is_move_valid(move):
            raise HTTPException(status_code=400, detail="illegal move")
        state.execute_move(move)
        logger.info("move", extra={"game_id": game_id, "move": move_to_str(move)})
        return _game_state(game_id, state)

    @app.post("/api/games/{game_id}/undo", response_model=GameStateResponse)
    async def undo(game_id: str) -> GameStateResponse:
        state = _require_game(store, game_id)
        state.undo_last_move()
        return _game_state(game_id, state)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, bool]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        logger.info("game deleted", extra={"game_id": game_id, "games": len(store)})
        return {"deleted": True}

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        if req.depth > max_perft_depth:
            raise HTTPException(status_code=400, detail=f"depth must be <= {max_perft_depth}")
        try:
            state = GameState.from_placement(req.placement, Color(req.turn))
        except (ValueError, MissingKingError) as e:
            raise HTTPException(status_code=400, detail=f"invalid placement: {e}")
        return {"nodes": perft_nodes(state, req.depth), "depth": req.depth}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> GameState:
    state = store.get(game_id)
    if state is None:
        raise HTTPException(status_code=404, detail="game not found")
    return state


def _game_state(game_id: str, state: GameState) -> GameStateResponse:
    return GameStateResponse(game_id=game_id, **state_view(state).model_dump())


# Default app for non-factory servers
app = create_app()
