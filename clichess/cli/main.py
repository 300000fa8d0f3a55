from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

import uvicorn

from ..engine.board import STARTPOS_PLACEMENT
from ..engine.game import GameState
from ..engine.perft import perft
from ..engine.piece import Color
from .local import LocalGame
from .players import ConsolePlayer, GreedyPlayer, Player


def _player(kind: str) -> Player:
    if kind == "computer":
        return GreedyPlayer()
    return ConsolePlayer(sys.stdin)


def _cmd_local(args: argparse.Namespace) -> int:
    game = LocalGame(_player(args.white), _player(args.black), max_plies=args.max_plies)
    try:
        result = game.play()
    except (EOFError, KeyboardInterrupt):
        print("\ngame aborted")
        return 1
    print(f"result={result.outcome} plies={result.plies}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "clichess.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def _cmd_perft(args: argparse.Namespace) -> int:
    turn = Color.WHITE if args.turn == "w" else Color.BLACK
    state = GameState.from_placement(args.placement, turn)
    start = time.perf_counter()
    nodes = perft(state, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clichess", description="Terminal chess")
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    local = sub.add_parser("local", help="Play on this terminal")
    local.add_argument("--white", choices=("human", "computer"), default="human")
    local.add_argument("--black", choices=("human", "computer"), default="human")
    local.add_argument(
        "--max-plies", type=int, default=None, help="Stop after this many plies"
    )
    local.set_defaults(func=_cmd_local)

    serve = sub.add_parser("serve", help="Run the HTTP/websocket server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=_cmd_serve)

    pf = sub.add_parser("perft", help="Count legal move paths")
    pf.add_argument(
        "--placement",
        default=STARTPOS_PLACEMENT,
        help="FEN piece placement (default: startpos)",
    )
    pf.add_argument("--turn", choices=("w", "b"), default="w")
    pf.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    pf.set_defaults(func=_cmd_perft)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
