#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `clichess/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from clichess.engine.board import STARTPOS_PLACEMENT
from clichess.engine.game import GameState
from clichess.engine.perft import perft, perft_divide
from clichess.engine.piece import Color


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft on a placement and depth")
    parser.add_argument(
        "--placement",
        type=str,
        default=STARTPOS_PLACEMENT,
        help="FEN piece placement (default: startpos)",
    )
    parser.add_argument("--turn", choices=("w", "b"), default="w", help="Side to move")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the node count below each root move"
    )
    args = parser.parse_args()

    state = GameState.from_placement(args.placement, Color(args.turn))
    start = time.perf_counter()
    if args.divide:
        counts = perft_divide(state, args.depth)
        for move, n in sorted(counts.items()):
            print(f"{move}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(state, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
