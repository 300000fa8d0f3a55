from __future__ import annotations

from typing import Iterator, Tuple

from .coords import Square


Offset = Tuple[int, int]  # (file delta, rank delta)

ROOK_DIRECTIONS: Tuple[Offset, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRECTIONS: Tuple[Offset, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRECTIONS: Tuple[Offset, ...] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS

KNIGHT_OFFSETS: Tuple[Offset, ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)
KING_OFFSETS: Tuple[Offset, ...] = QUEEN_DIRECTIONS


def ray(start: Square, direction: Offset) -> Iterator[Square]:
    """Walk from ``start`` (exclusive) in ``direction`` until the board edge."""
    df, dr = direction
    sq = start.offset(df, dr)
    while sq is not None:
        yield sq
        sq = sq.offset(df, dr)


def jumps(start: Square, offsets: Tuple[Offset, ...]) -> Iterator[Square]:
    """Yield each on-board square reached from ``start`` by one of ``offsets``."""
    for df, dr in offsets:
        sq = start.offset(df, dr)
        if sq is not None:
            yield sq
