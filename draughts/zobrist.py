"""
Zobrist hashing of draughts positions.

The table holds one random 64-bit key per (dark square, occupancy state) and
one key per side to move. A position hash is the XOR of the side-to-move key
and the key of every dark square's occupancy. Hashes are recomputed from
scratch after each completed ply.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .types import BOARD_SIZE, DARK_SQUARES, SQUARES_COUNT, Color, Piece

# Occupancy states per square
EMPTY, WHITE_PAWN_STATE, WHITE_KING_STATE, BLACK_PAWN_STATE, BLACK_KING_STATE = range(5)
OCCUPANCY_STATES: int = 5

DEFAULT_SEED: int = 0x5EED_D8A0_6875


def square_index(row: int, col: int) -> int:
    """Index 0..31 of a dark square, row-major."""
    return row * (BOARD_SIZE // 2) + col // 2


def occupancy_state(piece: Optional[Piece]) -> int:
    if piece is None:
        return EMPTY
    if piece.color is Color.WHITE:
        return WHITE_KING_STATE if piece.king else WHITE_PAWN_STATE
    return BLACK_KING_STATE if piece.king else BLACK_PAWN_STATE


class ZobristTable:
    """Random keys; only their uniqueness matters, the seed just fixes them."""

    board_keys: List[List[int]]
    white_turn: int
    black_turn: int

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        rng = np.random.default_rng(seed)
        keys = rng.integers(
            0, np.iinfo(np.uint64).max, size=(SQUARES_COUNT * OCCUPANCY_STATES + 2,),
            dtype=np.uint64, endpoint=True,
        )
        flat = [int(k) for k in keys]
        self.board_keys = [
            flat[i * OCCUPANCY_STATES:(i + 1) * OCCUPANCY_STATES] for i in range(SQUARES_COUNT)
        ]
        self.white_turn = flat[-2]
        self.black_turn = flat[-1]

    def turn_key(self, turn: Color) -> int:
        return self.white_turn if turn is Color.WHITE else self.black_turn


# Process-wide read-only table
ZOBRIST = ZobristTable()


def hash_position(grid: Sequence[Sequence[Optional[Piece]]], turn: Color,
                  table: ZobristTable = ZOBRIST) -> int:
    """Fold occupancy and side to move into a 64-bit fingerprint."""
    h = table.turn_key(turn)
    keys = table.board_keys
    for i, pos in enumerate(DARK_SQUARES):
        h ^= keys[i][occupancy_state(grid[pos.row][pos.col])]
    return h
