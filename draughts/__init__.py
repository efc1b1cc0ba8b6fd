"""Draughts package: rules engine and alpha-beta search.

Usage examples:
    from draughts import Board, PieceMove, compute_move
    board = Board.new()
    board.make_move(compute_move(board))
"""
from __future__ import annotations

from .types import (
    LOST,
    WIN,
    DIRS,
    Color,
    Piece,
    CellPos,
    MoveDir,
    PieceMove,
    InvalidNotationError,
    cell,
)
from .board import Board
from .zobrist import ZOBRIST, ZobristTable, hash_position
from .eval import heuristic
from .moves import MoveGenerator, legal_moves, sort_by_heuristic
from .search import TranspositionTable, TranspositionEntry, alpha_beta, get_search_strategy
from .engine import AI, get_engine, compute_move, make_move
