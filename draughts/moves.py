from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from .board import Board
from .eval import heuristic
from .types import DIRS, LOST, CellPos, PieceMove

HeuristicFn = Callable[[Board], int]


def candidate_origins(board: Board) -> List[CellPos]:
    """Cells the side to move may move from: the forced set if any, else every own piece."""
    if board.must_jump:
        return list(board.must_jump)
    return board.piece_pos(board.turn)


class MoveGenerator:
    """Enumerates legal moves by probing `make_move` on disposable copies.

    Origins are visited in the given order and directions in `DIRS` order, so
    enumeration order is deterministic for a fixed origin list.
    """

    def successors(self, board: Board,
                   origins: Optional[List[CellPos]] = None) -> Iterator[Tuple[PieceMove, Board]]:
        if origins is None:
            origins = candidate_origins(board)
        for cp in origins:
            for d in DIRS:
                mv = PieceMove(cp, d)
                child = board.copy()
                if child.make_move(mv):
                    yield mv, child

    def legal_moves(self, board: Board) -> List[PieceMove]:
        return [mv for mv, _ in self.successors(board)]


def sort_by_heuristic(board: Board, origins: List[CellPos],
                      h_fn: HeuristicFn = heuristic) -> List[CellPos]:
    """Order origins by their best one-ply score, best first.

    Scores are taken from the perspective of the side to move in `board`;
    an origin with no legal move scores LOST. Ties keep input order.
    """
    keyed = []
    for cp in origins:
        best = LOST
        for d in DIRS:
            trial = board.copy()
            if trial.make_move(PieceMove(cp, d)):
                score = h_fn(trial)
                if trial.turn is not board.turn:
                    score = -score
                best = max(best, score)
        keyed.append((best, cp))
    keyed.sort(key=lambda x: x[0], reverse=True)
    return [cp for _, cp in keyed]


# Convenience functional API

def successors(board: Board) -> Iterator[Tuple[PieceMove, Board]]:
    return MoveGenerator().successors(board)


def legal_moves(board: Board) -> List[PieceMove]:
    return MoveGenerator().legal_moves(board)
