"""
Root move selection.

Every legal root move is searched as an independent task on its own board copy
with its own transposition table, either in a multiprocessing pool or
sequentially in-process. The best adjusted score wins; ties go to the move
enumerated first.
"""
from __future__ import annotations

import logging
import multiprocessing as mp
import random
import time
from typing import List, Optional, Tuple

from config import get_engine_settings

from .board import Board, make_move
from .moves import MoveGenerator, candidate_origins, sort_by_heuristic
from .search import AlphaBetaSearchStrategy, CacheStats
from .types import PieceMove

logger = logging.getLogger(__name__)

BranchResult = Tuple[int, CacheStats]


def _search_branch(child: Board, depth: int) -> BranchResult:
    """Worker entry point: search one root child with a private table."""
    strategy = AlphaBetaSearchStrategy()
    score = strategy.search(child, depth)
    return score, strategy.last_stats  # type: ignore[return-value]


class AI:
    """Alpha-beta engine searching root moves in parallel."""

    def __init__(self, depth: Optional[int] = None, parallel: Optional[bool] = None,
                 max_workers: Optional[int] = None, seed: Optional[int] = None,
                 shuffle: Optional[bool] = None) -> None:
        settings = get_engine_settings()
        self.depth: int = depth if depth is not None else settings.search_depth
        self.parallel: bool = parallel if parallel is not None else settings.parallel_search
        self.max_workers: Optional[int] = max_workers if max_workers is not None else settings.max_workers
        self.shuffle: bool = shuffle if shuffle is not None else settings.shuffle_roots
        self.rng = random.Random(seed if seed is not None else settings.seed)
        self._generator = MoveGenerator()

    def root_moves(self, board: Board) -> List[Tuple[PieceMove, Board]]:
        """Legal root moves in search order, each with its resulting board."""
        origins = candidate_origins(board)
        if self.shuffle:
            self.rng.shuffle(origins)
        origins = sort_by_heuristic(board, origins)
        return list(self._generator.successors(board, origins))

    def _run_tasks(self, tasks: List[Tuple[Board, int]]) -> List[BranchResult]:
        if not self.parallel or len(tasks) < 2:
            return [_search_branch(child, depth) for child, depth in tasks]
        workers = min(self.max_workers or mp.cpu_count(), len(tasks))
        with mp.Pool(processes=workers) as pool:
            return pool.starmap(_search_branch, tasks)

    def compute_move(self, board: Board) -> Optional[PieceMove]:
        """Best move for the side to move; `board` itself is never modified."""
        start = time.time()
        work = board.copy()
        candidates = self.root_moves(work)
        if not candidates:
            logger.warning("No legal move for %s", work.turn)
            return None

        results = self._run_tasks([(child, self.depth) for _, child in candidates])

        best: Optional[Tuple[int, PieceMove]] = None
        for (mv, child), (score, stats) in zip(candidates, results):
            sign = 1 if child.turn is work.turn else -1
            adjusted = score * sign
            logger.debug("%s -> %d (tt hits %d, size %d)", mv, adjusted, stats.hits, stats.cache_size)
            if best is None or adjusted > best[0]:
                best = (adjusted, mv)

        assert best is not None
        logger.info("Eval: %d, move %s (%d candidates, %.2fs)",
                    best[0], best[1], len(candidates), time.time() - start)
        return best[1]


def get_engine(**kwargs) -> AI:
    """Get a new engine instance."""
    return AI(**kwargs)


def compute_move(board: Board, depth: Optional[int] = None) -> Optional[PieceMove]:
    return AI(depth=depth).compute_move(board)


__all__ = [
    "AI",
    "get_engine",
    "compute_move",
    "make_move",
]
