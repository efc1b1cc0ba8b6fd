"""
Alpha-beta search with a per-invocation transposition table.

Scores are negamax style: every call returns a value from the perspective of
the side to move in the board it was given. A jump-chain continuation keeps
the mover, so it is searched at the same depth and window without negation.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from .board import Board
from .eval import heuristic
from .moves import MoveGenerator, candidate_origins
from .types import LOST, WIN


@dataclass(frozen=True)
class TranspositionEntry:
    score: int
    depth: int
    alpha: int
    beta: int


@dataclass
class CacheStats:
    """Transposition table statistics."""
    hits: int = 0
    misses: int = 0
    stores: int = 0
    hit_rate: float = 0.0
    cache_size: int = 0


class TranspositionTable:
    """Position-hash keyed cache, owned by a single search invocation."""

    def __init__(self) -> None:
        self._entries: Dict[int, TranspositionEntry] = {}
        self.hits: int = 0
        self.misses: int = 0
        self.stores: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: int) -> bool:
        return key in self._entries

    def get(self, key: int) -> Optional[TranspositionEntry]:
        return self._entries.get(key)

    def probe(self, key: int, depth: int, alpha: int, beta: int) -> Optional[int]:
        """Cached score usable for this depth and window, else None.

        An entry is usable only if it was searched at least as deep and with a
        window at least as wide as the one requested.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.depth >= depth and entry.alpha <= alpha and entry.beta >= beta:
            self.hits += 1
            return entry.score
        self.misses += 1
        return None

    def store(self, key: int, score: int, depth: int, alpha: int, beta: int) -> None:
        self._entries[key] = TranspositionEntry(score, max(depth, 0), alpha, beta)
        self.stores += 1

    def get_cache_stats(self) -> CacheStats:
        total = self.hits + self.misses
        return CacheStats(
            hits=self.hits,
            misses=self.misses,
            stores=self.stores,
            hit_rate=self.hits / total if total else 0.0,
            cache_size=len(self._entries),
        )


_generator = MoveGenerator()


def alpha_beta(board: Board, depth: int, alpha: int, beta: int,
               tt: Optional[TranspositionTable]) -> int:
    """Fail-hard negamax alpha-beta to `depth` plies.

    Forced capture sequences are always played out, even past the depth limit.
    Boards with a pending forced jump are neither looked up nor stored, since
    `must_jump` is not part of the hash. Pass ``tt=None`` to search without a
    cache.
    """
    if depth <= 0 and not board.must_jump:
        return heuristic(board)

    if tt is not None and not board.must_jump:
        cached = tt.probe(board.hash, depth, alpha, beta)
        if cached is not None:
            return cached

    orig_alpha, orig_beta = alpha, beta
    for _, child in _generator.successors(board, candidate_origins(board)):
        if child.turn is board.turn:
            score = alpha_beta(child, depth, alpha, beta, tt)
        else:
            score = -alpha_beta(child, depth - 1, -beta, -alpha, tt)

        if score > alpha:
            alpha = score
            if alpha >= beta:
                return alpha

    if tt is not None and not board.must_jump:
        tt.store(board.hash, alpha, depth, orig_alpha, orig_beta)
    return alpha


class SearchStrategy(ABC):
    """Abstract interface for position search."""

    @abstractmethod
    def search(self, board: Board, depth: int) -> int:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaSearchStrategy(SearchStrategy):
    """Alpha-beta with a new transposition table per call."""

    def __init__(self) -> None:
        self.last_stats: Optional[CacheStats] = None

    def search(self, board: Board, depth: int) -> int:
        tt = TranspositionTable()
        score = alpha_beta(board, depth, LOST, WIN, tt)
        self.last_stats = tt.get_cache_stats()
        return score


def get_search_strategy() -> SearchStrategy:
    """Factory for the default search strategy (alpha-beta)."""
    return AlphaBetaSearchStrategy()


__all__ = [
    "TranspositionEntry",
    "TranspositionTable",
    "CacheStats",
    "alpha_beta",
    "SearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_search_strategy",
]
