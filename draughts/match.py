"""
Engine-vs-engine matches.

Two engines play a series of games from the standard start, swapping colors
after every game. A game is lost by the side to move when it has no valid
move, and tied once `max_moves` plies have been played.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from config import get_match_settings

from .board import Board
from .engine import AI
from .eval import heuristic
from .types import Color

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of a match, from engine 1's point of view."""
    wins1: int = 0
    wins2: int = 0
    ties: int = 0
    time1: float = 0.0
    time2: float = 0.0
    evals: List[int] = field(default_factory=list)

    @property
    def games(self) -> int:
        return self.wins1 + self.wins2 + self.ties

    @property
    def median_eval(self) -> float:
        return float(np.median(self.evals)) if self.evals else 0.0

    def summary(self) -> str:
        n = max(1, self.games)
        return (f"AI1 wins: {self.wins1}; AI2 wins: {self.wins2}; ties: {self.ties}; "
                f"AI1 time: {self.time1 / n:.2f}s; AI2 time: {self.time2 / n:.2f}s; "
                f"median eval: {self.median_eval:.1f}")


class MatchRunner:
    """Plays `ai1` against `ai2`; `ai1` starts as Black."""

    def __init__(self, ai1: AI, ai2: AI, max_moves: Optional[int] = None) -> None:
        self.ai1 = ai1
        self.ai2 = ai2
        self.max_moves: int = max_moves if max_moves is not None else get_match_settings().max_moves

    def play_game(self, ai1_color: Color, result: MatchResult) -> None:
        board = Board.new()
        moves = 0
        while True:
            if moves >= self.max_moves:
                result.ties += 1
                break
            if not board.exists_valid_move():
                if board.turn is ai1_color:
                    result.wins2 += 1
                else:
                    result.wins1 += 1
                break

            ai1_to_move = board.turn is ai1_color
            ai = self.ai1 if ai1_to_move else self.ai2
            start = time.time()
            mv = ai.compute_move(board)
            elapsed = time.time() - start
            if ai1_to_move:
                result.time1 += elapsed
            else:
                result.time2 += elapsed

            if mv is None or not board.make_move(mv):
                # An engine that answers with an illegal move forfeits the game
                logger.warning("AI %d made invalid move %s (loser)", 1 if ai1_to_move else 2, mv)
                if ai1_to_move:
                    result.wins2 += 1
                else:
                    result.wins1 += 1
                break
            moves += 1

        score = heuristic(board)
        result.evals.append(score if board.turn is ai1_color else -score)
        logger.info("Game %d finished after %d plies: %s", result.games, moves, result.summary())

    def run(self, games: Optional[int] = None) -> MatchResult:
        games = games if games is not None else get_match_settings().games
        result = MatchResult()
        ai1_color = Color.BLACK
        for _ in range(games):
            self.play_game(ai1_color, result)
            ai1_color = -ai1_color
        return result
