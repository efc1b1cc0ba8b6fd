from __future__ import annotations

from draughts import AI, Board, heuristic
from draughts.types import Color


def test_end_to_end_move_and_eval():
    board = Board.new()
    assert heuristic(board) == 0

    ai = AI(depth=2, parallel=False, seed=5)
    for _ in range(6):
        mover = board.turn
        best = ai.compute_move(board)
        assert best is not None
        assert board.make_move(best)
        # finish any jump chain before handing over
        while board.turn is mover and board.must_jump:
            assert board.make_move(ai.compute_move(board))
    assert board.turn is Color.BLACK
