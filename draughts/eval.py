"""
Static evaluation of draughts positions.

`heuristic` scores a board from the perspective of the side to move: each
color's subtotal is added when it is that color's turn and subtracted
otherwise.
"""
from __future__ import annotations

from .board import Board
from .types import Color, backward_dirs, forward_dirs

# Row bonuses indexed by the row counted from the piece's own home row
ROW_VALS_PAWN = (7, 0, 1, 2, 3, 4, 5, 9)
ROW_VALS_KING = (1, 2, 2, 3, 3, 2, 2, 1)

PIECE_VAL = 5
KING_VAL = 10
SQ_6X6_VAL = 3
SQ_4X4_VAL = 1
MISSING_NEIGHBOR_VAL = -1
EXPOSED_PAWN_VAL = -2
TURN_JUMP_VAL = 3


def heuristic(board: Board) -> int:
    """Hand-tuned score of `board` for the side to move."""
    res = 0
    for color in (Color.WHITE, Color.BLACK):
        sign = 1 if board.turn is color else -1
        ahead = forward_dirs(color)
        behind = backward_dirs(color)
        lres = 0

        for cp in board.piece_pos(color):
            piece = board[cp]
            rrow = cp.row if color is Color.WHITE else 7 - cp.row

            lres += PIECE_VAL

            if 1 <= cp.col <= 6 and 1 <= cp.row <= 6:
                lres += SQ_6X6_VAL
                if 2 <= cp.col <= 5 and 2 <= cp.row <= 5:
                    lres += SQ_4X4_VAL

            if color is board.turn and board.can_jump(cp):
                lres += TURN_JUMP_VAL

            if piece.king:
                lres += KING_VAL + ROW_VALS_KING[rrow]
                continue

            lres += ROW_VALS_PAWN[rrow]
            # exposed from behind
            for d in behind:
                back = cp.shift(d)
                if back is not None and board[back] is None:
                    lres += EXPOSED_PAWN_VAL
            # no friendly support ahead
            for d in ahead:
                front = cp.shift(d)
                if front is not None and board[front] is None:
                    lres += MISSING_NEIGHBOR_VAL

        res += lres * sign
    return res
