import io

import pytest

from draughts.board import Board
from draughts.engine import AI
from draughts.moves import legal_moves
from draughts.protocol import requests, run_protocol
from draughts.types import CellPos, Color, InvalidNotationError, Piece, PieceMove

# Helpers

def make_board(pieces, turn):
    return Board.from_pieces({CellPos.from_str(k): Piece.from_symbol(v) for k, v in pieces.items()}, turn)


def request(board, must_jump=""):
    return f"{must_jump}\n{board.to_text()}\n"


def engine():
    return AI(depth=1, parallel=False, seed=0)


def test_answers_opening_request():
    stdin = io.StringIO("black\n" + request(Board.new()) + "exit\n")
    stdout = io.StringIO()
    assert run_protocol(stdin, stdout, engine()) == 1
    mv = PieceMove.from_str(stdout.getvalue())
    assert mv in legal_moves(Board.new())


def test_color_switch_and_eof():
    board = Board.new()
    assert board.make_move(PieceMove.from_str("B5 dl"))
    stdin = io.StringIO("black\n" + request(Board.new()) + "white\n" + request(board))
    stdout = io.StringIO()
    assert run_protocol(stdin, stdout, engine()) == 2
    first, second = stdout.getvalue().splitlines()
    assert PieceMove.from_str(first) in legal_moves(Board.new())
    assert PieceMove.from_str(second) in legal_moves(board)


def test_jump_chain_request():
    board = make_board({"C2": "W", "D3": "b", "F5": "b", "B7": "b"}, Color.WHITE)
    assert board.make_move(PieceMove.from_str("C2 tr"))
    stdin = io.StringIO("white\n" + request(board, "E4") + "exit\n")
    boards = list(requests(stdin))
    assert len(boards) == 1
    assert boards[0].must_jump == [CellPos(4, 4)]
    assert boards[0].turn is Color.WHITE

    stdin = io.StringIO("white\n" + request(board, "E4") + "exit\n")
    stdout = io.StringIO()
    run_protocol(stdin, stdout, engine())
    assert stdout.getvalue() == "E4 tr\n"


def test_empty_input():
    assert run_protocol(io.StringIO(""), io.StringIO(), engine()) == 0


def test_malformed_must_jump_line():
    stdin = io.StringIO("black\nZ9\n" + Board.new().to_text() + "\n")
    with pytest.raises(InvalidNotationError):
        run_protocol(stdin, io.StringIO(), engine())


def test_truncated_board():
    text = "\n".join(Board.new().to_text().splitlines()[:5])
    stdin = io.StringIO("black\n\n" + text + "\n")
    with pytest.raises(InvalidNotationError):
        run_protocol(stdin, io.StringIO(), engine())


def test_unknown_color():
    with pytest.raises(InvalidNotationError):
        run_protocol(io.StringIO("red\n"), io.StringIO(), engine())
