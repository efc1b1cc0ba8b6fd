from draughts.board import Board
from draughts.types import DARK_SQUARES, Color, PieceMove
from draughts.zobrist import (
    OCCUPANCY_STATES,
    ZOBRIST,
    ZobristTable,
    hash_position,
    square_index,
)


def play(board, moves):
    for s in moves:
        assert board.make_move(PieceMove.from_str(s)), s
    return board


def test_table_shape_and_uniqueness():
    assert len(ZOBRIST.board_keys) == 32
    assert all(len(row) == OCCUPANCY_STATES for row in ZOBRIST.board_keys)
    keys = [k for row in ZOBRIST.board_keys for k in row] + [ZOBRIST.white_turn, ZOBRIST.black_turn]
    assert len(set(keys)) == len(keys)
    assert all(0 <= k < 2 ** 64 for k in keys)


def test_table_is_deterministic_per_seed():
    assert ZobristTable().board_keys == ZOBRIST.board_keys
    assert ZobristTable(seed=1).board_keys != ZOBRIST.board_keys


def test_square_index_covers_dark_squares():
    assert sorted(square_index(p.row, p.col) for p in DARK_SQUARES) == list(range(32))
    assert [square_index(p.row, p.col) for p in DARK_SQUARES] == list(range(32))


def test_side_to_move_changes_hash():
    board = Board.new()
    assert hash_position(board.grid, Color.WHITE) != hash_position(board.grid, Color.BLACK)
    assert hash_position(board.grid, Color.WHITE) ^ hash_position(board.grid, Color.BLACK) == \
        ZOBRIST.white_turn ^ ZOBRIST.black_turn


def test_transposed_move_orders_hash_identically():
    a = play(Board.new(), ["B5 dl", "G2 tr", "D5 dl", "E2 tr"])
    b = play(Board.new(), ["D5 dl", "E2 tr", "B5 dl", "G2 tr"])
    assert a.grid == b.grid
    assert a.turn is b.turn is Color.BLACK
    assert a.hash == b.hash
    assert a.hash != Board.new().hash


def test_hash_independent_of_history():
    board = play(Board.new(), ["B5 dl", "G2 tr"])
    rebuilt = Board.from_text(board.to_text(), turn=board.turn)
    assert rebuilt.hash == board.hash
