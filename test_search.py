import pytest

from draughts.board import Board
from draughts.eval import heuristic
from draughts.moves import successors
from draughts.search import (
    AlphaBetaSearchStrategy,
    TranspositionTable,
    alpha_beta,
    get_search_strategy,
)
from draughts.types import LOST, WIN, CellPos, Color, Piece, PieceMove

# Helpers

def make_board(pieces, turn):
    return Board.from_pieces({CellPos.from_str(k): Piece.from_symbol(v) for k, v in pieces.items()}, turn)


def play(board, moves):
    for s in moves:
        assert board.make_move(PieceMove.from_str(s)), s
    return board


def minimax(board, depth):
    """Unpruned reference search with the same depth and chain rules."""
    if depth <= 0 and not board.must_jump:
        return heuristic(board)
    best = LOST
    for _, child in successors(board):
        if child.turn is board.turn:
            score = minimax(child, depth)
        else:
            score = -minimax(child, depth - 1)
        best = max(best, score)
    return best


# Pawn-only positions
PAWN_POSITIONS = [
    (Board.new(), 3),
    (play(Board.new(), ["B5 dl", "E2 tr", "D5 dr", "F3 tl"]), 3),
    (make_board({"C2": "w", "E2": "w", "B1": "w", "D3": "b", "F5": "b", "B5": "b", "G6": "b"},
                Color.WHITE), 4),
]

# Positions with kings, searched without a table
KING_POSITIONS = [
    (make_board({"D3": "W", "B1": "w", "E6": "B", "B5": "b", "F5": "b"}, Color.WHITE), 3),
    (make_board({"C2": "W", "D3": "b", "F5": "b", "B7": "b", "H1": "w"}, Color.WHITE), 3),
    (make_board({"A0": "W", "H7": "B", "D5": "b", "E2": "w"}, Color.BLACK), 3),
]


@pytest.mark.parametrize("board,depth", PAWN_POSITIONS)
def test_alpha_beta_matches_minimax_with_table(board, depth):
    assert alpha_beta(board, depth, LOST, WIN, TranspositionTable()) == minimax(board, depth)


@pytest.mark.parametrize("board,depth", PAWN_POSITIONS + KING_POSITIONS)
def test_alpha_beta_matches_minimax_without_table(board, depth):
    assert alpha_beta(board, depth, LOST, WIN, None) == minimax(board, depth)


def test_depth_zero_returns_heuristic():
    board = Board.new()
    assert alpha_beta(board, 0, LOST, WIN, TranspositionTable()) == heuristic(board)


def test_forced_capture_extends_past_depth():
    board = make_board({"C2": "w", "D3": "b"}, Color.WHITE)
    assert board.must_jump == [CellPos(2, 2)]
    assert heuristic(board) == 1
    # white captures the last black piece, then the position is scored for black
    assert alpha_beta(board, 0, LOST, WIN, TranspositionTable()) == 6
    assert minimax(board, 0) == 6


def test_no_legal_move_is_lost():
    board = make_board({"B1": "b", "A0": "w", "C0": "w"}, Color.BLACK)
    assert alpha_beta(board, 2, LOST, WIN, TranspositionTable()) == LOST
    assert minimax(board, 2) == LOST


def test_root_entry_stored_with_window():
    board = Board.new()
    tt = TranspositionTable()
    score = alpha_beta(board, 3, LOST, WIN, tt)
    entry = tt.get(board.hash)
    assert entry is not None
    assert entry.score == score
    assert entry.depth == 3
    assert (entry.alpha, entry.beta) == (LOST, WIN)

    hits = tt.hits
    assert alpha_beta(board, 3, LOST, WIN, tt) == score
    assert tt.hits == hits + 1
    assert tt.get_cache_stats().cache_size == len(tt)


def test_probe_respects_depth_and_window():
    tt = TranspositionTable()
    tt.store(42, 7, 3, -10, 10)
    assert tt.probe(42, 3, -5, 5) == 7
    assert tt.probe(42, 2, -10, 10) == 7
    assert tt.probe(42, 4, -5, 5) is None
    assert tt.probe(42, 3, -20, 5) is None
    assert tt.probe(42, 3, -5, 20) is None
    assert tt.probe(43, 1, 0, 1) is None
    stats = tt.get_cache_stats()
    assert (stats.hits, stats.misses, stats.stores) == (2, 4, 1)


def test_store_clamps_depth():
    tt = TranspositionTable()
    tt.store(1, 0, -3, LOST, WIN)
    assert tt.get(1).depth == 0


def test_forced_positions_are_not_cached():
    board = make_board({"C2": "W", "D3": "b", "F5": "b", "B7": "b", "H1": "w"}, Color.WHITE)
    assert board.must_jump
    tt = TranspositionTable()
    alpha_beta(board, 2, LOST, WIN, tt)
    assert board.hash not in tt
    # mid-chain board keeps the pre-chain hash and must not be stored either
    chain = board.copy()
    assert chain.make_move(PieceMove.from_str("C2 tr"))
    assert chain.hash == board.hash
    alpha_beta(chain, 2, LOST, WIN, tt)
    assert board.hash not in tt


def test_strategy_uses_fresh_table_each_call():
    strategy = get_search_strategy()
    assert isinstance(strategy, AlphaBetaSearchStrategy)
    board = Board.new()
    first = strategy.search(board, 2)
    stats = strategy.last_stats
    assert strategy.search(board, 2) == first
    assert strategy.last_stats == stats
    assert first == minimax(board, 2)
