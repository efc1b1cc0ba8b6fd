"""
Board state machine.

`Board.make_move` is the only mutation path once a board is built. It enforces
side to move, pawn directions, mandatory captures (kings first), jump-chain
continuation and promotion, and recomputes the Zobrist hash after every
completed ply.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .types import (
    BOARD_SIZE,
    DARK_SQUARES,
    DEFAULT_TURN,
    DIRS,
    BLACK_PAWN,
    WHITE_PAWN,
    CellPos,
    Color,
    InvalidNotationError,
    Piece,
    PieceMove,
    forward_dirs,
    is_dark,
)
from .zobrist import hash_position

Grid = List[List[Optional[Piece]]]

_HEADER = "   " + "".join(f"{ch} " for ch in "ABCDEFGH")


def _empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def _is_label_line(tokens: Sequence[str]) -> bool:
    return bool(tokens) and all(len(t) == 1 and t in "ABCDEFGH" for t in tokens)


@dataclass
class Board:
    """8x8 draughts position with side to move and pending forced jumps."""

    grid: Grid = field(default_factory=_empty_grid)
    turn: Color = DEFAULT_TURN
    must_jump: List[CellPos] = field(default_factory=list)
    hash: int = 0

    # -----------------------------
    # Construction
    # -----------------------------
    @classmethod
    def new(cls) -> Board:
        """Standard start: white pawns on rows 0..2, black pawns on rows 5..7."""
        pieces = {}
        for pos in DARK_SQUARES:
            if pos.row < 3:
                pieces[pos] = WHITE_PAWN
            elif pos.row > 4:
                pieces[pos] = BLACK_PAWN
        return cls.from_pieces(pieces)

    @classmethod
    def from_pieces(cls, pieces: Mapping[CellPos, Piece], turn: Color = DEFAULT_TURN,
                    must_jump: Optional[Sequence[CellPos]] = None) -> Board:
        """Build a position; promotion and forced jumps are resolved immediately.

        A non-empty `must_jump` replaces the recomputed forced-jump set, which is
        how a jump chain in progress is handed over from outside.
        """
        grid = _empty_grid()
        for pos, piece in pieces.items():
            if not is_dark(pos):
                raise ValueError(f"{pos} is not a playable square")
            grid[pos.row][pos.col] = piece
        board = cls(grid=grid, turn=turn)
        board._promote_pawns()
        board._find_forced_jumps()
        board._rehash()
        if must_jump:
            board.must_jump = list(must_jump)
        return board

    @classmethod
    def from_text(cls, text: Union[str, Iterable[str]], turn: Color = DEFAULT_TURN,
                  must_jump: Optional[Sequence[CellPos]] = None) -> Board:
        """Parse the rendering produced by `to_text` (top row first).

        The column-label header is skipped, as is an optional trailing label
        line. Each row line starts with a row label token followed by eight
        symbols out of ``. w b W B``.
        """
        lines = text.splitlines() if isinstance(text, str) else list(text)
        rows = [line.split() for line in lines if line.strip()]
        if rows and _is_label_line(rows[0]):
            rows = rows[1:]
        if rows and _is_label_line(rows[-1]):
            rows = rows[:-1]
        if len(rows) != BOARD_SIZE:
            raise InvalidNotationError(f"Expected {BOARD_SIZE} board rows, got {len(rows)}")

        pieces = {}
        for i, tokens in enumerate(rows):
            symbols = tokens[1:]
            if len(symbols) != BOARD_SIZE:
                raise InvalidNotationError(f"Row {i} has {len(symbols)} cells: {' '.join(tokens)!r}")
            row = BOARD_SIZE - 1 - i
            for col, ch in enumerate(symbols):
                piece = Piece.from_symbol(ch)
                if piece is None:
                    continue
                pos = CellPos(row, col)
                if not is_dark(pos):
                    raise InvalidNotationError(f"Piece on light square {pos}")
                pieces[pos] = piece
        return cls.from_pieces(pieces, turn, must_jump)

    def to_text(self) -> str:
        lines = [_HEADER]
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = "".join(
                f"{p.symbol if p is not None else '.'} " for p in self.grid[row]
            )
            lines.append(f"{row}: {cells}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_text()

    def copy(self) -> Board:
        """Independent snapshot; pieces are immutable so rows are copied shallowly."""
        return Board(
            grid=[row[:] for row in self.grid],
            turn=self.turn,
            must_jump=list(self.must_jump),
            hash=self.hash,
        )

    # -----------------------------
    # Queries
    # -----------------------------
    def __getitem__(self, pos: CellPos) -> Optional[Piece]:
        return self.grid[pos.row][pos.col]

    def piece_pos(self, color: Color) -> List[CellPos]:
        """Cells holding pieces of `color`, row-major."""
        result: List[CellPos] = []
        for pos in DARK_SQUARES:
            p = self.grid[pos.row][pos.col]
            if p is not None and p.color is color:
                result.append(pos)
        return result

    def count_pieces(self) -> Tuple[int, int, int, int]:
        """Returns (white_pawns, white_kings, black_pawns, black_kings)."""
        wp = wk = bp = bk = 0
        for pos in DARK_SQUARES:
            p = self.grid[pos.row][pos.col]
            if p is None:
                continue
            if p.color is Color.WHITE:
                if p.king:
                    wk += 1
                else:
                    wp += 1
            elif p.king:
                bk += 1
            else:
                bp += 1
        return wp, wk, bp, bk

    def can_jump(self, cp: CellPos) -> bool:
        """Whether the piece at `cp` has a capture available.

        The cell must hold a piece of the side to move.
        """
        piece = self[cp]
        if piece is None:
            raise ValueError(f"can_jump called on empty cell {cp}")
        if piece.color is not self.turn:
            raise ValueError(f"can_jump called on {cp}, which does not belong to {self.turn}")

        dirs = DIRS if piece.king else forward_dirs(piece.color)
        for d in dirs:
            np_ = cp.shift(d)
            if np_ is None:
                continue
            victim = self[np_]
            if victim is None or victim.color is self.turn:
                continue
            landing = np_.shift(d)
            if landing is not None and self[landing] is None:
                return True
        return False

    def exists_valid_move(self) -> bool:
        """False when the side to move is stuck (a loss)."""
        probe = self.copy()
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                for d in DIRS:
                    if probe.make_move(PieceMove(CellPos(row, col), d)):
                        return True
        return False

    # -----------------------------
    # Mutation
    # -----------------------------
    def make_move(self, mv: PieceMove) -> bool:
        """Apply `mv` if legal. Returns False and leaves the board untouched otherwise."""
        piece = self[mv.pos]
        if piece is None or piece.color is not self.turn:
            return False
        if self.must_jump and mv.pos not in self.must_jump:
            return False
        if not piece.king and mv.direction not in forward_dirs(piece.color):
            return False

        npos = mv.pos.shift(mv.direction)
        if npos is None:
            return False

        victim = self[npos]
        if victim is not None:
            if victim.color is self.turn:
                return False
            landing = npos.shift(mv.direction)
            if landing is None or self[landing] is not None:
                return False
            self._put(landing, piece)
            self._put(mv.pos, None)
            self._put(npos, None)
            if self.can_jump(landing):
                # Same player continues the chain; hash stays at the pre-chain value
                self.must_jump = [landing]
                self._promote_pawns()
                return True
            self.turn = -self.turn
        else:
            if self.must_jump:
                return False
            self._put(mv.pos, None)
            self._put(npos, piece)
            self.turn = -self.turn

        self._promote_pawns()
        self._find_forced_jumps()
        self._rehash()
        return True

    def _put(self, pos: CellPos, piece: Optional[Piece]) -> None:
        self.grid[pos.row][pos.col] = piece

    def _promote_pawns(self) -> None:
        top, bottom = self.grid[BOARD_SIZE - 1], self.grid[0]
        for col in range(BOARD_SIZE):
            p = top[col]
            if p is not None and p.color is Color.WHITE and not p.king:
                top[col] = Piece(Color.WHITE, king=True)
            p = bottom[col]
            if p is not None and p.color is Color.BLACK and not p.king:
                bottom[col] = Piece(Color.BLACK, king=True)

    def _find_forced_jumps(self) -> None:
        """Rebuild `must_jump`; if any king can capture, only kings are listed."""
        kings: List[CellPos] = []
        pawns: List[CellPos] = []
        for pos in DARK_SQUARES:
            p = self.grid[pos.row][pos.col]
            if p is None or p.color is not self.turn or not self.can_jump(pos):
                continue
            (kings if p.king else pawns).append(pos)
        self.must_jump = kings or pawns

    def _rehash(self) -> None:
        self.hash = hash_position(self.grid, self.turn)


def make_move(board: Board, mv: PieceMove) -> bool:
    return board.make_move(mv)
