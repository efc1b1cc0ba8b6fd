"""
Type definitions for the draughts engine.

This module provides the geometry primitives shared by every other module:
- Colors and pieces
- Board coordinates and movement directions
- Moves and their textual notation
- Score sentinels for won/lost positions
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

# Score sentinels
LOST: int = -1_000_000
WIN: int = 1_000_000

BOARD_SIZE: int = 8
SQUARES_COUNT: int = 32

_COLUMN_LETTERS = "ABCDEFGH"


class InvalidNotationError(ValueError):
    """Raised when external text (coordinates, directions, boards) is malformed."""


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    def __neg__(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, s: str) -> Color:
        try:
            return cls(s.strip())
        except ValueError:
            raise InvalidNotationError(f"Unknown color: {s!r}") from None


DEFAULT_TURN: Color = Color.BLACK


@dataclass(frozen=True)
class Piece:
    """A single checker; replaced wholesale on promotion or capture."""
    color: Color
    king: bool = False

    @property
    def symbol(self) -> str:
        ch = "w" if self.color is Color.WHITE else "b"
        return ch.upper() if self.king else ch

    @classmethod
    def from_symbol(cls, ch: str) -> Optional[Piece]:
        if ch == ".":
            return None
        if ch not in _PIECE_SYMBOLS:
            raise InvalidNotationError(f"Unknown board symbol: {ch!r}")
        return _PIECE_SYMBOLS[ch]


WHITE_PAWN = Piece(Color.WHITE)
WHITE_KING = Piece(Color.WHITE, king=True)
BLACK_PAWN = Piece(Color.BLACK)
BLACK_KING = Piece(Color.BLACK, king=True)

_PIECE_SYMBOLS = {
    "w": WHITE_PAWN,
    "W": WHITE_KING,
    "b": BLACK_PAWN,
    "B": BLACK_KING,
}


class MoveDir(Enum):
    """Diagonal step; value is (row delta, column delta). White moves toward the top."""
    TOP_LEFT = (1, -1)
    TOP_RIGHT = (1, 1)
    DOWN_LEFT = (-1, -1)
    DOWN_RIGHT = (-1, 1)

    @property
    def code(self) -> str:
        return _DIR_CODES[self]

    @property
    def is_top(self) -> bool:
        return self.value[0] > 0

    def __str__(self) -> str:
        return self.code

    @classmethod
    def from_str(cls, s: str) -> MoveDir:
        try:
            return _DIRS_BY_CODE[s.strip()]
        except KeyError:
            raise InvalidNotationError(f"Invalid move direction: {s!r}") from None


_DIR_CODES = {
    MoveDir.TOP_LEFT: "tl",
    MoveDir.TOP_RIGHT: "tr",
    MoveDir.DOWN_LEFT: "dl",
    MoveDir.DOWN_RIGHT: "dr",
}
_DIRS_BY_CODE = {code: d for d, code in _DIR_CODES.items()}

DIRS: Tuple[MoveDir, ...] = (
    MoveDir.TOP_LEFT,
    MoveDir.TOP_RIGHT,
    MoveDir.DOWN_LEFT,
    MoveDir.DOWN_RIGHT,
)


def forward_dirs(color: Color) -> Tuple[MoveDir, MoveDir]:
    """Directions a pawn of `color` may move and capture in."""
    if color is Color.WHITE:
        return (MoveDir.TOP_LEFT, MoveDir.TOP_RIGHT)
    return (MoveDir.DOWN_LEFT, MoveDir.DOWN_RIGHT)


def backward_dirs(color: Color) -> Tuple[MoveDir, MoveDir]:
    return forward_dirs(-color)


class CellPos(NamedTuple):
    """Board coordinate; textual form is column letter + row digit, e.g. ``C4``."""
    row: int
    col: int

    def shift(self, direction: MoveDir) -> Optional[CellPos]:
        """Adjacent cell in `direction`, or None when it falls off the board."""
        dr, dc = direction.value
        r, c = self.row + dr, self.col + dc
        if 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
            return CellPos(r, c)
        return None

    def __str__(self) -> str:
        return f"{_COLUMN_LETTERS[self.col]}{self.row}"

    @classmethod
    def from_str(cls, s: str) -> CellPos:
        s = s.strip()
        if len(s) != 2 or s[0] not in _COLUMN_LETTERS or not s[1].isdigit():
            raise InvalidNotationError(f"Invalid cell coordinate: {s!r}")
        row = int(s[1])
        if row >= BOARD_SIZE:
            raise InvalidNotationError(f"Row out of range in {s!r}")
        return cls(row, _COLUMN_LETTERS.index(s[0]))


def cell(row: int, col: int) -> CellPos:
    return CellPos(row, col)


def is_dark(pos: CellPos) -> bool:
    return (pos.row + pos.col) % 2 == 0


# All 32 playable squares in row-major order
DARK_SQUARES: List[CellPos] = [
    CellPos(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if (r + c) % 2 == 0
]


class PieceMove(NamedTuple):
    """Move (or jump) the piece at `pos` one step in `direction`."""
    pos: CellPos
    direction: MoveDir

    def __str__(self) -> str:
        return f"{self.pos} {self.direction}"

    @classmethod
    def from_str(cls, s: str) -> PieceMove:
        parts = s.split()
        if len(parts) != 2:
            raise InvalidNotationError(f"Invalid move: {s!r}")
        return cls(CellPos.from_str(parts[0]), MoveDir.from_str(parts[1]))


def parse_cells(s: str) -> List[CellPos]:
    """Parse a whitespace-separated list of coordinates (may be empty)."""
    return [CellPos.from_str(p) for p in s.split()]
