"""
Line-oriented text protocol around the engine.

Input, one item per line:
- the engine's color (``white`` or ``black``), first line and whenever it changes
- ``exit`` to stop
- otherwise a request: a line of forced-jump cells (possibly empty) followed
  by a board rendering (header plus eight rows)

For each request the engine answers with one move line, e.g. ``C4 tr``.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional, TextIO

from .board import Board
from .engine import AI
from .types import BOARD_SIZE, CellPos, Color, InvalidNotationError, PieceMove, parse_cells

logger = logging.getLogger(__name__)

_COLOR_WORDS = ("white", "black")


def _read_line(stream: TextIO) -> Optional[str]:
    line = stream.readline()
    if not line:
        return None
    return line.strip()


def read_board(stream: TextIO, turn: Color, must_jump: Optional[List[CellPos]] = None) -> Board:
    """Read the header line and eight rows of a board from `stream`."""
    lines: List[str] = []
    for _ in range(BOARD_SIZE + 1):
        line = stream.readline()
        if not line:
            raise InvalidNotationError("Unexpected end of input while reading board")
        lines.append(line)
    return Board.from_text(lines, turn=turn, must_jump=must_jump)


def requests(stream: TextIO) -> Iterator[Board]:
    """Yield the boards requested on `stream` until ``exit`` or end of input."""
    first = _read_line(stream)
    if first is None:
        return
    color = Color.from_str(first)

    while True:
        line = _read_line(stream)
        if line is None or line == "exit":
            return
        if line in _COLOR_WORDS:
            color = Color.from_str(line)
            continue
        must_jump = parse_cells(line)
        yield read_board(stream, color, must_jump)


def run_protocol(stdin: TextIO, stdout: TextIO, ai: Optional[AI] = None) -> int:
    """Answer every request with a move; returns the number of moves written."""
    ai = ai or AI()
    answered = 0
    for board in requests(stdin):
        mv: Optional[PieceMove] = ai.compute_move(board)
        if mv is None:
            logger.error("No legal move available:\n%s", board)
            break
        stdout.write(f"{mv}\n")
        stdout.flush()
        answered += 1
    return answered
