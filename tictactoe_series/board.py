"""Board evaluation helpers: winner, winning line, draw detection and text rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

X = "X"
O = "O"
EMPTY = None
SYMBOLS = (X, O)
CENTER = 4
CORNERS = (0, 2, 6, 8)

Cell = Optional[str]
Board = Tuple[Cell, ...]
Line = Tuple[int, int, int]

# Rows, then columns, then diagonals. winning_line() relies on this order.
LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: str
    symbol: Optional[str] = None
    line: Optional[Line] = None

    @property
    def is_over(self) -> bool:
        return self.status != IN_PROGRESS


def new_board() -> Board:
    return (EMPTY,) * 9


def _check_size(board: Sequence[Cell]) -> None:
    if len(board) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(board)}")


def other(symbol: str) -> str:
    return O if symbol == X else X


def winning_line(board: Sequence[Cell]) -> Optional[Line]:
    """Return the first fully owned line, or None."""
    _check_size(board)
    for a, b, c in LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def winner(board: Sequence[Cell]) -> Optional[str]:
    line = winning_line(board)
    if line is None:
        return None
    return board[line[0]]


def is_full(board: Sequence[Cell]) -> bool:
    _check_size(board)
    return all(cell is not None for cell in board)


def is_draw(board: Sequence[Cell]) -> bool:
    return winner(board) is None and is_full(board)


def outcome(board: Sequence[Cell]) -> Outcome:
    line = winning_line(board)
    if line is not None:
        return Outcome(WIN, board[line[0]], line)
    if is_full(board):
        return Outcome(DRAW)
    return Outcome(IN_PROGRESS)


def empty_cells(board: Sequence[Cell]) -> List[int]:
    _check_size(board)
    return [idx for idx, cell in enumerate(board) if cell is None]


def place(board: Sequence[Cell], index: int, symbol: str) -> Board:
    """Return a new snapshot with ``symbol`` at ``index``."""
    _check_size(board)
    if symbol not in SYMBOLS:
        raise ValueError(f"Unknown symbol {symbol!r}")
    if not 0 <= index <= 8:
        raise ValueError(f"Index {index} is off the board")
    if board[index] is not None:
        raise ValueError(f"Cell {index} is already taken")
    cells = list(board)
    cells[index] = symbol
    return tuple(cells)


def format_board(board: Sequence[Cell]) -> str:
    _check_size(board)
    lines = ["   1   2   3"]
    for r in range(3):
        row_cells = [cell or " " for cell in board[r * 3 : (r + 1) * 3]]
        lines.append(f"{r + 1}  " + " | ".join(row_cells))
        if r < 2:
            lines.append("  --+---+--")
    return "\n".join(lines)
