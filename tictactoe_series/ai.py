"""Computer opponent: random play on Easy, a fixed win/block/center/corner heuristic on Hard."""

from __future__ import annotations

import enum
import random
from typing import Optional, Sequence

from . import board as b


class SelectorPreconditionError(RuntimeError):
    """Raised when a move is requested for a board that is already won or full."""


class Difficulty(enum.Enum):
    EASY = "easy"
    HARD = "hard"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> "Difficulty":
        options = {
            "1": cls.EASY,
            "easy": cls.EASY,
            "e": cls.EASY,
            "2": cls.HARD,
            "hard": cls.HARD,
            "h": cls.HARD,
        }
        key = str(text).strip().lower()
        if key not in options:
            raise ValueError("Please enter 1, 2, or a difficulty name (easy/hard).")
        return options[key]


def find_completing_move(board: Sequence[b.Cell], symbol: str) -> Optional[int]:
    """Return the lowest open index that completes a line for symbol, if any."""
    for idx in b.empty_cells(board):
        if b.winner(b.place(board, idx, symbol)) == symbol:
            return idx
    return None


def ai_move_easy(board: Sequence[b.Cell], rng: Optional[random.Random] = None) -> int:
    """Easy AI: choose a random open spot."""
    return (rng or random).choice(b.empty_cells(board))


def ai_move_hard(board: Sequence[b.Cell], symbol: str, opponent: str) -> int:
    """Hard AI: win if possible, block if needed, else center, first free corner, first free cell."""
    win_idx = find_completing_move(board, symbol)
    if win_idx is not None:
        return win_idx

    block_idx = find_completing_move(board, opponent)
    if block_idx is not None:
        return block_idx

    if board[b.CENTER] is None:
        return b.CENTER

    for idx in b.CORNERS:
        if board[idx] is None:
            return idx

    return b.empty_cells(board)[0]


def select_move(
    board: Sequence[b.Cell],
    computer_symbol: str,
    opponent_symbol: str,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> int:
    if b.winner(board) is not None:
        raise SelectorPreconditionError("Board already has a winner")
    if not b.empty_cells(board):
        raise SelectorPreconditionError("Board has no open cells")
    if difficulty is Difficulty.EASY:
        return ai_move_easy(board, rng)
    return ai_move_hard(board, computer_symbol, opponent_symbol)
