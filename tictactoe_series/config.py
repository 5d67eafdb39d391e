"""Session configuration chosen before the first round of a series."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

from . import board as b
from .ai import Difficulty

HUMAN = "human"
COMPUTER = "computer"
PLAYER_1 = "player1"
PLAYER_2 = "player2"
SERIES_LENGTHS = (3, 5, 7, 10)
DEFAULT_SERIES_LENGTH = 3


class Mode(enum.Enum):
    HUMAN_VS_HUMAN = "hvh"
    HUMAN_VS_COMPUTER = "hvc"

    @property
    def label(self) -> str:
        return "Human vs Human" if self is Mode.HUMAN_VS_HUMAN else "Human vs Computer"

    @classmethod
    def parse(cls, text: str) -> "Mode":
        options = {
            "1": cls.HUMAN_VS_HUMAN,
            "hvh": cls.HUMAN_VS_HUMAN,
            "human": cls.HUMAN_VS_HUMAN,
            "2": cls.HUMAN_VS_COMPUTER,
            "hvc": cls.HUMAN_VS_COMPUTER,
            "computer": cls.HUMAN_VS_COMPUTER,
        }
        key = str(text).strip().lower()
        if key not in options:
            raise ValueError("Please enter 1 (human vs human) or 2 (human vs computer).")
        return options[key]


def parse_series_length(text: str) -> int:
    value = str(text).strip()
    if value.isdigit() and int(value) >= 1:
        return int(value)
    raise ValueError("Please enter a positive number like 3, 5, 7 or 10.")


def parse_symbol(text: str) -> str:
    value = str(text).strip().upper()
    if value in b.SYMBOLS:
        return value
    raise ValueError("Please choose X or O.")


def needed_wins(series_length: int) -> int:
    """Wins required to take a best-of series (ceil of half the length)."""
    return (series_length + 1) // 2


@dataclass(frozen=True)
class SessionConfig:
    mode: Mode = Mode.HUMAN_VS_COMPUTER
    names: Tuple[str, str] = ("You", "Computer")
    difficulty: Difficulty = Difficulty.EASY
    series_length: int = DEFAULT_SERIES_LENGTH
    human_symbol: str = b.X

    def __post_init__(self) -> None:
        if self.series_length < 1:
            raise ValueError("Series length must be positive")
        if self.human_symbol not in b.SYMBOLS:
            raise ValueError(f"Unknown symbol {self.human_symbol!r}")
        if len(self.names) != 2:
            raise ValueError("Exactly two side names are required")

    @property
    def vs_computer(self) -> bool:
        return self.mode is Mode.HUMAN_VS_COMPUTER

    @property
    def computer_symbol(self) -> str:
        return b.other(self.human_symbol)

    @property
    def sides(self) -> Tuple[str, str]:
        if self.vs_computer:
            return (HUMAN, COMPUTER)
        return (PLAYER_1, PLAYER_2)

    def side_for(self, symbol: str) -> str:
        """Map a board symbol to the side playing it."""
        if self.vs_computer:
            return HUMAN if symbol == self.human_symbol else COMPUTER
        return PLAYER_1 if symbol == b.X else PLAYER_2

    def name_for(self, symbol: str) -> str:
        first, second = self.sides
        return self.names[0] if self.side_for(symbol) == first else self.names[1]

    def side_name(self, side: str) -> str:
        return self.names[self.sides.index(side)]
