"""Pre-game questions (mode, names, difficulty, series length, symbol) as a small state machine."""

from __future__ import annotations

import enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .ai import Difficulty
from .config import (
    DEFAULT_SERIES_LENGTH,
    SERIES_LENGTHS,
    Mode,
    SessionConfig,
    parse_series_length,
    parse_symbol,
)

DEFAULT_NAMES = {
    Mode.HUMAN_VS_HUMAN: ("Player 1", "Player 2"),
    Mode.HUMAN_VS_COMPUTER: ("You", "Computer"),
}


class SetupStep(enum.Enum):
    MODE = "mode"
    NAMES = "names"
    DIFFICULTY = "difficulty"
    SERIES_LENGTH = "series_length"
    SYMBOL = "symbol"
    DONE = "done"


class SetupFlow:
    def __init__(
        self,
        series_lengths: Tuple[int, ...] = SERIES_LENGTHS,
        default_series_length: int = DEFAULT_SERIES_LENGTH,
        default_difficulty: Difficulty = Difficulty.EASY,
    ) -> None:
        self.series_lengths = tuple(series_lengths)
        self.default_series_length = default_series_length
        self.default_difficulty = default_difficulty
        self._handlers: Dict[SetupStep, Callable[[Any], SetupStep]] = {
            SetupStep.MODE: self._submit_mode,
            SetupStep.NAMES: self._submit_names,
            SetupStep.DIFFICULTY: self._submit_difficulty,
            SetupStep.SERIES_LENGTH: self._submit_series_length,
            SetupStep.SYMBOL: self._submit_symbol,
        }
        self.restart()

    def restart(self) -> None:
        self.step = SetupStep.MODE
        self.mode: Optional[Mode] = None
        self.names: Tuple[str, str] = DEFAULT_NAMES[Mode.HUMAN_VS_COMPUTER]
        self.difficulty = self.default_difficulty
        self.series_length = self.default_series_length
        self.human_symbol = "X"

    @property
    def done(self) -> bool:
        return self.step is SetupStep.DONE

    @property
    def prompt(self) -> str:
        if self.step is SetupStep.MODE:
            return "Choose mode - 1: Human vs Human, 2: Human vs Computer"
        if self.step is SetupStep.NAMES:
            if self.mode is Mode.HUMAN_VS_HUMAN:
                return "Enter both player names separated by a comma (Enter for defaults)"
            return "Enter your name (Enter for default)"
        if self.step is SetupStep.DIFFICULTY:
            return "Choose computer difficulty - 1: Easy, 2: Hard"
        if self.step is SetupStep.SERIES_LENGTH:
            options = "/".join(str(n) for n in self.series_lengths)
            return f"Best of how many rounds? ({options}, Enter for {self.default_series_length})"
        if self.step is SetupStep.SYMBOL:
            return "Play as X or O? (X moves first in round 1)"
        return "Setup complete."

    @property
    def choices(self) -> List[str]:
        if self.step is SetupStep.MODE:
            return [mode.value for mode in Mode]
        if self.step is SetupStep.DIFFICULTY:
            return [level.value for level in Difficulty]
        if self.step is SetupStep.SERIES_LENGTH:
            return [str(n) for n in self.series_lengths]
        if self.step is SetupStep.SYMBOL:
            return ["X", "O"]
        return []

    def submit(self, value: Any) -> SetupStep:
        """Answer the current question. Raises ValueError with a user-facing message on bad input."""
        handler = self._handlers.get(self.step)
        if handler is None:
            raise ValueError("Setup is already complete.")
        self.step = handler(value)
        return self.step

    def config(self) -> SessionConfig:
        if not self.done:
            raise ValueError(f"Setup is not complete (waiting for {self.step.value}).")
        return SessionConfig(
            mode=self.mode,
            names=self.names,
            difficulty=self.difficulty,
            series_length=self.series_length,
            human_symbol=self.human_symbol,
        )

    def _submit_mode(self, value: Any) -> SetupStep:
        self.mode = value if isinstance(value, Mode) else Mode.parse(value)
        self.names = DEFAULT_NAMES[self.mode]
        return SetupStep.NAMES

    def _submit_names(self, value: Any) -> SetupStep:
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",")] if value.strip() else []
        else:
            parts = [str(part).strip() for part in value or ()]
        defaults = DEFAULT_NAMES[self.mode]
        if self.mode is Mode.HUMAN_VS_HUMAN:
            if len(parts) > 2:
                raise ValueError("Please enter at most two names.")
            parts += [""] * (2 - len(parts))
            first, second = (part or default for part, default in zip(parts, defaults))
            if first == second:
                raise ValueError("Players need different names.")
            self.names = (first, second)
            return SetupStep.DONE
        if len(parts) > 1:
            raise ValueError("Please enter a single name.")
        name = parts[0] if parts and parts[0] else defaults[0]
        if name == defaults[1]:
            raise ValueError(f"{defaults[1]} is taken; pick another name.")
        self.names = (name, defaults[1])
        return SetupStep.DIFFICULTY

    def _submit_difficulty(self, value: Any) -> SetupStep:
        self.difficulty = value if isinstance(value, Difficulty) else Difficulty.parse(value)
        return SetupStep.SERIES_LENGTH

    def _submit_series_length(self, value: Any) -> SetupStep:
        if isinstance(value, int):
            if value < 1:
                raise ValueError("Please enter a positive number like 3, 5, 7 or 10.")
            self.series_length = value
        elif str(value).strip():
            self.series_length = parse_series_length(value)
        else:
            self.series_length = self.default_series_length
        return SetupStep.SYMBOL

    def _submit_symbol(self, value: Any) -> SetupStep:
        self.human_symbol = parse_symbol(value)
        return SetupStep.DONE
