"""Round and series state machine.

One ``SeriesGame`` owns the move history of the current round, the running
score, and the series result. Turn and round outcome are computed from the
displayed snapshot on every access. AI moves and the transition out of a
finished round are scheduled through a scheduler rather than run inline.
"""

from __future__ import annotations

import enum
import logging
import random
from typing import Any, Callable, Dict, List, Optional

from . import board as b
from .ai import select_move
from .config import SessionConfig, needed_wins

logger = logging.getLogger(__name__)

Listener = Callable[["SeriesGame"], None]


class SeriesStateError(RuntimeError):
    """Raised on transitions that correct play can never reach."""


class Phase(enum.Enum):
    SETUP = "setup"
    ROUND_IN_PROGRESS = "round_in_progress"
    ROUND_OVER = "round_over"
    SERIES_OVER = "series_over"


class SeriesGame:
    def __init__(
        self,
        scheduler: Any,
        ai_delay_ms: int = 500,
        settle_delay_ms: int = 1500,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.scheduler = scheduler
        self.ai_delay_ms = ai_delay_ms
        self.settle_delay_ms = settle_delay_ms
        self.rng = rng or random.Random()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._pending_ai: Optional[Any] = None
        self._pending_settle: Optional[Any] = None
        self._clear()

    def _clear(self) -> None:
        self.phase = Phase.SETUP
        self.config: Optional[SessionConfig] = None
        self._history: List[b.Board] = [b.new_board()]
        self._current_move = 0
        self.starter = b.X
        self.round_number = 0
        self._score: Dict[str, int] = {}
        self.round_results: List[Optional[str]] = []
        self.series_winner: Optional[str] = None

    # Observers

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Derived state

    @property
    def history(self) -> List[b.Board]:
        return list(self._history)

    @property
    def current_move(self) -> int:
        return self._current_move

    @property
    def board(self) -> b.Board:
        return self._history[self._current_move]

    @property
    def x_is_next(self) -> bool:
        return (self._current_move % 2 == 0) == (self.starter == b.X)

    @property
    def next_symbol(self) -> str:
        return b.X if self.x_is_next else b.O

    @property
    def outcome(self) -> b.Outcome:
        return b.outcome(self.board)

    @property
    def winning_line(self) -> Optional[b.Line]:
        return b.winning_line(self.board)

    @property
    def score(self) -> Dict[str, int]:
        return dict(self._score)

    @property
    def needed_wins(self) -> Optional[int]:
        if self.config is None:
            return None
        return needed_wins(self.config.series_length)

    @property
    def thinking(self) -> bool:
        return self._pending_ai is not None

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.config is not None
            and self.config.vs_computer
            and self.next_symbol == self.config.computer_symbol
        )

    # Transitions

    def start(self, config: SessionConfig) -> None:
        if self.phase is not Phase.SETUP:
            raise SeriesStateError("A series is already running; reset it first")
        self.config = config
        self._score = {side: 0 for side in config.sides}
        self.round_number = 1
        self.phase = Phase.ROUND_IN_PROGRESS
        logger.info(
            "Series started: %s, %s vs %s, best of %d%s",
            config.mode.label,
            config.names[0],
            config.names[1],
            config.series_length,
            f", {config.difficulty.label}" if config.vs_computer else "",
        )
        self._maybe_schedule_ai()
        self._notify()

    def play(self, index: int) -> bool:
        """Human move on the displayed board. Returns False when the move is ignored."""
        if self.phase is not Phase.ROUND_IN_PROGRESS:
            logger.debug("Ignored move %s: phase is %s", index, self.phase.value)
            return False
        if self.thinking or self.is_computer_turn:
            logger.debug("Ignored move %s: not the human's turn", index)
            return False
        return self._apply(index)

    def jump_to(self, move: int) -> bool:
        """Show an earlier (or later) snapshot without touching history, score or series state.

        The computer only plays from the latest snapshot, so a pending move is
        cancelled on the way back and rescheduled on returning to the end.
        """
        if self.phase is Phase.SETUP:
            return False
        if not isinstance(move, int) or not 0 <= move < len(self._history):
            return False
        self._current_move = move
        if self.phase is Phase.ROUND_IN_PROGRESS:
            self._cancel_ai()
            self._maybe_schedule_ai()
        self._notify()
        return True

    def reset(self) -> None:
        """Abandon everything and return to setup. Pending delayed actions become no-ops."""
        self._generation += 1
        self._cancel_ai()
        self._cancel_settle()
        if self.phase is not Phase.SETUP:
            logger.info("Series reset")
        self._clear()
        self._notify()

    def _apply(self, index: int) -> bool:
        if self.phase is not Phase.ROUND_IN_PROGRESS:
            return False
        if not isinstance(index, int) or not 0 <= index <= 8:
            logger.debug("Ignored move %r: off the board", index)
            return False
        current = self.board
        if current[index] is not None or b.outcome(current).is_over:
            logger.debug("Ignored move %d: cell taken or round decided", index)
            return False

        symbol = self.next_symbol
        snapshot = b.place(current, index, symbol)
        del self._history[self._current_move + 1 :]
        self._history.append(snapshot)
        self._current_move = len(self._history) - 1
        logger.info(
            "Round %d move %d: %s plays %s at cell %d",
            self.round_number,
            self._current_move,
            self.config.name_for(symbol),
            symbol,
            index + 1,
        )

        result = b.outcome(snapshot)
        if result.is_over:
            self._finish_round(result)
        else:
            self._maybe_schedule_ai()
        self._notify()
        return True

    def _finish_round(self, result: b.Outcome) -> None:
        self.phase = Phase.ROUND_OVER
        side = self.config.side_for(result.symbol) if result.symbol else None
        if side is not None and self.config.vs_computer:
            self._score[side] += 1
        self.round_results.append(side)
        if side is None:
            logger.info("Round %d drawn", self.round_number)
        else:
            logger.info("Round %d won by %s (%s)", self.round_number, self.config.side_name(side), result.symbol)
        self._pending_settle = self._schedule(self.settle_delay_ms, self._settle)

    def _settle(self) -> None:
        self._pending_settle = None
        if self.phase is not Phase.ROUND_OVER:
            return
        winner = self._decide_series()
        if winner is not None:
            self.phase = Phase.SERIES_OVER
            self.series_winner = winner
            logger.info("Series won by %s %s", self.config.side_name(winner), self._score_line())
            self._notify()
            return

        self.starter = b.other(self.starter)
        self.round_number += 1
        self._history = [b.new_board()]
        self._current_move = 0
        self.phase = Phase.ROUND_IN_PROGRESS
        logger.info("Round %d starts, %s moves first", self.round_number, self.starter)
        self._maybe_schedule_ai()
        self._notify()

    def _decide_series(self) -> Optional[str]:
        needed = self.needed_wins
        qualified = [side for side in self.config.sides if self._score[side] >= needed]
        if not qualified:
            return None
        if len(qualified) > 1 and len({self._score[side] for side in qualified}) == 1:
            raise SeriesStateError(f"Both sides reached {needed} wins with equal scores")
        return max(qualified, key=lambda side: self._score[side])

    def _score_line(self) -> str:
        return "-".join(str(self._score[side]) for side in self.config.sides)

    # Computer turn

    @property
    def at_latest_move(self) -> bool:
        return self._current_move == len(self._history) - 1

    def _maybe_schedule_ai(self) -> None:
        if self.phase is not Phase.ROUND_IN_PROGRESS or self._pending_ai is not None:
            return
        if self.at_latest_move and self.is_computer_turn and not self.outcome.is_over:
            self._pending_ai = self._schedule(self.ai_delay_ms, self._run_ai_move)

    def _run_ai_move(self) -> None:
        self._pending_ai = None
        if (
            self.phase is not Phase.ROUND_IN_PROGRESS
            or not self.at_latest_move
            or not self.is_computer_turn
            or self.outcome.is_over
        ):
            self._notify()
            return
        idx = select_move(
            self.board,
            self.config.computer_symbol,
            self.config.human_symbol,
            self.config.difficulty,
            self.rng,
        )
        if not self._apply(idx):
            self._notify()

    def _schedule(self, delay_ms: int, action: Callable[[], None]) -> Any:
        generation = self._generation

        def fire() -> None:
            if generation != self._generation:
                return
            action()

        return self.scheduler.call_later(delay_ms, fire)

    def _cancel_ai(self) -> None:
        if self._pending_ai is not None:
            self.scheduler.cancel(self._pending_ai)
            self._pending_ai = None

    def _cancel_settle(self) -> None:
        if self._pending_settle is not None:
            self.scheduler.cancel(self._pending_settle)
            self._pending_settle = None
