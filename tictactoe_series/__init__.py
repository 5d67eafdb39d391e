"""Best-of tic-tac-toe series against a friend or the computer, with move-history review."""

from .ai import Difficulty, SelectorPreconditionError, select_move
from .board import outcome, winner, winning_line
from .config import Mode, SessionConfig, needed_wins
from .scheduling import ManualScheduler, TkScheduler
from .series import Phase, SeriesGame, SeriesStateError
from .setup_flow import SetupFlow, SetupStep
from .view import GameView, build_view

__version__ = "1.0.0"

__all__ = [
    "Difficulty",
    "GameView",
    "ManualScheduler",
    "Mode",
    "Phase",
    "SelectorPreconditionError",
    "SeriesGame",
    "SeriesStateError",
    "SessionConfig",
    "SetupFlow",
    "SetupStep",
    "TkScheduler",
    "build_view",
    "needed_wins",
    "outcome",
    "select_move",
    "winner",
    "winning_line",
]
