"""Plain-data snapshot of a ``SeriesGame`` for whatever draws it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import board as b
from .series import Phase, SeriesGame


@dataclass(frozen=True)
class HistoryEntry:
    move: int
    label: str
    current: bool


@dataclass(frozen=True)
class GameView:
    phase: Phase
    cells: Tuple[str, ...]
    status: str
    winning_line: Optional[b.Line]
    score: Tuple[int, int]
    score_labels: Tuple[str, str]
    needed_wins: Optional[int]
    round_number: int
    series_over: bool
    series_winner: Optional[str]
    thinking: bool
    history: Tuple[HistoryEntry, ...]
    vs_computer: bool


def history_label(move: int) -> str:
    return f"Go to move #{move}" if move > 0 else "Go to game start"


def _status(game: SeriesGame) -> str:
    config = game.config
    if game.phase is Phase.SETUP or config is None:
        return "Set up a new game."
    if game.phase is Phase.SERIES_OVER:
        winner = config.side_name(game.series_winner)
        first, second = config.sides
        return f"Series over: {winner} wins {game.score[first]}-{game.score[second]}"

    # After a round ends, the status reports its result whichever snapshot is shown.
    result = b.outcome(game.history[-1]) if game.phase is Phase.ROUND_OVER else game.outcome
    if result.status == b.WIN:
        return f"Winner: {result.symbol} ({config.name_for(result.symbol)})"
    if result.status == b.DRAW:
        return "It's a draw!"
    if game.thinking:
        return f"{config.names[1]} is thinking..."
    symbol = game.next_symbol
    return f"Next player: {symbol} ({config.name_for(symbol)})"


def build_view(game: SeriesGame) -> GameView:
    config = game.config
    if config is not None:
        first, second = config.sides
        score = (game.score.get(first, 0), game.score.get(second, 0))
        labels = config.names
        winner_name = config.side_name(game.series_winner) if game.series_winner else None
    else:
        score = (0, 0)
        labels = ("", "")
        winner_name = None

    history: List[HistoryEntry] = []
    if game.phase is not Phase.SETUP:
        history = [
            HistoryEntry(move, history_label(move), move == game.current_move)
            for move in range(len(game.history))
        ]

    return GameView(
        phase=game.phase,
        cells=tuple(cell or "" for cell in game.board),
        status=_status(game),
        winning_line=game.winning_line,
        score=score,
        score_labels=labels,
        needed_wins=game.needed_wins,
        round_number=game.round_number,
        series_over=game.phase is Phase.SERIES_OVER,
        series_winner=winner_name,
        thinking=game.thinking,
        history=tuple(history),
        vs_computer=bool(config and config.vs_computer),
    )


def score_text(view: GameView) -> str:
    if not view.vs_computer:
        return ""
    return (
        f"{view.score_labels[0]} {view.score[0]} - {view.score[1]} {view.score_labels[1]}"
        f" (first to {view.needed_wins})"
    )
