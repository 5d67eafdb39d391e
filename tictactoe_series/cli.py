"""Terminal front end: play a best-of series against a friend or the computer, with move-history review."""

from __future__ import annotations

import argparse
import random
from typing import Callable, Dict, List, Optional

from . import board as b
from .ai import Difficulty
from .config import Mode, SessionConfig
from .logs import init_logger, shutdown_logger
from .scheduling import ManualScheduler
from .series import Phase, SeriesGame
from .settings import load_settings, resolve_settings_path
from .setup_flow import SetupFlow, SetupStep
from .view import build_view, score_text

InputFn = Callable[[str], str]

PLAY_HELP = "Enter 1-9 or row,col to move; j N to jump to move N; h for history; r to reset; q to quit."


def parse_move(text: str) -> Optional[int]:
    parts = text.replace(",", " ").split()
    if len(parts) == 1 and parts[0].isdigit():
        single = int(parts[0])
        if 1 <= single <= 9:
            return single - 1
        return None

    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None

    row, col = (int(parts[0]), int(parts[1]))
    if not (1 <= row <= 3 and 1 <= col <= 3):
        return None
    return (row - 1) * 3 + (col - 1)


def parse_jump(text: str) -> Optional[int]:
    parts = text.split()
    if len(parts) == 2 and parts[0] in {"j", "jump"} and parts[1].isdigit():
        return int(parts[1])
    return None


class Announcer:
    """Prints computer moves and round/series transitions as the game reports them."""

    def __init__(self) -> None:
        self.last_phase = Phase.SETUP
        self.last_round = 0
        self.last_top: Optional[b.Board] = None

    def __call__(self, game: SeriesGame) -> None:
        history = game.history
        if (
            game.config is not None
            and game.config.vs_computer
            and len(history) > 1
            and history[-1] != self.last_top
        ):
            before, after = history[-2], history[-1]
            idx = next(i for i in range(9) if before[i] != after[i])
            if after[idx] == game.config.computer_symbol:
                r, c = divmod(idx, 3)
                print(f"{game.config.names[1]} plays at row {r + 1}, column {c + 1}.")

        if game.phase is Phase.ROUND_OVER and self.last_phase is not Phase.ROUND_OVER:
            view = build_view(game)
            print()
            print(b.format_board(game.board))
            print(view.status)
            if score_text(view):
                print(score_text(view))
        elif game.phase is Phase.SERIES_OVER and self.last_phase is not Phase.SERIES_OVER:
            print(build_view(game).status)
        elif game.phase is Phase.ROUND_IN_PROGRESS and game.round_number > 1 and game.round_number != self.last_round:
            print(f"\nRound {game.round_number}: {game.starter} ({game.config.name_for(game.starter)}) moves first.")

        self.last_phase = game.phase
        self.last_round = game.round_number
        self.last_top = history[-1]


def print_history(game: SeriesGame) -> None:
    for entry in build_view(game).history:
        marker = "*" if entry.current else " "
        print(f"{marker} {entry.move}: {entry.label}")


def print_view(game: SeriesGame) -> None:
    view = build_view(game)
    print(f"\nRound {view.round_number}" + (f" | {score_text(view)}" if view.vs_computer else ""))
    print(b.format_board(game.board))
    print(view.status)


def run_setup(flow: SetupFlow, prefill: Dict[SetupStep, object], input_fn: InputFn) -> Optional[SessionConfig]:
    """Ask the setup questions, using command-line answers first. Returns None if input runs out."""
    flow.restart()
    while not flow.done:
        value = prefill.get(flow.step)
        if value is None:
            try:
                value = input_fn(f"{flow.prompt}: ")
            except EOFError:
                return None
        try:
            flow.submit(value)
        except ValueError as exc:
            print(exc)
            prefill.pop(flow.step, None)
    return flow.config()


def _prefill(args: argparse.Namespace) -> Dict[SetupStep, object]:
    prefill: Dict[SetupStep, object] = {
        SetupStep.MODE: args.mode,
        SetupStep.NAMES: ",".join(args.name) if args.name else None,
        SetupStep.DIFFICULTY: args.difficulty,
        SetupStep.SERIES_LENGTH: args.best_of,
        SetupStep.SYMBOL: args.symbol,
    }
    return {step: value for step, value in prefill.items() if value is not None}


def play(game: SeriesGame, scheduler: ManualScheduler, flow: SetupFlow, prefill: Dict[SetupStep, object], input_fn: InputFn) -> None:
    game.subscribe(Announcer())
    while True:
        scheduler.run_pending()
        if game.phase is Phase.SETUP:
            config = run_setup(flow, dict(prefill), input_fn)
            if config is None:
                return
            print(f"\nStarting {config.mode.label}: {config.names[0]} vs {config.names[1]}.")
            game.start(config)
            print(PLAY_HELP)
            continue

        print_view(game)
        if game.phase is Phase.SERIES_OVER:
            question = "Series over. r for a new series, j N to review, q to quit: "
        else:
            question = "Your move: "
        try:
            text = input_fn(question).strip().lower()
        except EOFError:
            return

        if text in {"q", "quit", "exit"}:
            return
        if text in {"r", "reset", "new"}:
            game.reset()
            prefill = {}
            continue
        if text in {"h", "history"}:
            print_history(game)
            continue
        jump = parse_jump(text)
        if jump is not None:
            game.jump_to(jump)
            continue
        idx = parse_move(text)
        if idx is None:
            print(PLAY_HELP)
            continue
        game.play(idx)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe best-of series in the terminal.")
    parser.add_argument("--mode", choices=[mode.value for mode in Mode], help="hvh (two players) or hvc (against the computer).")
    parser.add_argument("--name", action="append", help="Player name; repeat for the second player in hvh mode.")
    parser.add_argument("--difficulty", choices=[level.value for level in Difficulty], help="Computer difficulty.")
    parser.add_argument("--best-of", type=int, help="Series length (rounds); first to more than half wins.")
    parser.add_argument("--symbol", choices=b.SYMBOLS, help="Your symbol against the computer.")
    parser.add_argument("--seed", type=int, help="Seed for the Easy computer's random moves.")
    parser.add_argument("--settings", help="Path to a JSON settings file.")
    parser.add_argument("--log-dir", help="Directory for app.log (defaults to the settings value).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug detail, including ignored moves.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, input_fn: InputFn = input) -> int:
    args = parse_args(argv)
    settings = load_settings(resolve_settings_path(args.settings))
    init_logger(args.log_dir or settings["log_dir"], verbose=args.verbose)
    try:
        scheduler = ManualScheduler()
        game = SeriesGame(
            scheduler,
            ai_delay_ms=settings["ai_delay_ms"],
            settle_delay_ms=settings["settle_delay_ms"],
            rng=random.Random(args.seed),
        )
        flow = SetupFlow(
            series_lengths=tuple(settings["series_lengths"]),
            default_series_length=settings["default_series_length"],
            default_difficulty=Difficulty.parse(settings["default_difficulty"]),
        )
        print("Tic-Tac-Toe series")
        play(game, scheduler, flow, _prefill(args), input_fn)
        print("\nThanks for playing!")
    finally:
        shutdown_logger()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
