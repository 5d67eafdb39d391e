"""
Computer vs computer rounds.
Pick a difficulty for each symbol and let the move selector play both sides, alternating who starts.
"""

import argparse
import json
import logging
import random
from typing import Dict, List, Optional

from . import board as b
from .ai import Difficulty, select_move

logger = logging.getLogger(__name__)


def play_round(x_level: Difficulty, o_level: Difficulty, starter: str = b.X, rng: Optional[random.Random] = None) -> str:
    """Play one round to the end. Returns "X", "O" or "Draw"."""
    levels = {b.X: x_level, b.O: o_level}
    board = b.new_board()
    current = starter
    while True:
        idx = select_move(board, current, b.other(current), levels[current], rng)
        board = b.place(board, idx, current)
        result = b.outcome(board)
        if result.status == b.WIN:
            return result.symbol
        if result.status == b.DRAW:
            return "Draw"
        current = b.other(current)


def run_rounds(x_level: Difficulty, o_level: Difficulty, rounds: int, seed: Optional[int] = None) -> Dict[str, object]:
    rounds = max(1, rounds)
    rng = random.Random(seed)
    scores = {b.X: 0, b.O: 0, "Draw": 0}
    starter = b.X
    for i in range(1, rounds + 1):
        winner = play_round(x_level, o_level, starter, rng)
        scores[winner] += 1
        if winner == "Draw":
            print(f"Round {i}: Draw.")
        else:
            level = x_level if winner == b.X else o_level
            print(f"Round {i}: {winner} ({level.label}) wins.")
        logger.debug("Simulated round %d (starter %s): %s", i, starter, winner)
        starter = b.other(starter)

    if scores[b.X] > scores[b.O]:
        overall = b.X
    elif scores[b.O] > scores[b.X]:
        overall = b.O
    else:
        overall = "Draw"
    return {
        "x": x_level.value,
        "o": o_level.value,
        "rounds": rounds,
        "scores": scores,
        "winner": overall,
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run computer-vs-computer tic-tac-toe rounds.")
    levels = [level.value for level in Difficulty]
    parser.add_argument("--x", choices=levels, default="hard", help="Difficulty playing X (default hard).")
    parser.add_argument("--o", choices=levels, default="easy", help="Difficulty playing O (default easy).")
    parser.add_argument("--rounds", type=int, default=5, help="How many rounds to play (default 5).")
    parser.add_argument("--seed", type=int, help="Seed for Easy's random moves.")
    parser.add_argument(
        "--output",
        choices=("text", "json"),
        default="text",
        help="Choose text (default) or json summary output.",
    )
    parser.add_argument("--result-file", help="Optional path to write the summary JSON.")
    parser.add_argument(
        "--expect-winner",
        choices=("X", "O", "Draw"),
        help="Exit non-zero unless the aggregate winner matches (ties become Draw).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    summary = run_rounds(Difficulty(args.x), Difficulty(args.o), rounds=args.rounds, seed=args.seed)
    if args.output == "json":
        payload = json.dumps(summary, indent=2)
        print(payload)
        if args.result_file:
            try:
                with open(args.result_file, "w", encoding="utf-8") as f:
                    f.write(payload)
            except OSError as exc:
                print(f"Could not write result file: {exc}")
    else:
        print("\nFinal scores:")
        for name, val in summary["scores"].items():  # type: ignore[union-attr]
            print(f"- {name}: {val}")
    if args.expect_winner and summary["winner"] != args.expect_winner:
        print(f"Expected winner {args.expect_winner}, but got {summary['winner']}.")
        raise SystemExit(1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
