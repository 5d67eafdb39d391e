import io
import json
import os
import random
import tempfile
import unittest
from contextlib import redirect_stdout

from tictactoe_series import simulate
from tictactoe_series.ai import Difficulty


class TestSimulateCli(unittest.TestCase):
    def test_hard_vs_hard_json_output_and_expectation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            result_file = os.path.join(tmp, "summary.json")
            buf = io.StringIO()
            with redirect_stdout(buf):
                code = simulate.main(
                    [
                        "--x",
                        "hard",
                        "--o",
                        "hard",
                        "--rounds",
                        "2",
                        "--output",
                        "json",
                        "--result-file",
                        result_file,
                        "--expect-winner",
                        "Draw",
                    ]
                )
            with open(result_file, encoding="utf-8") as f:
                saved = json.load(f)
        self.assertEqual(code, 0)
        output = buf.getvalue()
        self.assertIn("Round 1: Draw.", output)
        data = json.loads(output[output.index("{") :])
        self.assertEqual(data, saved)
        self.assertEqual(data["x"], "hard")
        self.assertEqual(data["scores"], {"X": 0, "O": 0, "Draw": 2})
        self.assertEqual(data["winner"], "Draw")

    def test_expectation_failure_exits(self) -> None:
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit):
                simulate.main(["--x", "hard", "--o", "hard", "--rounds", "1", "--expect-winner", "X"])


def test_play_round_returns_a_result() -> None:
    rng = random.Random(11)
    for starter in ("X", "O"):
        assert simulate.play_round(Difficulty.HARD, Difficulty.EASY, starter, rng) in {"X", "O", "Draw"}


def test_run_rounds_is_reproducible_with_seed() -> None:
    with redirect_stdout(io.StringIO()):
        first = simulate.run_rounds(Difficulty.EASY, Difficulty.EASY, rounds=6, seed=42)
        second = simulate.run_rounds(Difficulty.EASY, Difficulty.EASY, rounds=6, seed=42)
    assert first == second
    assert sum(first["scores"].values()) == 6


if __name__ == "__main__":
    unittest.main()
