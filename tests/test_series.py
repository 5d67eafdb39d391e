import random
import unittest

from tictactoe_series import board as b
from tictactoe_series.ai import Difficulty
from tictactoe_series.config import COMPUTER, HUMAN, PLAYER_1, PLAYER_2, Mode, SessionConfig
from tictactoe_series.scheduling import ManualScheduler
from tictactoe_series.series import Phase, SeriesGame, SeriesStateError

AI_DELAY = 500
SETTLE_DELAY = 1500


def make_game():
    scheduler = ManualScheduler()
    game = SeriesGame(scheduler, ai_delay_ms=AI_DELAY, settle_delay_ms=SETTLE_DELAY, rng=random.Random(0))
    return game, scheduler


def hvh_config(series_length: int = 3) -> SessionConfig:
    return SessionConfig(mode=Mode.HUMAN_VS_HUMAN, names=("Ann", "Bob"), series_length=series_length)


def hvc_config(series_length: int = 3, human_symbol: str = "X", difficulty=Difficulty.HARD) -> SessionConfig:
    return SessionConfig(
        mode=Mode.HUMAN_VS_COMPUTER,
        names=("Sam", "Computer"),
        difficulty=difficulty,
        series_length=series_length,
        human_symbol=human_symbol,
    )


def human_beats_hard(game: SeriesGame, scheduler: ManualScheduler) -> None:
    """Human X opens in the corner; Hard answers 4, 2, 3 and loses on the bottom row."""
    for idx in (0, 8, 6):
        assert game.play(idx)
        scheduler.advance(AI_DELAY)
    assert game.play(7)


def computer_wins_two_rounds(game: SeriesGame, scheduler: ManualScheduler) -> None:
    """Round 1: human X opens on an edge and loses the 0-4-8 diagonal. Round 2: the computer opens."""
    for idx in (1, 2, 3):
        assert game.play(idx)
        scheduler.advance(AI_DELAY)
    scheduler.advance(SETTLE_DELAY)
    scheduler.advance(AI_DELAY)
    for idx in (1, 2):
        assert game.play(idx)
        scheduler.advance(AI_DELAY)


def human_draws_hard(game: SeriesGame, scheduler: ManualScheduler) -> None:
    for idx in (0, 8, 6, 5):
        assert game.play(idx)
        scheduler.advance(AI_DELAY)
    assert game.play(1)


class TestRoundPlay(unittest.TestCase):
    def test_start_opens_round_one_with_x(self) -> None:
        game, _ = make_game()
        game.start(hvh_config())
        self.assertIs(game.phase, Phase.ROUND_IN_PROGRESS)
        self.assertEqual(game.round_number, 1)
        self.assertEqual(game.next_symbol, "X")
        self.assertEqual(game.needed_wins, 2)
        with self.assertRaises(SeriesStateError):
            game.start(hvh_config())

    def test_invalid_moves_leave_state_unchanged(self) -> None:
        game, _ = make_game()
        self.assertFalse(game.play(0))
        game.start(hvh_config())
        self.assertTrue(game.play(4))
        before = game.history
        self.assertFalse(game.play(4))
        self.assertFalse(game.play(9))
        self.assertFalse(game.play(-1))
        self.assertEqual(game.history, before)
        self.assertEqual(game.next_symbol, "O")

    def test_win_ends_round_and_highlights_line(self) -> None:
        game, _ = make_game()
        game.start(hvh_config())
        for idx in (0, 3, 1, 4, 2):
            game.play(idx)
        self.assertIs(game.phase, Phase.ROUND_OVER)
        self.assertEqual(game.winning_line, (0, 1, 2))
        self.assertEqual(game.round_results, [PLAYER_1])
        self.assertFalse(game.play(5))

    def test_human_vs_human_keeps_no_score_and_never_ends(self) -> None:
        game, sched = make_game()
        game.start(hvh_config(series_length=1))
        for idx in (0, 3, 1, 4, 2):
            game.play(idx)
        self.assertEqual(game.score, {PLAYER_1: 0, PLAYER_2: 0})
        sched.advance(SETTLE_DELAY)
        self.assertIs(game.phase, Phase.ROUND_IN_PROGRESS)
        self.assertEqual(game.round_number, 2)
        self.assertEqual(game.starter, "O")
        self.assertEqual(game.next_symbol, "O")
        self.assertEqual(game.board, b.new_board())

    def test_jump_then_move_truncates_future(self) -> None:
        game, _ = make_game()
        game.start(hvh_config())
        for idx in (0, 1, 2):
            game.play(idx)
        self.assertTrue(game.jump_to(1))
        self.assertEqual(game.next_symbol, "O")
        self.assertTrue(game.play(5))
        history = game.history
        self.assertEqual(len(history), 3)
        self.assertEqual(history[2][5], "O")
        self.assertIsNone(history[2][2])

    def test_jump_out_of_range_is_ignored(self) -> None:
        game, _ = make_game()
        self.assertFalse(game.jump_to(0))
        game.start(hvh_config())
        self.assertFalse(game.jump_to(3))
        self.assertEqual(game.current_move, 0)

    def test_listeners_hear_every_change(self) -> None:
        game, _ = make_game()
        seen = []
        game.subscribe(lambda g: seen.append(g.phase))
        game.start(hvh_config())
        game.play(0)
        game.reset()
        self.assertEqual(seen, [Phase.ROUND_IN_PROGRESS, Phase.ROUND_IN_PROGRESS, Phase.SETUP])


class TestComputerTurns(unittest.TestCase):
    def test_thinking_blocks_human_input(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        self.assertTrue(game.play(0))
        self.assertTrue(game.thinking)
        self.assertFalse(game.play(1))
        sched.advance(AI_DELAY)
        self.assertFalse(game.thinking)
        self.assertEqual(game.board[4], "O")

    def test_computer_opens_when_human_plays_o(self) -> None:
        game, sched = make_game()
        game.start(hvc_config(human_symbol="O"))
        self.assertTrue(game.is_computer_turn)
        self.assertTrue(game.thinking)
        self.assertFalse(game.play(0))
        sched.advance(AI_DELAY)
        self.assertEqual(game.board[4], "X")
        self.assertEqual(game.next_symbol, "O")

    def test_jump_reschedules_computer_move(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        game.play(0)
        self.assertTrue(game.jump_to(0))
        self.assertFalse(game.thinking)
        self.assertEqual(sched.pending, 0)
        self.assertTrue(game.play(4))
        self.assertTrue(game.thinking)

    def test_jump_back_to_computer_turn_keeps_later_moves(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        game.play(0)
        sched.advance(AI_DELAY)
        game.play(8)
        sched.advance(AI_DELAY)
        before = game.history
        self.assertEqual(len(before), 5)

        self.assertTrue(game.jump_to(1))
        self.assertTrue(game.is_computer_turn)
        self.assertFalse(game.thinking)
        sched.advance(10 * AI_DELAY)
        self.assertEqual(game.history, before)
        self.assertEqual(game.current_move, 1)
        self.assertFalse(game.play(5))
        self.assertEqual(game.history, before)

    def test_returning_to_latest_move_resumes_computer_turn(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        game.play(0)
        game.jump_to(0)
        self.assertFalse(game.thinking)
        game.jump_to(1)
        self.assertTrue(game.thinking)
        sched.advance(AI_DELAY)
        self.assertEqual(len(game.history), 3)
        self.assertEqual(game.board[4], "O")

    def test_reset_cancels_pending_computer_move(self) -> None:
        game, sched = make_game()
        game.start(hvc_config(human_symbol="O"))
        game.reset()
        self.assertIs(game.phase, Phase.SETUP)
        self.assertEqual(sched.pending, 0)
        sched.advance(10 * SETTLE_DELAY)
        self.assertEqual(game.board, b.new_board())
        self.assertIsNone(game.config)


class TestSeries(unittest.TestCase):
    def test_single_round_series_ends_on_win(self) -> None:
        game, sched = make_game()
        game.start(hvc_config(series_length=1))
        human_beats_hard(game, sched)
        self.assertIs(game.phase, Phase.ROUND_OVER)
        self.assertEqual(game.score, {HUMAN: 1, COMPUTER: 0})
        sched.advance(SETTLE_DELAY)
        self.assertIs(game.phase, Phase.SERIES_OVER)
        self.assertEqual(game.series_winner, HUMAN)
        history = game.history
        self.assertFalse(game.play(2))
        self.assertEqual(game.history, history)
        self.assertEqual(game.score, {HUMAN: 1, COMPUTER: 0})

    def test_next_round_flips_starter(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        human_beats_hard(game, sched)
        sched.advance(SETTLE_DELAY)
        self.assertIs(game.phase, Phase.ROUND_IN_PROGRESS)
        self.assertEqual(game.round_number, 2)
        self.assertEqual(game.starter, "O")
        self.assertTrue(game.thinking)
        sched.advance(AI_DELAY)
        self.assertEqual(game.board[4], "O")
        self.assertEqual(game.score, {HUMAN: 1, COMPUTER: 0})

    def test_computer_takes_best_of_three_over_two_rounds(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        starters = []
        game.subscribe(lambda g: starters.append((g.round_number, g.starter)))
        computer_wins_two_rounds(game, sched)
        self.assertEqual(game.round_results, [COMPUTER, COMPUTER])
        self.assertEqual(dict(starters), {1: "X", 2: "O"})
        self.assertEqual(game.board, (b.O, b.X, b.X, None, b.O, None, None, None, b.O))
        self.assertIs(game.phase, Phase.ROUND_OVER)
        self.assertEqual(game.score, {HUMAN: 0, COMPUTER: 2})
        sched.advance(SETTLE_DELAY)
        self.assertIs(game.phase, Phase.SERIES_OVER)
        self.assertEqual(game.series_winner, COMPUTER)

    def test_series_over_ignores_jumps_and_moves(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        computer_wins_two_rounds(game, sched)
        sched.advance(SETTLE_DELAY)
        history = game.history

        self.assertTrue(game.jump_to(1))
        self.assertEqual(game.board, history[1])
        self.assertFalse(game.play(0))
        sched.advance(10 * SETTLE_DELAY)
        self.assertEqual(game.history, history)
        self.assertIs(game.phase, Phase.SERIES_OVER)
        self.assertEqual(game.score, {HUMAN: 0, COMPUTER: 2})
        self.assertEqual(game.series_winner, COMPUTER)

    def test_draw_does_not_score(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        human_draws_hard(game, sched)
        self.assertTrue(b.is_draw(game.board))
        self.assertEqual(game.round_results, [None])
        self.assertEqual(game.score, {HUMAN: 0, COMPUTER: 0})
        sched.advance(SETTLE_DELAY)
        self.assertEqual(game.round_number, 2)

    def test_jump_after_round_keeps_score(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        human_beats_hard(game, sched)
        self.assertTrue(game.jump_to(0))
        self.assertEqual(game.board, b.new_board())
        self.assertEqual(game.score, {HUMAN: 1, COMPUTER: 0})
        self.assertIs(game.phase, Phase.ROUND_OVER)
        sched.advance(SETTLE_DELAY)
        self.assertEqual(game.round_number, 2)

    def test_reset_during_round_over_cancels_settle(self) -> None:
        game, sched = make_game()
        game.start(hvc_config())
        human_beats_hard(game, sched)
        game.reset()
        game.start(hvh_config())
        sched.advance(SETTLE_DELAY)
        self.assertEqual(game.round_number, 1)
        self.assertEqual(game.board, b.new_board())

    def test_equal_qualifying_scores_are_rejected(self) -> None:
        game, _ = make_game()
        game.start(hvc_config())
        game._score = {HUMAN: 2, COMPUTER: 2}
        with self.assertRaises(SeriesStateError):
            game._decide_series()


if __name__ == "__main__":
    unittest.main()
