import unittest

from tictactoe_series.scheduling import ManualScheduler, TkScheduler


class FakeRoot:
    def __init__(self) -> None:
        self.scheduled = {}
        self.cancelled = []

    def after(self, delay, callback):
        handle = f"after#{len(self.scheduled)}"
        self.scheduled[handle] = (delay, callback)
        return handle

    def after_cancel(self, handle) -> None:
        self.cancelled.append(handle)


class TestManualScheduler(unittest.TestCase):
    def test_advance_runs_only_due_callbacks(self) -> None:
        sched = ManualScheduler()
        ran = []
        sched.call_later(500, lambda: ran.append("ai"))
        sched.call_later(1500, lambda: ran.append("settle"))
        self.assertEqual(sched.advance(499), 0)
        self.assertEqual(sched.advance(1), 1)
        self.assertEqual(ran, ["ai"])
        self.assertEqual(sched.now, 500)
        sched.advance(1000)
        self.assertEqual(ran, ["ai", "settle"])
        self.assertEqual(sched.pending, 0)

    def test_cancel_drops_callback(self) -> None:
        sched = ManualScheduler()
        ran = []
        handle = sched.call_later(10, lambda: ran.append(1))
        sched.cancel(handle)
        sched.cancel(None)
        self.assertEqual(sched.pending, 0)
        self.assertEqual(sched.advance(100), 0)
        self.assertEqual(ran, [])

    def test_run_pending_follows_chained_callbacks(self) -> None:
        sched = ManualScheduler()
        ran = []

        def first() -> None:
            ran.append("first")
            sched.call_later(200, lambda: ran.append("second"))

        sched.call_later(100, first)
        self.assertEqual(sched.run_pending(), 2)
        self.assertEqual(ran, ["first", "second"])
        self.assertEqual(sched.now, 300)

    def test_same_due_time_keeps_insertion_order(self) -> None:
        sched = ManualScheduler()
        ran = []
        for name in ("a", "b", "c"):
            sched.call_later(0, lambda name=name: ran.append(name))
        sched.run_pending()
        self.assertEqual(ran, ["a", "b", "c"])


class TestTkScheduler(unittest.TestCase):
    def test_delegates_to_after(self) -> None:
        root = FakeRoot()
        sched = TkScheduler(root)
        handle = sched.call_later(-5, lambda: None)
        self.assertEqual(root.scheduled[handle][0], 0)
        sched.cancel(handle)
        sched.cancel(None)
        self.assertEqual(root.cancelled, [handle])


if __name__ == "__main__":
    unittest.main()
