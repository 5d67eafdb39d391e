"""Delayed callbacks for AI moves and round transitions.

Game code never sleeps. It asks a scheduler to run a callback later and keeps
the returned handle so a reset can cancel it. ``TkScheduler`` rides on the Tk
event loop; ``ManualScheduler`` is driven explicitly by the terminal front end
and by tests.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, Dict, List, Optional, Tuple


class TkScheduler:
    def __init__(self, root: Any) -> None:
        self.root = root

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.root.after(max(0, int(delay_ms)), callback)

    def cancel(self, handle: Optional[str]) -> None:
        if handle is None:
            return
        self.root.after_cancel(handle)


class ManualScheduler:
    """Virtual clock; callbacks run only when advanced."""

    def __init__(self) -> None:
        self.now = 0
        self._queue: List[Tuple[int, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        heapq.heappush(self._queue, (self.now + max(0, int(delay_ms)), handle))
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._callbacks.pop(handle, None)

    def _pop_due(self, until: Optional[int]) -> Optional[Callable[[], None]]:
        while self._queue:
            due, handle = self._queue[0]
            if until is not None and due > until:
                return None
            heapq.heappop(self._queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            self.now = max(self.now, due)
            return callback
        return None

    def advance(self, ms: int) -> int:
        """Move the clock forward, running callbacks that fall due. Returns how many ran."""
        target = self.now + max(0, int(ms))
        ran = 0
        while True:
            callback = self._pop_due(target)
            if callback is None:
                break
            callback()
            ran += 1
        self.now = target
        return ran

    def run_pending(self, limit: int = 1000) -> int:
        """Run callbacks in due order, including ones scheduled along the way, until idle."""
        ran = 0
        while ran < limit:
            callback = self._pop_due(None)
            if callback is None:
                break
            callback()
            ran += 1
        return ran
