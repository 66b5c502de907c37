from __future__ import annotations
import heapq
import itertools
from typing import Any, Callable, List, Tuple

class TimerHandle:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

class ManualScheduler:
    """Scheduler whose clock only moves when ``advance`` is called.

    Mirrors the ``call_later`` signature of an asyncio event loop so either
    can back a surface.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        handle = TimerHandle(self.now + max(delay, 0.0), callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def advance(self, seconds: float) -> int:
        """Run every timer due within ``seconds``; returns how many ran."""
        deadline = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            when, _, handle = heapq.heappop(self._queue)
            self.now = when
            if handle.cancelled:
                continue
            handle.callback(*handle.args)
            ran += 1
        self.now = deadline
        return ran

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)
