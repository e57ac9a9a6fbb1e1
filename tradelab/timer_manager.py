"""Single-threaded manager of repeating timers."""

from __future__ import annotations

import bisect
import time
from typing import Any, Callable, List

from tradelab.timer import Timer


class TimerManager:
    """Keeps timers ordered by next fire time and fires those that are due."""

    def __init__(self, clock: Callable[[], Any] = time.monotonic) -> None:
        self._clock = clock
        # Ordered by descending next fire time; the earliest timer is last.
        self._timers: List[Timer] = []

    def _insert(self, timer: Timer) -> None:
        index = bisect.bisect_right(
            [-t.next_fire for t in self._timers], -timer.next_fire
        )
        self._timers.insert(index, timer)

    def create_timer(self, interval: Any, callback: Callable[[], Any]) -> int:
        """Start a timer firing every ``interval`` from now; return its id."""
        timer = Timer(self._clock(), interval, callback)
        self._insert(timer)
        return timer.timer_id

    def delete_timer(self, timer_id: int) -> None:
        """Remove the timer with ``timer_id`` if it exists."""
        for index, timer in enumerate(self._timers):
            if timer == timer_id:
                del self._timers[index]
                return

    def update(self) -> None:
        """Fire every timer that is due, rescheduling each after it fires."""
        while self._timers and self._timers[-1].check_fire(self._clock()):
            self._insert(self._timers.pop())