"""Repeating timer."""

from __future__ import annotations

import itertools
from typing import Any, Callable


class Timer:
    """A timer that fires its callback every ``interval`` after ``now``.

    Times may be any values supporting addition and ordering (numbers of
    seconds, datetimes with timedeltas, ...).
    """

    _ids = itertools.count(0)

    def __init__(self, now: Any, interval: Any, callback: Callable[[], Any]) -> None:
        self.timer_id: int = next(Timer._ids)
        self.interval = interval
        self.callback = callback
        self.next_fire = now + interval

    def check_fire(self, now: Any) -> bool:
        """Fire once if ``now`` has reached the next fire time; return whether it fired."""
        if now >= self.next_fire:
            self.callback()
            self.next_fire = self.next_fire + self.interval
            return True
        return False

    def __lt__(self, other: "Timer") -> bool:
        return self.next_fire < other.next_fire

    def __gt__(self, other: "Timer") -> bool:
        return self.next_fire > other.next_fire

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Timer):
            return self.timer_id == other.timer_id
        if isinstance(other, int):
            return self.timer_id == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.timer_id)

    def __repr__(self) -> str:
        return f"Timer(id={self.timer_id}, next_fire={self.next_fire!r})"