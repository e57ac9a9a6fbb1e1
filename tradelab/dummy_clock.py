"""A manually driven clock for tests and simulations."""

from __future__ import annotations

from typing import Any


class DummyClock:
    """A clock whose time only moves when told to."""

    def __init__(self, start: Any = 0.0) -> None:
        self._time = start

    def set_time(self, now: Any) -> None:
        """Set the current time."""
        self._time = now

    def tick(self, elapsed: Any) -> None:
        """Advance the current time by ``elapsed``."""
        self._time = self._time + elapsed

    def now(self) -> Any:
        """Return the current time."""
        return self._time