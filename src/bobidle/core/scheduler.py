"""Cooperative periodic scheduler driven by explicit polling."""
from __future__ import annotations

import time
from typing import Callable


class TickScheduler:
    """Fires ``callback(elapsed_seconds)`` once at least ``interval`` has passed.

    Nothing runs in the background: the owner calls :meth:`poll` from its own
    loop, so state is only ever touched from one thread. Tests inject a fake
    ``clock`` to drive ticks deterministically.
    """

    def __init__(
        self,
        callback: Callable[[float], None],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._callback = callback
        self._clock = clock
        self._interval: float | None = None
        self._last_fired: float = 0.0

    @property
    def running(self) -> bool:
        return self._interval is not None

    @property
    def interval(self) -> float | None:
        return self._interval

    def start(self, interval: float) -> None:
        """Begin scheduling; ``interval=0`` fires on every poll."""
        if interval < 0:
            raise ValueError("interval must be non-negative.")
        self._interval = interval
        self._last_fired = self._clock()

    def stop(self) -> None:
        self._interval = None

    def poll(self) -> bool:
        """Fire the callback if due; returns True when it fired."""
        if self._interval is None:
            return False
        now = self._clock()
        elapsed = now - self._last_fired
        if elapsed < self._interval or elapsed <= 0:
            return False
        self._last_fired = now
        self._callback(elapsed)
        return True

    def seconds_until_due(self) -> float | None:
        if self._interval is None:
            return None
        return max(0.0, self._interval - (self._clock() - self._last_fired))
