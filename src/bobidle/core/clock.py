"""Wall-clock source used by the reconciliation store."""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current wall-clock time in epoch milliseconds."""

    def now_ms(self) -> int: ...


class SystemClock:
    """Clock backed by time.time()."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


__all__ = ["Clock", "SystemClock"]
