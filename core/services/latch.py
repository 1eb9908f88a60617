"""Countdown latch used as the completion barrier for batch tasks."""

from __future__ import annotations

import threading


class CountdownLatch:
    """Releases once `count_down` has been called `count` times.

    `count_down` returns True for exactly one caller: the one that brought the
    count to zero. Extra calls after release raise `RuntimeError`.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        self._count = count
        self._cond = threading.Condition()

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def count_down(self) -> bool:
        """Record one completion. Return True when this call released the latch."""
        with self._cond:
            if self._count == 0:
                raise RuntimeError("latch already released")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()
                return True
            return False

    def wait(self, timeout: float | None = None) -> bool:
        """Block until released. Return False if `timeout` elapsed first."""
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout)
