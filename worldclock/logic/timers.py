"""
Periodic triggers for the refresh scheduler.

A trigger fires a callback at a fixed rate until cancelled. Deadlines are
advanced on the monotonic clock, so slow callbacks never accumulate drift;
firings missed while a callback overran are dropped, not queued.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def next_deadline(deadline: float, interval: float, now: float) -> float:
    """Advances `deadline` by whole intervals until it lies after `now`."""
    deadline += interval
    if now >= deadline:
        missed = int((now - deadline) // interval) + 1
        deadline += missed * interval
    return deadline


class PeriodicTrigger(ABC):
    """Fixed-rate timer with explicit cancel."""

    @abstractmethod
    def arm(self, interval_ms: int, callback: Callable[[], None]) -> None:
        """Starts firing `callback` every `interval_ms` milliseconds."""

    @abstractmethod
    def cancel(self) -> None:
        """Stops firing. No callback starts after this returns."""

    @property
    @abstractmethod
    def armed(self) -> bool:
        ...


class ThreadTrigger(PeriodicTrigger):
    """
    Fires on a daemon thread.

    Callbacks run on the timer thread; hosts with a single UI thread must
    marshal results back onto it.
    """

    def __init__(self, name: str = "worldclock-refresh",
                 clock: Callable[[], float] = time.monotonic) -> None:
        self._name = name
        self._clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def armed(self) -> bool:
        return self._thread is not None and not self._stop.is_set()

    def arm(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if self._thread is not None:
            raise RuntimeError("Trigger is already armed")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, args=(interval_ms / 1000.0, callback), name=self._name, daemon=True
        )
        self._thread.start()

    def cancel(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5.0)

    def _run(self, interval: float, callback: Callable[[], None]) -> None:
        deadline = self._clock() + interval
        while not self._stop.wait(max(0.0, deadline - self._clock())):
            try:
                callback()
            except Exception:
                logger.exception("Periodic callback failed")
            deadline = next_deadline(deadline, interval, self._clock())
