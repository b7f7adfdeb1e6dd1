"""
TkAfterTrigger – PeriodicTrigger driven by Tk's `after`.

Callbacks run on the Tk main loop, so views may be updated directly.
"""

from __future__ import annotations

import logging
import time
import tkinter as tk
from typing import Callable, Optional

from worldclock.logic.timers import PeriodicTrigger, next_deadline

logger = logging.getLogger(__name__)


class TkAfterTrigger(PeriodicTrigger):
    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget
        self._after_id: Optional[str] = None
        self._callback: Optional[Callable[[], None]] = None
        self._interval = 0.0
        self._deadline = 0.0

    @property
    def armed(self) -> bool:
        return self._callback is not None

    def arm(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if self._callback is not None:
            raise RuntimeError("Trigger is already armed")
        self._callback = callback
        self._interval = interval_ms / 1000.0
        self._deadline = time.monotonic() + self._interval
        self._after_id = self._widget.after(interval_ms, self._fire)

    def cancel(self) -> None:
        self._callback = None
        if self._after_id is not None:
            try:
                self._widget.after_cancel(self._after_id)
            except tk.TclError:
                pass  # widget already destroyed
            self._after_id = None

    # --- Tick loop ----------------------------------------------------------

    def _fire(self) -> None:
        self._after_id = None
        callback = self._callback
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception("Periodic callback failed")
        if self._callback is None:
            return  # cancelled from inside the callback
        self._deadline = next_deadline(self._deadline, self._interval, time.monotonic())
        delay_ms = max(0, int((self._deadline - time.monotonic()) * 1000))
        self._after_id = self._widget.after(delay_ms, self._fire)
