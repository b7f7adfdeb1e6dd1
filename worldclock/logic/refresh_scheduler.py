"""
RefreshScheduler – keeps every clock slot current.

Lifecycle: IDLE -> RUNNING -> STOPPED. STOPPED is terminal; build a new
scheduler to run again. While RUNNING, each tick takes a single reference
instant, re-queries the ClockSource for every slot and publishes one
SlotUpdate per slot to all subscribers.

Subscribers are assumed to be effectively instantaneous (no blocking I/O);
ticks are neither queued nor skipped on their behalf.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from worldclock.exceptions.errors import SchedulerStateError, UnknownZoneError
from worldclock.logic.clock_source import ClockSource, utc_now
from worldclock.logic.timers import PeriodicTrigger, ThreadTrigger
from worldclock.models.clock_slot import ClockSlot
from worldclock.models.slot_update import SlotUpdate

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 1000

SlotListener = Callable[[SlotUpdate], None]


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class RefreshScheduler:
    """
    Periodically refreshes a sequence of ClockSlots.

    Args:
        clock_source: Source of civil readings.
        slots: Slots owned by the presentation layer. The sequence is read on
            every tick, so zone changes show up on the next tick.
        interval_ms: Tick interval.
        trigger: Timer driving the ticks (ThreadTrigger if omitted).
        now: Instant source, injectable for tests.
    """

    def __init__(
        self,
        clock_source: ClockSource,
        slots: Sequence[ClockSlot],
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        trigger: Optional[PeriodicTrigger] = None,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._clock = clock_source
        self._slots = slots
        self._interval_ms = interval_ms
        self._trigger = trigger or ThreadTrigger()
        self._now = now

        self._state = SchedulerState.IDLE
        self._lock = threading.RLock()
        self._listeners: List[SlotListener] = []

    # --- Public API ---------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def slots(self) -> Sequence[ClockSlot]:
        return self._slots

    def subscribe(self, listener: SlotListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: SlotListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def start(self) -> None:
        """
        Arms the trigger and refreshes all slots immediately.

        Raises:
            SchedulerStateError: if not IDLE.
        """
        with self._lock:
            if self._state is not SchedulerState.IDLE:
                raise SchedulerStateError(f"Cannot start scheduler in state {self._state.value}")
            self._state = SchedulerState.RUNNING
            logger.info("Refresh scheduler started (%d slots, every %d ms)",
                        len(self._slots), self._interval_ms)
            self._tick_locked()
            self._trigger.arm(self._interval_ms, self.tick)

    def stop(self) -> None:
        """Disarms the trigger. Idempotent; no tick runs after this returns."""
        with self._lock:
            if self._state is SchedulerState.STOPPED:
                return
            was_running = self._state is SchedulerState.RUNNING
            self._state = SchedulerState.STOPPED
        # Cancel outside the lock: a thread trigger may be waiting for it.
        if was_running:
            self._trigger.cancel()
        logger.info("Refresh scheduler stopped")

    def tick(self) -> List[SlotUpdate]:
        """Refreshes every slot once. Returns the published updates (empty unless RUNNING)."""
        with self._lock:
            if self._state is not SchedulerState.RUNNING:
                return []
            return self._tick_locked()

    def refresh_slot(self, slot_id: int) -> SlotUpdate:
        """Immediate out-of-band refresh, e.g. right after a zone selection."""
        with self._lock:
            if self._state is SchedulerState.STOPPED:
                raise SchedulerStateError("Scheduler is stopped")
            update = self._refresh(slot_id, self._slots[slot_id], self._now())
            self._publish(update)
            return update

    # --- Internal helpers ---------------------------------------------------

    def _tick_locked(self) -> List[SlotUpdate]:
        reference = self._now()
        updates = [self._refresh(i, slot, reference) for i, slot in enumerate(list(self._slots))]
        for update in updates:
            self._publish(update)
        return updates

    def _refresh(self, slot_id: int, slot: ClockSlot, reference: datetime) -> SlotUpdate:
        zone_id = slot.selected_zone_id
        try:
            moment = self._clock.now(zone_id, reference)
        except UnknownZoneError as exc:
            if slot.last_error is None:
                logger.warning("Clock slot %d: %s", slot_id, exc)
            slot.last_computed = None
            slot.last_error = exc
            return SlotUpdate(slot_id, zone_id, reference, error=exc)
        slot.last_computed = moment
        slot.last_error = None
        return SlotUpdate(slot_id, zone_id, reference, moment=moment)

    def _publish(self, update: SlotUpdate) -> None:
        for listener in list(self._listeners):
            try:
                listener(update)
            except Exception:
                logger.exception("Slot listener %r failed for slot %d", listener, update.slot_id)
