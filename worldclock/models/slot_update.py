"""
Event objects published by the refresh scheduler.

Subscribers (typically the presentation layer) receive one SlotUpdate per
slot per tick without being coupled to the scheduler internals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from worldclock.exceptions.errors import WorldClockError
from worldclock.models.civil_moment import CivilMoment


@dataclass(frozen=True, slots=True)
class SlotUpdate:
    """Represents the outcome of refreshing one clock slot."""

    slot_id: int
    zone_id: str
    reference_instant: datetime
    moment: Optional[CivilMoment] = None
    error: Optional[WorldClockError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.moment is not None
