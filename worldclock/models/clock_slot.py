"""
ClockSlot – state behind one visible clock panel.

The presentation layer owns the slots; the refresh scheduler only reads
`selected_zone_id` and writes `last_computed` / `last_error`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worldclock.exceptions.errors import WorldClockError
from worldclock.models.civil_moment import CivilMoment


@dataclass
class ClockSlot:
    selected_zone_id: str
    last_computed: Optional[CivilMoment] = None
    last_error: Optional[WorldClockError] = None

    def select_zone(self, zone_id: str) -> None:
        """Switch the slot to another zone and drop the stale reading."""
        if zone_id != self.selected_zone_id:
            self.selected_zone_id = zone_id
            self.last_computed = None
            self.last_error = None

    @property
    def available(self) -> bool:
        return self.last_computed is not None and self.last_error is None
