"""
Request / result models of the time conversion panel.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from worldclock.exceptions.errors import UnknownZoneError
from worldclock.models.civil_moment import CivilMoment
from worldclock.models.zone_entry import ZoneEntry


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """
    Attributes:
        source_zone_id (str): Zone the entered time is read in.
        hour (int): 0-23.
        minute (int): 0-59.
    """
    source_zone_id: str
    hour: int
    minute: int


@dataclass(frozen=True, slots=True)
class ConversionRow:
    """One line of the result table; `moment` is None when the zone is unavailable."""

    zone_entry: ZoneEntry
    moment: Optional[CivilMoment]
    is_source: bool = False
    error: Optional[UnknownZoneError] = None

    @property
    def available(self) -> bool:
        return self.moment is not None


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Full cross-zone table, one row per catalog entry in catalog order."""

    request: ConversionRequest
    source_instant: datetime
    rows: tuple[ConversionRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ConversionRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> ConversionRow:
        return self.rows[index]

    @property
    def source_row(self) -> Optional[ConversionRow]:
        for row in self.rows:
            if row.is_source:
                return row
        return None

    def row_for_zone(self, zone_id: str) -> ConversionRow:
        for row in self.rows:
            if row.zone_entry.zone_id == zone_id:
                return row
        raise KeyError(zone_id)
