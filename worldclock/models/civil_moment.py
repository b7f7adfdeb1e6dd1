"""
CivilMoment – the wall-clock reading of one zone at one absolute instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone


@dataclass(frozen=True, slots=True)
class CivilMoment:
    """
    Pure value, recomputed on every query and replaced wholesale.

    Attributes:
        date (date): Civil calendar date in the zone.
        time (time): Civil time of day, second precision, no tzinfo.
        utc_offset_seconds (int): Offset of the rule in effect at date+time.
        zone_id (str): IANA identifier the moment was computed for.
    """
    date: date
    time: time
    utc_offset_seconds: int
    zone_id: str

    def __post_init__(self) -> None:
        if self.time.tzinfo is not None:
            raise ValueError("CivilMoment.time must be naive")
        if self.time.microsecond:
            raise ValueError("CivilMoment.time has second precision")

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def minute(self) -> int:
        return self.time.minute

    @property
    def second(self) -> int:
        return self.time.second

    @property
    def utc_offset(self) -> timedelta:
        return timedelta(seconds=self.utc_offset_seconds)

    @property
    def wall(self) -> datetime:
        """Naive civil date/time."""
        return datetime.combine(self.date, self.time)

    @property
    def instant(self) -> datetime:
        """The absolute instant (aware, UTC) this civil reading denotes."""
        return (self.wall - self.utc_offset).replace(tzinfo=timezone.utc)

    def to_datetime(self) -> datetime:
        """Aware datetime carrying the fixed offset of this moment."""
        return self.wall.replace(tzinfo=timezone(self.utc_offset))
