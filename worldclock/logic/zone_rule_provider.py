"""
Zone rule providers – read-only access to UTC offset rules.

The clock source never touches the zone database directly; it is handed a
ZoneRuleProvider. Production code uses ZoneInfoRuleProvider (zoneinfo over the
tzdata package), tests can use TransitionTableRuleProvider with a synthetic
rule table that never changes with database updates.
"""

from __future__ import annotations

import bisect
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Iterable, Mapping

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from worldclock.exceptions.errors import UnknownZoneError

# Wide enough to step over any single DST transition around a wall time.
_PROBE = timedelta(days=1)


def as_utc(instant: datetime) -> datetime:
    """Normalizes an aware instant to UTC; naive datetimes are rejected."""
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("Reference instant must be timezone-aware")
    return instant.astimezone(timezone.utc)


class ZoneRuleProvider(ABC):
    """Offset lookups for named zones."""

    @abstractmethod
    def utc_offset(self, zone_id: str, instant: datetime) -> timedelta:
        """
        Offset in effect in `zone_id` at the absolute `instant`.

        Raises:
            UnknownZoneError: if the zone cannot be resolved.
        """

    def knows(self, zone_id: str) -> bool:
        try:
            self.utc_offset(zone_id, datetime.now(timezone.utc))
        except UnknownZoneError:
            return False
        return True

    def local_offsets(self, zone_id: str, wall: datetime) -> tuple[timedelta, ...]:
        """
        All offsets under which the naive civil time `wall` actually occurs.

        One offset for an ordinary time, two for a repeated time (largest,
        i.e. earliest instant, first) and none for a time inside a gap.
        """
        probe = wall.replace(tzinfo=timezone.utc)
        candidates = {
            self.utc_offset(zone_id, probe - _PROBE),
            self.utc_offset(zone_id, probe),
            self.utc_offset(zone_id, probe + _PROBE),
        }
        valid = [
            off for off in candidates
            if self.utc_offset(zone_id, (wall - off).replace(tzinfo=timezone.utc)) == off
        ]
        return tuple(sorted(valid, reverse=True))

    def offset_before(self, zone_id: str, wall: datetime) -> timedelta:
        """Offset in force before any transition near `wall`."""
        return self.utc_offset(zone_id, wall.replace(tzinfo=timezone.utc) - _PROBE)


class ZoneInfoRuleProvider(ZoneRuleProvider):
    """Provider backed by the IANA database via zoneinfo."""

    def _zone(self, zone_id: str) -> ZoneInfo:
        try:
            return ZoneInfo(zone_id)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise UnknownZoneError(zone_id) from None

    def utc_offset(self, zone_id: str, instant: datetime) -> timedelta:
        return as_utc(instant).astimezone(self._zone(zone_id)).utcoffset()

    def local_offsets(self, zone_id: str, wall: datetime) -> tuple[timedelta, ...]:
        tz = self._zone(zone_id)
        wall = wall.replace(tzinfo=None)
        valid: list[timedelta] = []
        for fold in (0, 1):
            off = wall.replace(tzinfo=tz, fold=fold).utcoffset()
            back = (wall - off).replace(tzinfo=timezone.utc).astimezone(tz)
            if back.replace(tzinfo=None) == wall and off not in valid:
                valid.append(off)
        return tuple(sorted(valid, reverse=True))

    def offset_before(self, zone_id: str, wall: datetime) -> timedelta:
        # PEP 495: fold=0 inside a gap yields the pre-transition offset.
        return wall.replace(tzinfo=self._zone(zone_id), fold=0).utcoffset()


class TransitionTableRuleProvider(ZoneRuleProvider):
    """
    Provider over an explicit rule table.

    Args:
        zones: zone id -> (initial offset in seconds,
            iterable of (transition instant, new offset in seconds)).
    """

    def __init__(self, zones: Mapping[str, tuple[int, Iterable[tuple[datetime, int]]]]) -> None:
        self._tables: dict[str, tuple[list[datetime], list[timedelta]]] = {}
        for zone_id, (initial, transitions) in zones.items():
            ordered = sorted((as_utc(at), seconds) for at, seconds in transitions)
            starts = [at for at, _ in ordered]
            offsets = [timedelta(seconds=initial)] + [timedelta(seconds=s) for _, s in ordered]
            self._tables[zone_id] = (starts, offsets)

    @classmethod
    def fixed(cls, offsets: Mapping[str, int]) -> "TransitionTableRuleProvider":
        """Zones that never change offset."""
        return cls({zone_id: (seconds, ()) for zone_id, seconds in offsets.items()})

    def utc_offset(self, zone_id: str, instant: datetime) -> timedelta:
        try:
            starts, offsets = self._tables[zone_id]
        except KeyError:
            raise UnknownZoneError(zone_id) from None
        return offsets[bisect.bisect_right(starts, as_utc(instant))]
