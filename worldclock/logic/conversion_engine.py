"""
ConversionEngine – "what time is H:M in zone A everywhere else?"

The conversion always goes through one absolute instant, never through
hour arithmetic across offsets, so DST and half/quarter-hour zones are
handled the same way.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, time
from typing import Optional

from worldclock.exceptions.errors import InvalidTimeError, SettingsError, UnknownZoneError
from worldclock.logic.clock_source import ClockSource
from worldclock.logic.zone_catalog import ZoneCatalog
from worldclock.models.conversion import ConversionRequest, ConversionResult, ConversionRow
from worldclock.models.worldclock_settings import DST_POLICIES, DST_POLICY_LENIENT

logger = logging.getLogger(__name__)

MSG_NOT_A_NUMBER = "Please enter valid numbers for hours and minutes."
MSG_OUT_OF_RANGE = "Invalid time. Hours must be 0-23, minutes must be 0-59."

# Signed decimal digits, no digit-group underscores.
_INTEGER = re.compile(r"[+-]?\d+")


def validate_request(request: ConversionRequest) -> None:
    """Raises InvalidTimeError for hours outside 0-23 or minutes outside 0-59."""
    hour, minute = request.hour, request.minute
    if isinstance(hour, bool) or isinstance(minute, bool):
        raise InvalidTimeError(MSG_NOT_A_NUMBER)
    if not isinstance(hour, int) or not isinstance(minute, int):
        raise InvalidTimeError(MSG_NOT_A_NUMBER)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeError(MSG_OUT_OF_RANGE)


def parse_request(source_zone_id: str, hour_text: str, minute_text: str) -> ConversionRequest:
    """
    Builds a validated request from raw entry-field text.

    Raises:
        InvalidTimeError: non-numeric or out-of-range input.
    """
    fields = (str(hour_text).strip(), str(minute_text).strip())
    if not all(_INTEGER.fullmatch(text) for text in fields):
        raise InvalidTimeError(MSG_NOT_A_NUMBER)
    hour, minute = (int(text) for text in fields)
    request = ConversionRequest(source_zone_id=source_zone_id, hour=hour, minute=minute)
    validate_request(request)
    return request


class ConversionEngine:
    """Produces a full ConversionResult for every catalog zone."""

    def __init__(
        self,
        catalog: ZoneCatalog,
        clock_source: Optional[ClockSource] = None,
        *,
        dst_policy: str = DST_POLICY_LENIENT,
    ) -> None:
        self._catalog = catalog
        self._clock = clock_source or ClockSource()
        if dst_policy not in DST_POLICIES:
            raise SettingsError(f"Unknown DST policy: {dst_policy!r}")
        self._dst_policy = dst_policy

    @property
    def catalog(self) -> ZoneCatalog:
        return self._catalog

    def convert(self, request: ConversionRequest, reference_instant: datetime) -> ConversionResult:
        """
        Converts request.hour:request.minute "today" in the source zone.

        "Today" is the source zone's calendar date at `reference_instant`,
        not the host's local date.

        Raises:
            InvalidTimeError: hour/minute out of range (no rows produced).
            UnknownZoneError: the source zone itself is not resolvable.
            AmbiguousTimeError / NonexistentTimeError: strict DST policy only.
        """
        validate_request(request)
        source = request.source_zone_id

        today = self._clock.today(source, reference_instant)
        wall = datetime.combine(today, time(request.hour, request.minute))
        instant = self._clock.resolve_local(source, wall, self._dst_policy)
        logger.debug("Converting %s %s -> instant %s", source, wall, instant.isoformat())

        rows = []
        for entry in self._catalog:
            is_source = entry.zone_id == source
            try:
                moment = self._clock.now(entry.zone_id, instant)
            except UnknownZoneError as exc:
                logger.warning("Zone %s unavailable in conversion: %s", entry.zone_id, exc)
                rows.append(ConversionRow(entry, None, is_source=is_source, error=exc))
                continue
            rows.append(ConversionRow(entry, moment, is_source=is_source))

        return ConversionResult(request=request, source_instant=instant, rows=tuple(rows))

    def convert_time(self, source_zone_id: str, hour: int, minute: int,
                     reference_instant: datetime) -> ConversionResult:
        return self.convert(ConversionRequest(source_zone_id, hour, minute), reference_instant)

    def convert_display(self, display_name: str, hour: int, minute: int,
                        reference_instant: datetime) -> ConversionResult:
        """Same as convert_time, with the source picked by catalog label."""
        return self.convert_time(self._catalog.lookup(display_name), hour, minute, reference_instant)
