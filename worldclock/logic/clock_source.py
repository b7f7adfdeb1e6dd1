"""
ClockSource – timezone-aware clock readings over an injected rule provider.
Separated from the views to keep responsibilities clean.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional

from worldclock.exceptions.errors import AmbiguousTimeError, NonexistentTimeError
from worldclock.logic.zone_rule_provider import ZoneInfoRuleProvider, ZoneRuleProvider, as_utc
from worldclock.models.civil_moment import CivilMoment
from worldclock.models.worldclock_settings import DST_POLICIES, DST_POLICY_LENIENT, DST_POLICY_STRICT

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current absolute instant (aware, UTC)."""
    return datetime.now(timezone.utc)


class ClockSource:
    """Maps absolute instants to civil readings and back."""

    def __init__(self, rules: Optional[ZoneRuleProvider] = None) -> None:
        self._rules = rules or ZoneInfoRuleProvider()

    @property
    def rules(self) -> ZoneRuleProvider:
        return self._rules

    def now(self, zone_id: str, reference_instant: datetime) -> CivilMoment:
        """
        Civil date/time of `zone_id` at `reference_instant`.

        All slots of one refresh tick share the same reference instant so the
        clocks never drift against each other.

        Raises:
            UnknownZoneError: zone not resolvable by the rule provider.
            ValueError: reference instant is naive.
        """
        instant = as_utc(reference_instant).replace(microsecond=0)
        offset = self._rules.utc_offset(zone_id, instant)
        wall = (instant + offset).replace(tzinfo=None)
        return CivilMoment(
            date=wall.date(),
            time=wall.time(),
            utc_offset_seconds=int(offset.total_seconds()),
            zone_id=zone_id,
        )

    def today(self, zone_id: str, reference_instant: datetime) -> date:
        """Calendar date in `zone_id` at `reference_instant`."""
        return self.now(zone_id, reference_instant).date

    def resolve_local(self, zone_id: str, wall: datetime, policy: str = DST_POLICY_LENIENT) -> datetime:
        """
        Absolute instant (aware, UTC) of the naive civil time `wall` in `zone_id`.

        Lenient policy: a repeated time resolves to its earlier occurrence, a
        time inside a gap is read with the pre-transition offset, which moves
        it forward by the length of the gap. Strict policy raises instead.

        Raises:
            AmbiguousTimeError / NonexistentTimeError: strict policy only.
            UnknownZoneError: zone not resolvable.
        """
        if policy not in DST_POLICIES:
            raise ValueError(f"Unknown DST policy: {policy!r}")
        wall = wall.replace(tzinfo=None)
        offsets = self._rules.local_offsets(zone_id, wall)

        if len(offsets) == 1:
            offset = offsets[0]
        elif offsets:
            if policy == DST_POLICY_STRICT:
                raise AmbiguousTimeError(
                    f"{wall:%Y-%m-%d %H:%M} occurs twice in {zone_id}", zone_id=zone_id, wall=wall
                )
            offset = max(offsets)
            logger.debug("Ambiguous %s in %s, using earlier occurrence", wall, zone_id)
        else:
            if policy == DST_POLICY_STRICT:
                raise NonexistentTimeError(
                    f"{wall:%Y-%m-%d %H:%M} does not exist in {zone_id}", zone_id=zone_id, wall=wall
                )
            offset = self._rules.offset_before(zone_id, wall)
            logger.debug("Gap time %s in %s, shifting forward", wall, zone_id)

        return (wall - offset).replace(tzinfo=timezone.utc)
