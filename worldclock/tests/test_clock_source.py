"""
worldclock/tests/test_clock_source.py

ClockSource against the synthetic rule table and against the real IANA
database (zoneinfo + tzdata).
"""

from __future__ import annotations

import unittest
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from worldclock.exceptions.errors import AmbiguousTimeError, NonexistentTimeError, UnknownZoneError
from worldclock.logic.clock_source import ClockSource
from worldclock.logic.zone_catalog import ZoneCatalog
from worldclock.logic.zone_rule_provider import ZoneInfoRuleProvider
from worldclock.tests._rules import synthetic_rules

UTC = timezone.utc


class TestClockSourceSynthetic(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ClockSource(synthetic_rules())

    def test_now_adds_offset_to_instant(self) -> None:
        m = self.clock.now("Asia/Tokyo", datetime(2024, 1, 15, 20, 15, 42, 999_000, tzinfo=UTC))
        self.assertEqual(m.date, date(2024, 1, 16))
        self.assertEqual(m.time, time(5, 15, 42))
        self.assertEqual(m.utc_offset_seconds, 9 * 3600)
        self.assertEqual(m.zone_id, "Asia/Tokyo")

    def test_offset_follows_transitions(self) -> None:
        before = self.clock.now("America/New_York", datetime(2024, 3, 10, 6, 59, 59, tzinfo=UTC))
        after = self.clock.now("America/New_York", datetime(2024, 3, 10, 7, 0, 0, tzinfo=UTC))
        self.assertEqual(before.time, time(1, 59, 59))
        self.assertEqual(before.utc_offset_seconds, -5 * 3600)
        self.assertEqual(after.time, time(3, 0, 0))
        self.assertEqual(after.utc_offset_seconds, -4 * 3600)

    def test_moment_instant_round_trips(self) -> None:
        ref = datetime(2024, 6, 1, 12, 30, 5, tzinfo=UTC)
        for zone_id in ("Etc/UTC", "Asia/Kolkata", "America/New_York"):
            self.assertEqual(self.clock.now(zone_id, ref).instant, ref)

    def test_reference_in_other_zone_is_normalized(self) -> None:
        ref = datetime(2024, 1, 15, 9, 0, tzinfo=timezone(timedelta(hours=9)))
        self.assertEqual(self.clock.now("Etc/UTC", ref).time, time(0, 0))

    def test_today_uses_zone_calendar(self) -> None:
        ref = datetime(2024, 1, 15, 3, 0, tzinfo=UTC)
        self.assertEqual(self.clock.today("America/New_York", ref), date(2024, 1, 14))
        self.assertEqual(self.clock.today("Asia/Tokyo", ref), date(2024, 1, 15))

    def test_unknown_zone_raises(self) -> None:
        with self.assertRaises(UnknownZoneError) as ctx:
            self.clock.now("Mars/Olympus_Mons", datetime(2024, 1, 1, tzinfo=UTC))
        self.assertEqual(ctx.exception.zone_id, "Mars/Olympus_Mons")

    def test_naive_reference_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.clock.now("Etc/UTC", datetime(2024, 1, 1))

    def test_resolve_local_ordinary_time(self) -> None:
        instant = self.clock.resolve_local("America/New_York", datetime(2024, 7, 4, 12, 0))
        self.assertEqual(instant, datetime(2024, 7, 4, 16, 0, tzinfo=UTC))

    def test_resolve_local_gap_shifts_forward(self) -> None:
        instant = self.clock.resolve_local("America/New_York", datetime(2024, 3, 10, 2, 30))
        self.assertEqual(instant, datetime(2024, 3, 10, 7, 30, tzinfo=UTC))
        self.assertEqual(self.clock.now("America/New_York", instant).time, time(3, 30))

    def test_resolve_local_overlap_takes_earlier_instant(self) -> None:
        instant = self.clock.resolve_local("America/New_York", datetime(2024, 11, 3, 1, 30))
        self.assertEqual(instant, datetime(2024, 11, 3, 5, 30, tzinfo=UTC))

    def test_resolve_local_strict(self) -> None:
        with self.assertRaises(NonexistentTimeError):
            self.clock.resolve_local("America/New_York", datetime(2024, 3, 10, 2, 30), "strict")
        with self.assertRaises(AmbiguousTimeError):
            self.clock.resolve_local("America/New_York", datetime(2024, 11, 3, 1, 30), "strict")

    def test_resolve_local_unknown_policy(self) -> None:
        with self.assertRaises(ValueError):
            self.clock.resolve_local("Etc/UTC", datetime(2024, 1, 1), "sloppy")


class TestClockSourceZoneInfo(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ClockSource(ZoneInfoRuleProvider())

    def test_offsets_match_zone_database(self) -> None:
        instants = [
            datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
            datetime(2024, 7, 15, 12, 0, tzinfo=UTC),
            datetime(2025, 3, 30, 0, 59, 59, tzinfo=UTC),
            datetime(2025, 3, 30, 1, 0, 0, tzinfo=UTC),
            datetime(2025, 10, 26, 0, 30, tzinfo=UTC),
        ]
        for entry in ZoneCatalog.default():
            tz = ZoneInfo(entry.zone_id)
            for instant in instants:
                with self.subTest(zone=entry.zone_id, instant=instant):
                    expected = instant.astimezone(tz)
                    m = self.clock.now(entry.zone_id, instant)
                    self.assertEqual(m.utc_offset_seconds, int(expected.utcoffset().total_seconds()))
                    self.assertEqual(m.wall, expected.replace(tzinfo=None))

    def test_half_hour_zone(self) -> None:
        m = self.clock.now("Asia/Kolkata", datetime(2024, 1, 15, 14, 0, tzinfo=UTC))
        self.assertEqual(m.time, time(19, 30))
        self.assertEqual(m.utc_offset_seconds, 19800)

    def test_unknown_zone_raises(self) -> None:
        for bad in ("Mars/Olympus_Mons", "", "../etc/passwd"):
            with self.subTest(zone=bad):
                with self.assertRaises(UnknownZoneError):
                    self.clock.now(bad, datetime(2024, 1, 1, tzinfo=UTC))

    def test_knows(self) -> None:
        rules = self.clock.rules
        self.assertTrue(rules.knows("Europe/Prague"))
        self.assertFalse(rules.knows("Europe/Atlantis"))

    def test_resolve_local_matches_synthetic_behaviour(self) -> None:
        self.assertEqual(
            self.clock.resolve_local("America/New_York", datetime(2024, 3, 10, 2, 30)),
            datetime(2024, 3, 10, 7, 30, tzinfo=UTC),
        )
        self.assertEqual(
            self.clock.resolve_local("America/New_York", datetime(2024, 11, 3, 1, 30)),
            datetime(2024, 11, 3, 5, 30, tzinfo=UTC),
        )


if __name__ == "__main__":
    unittest.main()
