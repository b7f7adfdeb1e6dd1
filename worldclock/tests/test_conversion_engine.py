"""
worldclock/tests/test_conversion_engine.py

Cross-zone conversion: date rollover, "today" in the source zone, DST
policies, unavailable rows and input validation.
"""

from __future__ import annotations

import unittest
from datetime import date, datetime, time, timezone

from worldclock.exceptions.errors import (
    AmbiguousTimeError,
    InvalidTimeError,
    NonexistentTimeError,
    NotFoundError,
    SettingsError,
    UnknownZoneError,
)
from worldclock.logic.clock_source import ClockSource
from worldclock.logic.conversion_engine import (
    MSG_NOT_A_NUMBER,
    MSG_OUT_OF_RANGE,
    ConversionEngine,
    parse_request,
)
from worldclock.logic.zone_catalog import ZoneCatalog
from worldclock.logic.zone_rule_provider import ZoneInfoRuleProvider
from worldclock.models.conversion import ConversionRequest
from worldclock.tests._rules import synthetic_catalog, synthetic_rules

UTC = timezone.utc
WINTER = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


class TestConversionEngineSynthetic(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = synthetic_catalog()
        self.engine = ConversionEngine(self.catalog, ClockSource(synthetic_rules()))

    def test_utc_to_utc_plus_nine_crosses_midnight(self) -> None:
        result = self.engine.convert_time("Etc/UTC", 23, 30, WINTER)
        utc_row = result.row_for_zone("Etc/UTC")
        tokyo_row = result.row_for_zone("Asia/Tokyo")
        self.assertEqual((utc_row.moment.date, utc_row.moment.time), (date(2024, 1, 15), time(23, 30)))
        self.assertEqual((tokyo_row.moment.date, tokyo_row.moment.time), (date(2024, 1, 16), time(8, 30)))
        self.assertEqual(result.source_instant, datetime(2024, 1, 15, 23, 30, tzinfo=UTC))

    def test_round_trip_every_minute_of_the_day(self) -> None:
        for source in ("Etc/UTC", "America/New_York", "Asia/Kolkata"):
            for hour in range(24):
                for minute in range(60):
                    row = self.engine.convert_time(source, hour, minute, WINTER).row_for_zone(source)
                    if row.moment.time != time(hour, minute) or not row.is_source:
                        self.fail(f"{source} {hour:02d}:{minute:02d} came back as {row.moment}")

    def test_half_hour_offset_zone(self) -> None:
        result = self.engine.convert_time("America/New_York", 9, 0, WINTER)
        self.assertEqual(result.row_for_zone("Asia/Kolkata").moment.time, time(19, 30))

    def test_today_is_taken_in_the_source_zone(self) -> None:
        # 03:00 UTC on the 15th is still the 14th in New York
        ref = datetime(2024, 1, 15, 3, 0, tzinfo=UTC)
        result = self.engine.convert_time("America/New_York", 10, 0, ref)
        self.assertEqual(result.row_for_zone("America/New_York").moment.date, date(2024, 1, 14))
        tokyo = result.row_for_zone("Asia/Tokyo").moment
        self.assertEqual((tokyo.date, tokyo.time), (date(2024, 1, 15), time(0, 0)))

    def test_rows_follow_catalog_order_for_every_source(self) -> None:
        for entry in self.catalog:
            result = self.engine.convert_time(entry.zone_id, 8, 15, WINTER)
            self.assertEqual(len(result), self.catalog.size())
            self.assertEqual([r.zone_entry for r in result], list(self.catalog.list()))
            self.assertEqual([r.is_source for r in result].count(True), 1)
            self.assertEqual(result.source_row.zone_entry, entry)

    def test_hour_out_of_range_produces_no_result(self) -> None:
        with self.assertRaises(InvalidTimeError) as ctx:
            self.engine.convert(ConversionRequest("Etc/UTC", 25, 0), WINTER)
        self.assertEqual(str(ctx.exception), MSG_OUT_OF_RANGE)
        for bad in ((-1, 0), (0, 60), (0, -1), (24, 0)):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidTimeError):
                    self.engine.convert_time("Etc/UTC", *bad, WINTER)

    def test_spring_forward_gap_lenient(self) -> None:
        ref = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
        result = self.engine.convert_time("America/New_York", 2, 30, ref)
        source = result.source_row.moment
        self.assertEqual(source.time, time(3, 30))
        self.assertEqual(source.utc_offset_seconds, -4 * 3600)
        self.assertEqual(result.row_for_zone("Etc/UTC").moment.time, time(7, 30))

    def test_fall_back_overlap_lenient_uses_earlier_occurrence(self) -> None:
        ref = datetime(2024, 11, 3, 12, 0, tzinfo=UTC)
        result = self.engine.convert_time("America/New_York", 1, 30, ref)
        source = result.source_row.moment
        self.assertEqual(source.time, time(1, 30))
        self.assertEqual(source.utc_offset_seconds, -4 * 3600)
        self.assertEqual(result.row_for_zone("Etc/UTC").moment.time, time(5, 30))

    def test_strict_policy_rejects_gap_and_overlap(self) -> None:
        strict = ConversionEngine(self.catalog, ClockSource(synthetic_rules()), dst_policy="strict")
        with self.assertRaises(NonexistentTimeError):
            strict.convert_time("America/New_York", 2, 30, datetime(2024, 3, 10, 12, 0, tzinfo=UTC))
        with self.assertRaises(AmbiguousTimeError):
            strict.convert_time("America/New_York", 1, 30, datetime(2024, 11, 3, 12, 0, tzinfo=UTC))
        # ordinary times are unaffected
        result = strict.convert_time("America/New_York", 4, 0, datetime(2024, 3, 10, 12, 0, tzinfo=UTC))
        self.assertEqual(result.source_row.moment.time, time(4, 0))

    def test_unknown_dst_policy_rejected_at_construction(self) -> None:
        for policy in ("Lenient", "sloppy", ""):
            with self.subTest(policy=policy):
                with self.assertRaises(SettingsError):
                    ConversionEngine(self.catalog, ClockSource(synthetic_rules()), dst_policy=policy)

    def test_unresolvable_zone_renders_unavailable_row(self) -> None:
        catalog = ZoneCatalog.from_pairs([
            ("UTC", "Etc/UTC"),
            ("Olympus Mons (MST)", "Mars/Olympus_Mons"),
            ("Tokyo (JST)", "Asia/Tokyo"),
        ])
        engine = ConversionEngine(catalog, ClockSource(synthetic_rules()))
        with self.assertLogs("worldclock.logic.conversion_engine", level="WARNING"):
            result = engine.convert_time("Etc/UTC", 12, 0, WINTER)
        self.assertEqual(len(result), 3)
        broken = result[1]
        self.assertFalse(broken.available)
        self.assertIsInstance(broken.error, UnknownZoneError)
        self.assertTrue(result[2].available)

    def test_unknown_source_zone_raises(self) -> None:
        with self.assertRaises(UnknownZoneError):
            self.engine.convert_time("Mars/Olympus_Mons", 12, 0, WINTER)

    def test_convert_by_display_name(self) -> None:
        result = self.engine.convert_display("Tokyo (JST)", 9, 0, WINTER)
        self.assertEqual(result.row_for_zone("Etc/UTC").moment.time, time(0, 0))
        with self.assertRaises(NotFoundError):
            self.engine.convert_display("Atlantis", 9, 0, WINTER)

    def test_repeated_requests_are_independent(self) -> None:
        first = self.engine.convert_time("Etc/UTC", 6, 0, WINTER)
        second = self.engine.convert_time("Etc/UTC", 6, 0, WINTER)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)


class TestConversionEngineZoneInfo(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = ZoneCatalog.default()
        self.engine = ConversionEngine(self.catalog, ClockSource(ZoneInfoRuleProvider()))

    def test_every_source_yields_full_table(self) -> None:
        for entry in self.catalog:
            with self.subTest(source=entry.display_name):
                result = self.engine.convert_time(entry.zone_id, 12, 0, WINTER)
                self.assertEqual(len(result), self.catalog.size())
                self.assertTrue(all(r.available for r in result))
                self.assertEqual(result.source_row.moment.time, time(12, 0))
                instants = {r.moment.instant for r in result}
                self.assertEqual(instants, {result.source_instant})

    def test_new_york_spring_forward(self) -> None:
        result = self.engine.convert_time("America/New_York", 2, 30, datetime(2024, 3, 10, 12, 0, tzinfo=UTC))
        self.assertEqual(result.source_row.moment.time, time(3, 30))
        self.assertEqual(result.row_for_zone("Europe/London").moment.time, time(7, 30))

    def test_new_york_to_london_and_sydney(self) -> None:
        result = self.engine.convert_time("America/New_York", 18, 0, WINTER)
        london = result.row_for_zone("Europe/London").moment
        sydney = result.row_for_zone("Australia/Sydney").moment
        self.assertEqual((london.date, london.time), (date(2024, 1, 15), time(23, 0)))
        self.assertEqual((sydney.date, sydney.time), (date(2024, 1, 16), time(10, 0)))


class TestParseRequest(unittest.TestCase):
    def test_valid_text(self) -> None:
        self.assertEqual(parse_request("Etc/UTC", " 07 ", "05"), ConversionRequest("Etc/UTC", 7, 5))
        self.assertEqual(parse_request("Etc/UTC", "+7", "0"), ConversionRequest("Etc/UTC", 7, 0))

    def test_non_numeric_text(self) -> None:
        for hour, minute in (("", "00"), ("ab", "00"), ("12", "3.5"), ("1_2", "0_5"), ("0x1", "00")):
            with self.subTest(hour=hour, minute=minute):
                with self.assertRaises(InvalidTimeError) as ctx:
                    parse_request("Etc/UTC", hour, minute)
                self.assertEqual(str(ctx.exception), MSG_NOT_A_NUMBER)

    def test_out_of_range_text(self) -> None:
        with self.assertRaises(InvalidTimeError) as ctx:
            parse_request("Etc/UTC", "24", "00")
        self.assertEqual(str(ctx.exception), MSG_OUT_OF_RANGE)


if __name__ == "__main__":
    unittest.main()
