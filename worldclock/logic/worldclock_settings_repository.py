"""
WorldClockSettingsRepository
----------------------------
Loads World Clock settings from the layered ConfigService and persists the
display options into the machine config.ini.

Strategy:
- Read [Clock] and [Conversion] through ConfigService (env/user layers apply).
- Validate ranges; bad values raise SettingsError naming section and key.
- Write atomically (temp file + replace) to avoid partial writes.

Zone selections of the clock panels are deliberately not stored.
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Optional

from core.config.config_service import ConfigService, config_service
from worldclock.exceptions.errors import SettingsError
from worldclock.models.worldclock_settings import (
    DST_POLICIES,
    DST_POLICY_LENIENT,
    DST_POLICY_STRICT,
    WorldClockSettings,
)

logger = logging.getLogger(__name__)

MIN_INTERVAL_MS = 50
MAX_INTERVAL_MS = 60_000


class WorldClockSettingsRepository:
    """
    Loads and saves WorldClockSettings in the [Clock] / [Conversion] sections.
    """

    CLOCK = "Clock"
    CONVERSION = "Conversion"

    def __init__(self, config: Optional[ConfigService] = None) -> None:
        self._config = config or config_service

    # --- Public API ---------------------------------------------------------

    def load(self) -> WorldClockSettings:
        """
        Returns validated settings; missing keys fall back to defaults.

        Raises:
            SettingsError: a configured value is malformed or out of range.
        """
        d = WorldClockSettings()
        s = WorldClockSettings(
            clock_count=self._get(self.CLOCK, "clock_count", int, d.clock_count),
            update_interval_ms=self._get(self.CLOCK, "update_interval_ms", int, d.update_interval_ms),
            use_24h=self._get(self.CLOCK, "use_24h", bool, d.use_24h),
            show_seconds=self._get(self.CLOCK, "show_seconds", bool, d.show_seconds),
            show_date=self._get(self.CLOCK, "show_date", bool, d.show_date),
            dst_policy=str(self._get(self.CONVERSION, "dst_policy", str, d.dst_policy)).strip().lower(),
            default_hour=self._get(self.CONVERSION, "default_hour", int, d.default_hour),
            default_minute=self._get(self.CONVERSION, "default_minute", int, d.default_minute),
        )
        self.validate(s)
        return s

    def save(self, s: WorldClockSettings) -> None:
        """
        Persists settings atomically into the machine config.ini and reloads
        the config layers.
        """
        self.validate(s)
        path = self._config.machine_ini
        cfg = configparser.ConfigParser()
        cfg.read(path, encoding="utf-8")
        for section in (self.CLOCK, self.CONVERSION):
            if not cfg.has_section(section):
                cfg.add_section(section)

        cfg.set(self.CLOCK, "clock_count", str(int(s.clock_count)))
        cfg.set(self.CLOCK, "update_interval_ms", str(int(s.update_interval_ms)))
        cfg.set(self.CLOCK, "use_24h", str(bool(s.use_24h)))
        cfg.set(self.CLOCK, "show_seconds", str(bool(s.show_seconds)))
        cfg.set(self.CLOCK, "show_date", str(bool(s.show_date)))
        cfg.set(self.CONVERSION, "dst_policy", s.dst_policy)
        cfg.set(self.CONVERSION, "default_hour", str(int(s.default_hour)))
        cfg.set(self.CONVERSION, "default_minute", str(int(s.default_minute)))

        self._atomic_write(cfg, path)
        logger.info("World clock settings saved to %s", path)
        self._config.reload()

    @classmethod
    def from_form(
        cls,
        *,
        clock_count: str,
        update_interval_ms: str,
        use_24h: bool,
        show_seconds: bool,
        show_date: bool,
        strict_dst: bool,
        default_hour: str,
        default_minute: str,
    ) -> WorldClockSettings:
        """
        Builds validated settings from the raw values of the settings dialog.

        Raises:
            SettingsError: a numeric field is not a number or out of range.
        """
        numbers = {}
        for key, text in (
            ("clock_count", clock_count),
            ("update_interval_ms", update_interval_ms),
            ("default_hour", default_hour),
            ("default_minute", default_minute),
        ):
            try:
                numbers[key] = int(str(text).strip())
            except ValueError:
                raise SettingsError(f"{key} must be a whole number, got {text!r}") from None
        s = WorldClockSettings(
            use_24h=bool(use_24h),
            show_seconds=bool(show_seconds),
            show_date=bool(show_date),
            dst_policy=DST_POLICY_STRICT if strict_dst else DST_POLICY_LENIENT,
            **numbers,
        )
        cls.validate(s)
        return s

    @staticmethod
    def validate(s: WorldClockSettings) -> None:
        if s.clock_count < 1:
            raise SettingsError("[Clock] clock_count must be at least 1")
        if not MIN_INTERVAL_MS <= s.update_interval_ms <= MAX_INTERVAL_MS:
            raise SettingsError(
                f"[Clock] update_interval_ms must be between {MIN_INTERVAL_MS} and {MAX_INTERVAL_MS}"
            )
        if s.dst_policy not in DST_POLICIES:
            raise SettingsError(f"[Conversion] dst_policy must be one of {', '.join(DST_POLICIES)}")
        if not 0 <= s.default_hour <= 23 or not 0 <= s.default_minute <= 59:
            raise SettingsError("[Conversion] default_hour/default_minute out of range")

    # --- Internal helpers ---------------------------------------------------

    def _get(self, section: str, key: str, cast: type, default):
        try:
            value = self._config.get(section, key, cast=cast)
        except ValueError as ex:
            raise SettingsError(f"[{section}] {key}: {ex}") from ex
        return default if value is None else value

    @staticmethod
    def _atomic_write(cfg: configparser.ConfigParser, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            cfg.write(f)
        tmp.replace(path)
