"""
WorldClockSettingsWidget (Tkinter)
----------------------------------
Settings editor for the world clock with validation, live preview and
atomic persistence through WorldClockSettingsRepository.

Save writes the machine config.ini and hands the reloaded settings to the
optional `on_saved` callback so the host can rebuild its clock view.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Optional

from worldclock.exceptions.errors import SettingsError
from worldclock.logic.clock_source import ClockSource, utc_now
from worldclock.logic.formatting import format_date, format_time
from worldclock.logic.worldclock_settings_repository import (
    MAX_INTERVAL_MS,
    MIN_INTERVAL_MS,
    WorldClockSettingsRepository,
)
from worldclock.models.worldclock_settings import WorldClockSettings

logger = logging.getLogger(__name__)

PREVIEW_ZONE = "Etc/UTC"


class WorldClockSettingsWidget(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        repository: Optional[WorldClockSettingsRepository] = None,
        settings: Optional[WorldClockSettings] = None,
        on_saved: Optional[Callable[[WorldClockSettings], None]] = None,
    ) -> None:
        super().__init__(parent, padding=10)
        self._repo = repository or WorldClockSettingsRepository()
        self._settings = settings or WorldClockSettings()
        self._on_saved = on_saved
        self._clock = ClockSource()

        self._build_ui()
        self._populate_from_model()
        self._update_preview()

    # --- UI -----------------------------------------------------------------

    def _build_ui(self) -> None:
        self.columnconfigure(1, weight=1)

        ttk.Label(self, text="Number of clocks").grid(row=0, column=0, sticky="w", padx=10, pady=4)
        self.clock_count_ctrl = ttk.Spinbox(self, from_=1, to=12, increment=1, width=8)
        self.clock_count_ctrl.grid(row=0, column=1, sticky="w", padx=10, pady=4)

        ttk.Label(self, text="Update interval (ms)").grid(row=1, column=0, sticky="w", padx=10, pady=4)
        self.update_ms_ctrl = ttk.Spinbox(self, from_=MIN_INTERVAL_MS, to=MAX_INTERVAL_MS, increment=50, width=8)
        self.update_ms_ctrl.grid(row=1, column=1, sticky="w", padx=10, pady=4)

        self.use_24h_var = tk.BooleanVar(value=True)
        self.show_seconds_var = tk.BooleanVar(value=True)
        self.show_date_var = tk.BooleanVar(value=True)
        self.strict_dst_var = tk.BooleanVar(value=False)

        for row, (text, var) in enumerate((
            ("Use 24-hour clock", self.use_24h_var),
            ("Show seconds", self.show_seconds_var),
            ("Show date line", self.show_date_var),
            ("Reject skipped or repeated DST times in conversions", self.strict_dst_var),
        ), start=2):
            ttk.Checkbutton(self, text=text, variable=var, command=self._update_preview).grid(
                row=row, column=0, columnspan=2, sticky="w", padx=10, pady=4
            )

        ttk.Label(self, text="Default conversion time").grid(row=6, column=0, sticky="w", padx=10, pady=4)
        hm = ttk.Frame(self)
        hm.grid(row=6, column=1, sticky="w", padx=10, pady=4)
        self.default_hour_ctrl = ttk.Entry(hm, width=4)
        self.default_hour_ctrl.pack(side="left")
        ttk.Label(hm, text=":").pack(side="left")
        self.default_minute_ctrl = ttk.Entry(hm, width=4)
        self.default_minute_ctrl.pack(side="left")

        # Preview
        ttk.Separator(self).grid(row=7, column=0, columnspan=2, sticky="ew", padx=10, pady=8)
        ttk.Label(self, text="Preview (UTC)").grid(row=8, column=0, sticky="w", padx=10, pady=(0, 4))
        self.preview_time_var = tk.StringVar(value="")
        self.preview_date_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.preview_time_var, font=("Segoe UI", 18, "bold")).grid(
            row=9, column=0, columnspan=2, sticky="w", padx=10
        )
        ttk.Label(self, textvariable=self.preview_date_var, font=("Segoe UI", 11)).grid(
            row=10, column=0, columnspan=2, sticky="w", padx=10, pady=(0, 8)
        )

        # Buttons
        ttk.Separator(self).grid(row=11, column=0, columnspan=2, sticky="ew", padx=10, pady=8)
        btns = ttk.Frame(self)
        btns.grid(row=12, column=0, columnspan=2, sticky="e", padx=10, pady=(0, 12))
        ttk.Button(btns, text="Save", command=self._on_save).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Reset to defaults", command=self._on_reset).grid(row=0, column=1)

    # --- Data binding -------------------------------------------------------

    def _populate_from_model(self) -> None:
        s = self._settings
        self._set_text(self.clock_count_ctrl, str(s.clock_count))
        self._set_text(self.update_ms_ctrl, str(s.update_interval_ms))
        self.use_24h_var.set(s.use_24h)
        self.show_seconds_var.set(s.show_seconds)
        self.show_date_var.set(s.show_date)
        self.strict_dst_var.set(s.strict_dst)
        self._set_text(self.default_hour_ctrl, f"{s.default_hour:02d}")
        self._set_text(self.default_minute_ctrl, f"{s.default_minute:02d}")

    def _collect_to_model(self) -> WorldClockSettings:
        return WorldClockSettingsRepository.from_form(
            clock_count=self.clock_count_ctrl.get(),
            update_interval_ms=self.update_ms_ctrl.get(),
            use_24h=self.use_24h_var.get(),
            show_seconds=self.show_seconds_var.get(),
            show_date=self.show_date_var.get(),
            strict_dst=self.strict_dst_var.get(),
            default_hour=self.default_hour_ctrl.get(),
            default_minute=self.default_minute_ctrl.get(),
        )

    # --- Actions ------------------------------------------------------------

    def _on_save(self) -> None:
        try:
            model = self._collect_to_model()
            self._repo.save(model)
            self._settings = self._repo.load()
        except SettingsError as ex:
            logger.info("Settings rejected: %s", ex)
            messagebox.showerror("Invalid settings", str(ex), parent=self)
            return

        self._update_preview()
        if self._on_saved is not None:
            self._on_saved(self._settings)

    def _on_reset(self) -> None:
        self._settings = WorldClockSettings()
        self._populate_from_model()
        self._update_preview()

    # --- Preview ------------------------------------------------------------

    def _update_preview(self) -> None:
        try:
            s = self._collect_to_model()
        except SettingsError:
            s = self._settings
        moment = self._clock.now(PREVIEW_ZONE, utc_now())
        self.preview_time_var.set(format_time(moment, use_24h=s.use_24h, show_seconds=s.show_seconds))
        self.preview_date_var.set(format_date(moment) if s.show_date else "")

    # --- Helpers ------------------------------------------------------------

    @staticmethod
    def _set_text(ctrl: ttk.Entry, value: str) -> None:
        ctrl.delete(0, "end")
        ctrl.insert(0, value)
