"""
ConversionPanel (Tkinter)
-------------------------
"Time in: [zone] [HH]:[MM] [Convert]" plus a Location / Date / Time grid.
The source zone's row is rendered bold.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

from worldclock.exceptions.errors import WorldClockError
from worldclock.logic.clock_source import utc_now
from worldclock.logic.conversion_engine import ConversionEngine, parse_request
from worldclock.logic.formatting import format_date, format_time
from worldclock.models.conversion import ConversionResult
from worldclock.models.worldclock_settings import WorldClockSettings

logger = logging.getLogger(__name__)

NORMAL_FONT = ("Segoe UI", 10)
BOLD_FONT = ("Segoe UI", 10, "bold")


class ConversionPanel(ttk.Frame):
    def __init__(self, parent: tk.Misc, *, engine: ConversionEngine,
                 settings: Optional[WorldClockSettings] = None) -> None:
        super().__init__(parent, padding=15, relief="groove", borderwidth=1)
        self._engine = engine
        self._settings = settings or WorldClockSettings()
        self.last_result: Optional[ConversionResult] = None
        self._build_ui()

    # --- UI -----------------------------------------------------------------

    def _build_ui(self) -> None:
        ttk.Label(self, text="Time Conversion", font=("Segoe UI", 16, "bold")).grid(
            row=0, column=0, sticky="w", pady=(0, 10)
        )

        row = ttk.Frame(self)
        row.grid(row=1, column=0, sticky="w")

        names = self._engine.catalog.display_names()
        ttk.Label(row, text="Time in:").pack(side="left", padx=(0, 6))
        self.source_var = tk.StringVar(value=names[0] if names else "")
        self.source_combo = ttk.Combobox(row, textvariable=self.source_var, values=names,
                                         state="readonly", width=26)
        self.source_combo.pack(side="left", padx=(0, 6))

        self.hour_var = tk.StringVar(value=f"{self._settings.default_hour:02d}")
        self.minute_var = tk.StringVar(value=f"{self._settings.default_minute:02d}")
        ttk.Entry(row, textvariable=self.hour_var, width=4).pack(side="left")
        ttk.Label(row, text=":").pack(side="left")
        ttk.Entry(row, textvariable=self.minute_var, width=4).pack(side="left", padx=(0, 6))
        ttk.Button(row, text="Convert", command=self.on_convert).pack(side="left")

        self.result_frame = ttk.Frame(self, padding=10)
        self.result_frame.grid(row=2, column=0, sticky="nsew")

    # --- Actions ------------------------------------------------------------

    def on_convert(self) -> None:
        try:
            zone_id = self._engine.catalog.lookup(self.source_var.get())
            request = parse_request(zone_id, self.hour_var.get(), self.minute_var.get())
            result = self._engine.convert(request, utc_now())
        except WorldClockError as ex:
            logger.info("Conversion rejected: %s", ex)
            messagebox.showerror("Input Error", str(ex), parent=self)
            return
        self.last_result = result
        self._render(result)

    def _render(self, result: ConversionResult) -> None:
        for child in self.result_frame.winfo_children():
            child.destroy()

        for col, title in enumerate(("Location", "Date", "Time")):
            ttk.Label(self.result_frame, text=title, font=BOLD_FONT).grid(
                row=0, column=col, sticky="w", padx=(0, 10)
            )

        for i, r in enumerate(result, start=1):
            font = BOLD_FONT if r.is_source else NORMAL_FONT
            if r.available:
                date_text = format_date(r.moment)
                time_text = format_time(r.moment, use_24h=self._settings.use_24h)
            else:
                date_text, time_text = "", "unavailable"
            for col, text in enumerate((r.zone_entry.display_name, date_text, time_text)):
                ttk.Label(self.result_frame, text=text, font=font).grid(
                    row=i, column=col, sticky="w", padx=(0, 10), pady=1
                )
