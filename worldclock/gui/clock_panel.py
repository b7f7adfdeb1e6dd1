"""
ClockPanel (Tkinter)
--------------------
One clock: zone picker, large time label, date line and zone caption.

The panel never computes times itself; it renders SlotUpdates pushed by the
refresh scheduler and reports zone selections back through `on_zone_selected`.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from worldclock.logic.formatting import format_date, format_time, zone_caption
from worldclock.logic.zone_catalog import ZoneCatalog
from worldclock.models.slot_update import SlotUpdate
from worldclock.models.worldclock_settings import WorldClockSettings

UNAVAILABLE = "unavailable"


class ClockPanel(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        slot_id: int,
        catalog: ZoneCatalog,
        zone_id: str,
        settings: WorldClockSettings,
        on_zone_selected: Optional[Callable[[int, str], None]] = None,
    ) -> None:
        super().__init__(parent, padding=10, relief="groove", borderwidth=1)
        self.slot_id = slot_id
        self._catalog = catalog
        self._settings = settings
        self._on_zone_selected = on_zone_selected

        self.columnconfigure(0, weight=1)

        self.zone_var = tk.StringVar(value=catalog.entry_for_zone(zone_id).display_name)
        self.zone_combo = ttk.Combobox(
            self, textvariable=self.zone_var, values=catalog.display_names(), state="readonly", width=28
        )
        self.zone_combo.grid(row=0, column=0, pady=(0, 4))
        self.zone_combo.bind("<<ComboboxSelected>>", self._on_select)

        self.time_var = tk.StringVar(value="--:--:--")
        self.date_var = tk.StringVar(value="")
        self.caption_var = tk.StringVar(value="")

        self.time_label = ttk.Label(self, textvariable=self.time_var, anchor="center")
        self.time_label.configure(font=("Segoe UI", 24, "bold"))
        self.time_label.grid(row=1, column=0, sticky="ew")

        self.date_label = ttk.Label(self, textvariable=self.date_var, anchor="center")
        self.date_label.grid(row=2, column=0, sticky="ew")

        self.caption_label = ttk.Label(self, textvariable=self.caption_var, anchor="center")
        self.caption_label.configure(font=("Segoe UI", 9, "italic"))
        self.caption_label.grid(row=3, column=0, sticky="ew")

    # --- Public API ---------------------------------------------------------

    def show(self, update: SlotUpdate) -> None:
        if not update.ok:
            self.time_var.set(UNAVAILABLE)
            self.date_var.set("")
            self.caption_var.set(update.zone_id)
            return
        m = update.moment
        self.time_var.set(
            format_time(m, use_24h=self._settings.use_24h, show_seconds=self._settings.show_seconds)
        )
        self.date_var.set(format_date(m) if self._settings.show_date else "")
        self.caption_var.set(zone_caption(m))

    # --- Events -------------------------------------------------------------

    def _on_select(self, _event: tk.Event) -> None:
        zone_id = self._catalog.lookup(self.zone_var.get())
        if self._on_zone_selected is not None:
            self._on_zone_selected(self.slot_id, zone_id)
