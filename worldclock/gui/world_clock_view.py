"""
WorldClockView (Tkinter)
------------------------
Clock panels on the left, the time conversion panel on the right.

Conventions:
- The view owns the ClockSlots; the RefreshScheduler only refreshes them.
- Ticks come from Tk's `after`, so slot updates arrive on the UI thread.
- Destroying the view stops the scheduler.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from worldclock.gui.clock_panel import ClockPanel
from worldclock.gui.conversion_panel import ConversionPanel
from worldclock.gui.tk_trigger import TkAfterTrigger
from worldclock.logic.clock_source import ClockSource
from worldclock.logic.conversion_engine import ConversionEngine
from worldclock.logic.refresh_scheduler import RefreshScheduler
from worldclock.logic.zone_catalog import ZoneCatalog
from worldclock.models.clock_slot import ClockSlot
from worldclock.models.slot_update import SlotUpdate
from worldclock.models.worldclock_settings import WorldClockSettings

logger = logging.getLogger(__name__)


class WorldClockView(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        settings: Optional[WorldClockSettings] = None,
        catalog: Optional[ZoneCatalog] = None,
        clock_source: Optional[ClockSource] = None,
    ) -> None:
        super().__init__(parent, padding=10)
        self._settings = settings or WorldClockSettings()
        self._catalog = catalog or ZoneCatalog.default()
        self._clock = clock_source or ClockSource()

        self.slots: List[ClockSlot] = [
            ClockSlot(self._catalog.default_zone_for_slot(i)) for i in range(self._settings.clock_count)
        ]
        self.panels: List[ClockPanel] = []

        self._build_ui()

        self.scheduler = RefreshScheduler(
            self._clock,
            self.slots,
            interval_ms=self._settings.update_interval_ms,
            trigger=TkAfterTrigger(self),
        )
        self.scheduler.subscribe(self._on_slot_update)
        self.scheduler.start()

    # --- UI -----------------------------------------------------------------

    def _build_ui(self) -> None:
        clocks = ttk.Frame(self, padding=10)
        clocks.grid(row=0, column=0, sticky="n")

        for i, slot in enumerate(self.slots):
            panel = ClockPanel(
                clocks,
                slot_id=i,
                catalog=self._catalog,
                zone_id=slot.selected_zone_id,
                settings=self._settings,
                on_zone_selected=self._on_zone_selected,
            )
            panel.grid(row=i, column=0, sticky="ew", pady=5)
            self.panels.append(panel)

        engine = ConversionEngine(self._catalog, self._clock, dst_policy=self._settings.dst_policy)
        self.conversion_panel = ConversionPanel(self, engine=engine, settings=self._settings)
        self.conversion_panel.grid(row=0, column=1, sticky="nsew", padx=(15, 0))

    # --- Events -------------------------------------------------------------

    def _on_slot_update(self, update: SlotUpdate) -> None:
        self.panels[update.slot_id].show(update)

    def _on_zone_selected(self, slot_id: int, zone_id: str) -> None:
        logger.debug("Clock slot %d switched to %s", slot_id, zone_id)
        self.slots[slot_id].select_zone(zone_id)
        self.scheduler.refresh_slot(slot_id)

    def destroy(self) -> None:
        self.scheduler.stop()
        super().destroy()
