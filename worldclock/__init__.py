"""
World Clock feature package initializer.

Provides factory functions that a main window / feature loader can call to
create the world clock view without hard-coding internals.

The Tk views are imported lazily so the core (catalog, clock source,
conversion engine, refresh scheduler) stays importable without a display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .models.worldclock_settings import WorldClockSettings

if TYPE_CHECKING:
    import tkinter as tk

FEATURE_NAME = "World Clock"


def get_feature_name() -> str:
    """
    Human readable feature name (used e.g. for window titles).

    Returns:
        str: The feature name.
    """
    return FEATURE_NAME


def create_feature_view(parent: "tk.Misc", settings: Optional[WorldClockSettings] = None) -> "tk.Frame":
    """
    Factory for the main world clock view.

    Args:
        parent (tk.Misc): Tk container to mount the widget onto.
        settings (WorldClockSettings, optional): Loaded settings; defaults if omitted.

    Returns:
        tk.Frame: A fully wired view whose refresh scheduler is already running.
    """
    from .gui.world_clock_view import WorldClockView

    return WorldClockView(parent, settings=settings)
