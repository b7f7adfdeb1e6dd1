"""
Data model for a single selectable time zone.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ZoneEntry:
    """
    One row of the zone catalog.

    Attributes:
        display_name (str): Human readable label incl. abbreviation hint,
            e.g. "New York (EST/EDT)". Unique within a catalog.
        zone_id (str): IANA identifier, e.g. "America/New_York".
    """
    display_name: str
    zone_id: str

    def __str__(self) -> str:
        return self.display_name
