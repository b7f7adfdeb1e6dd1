"""
ZoneCatalog – the fixed, ordered list of zones offered by every picker.

The catalog is a flat static list so the widget never depends on enumerating
the zone database; its order drives both the pickers and the rows of the
conversion table.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from worldclock.exceptions.errors import NotFoundError
from worldclock.models.zone_entry import ZoneEntry

DEFAULT_ZONES: Sequence[tuple[str, str]] = (
    ("New York (EST/EDT)", "America/New_York"),
    ("London (GMT/BST)", "Europe/London"),
    ("Tokyo (JST)", "Asia/Tokyo"),
    ("Sydney (AEST/AEDT)", "Australia/Sydney"),
    ("Los Angeles (PST/PDT)", "America/Los_Angeles"),
    ("Paris (CET/CEST)", "Europe/Paris"),
    ("Dubai (GST)", "Asia/Dubai"),
    ("Singapore (SGT)", "Asia/Singapore"),
    ("Mumbai (IST)", "Asia/Kolkata"),
    ("Berlin (CET/CEST)", "Europe/Berlin"),
    ("Beijing (CST)", "Asia/Shanghai"),
    ("São Paulo (BRT/BRST)", "America/Sao_Paulo"),
    # European cities
    ("Prague (CET/CEST)", "Europe/Prague"),
    ("Vienna (CET/CEST)", "Europe/Vienna"),
    ("Warsaw (CET/CEST)", "Europe/Warsaw"),
    ("Budapest (CET/CEST)", "Europe/Budapest"),
    ("Rome (CET/CEST)", "Europe/Rome"),
    ("Amsterdam (CET/CEST)", "Europe/Amsterdam"),
    ("Madrid (CET/CEST)", "Europe/Madrid"),
    ("Stockholm (CET/CEST)", "Europe/Stockholm"),
    ("Athens (EET/EEST)", "Europe/Athens"),
    ("Helsinki (EET/EEST)", "Europe/Helsinki"),
    ("Lisbon (WET/WEST)", "Europe/Lisbon"),
    ("Dublin (GMT/IST)", "Europe/Dublin"),
)


class ZoneCatalog:
    """Immutable, insertion-ordered registry of ZoneEntry objects."""

    def __init__(self, entries: Iterable[ZoneEntry]) -> None:
        self._entries: tuple[ZoneEntry, ...] = tuple(entries)
        self._by_name: dict[str, ZoneEntry] = {}
        for entry in self._entries:
            if entry.display_name in self._by_name:
                raise ValueError(f"Duplicate display name in zone catalog: {entry.display_name!r}")
            self._by_name[entry.display_name] = entry

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "ZoneCatalog":
        return cls(ZoneEntry(name, zone_id) for name, zone_id in pairs)

    @classmethod
    def default(cls) -> "ZoneCatalog":
        return cls.from_pairs(DEFAULT_ZONES)

    # --- Public API ---------------------------------------------------------

    def list(self) -> tuple[ZoneEntry, ...]:
        return self._entries

    def size(self) -> int:
        return len(self._entries)

    def lookup(self, display_name: str) -> str:
        """
        Returns the zone id behind a picker label.

        Raises:
            NotFoundError: if the label is not part of the catalog.
        """
        try:
            return self._by_name[display_name].zone_id
        except KeyError:
            raise NotFoundError(f"No zone named {display_name!r} in catalog") from None

    def entry_for_zone(self, zone_id: str) -> ZoneEntry:
        for entry in self._entries:
            if entry.zone_id == zone_id:
                return entry
        raise NotFoundError(f"Zone {zone_id!r} is not part of the catalog")

    def display_names(self) -> list[str]:
        return [e.display_name for e in self._entries]

    def default_zone_for_slot(self, slot_index: int) -> str:
        """Slots start on successive catalog entries, wrapping around."""
        if not self._entries:
            raise NotFoundError("Zone catalog is empty")
        return self._entries[slot_index % len(self._entries)].zone_id

    # --- Dunder -------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ZoneEntry]:
        return iter(self._entries)

    def __contains__(self, display_name: object) -> bool:
        return display_name in self._by_name
