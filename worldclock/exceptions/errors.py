"""World clock feature exceptions."""
from __future__ import annotations


class WorldClockError(Exception):
    """Base exception for the world clock feature."""


class NotFoundError(WorldClockError, LookupError):
    """Raised when a display name or zone is not part of the catalog."""


class UnknownZoneError(WorldClockError):
    """Raised when the zone rule database cannot resolve a zone identifier."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Unknown time zone: {zone_id!r}")
        self.zone_id = zone_id


class InvalidTimeError(WorldClockError, ValueError):
    """Raised for hour/minute input outside 0-23 / 0-59 or non-numeric input."""


class DstResolutionError(WorldClockError, ValueError):
    """Raised by strict conversion when a civil time does not map to one instant."""

    def __init__(self, message: str, *, zone_id: str, wall) -> None:
        super().__init__(message)
        self.zone_id = zone_id
        self.wall = wall


class AmbiguousTimeError(DstResolutionError):
    """The civil time occurs twice (clocks fell back over it)."""


class NonexistentTimeError(DstResolutionError):
    """The civil time never occurs (clocks sprang forward over it)."""


class SchedulerStateError(WorldClockError, RuntimeError):
    """Raised on an illegal refresh scheduler lifecycle transition."""


class SettingsError(WorldClockError, ValueError):
    """Raised when a configured world clock setting is out of range."""
