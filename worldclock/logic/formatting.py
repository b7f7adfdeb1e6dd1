"""
Display strings for clock panels and the conversion table.
"""

from __future__ import annotations

from worldclock.models.civil_moment import CivilMoment


def time_format(use_24h: bool = True, show_seconds: bool = True) -> str:
    if use_24h:
        return "%H:%M:%S" if show_seconds else "%H:%M"
    return "%I:%M:%S %p" if show_seconds else "%I:%M %p"


def format_time(moment: CivilMoment, *, use_24h: bool = True, show_seconds: bool = True) -> str:
    """'14:05:09' by default."""
    return moment.time.strftime(time_format(use_24h, show_seconds))


def format_date(moment: CivilMoment) -> str:
    """'Sun, Mar 10, 2024' – day of month without zero padding."""
    d = moment.date
    return f"{d:%a, %b} {d.day}, {d.year}"


def format_offset(offset_seconds: int) -> str:
    """'+5:30', '-3:30', '+0:00' (hours unpadded, minutes padded)."""
    sign = "-" if offset_seconds < 0 else "+"
    hours, rest = divmod(abs(offset_seconds), 3600)
    return f"{sign}{hours}:{rest // 60:02d}"


def zone_caption(moment: CivilMoment) -> str:
    """'Asia/Kolkata (UTC+5:30)'."""
    return f"{moment.zone_id} (UTC{format_offset(moment.utc_offset_seconds)})"
