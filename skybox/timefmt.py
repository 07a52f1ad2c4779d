"""Formatting of remaining-time values."""

from __future__ import annotations


def format_time(total_seconds: int) -> str:
    """``HH:MM:SS`` when there are hours, else ``MM:SS``; negative means unknown."""
    if total_seconds < 0:
        return "--:--"
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"