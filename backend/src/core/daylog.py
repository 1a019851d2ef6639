"""Rolling Day Log - Pure functions over the 7-day entry log.

All functions are pure: same input always produces same output, no side effects.
"""

from datetime import date, datetime, timedelta
from typing import Iterable

from .models import DayEntry


RETENTION_DAYS = 7


def entries_for_day(entries: Iterable[DayEntry], day: date) -> list[DayEntry]:
    """Filter entries to those stamped on a calendar day, preserving order."""
    return [e for e in entries if e.timestamp.date() == day]


def prune_entries(
    entries: Iterable[DayEntry],
    now: datetime,
    retention_days: int = RETENTION_DAYS,
) -> list[DayEntry]:
    """Drop entries older than the retention window and sort newest first.

    Args:
        entries: Entries in any order
        now: Reference time for the window
        retention_days: Days of history to keep

    Returns:
        Entries within the window, newest first
    """
    cutoff = now - timedelta(days=retention_days)
    kept = [e for e in entries if e.timestamp >= cutoff]
    return sorted(kept, key=lambda e: e.timestamp, reverse=True)


def append_entry(entries: Iterable[DayEntry], entry: DayEntry, now: datetime) -> list[DayEntry]:
    """Add an entry and re-apply the retention window."""
    return prune_entries([*entries, entry], now)


def remove_entry(entries: Iterable[DayEntry], entry_id: str) -> list[DayEntry]:
    """Return entries without the one matching entry_id."""
    return [e for e in entries if e.id != entry_id]
