"""Unit tests for the rolling day log - pure functions, no mocks needed."""

from datetime import date, datetime

from src.core.models import DayEntry
from src.core.daylog import (
    entries_for_day,
    prune_entries,
    append_entry,
    remove_entry,
)


NOW = datetime(2026, 2, 14, 12, 0)


class TestEntriesForDay:
    """Tests for entries_for_day."""

    def test_filters_by_calendar_day(self):
        """Only entries stamped on the day are returned, in order."""
        entries = [
            DayEntry(food_text="late", timestamp=datetime(2026, 2, 14, 23, 59)),
            DayEntry(food_text="yesterday", timestamp=datetime(2026, 2, 13, 23, 59)),
            DayEntry(food_text="early", timestamp=datetime(2026, 2, 14, 0, 0)),
        ]
        today = entries_for_day(entries, date(2026, 2, 14))
        assert [e.food_text for e in today] == ["late", "early"]

    def test_no_entries(self):
        """An empty log gives an empty day."""
        assert entries_for_day([], date(2026, 2, 14)) == []


class TestPruneEntries:
    """Tests for prune_entries."""

    def test_drops_entries_older_than_a_week(self):
        """Entries beyond seven days are dropped."""
        entries = [
            DayEntry(food_text="keep", timestamp=datetime(2026, 2, 7, 12, 0)),
            DayEntry(food_text="drop", timestamp=datetime(2026, 2, 7, 11, 59)),
        ]
        kept = prune_entries(entries, NOW)
        assert [e.food_text for e in kept] == ["keep"]

    def test_sorted_newest_first(self):
        """Kept entries are sorted newest first."""
        entries = [
            DayEntry(food_text="old", timestamp=datetime(2026, 2, 10, 8, 0)),
            DayEntry(food_text="new", timestamp=datetime(2026, 2, 14, 8, 0)),
            DayEntry(food_text="mid", timestamp=datetime(2026, 2, 12, 8, 0)),
        ]
        assert [e.food_text for e in prune_entries(entries, NOW)] == ["new", "mid", "old"]


class TestAppendAndRemove:
    """Tests for append_entry and remove_entry."""

    def test_append_places_new_entry_first(self):
        """A new entry lands at the front of the log."""
        existing = [DayEntry(food_text="old", timestamp=datetime(2026, 2, 13, 8, 0))]
        new = DayEntry(food_text="new", timestamp=NOW)
        log = append_entry(existing, new, NOW)
        assert [e.food_text for e in log] == ["new", "old"]

    def test_remove_by_id(self):
        """Only the matching entry is removed."""
        a, b = DayEntry(food_text="a"), DayEntry(food_text="b")
        assert remove_entry([a, b], a.id) == [b]

    def test_remove_unknown_id(self):
        """Unknown IDs leave the log unchanged."""
        a = DayEntry(food_text="a")
        assert remove_entry([a], "missing") == [a]
