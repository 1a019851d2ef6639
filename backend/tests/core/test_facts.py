"""Unit tests for entry parsing - pure functions, no mocks needed."""

import pytest

from src.core.models import DayEntry
from src.core.facts import (
    parse_sleep_hours,
    find_sleep_hours,
    max_step_count,
    effective_steps,
    has_logged_text,
    derive_facts,
)


class TestParseSleepHours:
    """Tests for parse_sleep_hours."""

    def test_decimal(self):
        """Decimal hours are parsed."""
        assert parse_sleep_hours("7.5") == 7.5

    def test_whole_number(self):
        """Whole hours are parsed."""
        assert parse_sleep_hours("8") == 8.0

    def test_upper_bound_inclusive(self):
        """24 hours is the largest accepted value."""
        assert parse_sleep_hours("24") == 24.0

    def test_surrounding_whitespace(self):
        """Whitespace around the number is ignored."""
        assert parse_sleep_hours(" 6.5 ") == 6.5

    def test_bare_decimal_point(self):
        """Leading or trailing decimal points are plain decimals."""
        assert parse_sleep_hours(".5") == 0.5
        assert parse_sleep_hours("7.") == 7.0

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "abc", "30", "0", "-2", "24.1", "nan", "inf", "1_0", "1e1", "+7", "\uff17", "7.5h"],
    )
    def test_invalid_is_unknown(self, text):
        """Empty, non-decimal and out-of-range values are treated as not logged."""
        assert parse_sleep_hours(text) is None


class TestFindSleepHours:
    """Tests for find_sleep_hours."""

    def test_no_entries(self):
        """No entries means unknown sleep."""
        assert find_sleep_hours([]) is None

    def test_first_valid_wins(self):
        """The first parseable value in store order is used."""
        entries = [
            DayEntry(sleep_text=""),
            DayEntry(sleep_text="abc"),
            DayEntry(sleep_text="5"),
            DayEntry(sleep_text="9"),
        ]
        assert find_sleep_hours(entries) == 5.0

    def test_all_invalid(self):
        """Only invalid values means unknown sleep."""
        entries = [DayEntry(sleep_text="30"), DayEntry(sleep_text="lots")]
        assert find_sleep_hours(entries) is None


class TestStepCounts:
    """Tests for max_step_count and effective_steps."""

    def test_max_of_empty(self):
        """No entries means zero steps."""
        assert max_step_count([]) == 0

    def test_max_across_entries(self):
        """The highest snapshot is used, not the latest."""
        entries = [DayEntry(step_count=1200), DayEntry(step_count=4500), DayEntry(step_count=3000)]
        assert max_step_count(entries) == 4500

    def test_live_reading_higher(self):
        """A higher live reading beats the logged snapshots."""
        assert effective_steps([DayEntry(step_count=2000)], 6000) == 6000

    def test_logged_snapshot_higher(self):
        """A lower live reading does not hide a higher snapshot."""
        assert effective_steps([DayEntry(step_count=7000)], 500) == 7000

    def test_no_live_reading(self):
        """Missing live reading counts as zero."""
        assert effective_steps([DayEntry(step_count=100)], None) == 100
        assert effective_steps([], None) == 0


class TestHasLoggedText:
    """Tests for has_logged_text."""

    def test_whitespace_only_is_not_logged(self):
        """Whitespace does not count as logged."""
        assert has_logged_text(["", "  ", "\n"]) is False

    def test_any_content_is_logged(self):
        """Any real text counts."""
        assert has_logged_text(["", "eggs"]) is True


class TestDeriveFacts:
    """Tests for derive_facts."""

    def test_empty_day(self):
        """An empty day has nothing logged and unknown sleep."""
        facts = derive_facts([], hour=9)
        assert facts.hour == 9
        assert facts.sleep_hours is None
        assert facts.effective_steps == 0
        assert facts.has_food_logged is False
        assert facts.has_workout_logged is False

    def test_full_day(self):
        """Facts are gathered across all entries."""
        entries = [
            DayEntry(food_text="Oats", step_count=2500),
            DayEntry(sleep_text="6.5", workout_text="Run", step_count=4000),
        ]
        facts = derive_facts(entries, hour=18, last_known_steps=3500)
        assert facts.sleep_hours == 6.5
        assert facts.effective_steps == 4000
        assert facts.has_food_logged is True
        assert facts.has_workout_logged is True
        assert facts.is_evening is True
