"""Entry Parsing - Pure functions that derive facts from a day's entries.

All functions are pure: same input always produces same output, no side effects.
Malformed input degrades to "absent" or zero, never to an exception.
"""

import re
from typing import Iterable, Optional, Sequence

from .models import DayEntry, DayFacts


MAX_SLEEP_HOURS = 24.0

_DECIMAL_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def parse_sleep_hours(text: str) -> Optional[float]:
    """Parse a free-form sleep field into hours.

    Args:
        text: Sleep text as typed by the user

    Returns:
        Hours in (0, 24], or None if empty, not a plain decimal or out of range
    """
    stripped = text.strip()
    if not _DECIMAL_RE.fullmatch(stripped):
        return None

    hours = float(stripped)
    if not 0 < hours <= MAX_SLEEP_HOURS:
        return None
    return hours


def find_sleep_hours(entries: Iterable[DayEntry]) -> Optional[float]:
    """Return the first valid sleep value in store order, or None."""
    for entry in entries:
        hours = parse_sleep_hours(entry.sleep_text)
        if hours is not None:
            return hours
    return None


def max_step_count(entries: Iterable[DayEntry]) -> int:
    """Largest step snapshot among entries (0 if there are none)."""
    return max((e.step_count for e in entries), default=0)


def effective_steps(entries: Iterable[DayEntry], last_known_steps: Optional[int] = None) -> int:
    """Combine a live step reading with the logged snapshots.

    Args:
        entries: Today's entries
        last_known_steps: Freshest reading from the step source, if any

    Returns:
        The larger of the live reading and the highest logged snapshot
    """
    return max(last_known_steps or 0, max_step_count(entries))


def has_logged_text(values: Iterable[str]) -> bool:
    """True if any value has non-whitespace content."""
    return any(v.strip() for v in values)


def derive_facts(
    entries: Sequence[DayEntry],
    hour: int,
    last_known_steps: Optional[int] = None,
) -> DayFacts:
    """Derive everything the rule table looks at.

    Args:
        entries: Today's entries, in the order returned by the store
        hour: Current local hour (0-23)
        last_known_steps: Freshest reading from the step source, if any

    Returns:
        DayFacts for one evaluation cycle
    """
    return DayFacts(
        hour=hour,
        sleep_hours=find_sleep_hours(entries),
        effective_steps=effective_steps(entries, last_known_steps),
        has_food_logged=has_logged_text(e.food_text for e in entries),
        has_workout_logged=has_logged_text(e.workout_text for e in entries),
    )
