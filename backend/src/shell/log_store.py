"""Log Store - Local persistence for day entries and the home location.

This module handles all disk I/O for the rolling day log.
All I/O is contained here; business logic is in the core module.
"""

import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from ..core.models import Coordinate, DayEntry
from ..core.daylog import append_entry, entries_for_day, remove_entry


logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[DayEntry])


@dataclass
class LogStoreConfig:
    """Configuration for the log store.

    Attributes:
        data_dir: Directory holding the key files
        entries_key: File name for the rolling log
        home_key: File name for the saved home location
    """

    data_dir: Path = Path.home() / ".healthlog"
    entries_key: str = "health_data_log.json"
    home_key: str = "home_location.json"

    @classmethod
    def from_env(cls) -> "LogStoreConfig":
        """Build config from HEALTHLOG_DATA_DIR, falling back to defaults."""
        data_dir = os.environ.get("HEALTHLOG_DATA_DIR")
        if data_dir:
            return cls(data_dir=Path(data_dir).expanduser())
        return cls()


class DailyLogStore:
    """Key-value store for the 7-day entry log, backed by JSON files.

    Layout under data_dir:
        health_data_log.json: [ {id, timestamp, food_text, ...}, ... ]
        home_location.json: { latitude, longitude }
    """

    def __init__(
        self,
        config: LogStoreConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the store.

        Args:
            config: Store configuration
            clock: Source of the current local time
        """
        self.config = config or LogStoreConfig()
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def entries_path(self) -> Path:
        return self.config.data_dir / self.config.entries_key

    @property
    def home_path(self) -> Path:
        return self.config.data_dir / self.config.home_key

    def _write(self, path: Path, payload: bytes) -> None:
        """Replace a key file atomically."""
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_bytes(payload)
        os.replace(tmp_path, path)

    def _read_entries(self) -> list[DayEntry]:
        if not self.entries_path.exists():
            return []
        return _entries_adapter.validate_json(self.entries_path.read_bytes())

    def _write_entries(self, entries: list[DayEntry]) -> None:
        self._write(self.entries_path, _entries_adapter.dump_json(entries))

    # ==================== Entry Operations ====================

    def get_all_entries(self) -> list[DayEntry]:
        """Fetch the full rolling log.

        Returns:
            All stored entries, newest first (empty if unreadable)
        """
        try:
            with self._lock:
                return self._read_entries()
        except (OSError, ValidationError) as e:
            logger.error("Failed to read entries: %s", str(e))
            return []

    def get_today_entries(self) -> list[DayEntry]:
        """Fetch entries stamped on the current local calendar day."""
        today = self._clock().date()
        entries = entries_for_day(self.get_all_entries(), today)
        logger.debug("Found %d entries for %s", len(entries), today)
        return entries

    def save_entry(
        self,
        food: str = "",
        sleep: str = "",
        workout: str = "",
        step_count: int = 0,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> DayEntry | None:
        """Create an entry stamped now and add it to the log.

        Entries older than the retention window are dropped on every save.

        Args:
            food: Food eaten
            sleep: Hours of sleep, as typed
            workout: Workouts completed
            step_count: Step snapshot at entry time
            latitude: Current latitude, if known
            longitude: Current longitude, if known

        Returns:
            The stored entry if successful, None otherwise
        """
        location = None
        if latitude is not None and longitude is not None:
            location = Coordinate(latitude=latitude, longitude=longitude)

        now = self._clock()
        entry = DayEntry(
            timestamp=now,
            food_text=food,
            sleep_text=sleep,
            workout_text=workout,
            step_count=step_count,
            location=location,
        )

        logger.info("Saving entry %s", entry.id[:8])
        try:
            with self._lock:
                try:
                    existing = self._read_entries()
                except ValidationError as e:
                    logger.warning("Discarding unreadable log: %s", str(e))
                    existing = []
                self._write_entries(append_entry(existing, entry, now))
            return entry
        except OSError as e:
            logger.error("Failed to save entry: %s", str(e))
            return None

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry by ID.

        Args:
            entry_id: ID of the entry to delete

        Returns:
            True if an entry was removed
        """
        try:
            with self._lock:
                entries = self._read_entries()
                remaining = remove_entry(entries, entry_id)
                if len(remaining) == len(entries):
                    logger.warning("Entry not found: %s", entry_id)
                    return False
                self._write_entries(remaining)
            return True
        except (OSError, ValidationError) as e:
            logger.error("Failed to delete entry: %s", str(e))
            return False

    # ==================== Home Location Operations ====================

    def get_home_location(self) -> Coordinate | None:
        """Fetch the saved home location, or None if unset or unreadable."""
        try:
            with self._lock:
                if not self.home_path.exists():
                    return None
                return Coordinate.model_validate_json(self.home_path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.error("Failed to read home location: %s", str(e))
            return None

    def set_home_location(self, home: Coordinate) -> bool:
        """Save the home location.

        Returns:
            True if successful
        """
        logger.info("Saving home location")
        try:
            with self._lock:
                self._write(self.home_path, home.model_dump_json().encode())
            return True
        except OSError as e:
            logger.error("Failed to save home location: %s", str(e))
            return False
