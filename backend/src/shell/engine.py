"""Recommendation Engine - Keeps the current recommendation fresh.

Owns the periodic scheduler and the published recommendation state. The
scoring itself lives in core.recommender; this module only gathers inputs,
serializes recomputation and notifies subscribers.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler

from ..core.models import DayEntry
from ..core.recommender import evaluate


logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 3600.0
LOADING_RECOMMENDATION = "Loading recommendation..."
RECOMPUTE_JOB_ID = "recompute-recommendation"

Subscriber = Callable[[str], None]


class EntrySource(Protocol):
    """Anything that can list today's entries."""

    def get_today_entries(self) -> Sequence[DayEntry]: ...


class RecommendationEngine:
    """Publishes the current recommendation and recomputes it on demand.

    Recomputes once on construction, on every scheduled tick and on refresh().
    The scheduler is acquired here and released by close(); use the engine as
    a context manager to release it on every exit path.
    """

    def __init__(
        self,
        store: EntrySource,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        scheduler_factory: Callable[[], BaseScheduler] = BackgroundScheduler,
    ) -> None:
        """Initialize the engine and start periodic recomputation.

        Args:
            store: Source of today's entries
            interval: Seconds between automatic recomputations
            clock: Source of the current local time
            scheduler_factory: Builds the scheduler that owns the interval job
        """
        self._store = store
        self._clock = clock
        self._lock = threading.RLock()
        self._subscribers: list[Subscriber] = []
        self._current_recommendation = LOADING_RECOMMENDATION
        self._last_known_step_count: Optional[int] = None
        self._closed = False

        self._recompute()

        self._scheduler = scheduler_factory()
        self._scheduler.add_job(
            self._recompute,
            "interval",
            seconds=interval,
            id=RECOMPUTE_JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info("Recommendation engine started (interval %.0fs)", interval)

    def __enter__(self) -> "RecommendationEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def current_recommendation(self) -> str:
        return self._current_recommendation

    @property
    def last_known_step_count(self) -> Optional[int]:
        return self._last_known_step_count

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> tuple[str, Optional[int]]:
        """Current recommendation and the step count it was computed with."""
        with self._lock:
            return self._current_recommendation, self._last_known_step_count

    def refresh(self, step_count: Optional[int] = None) -> str:
        """Recompute now, optionally with a fresher step reading.

        A supplied step count replaces the last known one, even if lower.
        Negative readings are clamped to zero.

        Args:
            step_count: Latest reading from the step source, if any

        Returns:
            The new recommendation
        """
        return self._recompute(step_count)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every recomputation.

        Callbacks run on whichever thread triggered the recomputation,
        including the scheduler's worker thread, and must not call close().

        Args:
            callback: Called with the new recommendation text

        Returns:
            A function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def close(self) -> None:
        """Stop the scheduler and wait for a running tick. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._scheduler.shutdown(wait=True)
        logger.info("Recommendation engine stopped")

    def _today_entries(self) -> Sequence[DayEntry]:
        try:
            return self._store.get_today_entries()
        except Exception as e:
            logger.error("Failed to read today's entries: %s", str(e))
            return []

    def _recompute(self, step_count: Optional[int] = None) -> str:
        with self._lock:
            if step_count is not None:
                self._last_known_step_count = max(step_count, 0)
            entries = self._today_entries()
            hour = self._clock().hour
            recommendation = evaluate(entries, hour, self._last_known_step_count)
            self._current_recommendation = recommendation
            subscribers = list(self._subscribers)
            logger.debug(
                "Recommendation at hour %d from %d entries: %s",
                hour, len(entries), recommendation,
            )

        # Subscribers run without the lock held.
        for callback in subscribers:
            try:
                callback(recommendation)
            except Exception:
                logger.exception("Recommendation subscriber failed")
        return recommendation
