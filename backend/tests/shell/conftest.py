"""Shared fixtures for shell tests."""

from datetime import datetime

import pytest

from src.core.models import DayEntry
from src.shell.engine import RecommendationEngine
from src.shell.log_store import DailyLogStore, LogStoreConfig


MORNING = datetime(2026, 2, 14, 9, 0)


class FakeScheduler:
    """Scheduler stand-in that only ticks when told to."""

    def __init__(self):
        self.jobs = []
        self.started = False
        self.shutdown_count = 0

    def add_job(self, func, trigger, **kwargs):
        self.jobs.append((func, trigger, kwargs))

    def start(self):
        self.started = True

    def shutdown(self, wait=True):
        self.shutdown_count += 1

    @property
    def interval(self):
        return self.jobs[0][2]["seconds"]

    def tick(self):
        for func, _, _ in self.jobs:
            func()


class FakeStore:
    """In-memory entry source."""

    def __init__(self, entries=None):
        self.entries: list[DayEntry] = list(entries or [])

    def get_today_entries(self):
        return list(self.entries)


class Clock:
    """Settable clock."""

    def __init__(self, now: datetime = MORNING):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def schedulers():
    return []


@pytest.fixture
def make_engine(clock, schedulers):
    """Build engines with fake schedulers; all are closed after the test."""
    engines = []

    def factory():
        scheduler = FakeScheduler()
        schedulers.append(scheduler)
        return scheduler

    def build(store, **kwargs):
        kwargs.setdefault("clock", clock)
        engine = RecommendationEngine(store, scheduler_factory=factory, **kwargs)
        engines.append(engine)
        return engine

    yield build

    for engine in engines:
        engine.close()


@pytest.fixture
def log_store(tmp_path, clock):
    return DailyLogStore(LogStoreConfig(data_dir=tmp_path), clock=clock)
