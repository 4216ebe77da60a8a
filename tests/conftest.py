"""Shared fixtures: deterministic clock, manual timer, sequential ids."""

from datetime import datetime, timedelta
from typing import Callable

import pytest

from rulebot.agent.engine import IntentEngine
from rulebot.index.similarity import SimilarityIndex
from rulebot.reminders.scheduler import ReminderScheduler
from rulebot.tasks.store import TaskStore
from rulebot.types import Rule

NOW = datetime(2026, 3, 2, 9, 0, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class ManualTimer:
    """Timer whose callbacks run when the fake clock is advanced."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._pending: dict[int, tuple[datetime, Callable[[], None]]] = {}
        self._next_handle = 0
        self.cancelled: list[int] = []

    def after(self, delay: float, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = (self.clock() + timedelta(seconds=delay), callback)
        return self._next_handle

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        self._pending.pop(handle, None)

    def advance(self, delta: timedelta) -> None:
        self.clock.advance(delta)
        due = sorted(
            (at, handle) for handle, (at, _) in self._pending.items() if at <= self.clock()
        )
        for _, handle in due:
            _, callback = self._pending.pop(handle)
            callback()

    @property
    def armed(self) -> int:
        return len(self._pending)


class SequentialIds:
    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(clock):
    return ManualTimer(clock)


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def notifications():
    """List collecting every notification delivered to the sink."""
    return []


@pytest.fixture
def scheduler(timer, clock, ids, notifications):
    return ReminderScheduler(timer, sink=notifications.append, clock=clock, id_factory=ids)


@pytest.fixture
def index():
    return SimilarityIndex()


@pytest.fixture
def task_store(scheduler, clock):
    return TaskStore(max_tasks=100, scheduler=scheduler, clock=clock)


@pytest.fixture
def engine(index, scheduler, task_store, clock, ids):
    return IntentEngine(index, scheduler, tasks=task_store, clock=clock, id_factory=ids)


@pytest.fixture
def sample_rules():
    """A small rule corpus as produced by document ingestion."""
    return [
        Rule(id="r1", content="If two meetings overlap, reschedule the less important one",
             source="text/plain", priority=5, category="scheduling"),
        Rule(id="r2", content="Urgent client deadlines take priority; cancel gym sessions if needed",
             source="text/plain", priority=10, category="time-management"),
        Rule(id="r3", content="Always exercise at the gym three times a week",
             source="text/csv", priority=3, category="health"),
        Rule(id="r4", content="Check the schedule before accepting a new appointment",
             source="application/json", priority=5, category="scheduling"),
    ]
