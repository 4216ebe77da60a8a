"""Build a wired engine from configuration."""

from datetime import timedelta

from rulebot.agent.engine import IntentEngine
from rulebot.config.schema import Config
from rulebot.index.similarity import SimilarityIndex
from rulebot.reminders.scheduler import NotificationSink, ReminderScheduler
from rulebot.reminders.timers import AsyncioTimer, Timer
from rulebot.tasks.store import TaskStore
from rulebot.types import ReminderNotification
from rulebot.utils.helpers import Clock, IdFactory, new_id, system_clock


def create_engine(
    config: Config | None = None,
    sink: NotificationSink | None = None,
    timer: Timer | None = None,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
) -> IntentEngine:
    """
    Create an engine with its own index, scheduler and task store.

    Every call builds independent components; nothing is shared between
    engines. Fired reminders mark their task's ``reminder_sent`` flag before
    being forwarded to ``sink``.
    """
    config = config or Config()
    clock = clock or system_clock
    id_factory = id_factory or new_id

    index = SimilarityIndex(
        dimensions=config.index.dimensions,
        min_token_length=config.index.min_token_length,
    )
    tasks = TaskStore(max_tasks=config.tasks.max_tasks, clock=clock)

    def deliver(notification: ReminderNotification) -> None:
        tasks.mark_reminder_sent(notification.task_id)
        if sink is not None:
            sink(notification)

    scheduler = ReminderScheduler(
        timer=timer or AsyncioTimer(),
        sink=deliver,
        clock=clock,
        id_factory=id_factory,
        grace=timedelta(minutes=config.reminders.grace_minutes),
        window_hours=config.reminders.upcoming_window_hours,
    )
    tasks.scheduler = scheduler

    return IntentEngine(
        index=index,
        scheduler=scheduler,
        tasks=tasks,
        clock=clock,
        id_factory=id_factory,
        top_k=config.agent.top_k,
        min_similarity=config.agent.min_similarity,
    )
