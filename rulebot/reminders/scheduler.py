"""Reminder scheduler - one pending timer per active reminder."""

# 模块作用：提醒调度服务，为任务安排、触发和取消提醒
# 设计目的：每个待触发提醒对应一个定时器句柄，时间与定时器均可注入
from datetime import datetime, timedelta
from typing import Any, Callable

from loguru import logger

from rulebot.reminders.timers import Timer
from rulebot.reminders.timing import compose_message
from rulebot.types import Reminder, ReminderNotification, ReminderType, Task
from rulebot.utils.helpers import Clock, IdFactory, new_id, system_clock

NotificationSink = Callable[[ReminderNotification], None]

DEFAULT_GRACE = timedelta(minutes=5)


# 作用：提醒调度器核心类，维护待触发提醒表与定时器句柄
# 设计目的：同一任务最多保留一个待触发提醒，重新安排会取代旧提醒
class ReminderScheduler:
    """
    Arms, fires and cancels reminders for tasks.

    Reminders live in the pending table from ``schedule`` until they fire or
    are cancelled. A task has at most one pending reminder: scheduling again
    for the same task supersedes the previous one.
    """

    def __init__(
        self,
        timer: Timer,
        sink: NotificationSink | None = None,
        clock: Clock = system_clock,
        id_factory: IdFactory = new_id,
        grace: timedelta = DEFAULT_GRACE,
        window_hours: float = 24,
    ):
        """
        Args:
            timer: Backend providing ``after``/``cancel``.
            sink: Receives a notification when a reminder fires.
            clock: Source of the current time.
            id_factory: Generates reminder ids.
            grace: Late reminders within this window fire immediately;
                staler ones are dropped.
            window_hours: Default look-ahead for ``upcoming``.
        """
        self.timer = timer
        self.sink = sink
        self.clock = clock
        self.id_factory = id_factory
        self.grace = grace
        self.window_hours = window_hours
        self._reminders: dict[str, Reminder] = {}
        self._handles: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._reminders)

    # 作用：为任务安排提醒
    # 设计目的：宽限期内的迟到提醒立即触发，更早的直接丢弃
    def schedule(
        self,
        task: Task,
        reminder_time: datetime,
        reminder_type: ReminderType = ReminderType.DEADLINE,
    ) -> Reminder | None:
        """
        Schedule a reminder for ``task`` at ``reminder_time``.

        Returns:
            The reminder, or None when ``reminder_time`` is older than the
            grace window and the request was dropped. A dropped request
            leaves the task's pending reminder in place.
        """
        delay = (reminder_time - self.clock()).total_seconds()
        if delay < -self.grace.total_seconds():
            logger.debug(f"Dropped stale reminder for task {task.id} ({-delay:.0f}s late)")
            return None

        self.cancel_for_task(task.id)

        reminder = Reminder(
            id=self.id_factory(),
            task_id=task.id,
            message=compose_message(task, reminder_type),
            scheduled_time=reminder_time,
            priority=task.priority,
            type=reminder_type,
        )

        if delay > 0:
            self._handles[reminder.id] = self.timer.after(delay, lambda: self.fire(reminder.id))
            self._reminders[reminder.id] = reminder
            logger.info(f"Scheduled {reminder.type.value} reminder {reminder.id} for task {task.id} at {reminder_time}")
        else:
            self._reminders[reminder.id] = reminder
            self.fire(reminder.id)

        return reminder

    # 作用：触发提醒并通知sink（由定时器回调）
    def fire(self, reminder_id: str) -> None:
        """Deliver a pending reminder. Called by the timer."""
        reminder = self._reminders.pop(reminder_id, None)
        self._handles.pop(reminder_id, None)
        if reminder is None:
            return

        reminder.sent = True
        logger.info(f"Reminder {reminder.id} fired: {reminder.message}")

        if not self.sink:
            return
        notification = ReminderNotification(
            reminder_id=reminder.id,
            task_id=reminder.task_id,
            message=reminder.message,
            priority=reminder.priority,
            scheduled_time=reminder.scheduled_time,
        )
        try:
            self.sink(notification)
        except Exception as e:
            logger.error(f"Notification sink failed for reminder {reminder.id}: {e}")

    # 作用：取消单个待触发提醒
    def cancel(self, reminder_id: str) -> bool:
        """Cancel a pending reminder. Unknown or fired ids are a no-op."""
        handle = self._handles.pop(reminder_id, None)
        if handle is not None:
            self.timer.cancel(handle)
        removed = self._reminders.pop(reminder_id, None) is not None
        if removed:
            logger.debug(f"Cancelled reminder {reminder_id}")
        return removed

    def cancel_for_task(self, task_id: str) -> int:
        """Cancel every pending reminder of a task. Returns how many were cancelled."""
        ids = [r.id for r in self._reminders.values() if r.task_id == task_id]
        for reminder_id in ids:
            self.cancel(reminder_id)
        return len(ids)

    # 作用：列出时间窗口内即将触发的提醒
    def upcoming(self, window_hours: float | None = None) -> list[Reminder]:
        """Pending reminders due within the next ``window_hours``, soonest first."""
        now = self.clock()
        cutoff = now + timedelta(hours=self.window_hours if window_hours is None else window_hours)
        reminders = [r for r in self._reminders.values() if now <= r.scheduled_time <= cutoff]
        return sorted(reminders, key=lambda r: r.scheduled_time)

    def get_reminder(self, reminder_id: str) -> Reminder | None:
        return self._reminders.get(reminder_id)

    def pending(self) -> list[Reminder]:
        """All pending reminders in scheduling order."""
        return list(self._reminders.values())

    def shutdown(self) -> None:
        """Cancel every pending reminder."""
        for reminder_id in list(self._reminders):
            self.cancel(reminder_id)
        logger.info("Reminder scheduler stopped")
