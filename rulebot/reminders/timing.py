"""Reminder timing policy.

Pure functions of ``(now, due_date, priority)``: no timers, no clock reads
unless ``now`` is omitted.
"""

from datetime import datetime, timedelta

from rulebot.types import ReminderType, Task, TaskPriority

DEFAULT_DUE = timedelta(hours=24)  # assumed due date for undated tasks
DUE_SOON = timedelta(hours=24)  # at or under this, reminders are timed as high priority
MIN_LEAD = timedelta(minutes=5)  # earliest reminder is now + MIN_LEAD

PRIORITY_MARKERS = {
    TaskPriority.HIGH: "🚨",
    TaskPriority.MEDIUM: "⚠️",
    TaskPriority.LOW: "ℹ️",
}

MESSAGE_TEMPLATES = {
    ReminderType.PREPARATION: "Time to prepare for: {content}",
    ReminderType.FOLLOWUP: "Follow up needed on: {content}",
    ReminderType.DEADLINE: "Task deadline approaching: {content}",
}


def effective_priority(time_to_due: timedelta, priority: TaskPriority) -> TaskPriority:
    """Escalate to high when the due date is within a day."""
    if time_to_due <= DUE_SOON:
        return TaskPriority.HIGH
    return TaskPriority(priority)


def reminder_offset(time_to_due: timedelta, priority: TaskPriority) -> timedelta:
    """How long before the due date the reminder should fire, for an effective priority."""
    priority = TaskPriority(priority)

    if priority == TaskPriority.HIGH:
        if time_to_due <= timedelta(hours=2):
            return max(time_to_due * 0.25, timedelta(minutes=15))
        if time_to_due <= timedelta(hours=8):
            return timedelta(hours=1)
        return timedelta(hours=2)

    if priority == TaskPriority.MEDIUM:
        if time_to_due <= timedelta(hours=4):
            return max(time_to_due * 0.25, timedelta(hours=1))
        return timedelta(hours=4)

    if time_to_due <= timedelta(hours=24):
        return max(time_to_due * 0.5, timedelta(hours=4))
    return timedelta(hours=24)


def compute_reminder_time(
    task: Task,
    priority: TaskPriority | None = None,
    now: datetime | None = None,
) -> datetime:
    """
    Compute when to remind the user about ``task``.

    Args:
        task: Task whose ``due_date`` drives the timing (now + 24h if unset).
        priority: Stated priority; defaults to the task's own.
        now: Reference time; defaults to the current time.

    Returns:
        The reminder time, always strictly after ``now``.
    """
    now = now or datetime.now()
    priority = priority or task.priority
    due_date = task.due_date or now + DEFAULT_DUE
    time_to_due = due_date - now

    offset = reminder_offset(time_to_due, effective_priority(time_to_due, priority))
    reminder_time = due_date - offset
    if reminder_time <= now:
        return now + MIN_LEAD
    return reminder_time


def compose_message(task: Task, reminder_type: ReminderType = ReminderType.DEADLINE) -> str:
    """Reminder text: priority marker followed by the type's template."""
    template = MESSAGE_TEMPLATES[ReminderType(reminder_type)]
    return f"{PRIORITY_MARKERS[TaskPriority(task.priority)]} {template.format(content=task.content)}"
