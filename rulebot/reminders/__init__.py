"""Reminder timing and scheduling."""

from rulebot.reminders.scheduler import NotificationSink, ReminderScheduler
from rulebot.reminders.timers import AsyncioTimer, Timer
from rulebot.reminders.timing import compose_message, compute_reminder_time, reminder_offset

__all__ = [
    "AsyncioTimer",
    "NotificationSink",
    "ReminderScheduler",
    "Timer",
    "compose_message",
    "compute_reminder_time",
    "reminder_offset",
]
