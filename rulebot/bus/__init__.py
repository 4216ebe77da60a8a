"""Notification bus for fired reminders."""

from rulebot.bus.queue import NotificationBus

__all__ = ["NotificationBus"]
