"""Task store."""

from rulebot.tasks.store import TaskStore

__all__ = ["TaskStore"]
