"""Bounded in-memory task store."""

from loguru import logger

from rulebot.reminders.scheduler import ReminderScheduler
from rulebot.types import Task, TaskPriority, TaskStatus
from rulebot.utils.helpers import Clock, system_clock


class TaskStore:
    """
    Owns the tasks generated during the process lifetime.

    Applies task-update requests from the UI and keeps reminders in step:
    completing or removing a task cancels its pending reminders. When the
    store is full, completed tasks are pruned first (oldest first), then the
    oldest remaining tasks.
    """

    def __init__(
        self,
        max_tasks: int = 1000,
        scheduler: ReminderScheduler | None = None,
        clock: Clock = system_clock,
    ):
        self.max_tasks = max_tasks
        self.scheduler = scheduler
        self.clock = clock
        self._tasks: dict[str, Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def add(self, task: Task) -> Task:
        self._tasks[task.id] = task
        self._prune_if_needed()
        return task

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        """Tasks in creation order, optionally filtered by status."""
        tasks = list(self._tasks.values())
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return sorted(tasks, key=lambda t: t.created_at)

    def update(
        self,
        task_id: str,
        status: TaskStatus | str | None = None,
        priority: TaskPriority | str | None = None,
    ) -> Task | None:
        """
        Apply a task-update request.

        Args:
            task_id: Task to update.
            status: New status, if any.
            priority: New priority, if any.

        Returns:
            The updated task, or None if the id is unknown.

        Raises:
            ValueError: ``status`` or ``priority`` is not a valid value.
        """
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug(f"Update for unknown task {task_id} ignored")
            return None

        if status is not None:
            task.status = TaskStatus(status)
        if priority is not None:
            task.priority = TaskPriority(priority)
        task.touch(self.clock())

        if task.status == TaskStatus.COMPLETED:
            self._cancel_reminders(task_id)

        logger.info(f"Task {task_id} updated: status={task.status.value} priority={task.priority.value}")
        return task

    def remove(self, task_id: str) -> bool:
        """Remove a task and cancel its reminders."""
        task = self._tasks.pop(task_id, None)
        if task is None:
            return False
        self._cancel_reminders(task_id)
        return True

    def mark_reminder_sent(self, task_id: str) -> None:
        task = self._tasks.get(task_id)
        if task is not None and not task.reminder_sent:
            task.reminder_sent = True
            task.touch(self.clock())

    def stats(self) -> dict[str, int]:
        """Task counts by status."""
        counts = {status.value: 0 for status in TaskStatus}
        for task in self._tasks.values():
            counts[task.status.value] += 1
        return {"total": len(self._tasks), **counts}

    def _cancel_reminders(self, task_id: str) -> None:
        if self.scheduler is not None:
            self.scheduler.cancel_for_task(task_id)

    def _prune_if_needed(self) -> None:
        excess = len(self._tasks) - self.max_tasks
        if excess <= 0:
            return

        by_age = self.list_tasks()
        completed = [t for t in by_age if t.status == TaskStatus.COMPLETED]
        others = [t for t in by_age if t.status != TaskStatus.COMPLETED]
        for task in (completed + others)[:excess]:
            self.remove(task.id)
        logger.info(f"Pruned {excess} tasks from store")
