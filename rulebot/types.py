"""Core records (Pydantic models with camelCase JSON aliases).

These are the shapes exchanged with the ingestion, UI and transport
collaborators. Dump with ``model_dump(by_alias=True)`` for the wire form.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from rulebot.errors import ContractViolationError


class TaskPriority(str, Enum):
    """Priority of a task or reminder."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ReminderType(str, Enum):
    """Kind of reminder, selects the message template."""
    DEADLINE = "deadline"
    PREPARATION = "preparation"
    FOLLOWUP = "followup"


class Rule(BaseModel):
    """
    A natural-language rule extracted from an uploaded document.

    Read-only once created, except that the index attaches ``fingerprint``
    the first time the rule is indexed.
    """

    id: str
    content: str
    source: str = ""  # originating document type, e.g. "text/csv"
    priority: int = Field(3, ge=1, le=10)  # higher = more important
    category: str | None = None
    fingerprint: list[float] | None = None

    model_config = ConfigDict(populate_by_name=True)


class Task(BaseModel):
    """An actionable item generated from a single user input."""

    id: str
    content: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: datetime | None = Field(None, alias="dueDate")
    reminder_time: datetime | None = Field(None, alias="reminderTime")
    reminder_sent: bool = Field(False, alias="reminderSent")
    applied_rules: list[str] = Field(default_factory=list, alias="appliedRules")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    def touch(self, now: datetime | None = None) -> None:
        """Refresh ``updated_at`` after a mutation."""
        self.updated_at = now or datetime.now()


class Reminder(BaseModel):
    """A pending notification for a task. Holds the task id only, not the task."""

    id: str
    task_id: str = Field(alias="taskId")
    message: str
    scheduled_time: datetime = Field(alias="scheduledTime")
    priority: TaskPriority  # copied from the task when scheduled
    sent: bool = False
    type: ReminderType = ReminderType.DEADLINE

    model_config = ConfigDict(populate_by_name=True)


class ReminderNotification(BaseModel):
    """Event delivered to the notification sink when a reminder fires."""

    reminder_id: str = Field(alias="reminderId")
    task_id: str = Field(alias="taskId")
    message: str
    priority: TaskPriority
    scheduled_time: datetime = Field(alias="scheduledTime")

    model_config = ConfigDict(populate_by_name=True)


class VectorSearchResult(BaseModel):
    """A rule paired with its cosine similarity to the query."""

    rule: Rule
    similarity: float


class RAGResponse(BaseModel):
    """Engine answer for one input."""

    response: str
    relevant_rules: list[Rule] = Field(default_factory=list, alias="relevantRules")
    confidence: float = Field(0.0, ge=0.0, le=100.0)

    model_config = ConfigDict(populate_by_name=True)


def check_applied_rules(task: Task, retrieved_ids: Iterable[str]) -> None:
    """Raise if ``task`` cites a rule that was not retrieved for its input."""
    allowed = set(retrieved_ids)
    unknown = [rule_id for rule_id in task.applied_rules if rule_id not in allowed]
    if unknown:
        raise ContractViolationError(
            f"Task {task.id} references rules that were not retrieved: {', '.join(unknown)}"
        )
