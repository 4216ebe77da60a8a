"""Small shared helpers: id generation and clock typing."""

import uuid
from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def new_id() -> str:
    """Random id for tasks, reminders and extracted rules."""
    return str(uuid.uuid4())


def system_clock() -> datetime:
    return datetime.now()
