"""Action-item extraction and due-date parsing.

Everything here takes ``now`` explicitly so results are deterministic.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from rulebot.types import TaskPriority

URGENT_VOCABULARY = re.compile(r"urgent|emergency|asap|critical|immediately", re.IGNORECASE)
PRIORITY_VOCABULARY = re.compile(r"urgent|critical|important|asap|emergency", re.IGNORECASE)
ROUTINE_VOCABULARY = re.compile(r"meeting|appointment|deadline|client", re.IGNORECASE)

SAME_DAY = re.compile(r"today|tonight|this evening", re.IGNORECASE)
NEXT_DAY = re.compile(r"tomorrow|next day", re.IGNORECASE)
CLOCK_TIME = re.compile(
    r"\b(?:at|by|before)\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b"
    r"|\b(?:at|by|before)\s*(\d{1,2}):(\d{2})\b",
    re.IGNORECASE,
)
IN_HOURS = re.compile(r"\bin\s*(\d+)\s*hours?\b", re.IGNORECASE)

URGENT_TIMEFRAME = [
    SAME_DAY,
    IN_HOURS,
    re.compile(r"within.*hour", re.IGNORECASE),
    re.compile(r"by \d+:\d+", re.IGNORECASE),
    re.compile(r"before \d+", re.IGNORECASE),
    re.compile(r"urgent|asap|immediately|critical", re.IGNORECASE),
    re.compile(r"due.*today", re.IGNORECASE),
    re.compile(r"deadline.*today", re.IGNORECASE),
]

END_OF_DAY_HOUR = 18
URGENT_DUE = timedelta(minutes=30)
SAME_DAY_DUE = timedelta(hours=8)
DEFAULT_DUE = timedelta(hours=24)
DUE_SOON = timedelta(hours=24)

# (response pattern, action, default due offset), checked in order
ACTIONS = [
    (re.compile(r"reschedule|change time", re.IGNORECASE), "Reschedule conflicting appointment", timedelta(hours=2)),
    (re.compile(r"cancel|skip", re.IGNORECASE), "Cancel lower priority activity", timedelta(hours=1)),
    (re.compile(r"check|verify", re.IGNORECASE), "Verify schedule and requirements", timedelta(hours=4)),
]


@dataclass
class ActionItem:
    """A drafted task before it gets an id and timestamps."""
    content: str
    priority: TaskPriority
    due_date: datetime | None = None


def has_urgent_vocabulary(text: str) -> bool:
    return bool(URGENT_VOCABULARY.search(text))


def is_urgent_timeframe(text: str) -> bool:
    """Same-day phrasing, a deadline within hours, or urgent wording."""
    return any(p.search(text) for p in URGENT_TIMEFRAME)


def extract_due_date(text: str, now: datetime) -> datetime | None:
    """
    Parse a due date from free text.

    Recognised, in order: today/tonight/this evening (18:00 today),
    tomorrow/next day (now + 24h), "at/by/before" a clock time (today, or
    tomorrow if already past), "in N hours". Returns None otherwise,
    including for an hour count that falls outside the datetime range.
    """
    if SAME_DAY.search(text):
        return now.replace(hour=END_OF_DAY_HOUR, minute=0, second=0, microsecond=0)

    if NEXT_DAY.search(text):
        return now + timedelta(hours=24)

    match = CLOCK_TIME.search(text)
    clock = _clock_time(match) if match else None
    if clock is not None:
        target = now.replace(hour=clock[0], minute=clock[1], second=0, microsecond=0)
        if target <= now:
            target += timedelta(days=1)
        return target

    match = IN_HOURS.search(text)
    if match:
        try:
            return now + timedelta(hours=int(match.group(1)))
        except (OverflowError, ValueError):
            # beyond the datetime range
            return None

    return None


def _clock_time(match: re.Match) -> tuple[int, int] | None:
    """(hour, minute) on a 24-hour clock, or None if out of range."""
    if match.group(1) is not None:
        hours, minutes = int(match.group(1)), int(match.group(2) or 0)
        if not 1 <= hours <= 12:
            return None
        meridiem = match.group(3).lower()
        if meridiem == "pm" and hours != 12:
            hours += 12
        elif meridiem == "am" and hours == 12:
            hours = 0
    else:
        hours, minutes = int(match.group(4)), int(match.group(5))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def default_priority(text: str, due_date: datetime | None, now: datetime) -> TaskPriority:
    """Priority for the catch-all item when no action verb matched."""
    if due_date is not None and due_date - now <= DUE_SOON:
        return TaskPriority.HIGH
    if PRIORITY_VOCABULARY.search(text):
        return TaskPriority.HIGH
    if ROUTINE_VOCABULARY.search(text):
        return TaskPriority.MEDIUM
    return TaskPriority.LOW


def draft_action_items(response: str, text: str, now: datetime) -> list[ActionItem]:
    """
    Draft action items from the engine's response and the user's input.

    Drafting scans ``response`` for action verbs; with no match a single
    "Handle: <input>" item is drafted. Overrides then apply in order:
    a due date parsed from ``text`` replaces the default offsets; urgent
    wording forces high priority due in 30 minutes; otherwise an urgent
    timeframe forces high priority.
    """
    extracted = extract_due_date(text, now)

    items = [
        ActionItem(content=action, priority=TaskPriority.MEDIUM, due_date=now + offset)
        for pattern, action, offset in ACTIONS
        if pattern.search(response)
    ]
    if not items:
        items.append(ActionItem(
            content=f"Handle: {text}",
            priority=default_priority(text, extracted, now),
            due_date=now + DEFAULT_DUE,
        ))

    if extracted is not None:
        for item in items:
            item.due_date = extracted

    if has_urgent_vocabulary(text):
        for item in items:
            item.priority = TaskPriority.HIGH
            item.due_date = now + URGENT_DUE
    elif is_urgent_timeframe(text):
        for item in items:
            item.priority = TaskPriority.HIGH
            if item.due_date is None:
                item.due_date = now + SAME_DAY_DUE

    return items
