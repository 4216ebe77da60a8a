"""Situation classification: an ordered chain of (predicate, handler) pairs.

The first predicate that matches picks the handler that drafts the response.
Predicates and handlers are pure functions of the input text and the
retrieved rules (ranked, most similar first, never empty).
"""

import re
from typing import Callable, NamedTuple

from rulebot.types import Rule

TIME_REFERENCE = re.compile(r"\d+:\d+|\d+\s*(?:am|pm)|tomorrow|today|yesterday", re.IGNORECASE)
CONFLICT_RULE = re.compile(r"conflict|overlap|same time|schedule", re.IGNORECASE)
CONFLICT_RELEVANT = re.compile(r"conflict|overlap|schedule|time", re.IGNORECASE)
PRIORITY_INPUT = re.compile(r"urgent|important|priority|deadline", re.IGNORECASE)
PRIORITY_RULE = re.compile(r"priority|urgent|important|skip|cancel", re.IGNORECASE)


class Situation(NamedTuple):
    name: str
    matches: Callable[[str, list[Rule]], bool]
    respond: Callable[[str, list[Rule]], str]


def is_time_conflict(text: str, rules: list[Rule]) -> bool:
    return bool(TIME_REFERENCE.search(text)) and any(CONFLICT_RULE.search(r.content) for r in rules)


def is_priority_conflict(text: str, rules: list[Rule]) -> bool:
    return bool(PRIORITY_INPUT.search(text)) and any(PRIORITY_RULE.search(r.content) for r in rules)


def respond_time_conflict(text: str, rules: list[Rule]) -> str:
    relevant = [r for r in rules if CONFLICT_RELEVANT.search(r.content)]
    joined = "; ".join(r.content for r in relevant)
    return (
        f"Based on your rules: {joined}. "
        "I recommend checking for schedule conflicts and rescheduling if necessary."
    )


def respond_priority_conflict(text: str, rules: list[Rule]) -> str:
    candidates = [r for r in rules if PRIORITY_RULE.search(r.content)] or rules
    # max() keeps the first of equal priorities
    top = max(candidates, key=lambda r: r.priority)
    return (
        f'According to your highest priority rule: "{top.content}". '
        "This should take precedence over other activities."
    )


def respond_default(text: str, rules: list[Rule]) -> str:
    return (
        f'Based on the rule: "{rules[0].content}", here\'s what I recommend: '
        "Follow this guideline for your situation."
    )


SITUATIONS: list[Situation] = [
    Situation("time_conflict", is_time_conflict, respond_time_conflict),
    Situation("priority_conflict", is_priority_conflict, respond_priority_conflict),
    Situation("default", lambda text, rules: True, respond_default),
]


def classify(text: str, rules: list[Rule], situations: list[Situation] = SITUATIONS) -> Situation:
    """Return the first situation whose predicate matches."""
    for situation in situations:
        if situation.matches(text, rules):
            return situation
    return situations[-1]
