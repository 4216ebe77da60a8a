"""Turn candidate lines from an uploaded document into rules.

Format extraction (PDF, CSV, JSON) happens upstream; this module only decides
which lines read like rules and how much they weigh.
"""

import re
from typing import Iterable

from loguru import logger

from rulebot.types import Rule
from rulebot.utils.helpers import IdFactory, new_id

RULE_PATTERNS = [
    re.compile(r"^if\s+", re.IGNORECASE),
    re.compile(r"^when\s+", re.IGNORECASE),
    re.compile(r"^rule\s*\d*\s*:", re.IGNORECASE),
    re.compile(r"^always\s+", re.IGNORECASE),
    re.compile(r"^never\s+", re.IGNORECASE),
    re.compile(r"^\d+\.\s+"),
    re.compile(r"^-\s+"),
    re.compile(r"priority|urgent|important|deadline", re.IGNORECASE),
]
MIN_FREE_TEXT_LENGTH = 20  # longer lines count as rules even without a marker

# (pattern, priority), first match wins
PRIORITY_PATTERNS = [
    (re.compile(r"urgent|critical|high priority", re.IGNORECASE), 10),
    (re.compile(r"important|medium priority", re.IGNORECASE), 5),
    (re.compile(r"low priority|optional", re.IGNORECASE), 1),
]
DEFAULT_RULE_PRIORITY = 3

CATEGORY_PATTERNS = [
    (re.compile(r"meeting|appointment|schedule", re.IGNORECASE), "scheduling"),
    (re.compile(r"deadline|due date|time", re.IGNORECASE), "time-management"),
    (re.compile(r"health|gym|exercise", re.IGNORECASE), "health"),
    (re.compile(r"work|project|task", re.IGNORECASE), "work"),
]


def is_rule(line: str) -> bool:
    """Whether a stripped line reads like a rule."""
    return any(p.search(line) for p in RULE_PATTERNS) or len(line) > MIN_FREE_TEXT_LENGTH


def infer_priority(line: str) -> int:
    for pattern, priority in PRIORITY_PATTERNS:
        if pattern.search(line):
            return priority
    return DEFAULT_RULE_PRIORITY


def infer_category(line: str) -> str | None:
    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(line):
            return category
    return None


def rules_from_lines(
    lines: Iterable[str],
    source: str,
    id_factory: IdFactory = new_id,
) -> list[Rule]:
    """
    Build rules from candidate lines.

    Args:
        lines: Line-oriented text produced by the document extractor.
        source: Originating document type, stored on each rule.
        id_factory: Id generator for the new rules.

    Returns:
        Rules for the lines that look like rules, in input order.
    """
    rules = []
    skipped = 0
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if not is_rule(line):
            skipped += 1
            continue
        rules.append(Rule(
            id=id_factory(),
            content=line,
            source=source,
            priority=infer_priority(line),
            category=infer_category(line),
        ))

    logger.debug(f"Extracted {len(rules)} rules from {source} ({skipped} lines skipped)")
    return rules
