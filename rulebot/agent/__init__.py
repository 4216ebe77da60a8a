"""Intent engine: classification, extraction and task generation."""

from rulebot.agent.classify import SITUATIONS, Situation, classify
from rulebot.agent.engine import IntentEngine
from rulebot.agent.extract import ActionItem, draft_action_items, extract_due_date

__all__ = [
    "ActionItem",
    "IntentEngine",
    "SITUATIONS",
    "Situation",
    "classify",
    "draft_action_items",
    "extract_due_date",
]
