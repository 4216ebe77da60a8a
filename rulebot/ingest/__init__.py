"""Rule extraction from document lines."""

from rulebot.ingest.rules import infer_category, infer_priority, is_rule, rules_from_lines

__all__ = ["infer_category", "infer_priority", "is_rule", "rules_from_lines"]
