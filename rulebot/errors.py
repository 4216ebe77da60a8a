"""Shared error types for rulebot.

The engine degrades instead of raising for expected conditions (no matching
rules, unknown ids, stale reminders). These types cover the rest.
"""


class RulebotError(Exception):
    """Base error for rulebot."""


class ContractViolationError(RulebotError):
    """A record breaks an invariant it was created under (e.g. unknown rule id)."""


class TimerUnavailableError(RulebotError):
    """No event loop is available to arm a reminder timer."""


class ConfigError(RulebotError):
    """Configuration file could not be read or validated."""
