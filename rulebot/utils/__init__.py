"""Utility functions for rulebot."""

from rulebot.utils.helpers import Clock, IdFactory, new_id, system_clock

__all__ = ["Clock", "IdFactory", "new_id", "system_clock"]
