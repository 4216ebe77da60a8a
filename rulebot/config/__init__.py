"""Configuration module for rulebot."""

from rulebot.config.loader import load_config, save_config, get_config_path
from rulebot.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path"]
