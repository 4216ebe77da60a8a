"""Loguru logging setup."""

import os
import sys

from loguru import logger


def setup_logging(level: str | None = None) -> None:
    """Configure the loguru log level and stderr handler."""
    if level is None:
        level = os.environ.get("RULEBOT_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    level = level.upper()

    logger.remove()  # drop the default handler
    logger.add(
        sys.stderr,
        format="<level>{time:YYYY-MM-DD HH:mm:ss} | {name}:{function}:{line} | {message}</level>",
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )
