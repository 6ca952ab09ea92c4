"""
Centralized logging manager for the foliSDK environment manager
"""
import os
import sys
from typing import Optional

from loguru import logger

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "FOLISDK_LOG_LEVEL"


def resolve_log_level(log_level: Optional[str] = None) -> str:
    """Explicit level > FOLISDK_LOG_LEVEL > WARNING."""
    level = log_level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    return level.upper()


class LoggingManager:
    def __init__(self, log_level: Optional[str] = None):
        self.log_level = resolve_log_level(log_level)

    def setup(self):
        # stdout carries shell code for eval, so every message goes to stderr
        logger.remove()
        logger.add(lambda msg: print(msg, end="", file=sys.stderr),
                   level=self.log_level, format="{level}: {message}")
        logger.debug(f"Logging initialized at level: {self.log_level}")

    def debug(self, message: str):
        logger.debug(message)

    def info(self, message: str):
        logger.info(message)

    def warning(self, message: str):
        logger.warning(message)

    def error(self, message: str):
        logger.error(message)
