"""
Short user-facing messages about configuration and sync results.
"""
from __future__ import annotations

import logging
from logging import Logger

__all__ = [
    "Notifier",
    "LoggingNotifier",
]


class Notifier:
    """
    Displays a short-lived message to the user. Base implementation
    discards messages.
    """

    def notify(self, message: str, *, level: int = logging.INFO):
        pass


class LoggingNotifier(Notifier):
    """
    Displays messages by logging them.
    """

    def __init__(self, logger: Logger):
        self._logger = logger

    def notify(self, message: str, *, level: int = logging.INFO):
        self._logger.log(level, message)

