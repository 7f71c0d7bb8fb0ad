"""
Recurring invocation of a callback in a background thread.
"""
from __future__ import annotations

import logging
import threading
from logging import Logger
from typing import Callable, Self

__all__ = [
    "RecurringTask",
]


class RecurringTask:
    """
    Invokes a callback every `interval_seconds` until stopped. The first
    invocation happens one interval after starting. Exceptions raised by the
    callback are logged and don't stop subsequent invocations.

    The interval is measured from the end of one invocation to the start of
    the next, so invocations never overlap.
    """

    interval_seconds: float
    name: str

    _callback: Callable[[], object]
    _logger: Logger
    _stop_event: threading.Event
    _thread: threading.Thread | None

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], object],
        *,
        name: str = "recurring-task",
        logger: Logger | None = None,
    ):
        assert interval_seconds > 0, f"Invalid interval: {interval_seconds}"

        self.interval_seconds = interval_seconds
        self.name = name
        self._callback = callback
        self._logger = logger or logging.getLogger("ghsync")
        self._stop_event = threading.Event()
        self._thread = None

    @classmethod
    def from_minutes(
        cls,
        interval_minutes: int,
        callback: Callable[[], object],
        *,
        name: str = "recurring-task",
        logger: Logger | None = None,
    ) -> RecurringTask:
        return cls(interval_minutes * 60, callback, name=name, logger=logger)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, traceback):
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """
        Start invoking callback. No-op if already running.
        """
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name=self.name, daemon=True
        )
        self._thread.start()

        self._logger.debug(
            f"Started '{self.name}' with interval of {self.interval_seconds}s"
        )

    def stop(self, timeout: float | None = None):
        """
        Stop invoking callback, waiting for any in-progress invocation to
        complete.
        """
        self._stop_event.set()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

        self._thread = None
        self._logger.debug(f"Stopped '{self.name}'")

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until stopped or until timeout elapses. Returns whether the
        task was stopped.
        """
        return self._stop_event.wait(timeout)

    def _run(self):
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self._callback()
            except Exception:
                self._logger.exception(f"Error in '{self.name}'")
