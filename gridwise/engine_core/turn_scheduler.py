"""
Turn Scheduler - Delayed automatic turn advance.

After a successful placement the turn advances on its own after a
short delay. Only one advance can be pending at a time.

- schedule(): arm the timer (runs synchronously when delay is 0)
- cancel():   disarm; a callback already handed to a woken timer thread still
              runs, so callers re-check their own pending state
"""

from __future__ import annotations
from typing import Callable
import logging
import threading

logger = logging.getLogger(__name__)


class TurnScheduler:
    """One-shot, cancellable timer for the automatic turn advance."""

    def __init__(self, delay: float = 1.0):
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._callback: Callable[[], None] | None = None
        self._token = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._callback is not None

    def schedule(self, callback: Callable[[], None]):
        """Arm the timer, replacing anything already pending."""
        if self.delay <= 0:
            self.cancel()
            callback()
            return

        with self._lock:
            self._disarm()
            self._token += 1
            self._callback = callback
            self._timer = threading.Timer(self.delay, self._fire, args=(self._token,))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self):
        with self._lock:
            self._disarm()

    def _disarm(self):
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._callback = None
        self._token += 1

    def _fire(self, token: int):
        with self._lock:
            if token != self._token or self._callback is None:
                logger.debug("Ignoring stale turn timer")
                return
            callback = self._callback
            self._timer = None
            self._callback = None
        callback()
