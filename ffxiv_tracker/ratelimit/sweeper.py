"""
Background idle-bucket sweeper.

Runs a callback on a fixed cadence in a daemon thread so it never keeps
the interpreter alive on its own.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class BucketSweeper:
    """Repeating timer that calls ``callback`` every ``interval_ms`` milliseconds."""

    def __init__(
        self,
        callback: Callable[[], object],
        interval_ms: float,
        name: str = "ratelimit-sweeper",
    ) -> None:
        self._callback = callback
        self._interval_s = interval_ms / 1000.0
        self._name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start sweeping in a background thread. No-op if already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
        self._thread.start()
        logger.debug("Sweeper '%s' started (every %.1fs)", self._name, self._interval_s)

    def stop(self, timeout: float = 1.0) -> None:
        """Signal the thread to exit and wait briefly for it."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        logger.debug("Sweeper '%s' stopped", self._name)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval_s):
            try:
                self._callback()
            except Exception:
                logger.exception("Unhandled error in sweeper '%s'", self._name)
