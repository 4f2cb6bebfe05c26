"""
Polling Scheduler

Background worker that requests a reconciliation on a fixed interval, as a
safety net for missed real-time events.
"""

import threading
from typing import Callable, Optional

from ..utils.sync_logger import sync_logger


class PollScheduler:
    """
    Fires ``on_tick`` every ``interval_seconds`` until stopped.

    The first tick comes one interval after ``start``. There is no jitter or
    backoff, and a tick fires even if the previous one is still in flight.
    """

    def __init__(self, interval_seconds: float, on_tick: Callable[[], None], name: str = 'stats-poll'):
        self.interval_seconds = interval_seconds
        self.on_tick = on_tick
        self.name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self):
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._worker, args=(self._stop_event,), name=self.name, daemon=True
        )
        self._thread.start()
        sync_logger.logger.info(f"Poll scheduler started - every {self.interval_seconds}s")

    def stop(self, timeout: Optional[float] = 1.0):
        """Cancel future ticks. A tick already running is left to finish."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread and thread is not threading.current_thread():
            thread.join(timeout)

    def _worker(self, stop_event: threading.Event):
        while not stop_event.wait(self.interval_seconds):
            try:
                self.on_tick()
            except Exception as e:
                sync_logger.log_error(None, e, 'poll_tick')
