"""Periodic indexing trigger.

A chain of daemon threading.Timer objects: each tick re-arms the next one
before calling the orchestrator, so a slow tick never delays the schedule.
"""
import logging
import threading

logger = logging.getLogger(__name__)


class IndexingScheduler:
    """Calls orchestrator.scheduled_tick() every interval seconds"""

    def __init__(self, orchestrator, interval_seconds: float):
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self._timer = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        with self._lock:
            if self._running:
                return
            self._running = True
            self._arm()
        logger.info(f"Indexing scheduler started (every {self.interval_seconds:.0f}s)")

    def stop(self):
        with self._lock:
            self._running = False
            if self._timer:
                self._timer.cancel()
                self._timer = None

    def _arm(self):
        """Schedule the next tick (caller holds lock)"""
        self._timer = threading.Timer(self.interval_seconds, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self):
        with self._lock:
            if not self._running:
                return
            self._arm()
        try:
            self.orchestrator.scheduled_tick()
        except Exception:
            logger.exception("Scheduled indexing tick failed")
