import logging
import threading
from typing import Callable, Optional

import schedule

from utils.logger import safe_exception_handler

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs a refresh job on a fixed period from a background thread."""

    def __init__(self, job: Callable[[], object], interval_hours: float, poll_seconds: float = 60):
        """
        Initialize the scheduler.

        Args:
            job: Callable run on every tick. Errors are logged, never raised.
            interval_hours: Hours between runs.
            poll_seconds: How often the thread checks for a pending run.
        """
        self.job = job
        self.interval_hours = interval_hours
        self.poll_seconds = poll_seconds
        self.scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_job(self) -> None:
        try:
            logger.info("Running scheduled refresh")
            self.job()
        except Exception as e:
            safe_exception_handler(logger, "Error in scheduled refresh", e)

    def start(self) -> None:
        if self._thread is not None:
            return

        self.scheduler.every(self.interval_hours).hours.do(self.run_job)
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="refresh-scheduler", daemon=True)
        self._thread.start()
        logger.info(f"Scheduler started (every {self.interval_hours} hours)")

    def stop(self) -> None:
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=self.poll_seconds)
        self._thread = None
        self.scheduler.clear()
        logger.info("Scheduler stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.scheduler.run_pending()
            self._stop_event.wait(self.poll_seconds)
