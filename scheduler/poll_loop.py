"""
scheduler/poll_loop.py
----------------------
Fixed-interval poll loop built on APScheduler.

A single worker runs the ticks. When a tick is still busy at the next
fire time, the new run is skipped instead of overlapping it.
"""

from apscheduler.events import (
    EVENT_JOB_MAX_INSTANCES,
    EVENT_JOB_MISSED,
    JobExecutionEvent,
    JobSubmissionEvent,
)
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from services.ingest_service import IngestService
from utils.logger import get_logger

logger = get_logger(__name__)

JOB_ID = "poll_tick"


class PollLoop:
    """Drives IngestService.run_tick every `interval_seconds`."""

    def __init__(self, service: IngestService, interval_seconds: float):
        self.service = service
        self.interval_seconds = interval_seconds
        self.scheduler = BlockingScheduler(
            executors={"default": ThreadPoolExecutor(max_workers=1)},
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self.scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id=JOB_ID,
            name="Fetch and store robot telemetry",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.add_listener(self._on_max_instances, EVENT_JOB_MAX_INSTANCES)
        self.scheduler.add_listener(self._on_missed, EVENT_JOB_MISSED)

    def _tick(self) -> None:
        self.service.run_tick()

    def _on_max_instances(self, event: JobSubmissionEvent) -> None:
        run_time = event.scheduled_run_times[-1] if event.scheduled_run_times else None
        logger.warning(
            f"Skipped poll tick scheduled for {run_time}: previous tick still running."
        )

    def _on_missed(self, event: JobExecutionEvent) -> None:
        logger.warning(
            f"Missed poll tick scheduled for {event.scheduled_run_time}: "
            "the scheduler woke up too late (process suspended or overloaded)."
        )

    def start(self) -> None:
        """Block and run ticks until shutdown() or Ctrl+C."""
        logger.info(f"Polling every {self.interval_seconds:g}s. Press Ctrl+C to stop.")
        self.scheduler.start()

    def shutdown(self, wait: bool = True) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Poll loop stopped.")
