"""
services/ingest_service.py
--------------------------
Business logic for one poll tick: fetch telemetry, then store it.
"""

from dataclasses import dataclass
from typing import Optional

from repositories.robot_data_repo import InsertSummary, RobotDataRepository
from services.fetcher import FetchResult, FetchStatus, RecordFetcher
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class TickResult:
    """What happened during one tick. `summary` is None when nothing was written."""
    fetch: FetchResult
    summary: Optional[InsertSummary] = None

    @property
    def failed(self) -> bool:
        return self.fetch.status is FetchStatus.FAILED


class IngestService:
    """
    Runs the fetch-then-insert cycle.

    Responsibilities:
        - Ask the fetcher for the latest records.
        - Hand non-empty batches to the repository.
        - Log empty and failed fetches differently.
    """

    def __init__(self, fetcher: RecordFetcher, repository: RobotDataRepository):
        self.fetcher = fetcher
        self.repository = repository

    def run_tick(self) -> TickResult:
        """
        Execute one poll tick. Never raises: every failure is logged
        and reflected in the returned TickResult.
        """
        try:
            result = self.fetcher.fetch()
        except Exception as e:
            logger.exception(f"Unexpected error while fetching: {e}")
            return TickResult(FetchResult.failed(e))

        if result.status is FetchStatus.FAILED:
            logger.warning(f"Fetch failed, skipping this tick: {result.error}")
            return TickResult(result)

        if result.status is FetchStatus.EMPTY:
            logger.info("No data received from API.")
            return TickResult(result)

        try:
            summary = self.repository.insert_many(result.records)
        except Exception as e:
            logger.exception(f"Unexpected error while inserting: {e}")
            return TickResult(result)

        logger.info(
            f"Tick done: {summary.inserted}/{summary.attempted} record(s) stored, "
            f"{summary.failed} failed."
        )
        return TickResult(result, summary)
