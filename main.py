"""
main.py
-------
Entry point for the robot telemetry poller.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Wire the fetcher, repository and ingest service together.
    - Run the poll loop (or a single tick with --once).

Usage:
    python main.py           # poll forever
    python main.py --once    # one fetch-and-store cycle, then exit
"""

import argparse
import signal
import sys

from config import Settings, load_settings
from db.connection import Database
from db.init_db import create_tables
from repositories.robot_data_repo import RobotDataRepository
from scheduler.poll_loop import PollLoop
from services.fetcher import RecordFetcher
from services.ingest_service import IngestService
from utils.logger import get_logger, set_level

logger = get_logger(__name__)


def _raise_system_exit(signum, frame) -> None:
    """SIGTERM handler: unwind through the normal shutdown path."""
    raise SystemExit(0)


def run(settings: Settings, once: bool = False) -> int:
    """
    Start the poller with the given settings.

    Returns:
        Process exit code.
    """
    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    with Database(settings.database_url) as db:
        if not create_tables(db):
            logger.warning(
                "robot_data table could not be created; "
                "inserts will run against a possibly missing table."
            )

        # ── 2. Build the ingest pipeline ──────────────────
        fetcher = RecordFetcher(settings.api_url, timeout=settings.http_timeout_seconds)
        repository = RobotDataRepository(db)
        service = IngestService(fetcher, repository)

        try:
            # ── 3a. Single tick ───────────────────────────
            if once:
                result = service.run_tick()
                try:
                    logger.info(f"robot_data now holds {repository.count()} row(s).")
                except Exception as e:
                    logger.warning(f"Could not count stored rows: {e}")
                return 1 if result.failed else 0

            # ── 3b. Poll forever ──────────────────────────
            loop = PollLoop(service, settings.poll_interval_seconds)
            previous_handler = signal.signal(signal.SIGTERM, _raise_system_exit)
            try:
                loop.start()
            except (KeyboardInterrupt, SystemExit):
                logger.info("Shutdown requested.")
            finally:
                loop.shutdown(wait=False)
                signal.signal(signal.SIGTERM, previous_handler)
            return 0
        finally:
            # ── 4. Cleanup on shutdown ────────────────────
            fetcher.close()


def main(argv=None) -> int:
    """Parse arguments, load settings and run."""
    parser = argparse.ArgumentParser(description="Poll robot telemetry into PostgreSQL.")
    parser.add_argument("--once", action="store_true", help="Run a single tick and exit")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        set_level(settings.log_level)
        logger.info(f"🚀 Robot poller starting, source: {settings.api_url}")
        code = run(settings, once=args.once)
    except Exception as e:
        logger.error(f"Error in main function: {e}")
        return 1
    logger.info("Robot poller stopped.")
    return code


if __name__ == "__main__":
    sys.exit(main())
