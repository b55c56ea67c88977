"""
repositories/robot_data_repo.py
-------------------------------
Data access layer for robot telemetry.
All SQL queries related to the `robot_data` table live here.
"""

from dataclasses import dataclass
from typing import Iterable

from db.connection import Database, rollback_quietly
from models.robot_data import COLUMNS, RobotDataRecord
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class InsertSummary:
    """Outcome of one batch: every item is attempted exactly once."""
    attempted: int = 0
    inserted: int = 0
    failed: int = 0


class RobotDataRepository:
    """Repository for insert operations on the robot_data table."""

    INSERT_SQL = (
        f"INSERT INTO robot_data ({', '.join(COLUMNS)}) "
        f"VALUES ({', '.join(['%s'] * len(COLUMNS))}) "
        "RETURNING id;"
    )

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, record: RobotDataRecord) -> int:
        """
        Insert a single telemetry record in its own transaction.

        Args:
            record: The RobotDataRecord to persist.

        Returns:
            The generated primary key.
        """
        try:
            conn = self.db.get_connection()
        except Exception as e:
            logger.error(f"Error inserting data, no database connection: {e}")
            raise
        try:
            with conn.cursor() as cur:
                cur.execute(self.INSERT_SQL, record.as_row())
                row_id = cur.fetchone()[0]
            conn.commit()
            return row_id
        except Exception as e:
            logger.error(f"Error inserting data: {e}")
            rollback_quietly(conn)
            raise
        finally:
            self.db.release_connection(conn)

    def insert_many(self, items: Iterable[dict]) -> InsertSummary:
        """
        Coerce and insert raw API records one by one.

        A failing record is logged and skipped; the remaining records
        are still attempted. No transaction spans the batch.

        Args:
            items: Raw JSON objects as returned by the API.

        Returns:
            An InsertSummary with attempted/inserted/failed counts.
        """
        summary = InsertSummary()
        for item in items:
            summary.attempted += 1
            record = RobotDataRecord.from_raw(item)
            try:
                self.add(record)
            except Exception:
                # add() has logged the cause, including connection failures
                summary.failed += 1
                continue
            summary.inserted += 1
            logger.info(f"Record for {record.timestamp} inserted into db.")
        return summary

    # ── READ ──────────────────────────────────────────────

    def count(self) -> int:
        """Number of rows currently stored."""
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM robot_data;")
                return cur.fetchone()[0]
        finally:
            self.db.release_connection(conn)
