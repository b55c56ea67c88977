"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

The pool lives inside a `Database` handle that is created once in
`main.py` and passed to every component that needs the database.
"""

from typing import Optional

import psycopg2
from psycopg2 import pool

from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Owns one connection pool for the lifetime of the process.

    Usage:
        with Database(settings.database_url) as db:
            conn = db.get_connection()
            ...
            db.release_connection(conn)
    """

    def __init__(self, dsn: str, min_conn: int = 0, max_conn: int = 5):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.SimpleConnectionPool] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> "Database":
        """
        Initialize the database connection pool.

        With the default min_conn=0 no connection is made here, so an
        unreachable server surfaces on the first get_connection() instead.

        Raises:
            psycopg2.OperationalError: If min_conn > 0 and the database is unreachable.
        """
        if self._pool is not None:
            return self
        try:
            self._pool = pool.SimpleConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise
        return self

    def get_connection(self):
        """
        Get a connection from the pool.

        Returns:
            A psycopg2 connection object.

        Raises:
            RuntimeError: If the pool has not been opened.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        return self._pool.getconn()

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        if self._pool is not None:
            self._pool.putconn(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def rollback_quietly(conn) -> None:
    """
    Roll back a failed transaction without masking the original error.

    A connection the server already dropped raises on rollback; that is
    logged and swallowed so the caller can report the real cause.
    """
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed, connection is likely broken: {e}")
