"""
db/init_db.py
-------------
Creates the `robot_data` table if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database, rollback_quietly
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- One row per robot telemetry snapshot received from the API
CREATE TABLE IF NOT EXISTS robot_data (
    id              SERIAL PRIMARY KEY,
    timestamp       TIMESTAMP NOT NULL,
    organization    VARCHAR(255),
    division        VARCHAR(255),
    plant           VARCHAR(255),
    line            VARCHAR(255),
    workstation     VARCHAR(255),
    type            VARCHAR(255),
    tag             VARCHAR(255),
    positionx       FLOAT,
    positiony       FLOAT,
    positionz       FLOAT,
    initialized     BOOLEAN,
    running         BOOLEAN,
    wsviolation     BOOLEAN,
    paused          BOOLEAN,
    speedpercentage INT,
    finishedpartnum INT,
    m1_torque       FLOAT,
    m2_torque       FLOAT,
    m3_torque       FLOAT,
    m4_torque       FLOAT
);
"""


def create_tables(db: Database) -> bool:
    """
    Execute the schema SQL to create the robot_data table.
    Safe to call multiple times (uses IF NOT EXISTS).

    A failure is logged and reported through the return value only;
    startup is allowed to continue without a guaranteed schema.

    Returns:
        True if the table exists afterwards, False if creation failed.
    """
    try:
        conn = db.get_connection()
    except Exception as e:
        logger.error(f"Error creating table: {e}")
        return False
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Table created or already exists.")
        return True
    except Exception as e:
        logger.error(f"Error creating table: {e}")
        rollback_quietly(conn)
        return False
    finally:
        db.release_connection(conn)


if __name__ == "__main__":
    from config import load_settings

    with Database(load_settings().database_url) as database:
        if create_tables(database):
            print("✅ Database schema created successfully.")
        else:
            raise SystemExit(1)
