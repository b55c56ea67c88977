"""Shared fakes: an in-memory stand-in for the psycopg2 pool and connections."""

import pytest


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._result = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((sql, params))
        if self.conn.fail_when is not None and self.conn.fail_when(sql, params):
            raise self.conn.fail_error or RuntimeError("simulated database error")
        if sql.lstrip().startswith("INSERT"):
            self.conn.next_id += 1
            self.conn.rows.append(params)
            self._result = (self.conn.next_id,)
        elif sql.lstrip().startswith("SELECT COUNT"):
            self._result = (len(self.conn.rows),)

    def fetchone(self):
        return self._result


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.next_id = 0
        self.commits = 0
        self.rollbacks = 0
        self.fail_when = None
        self.fail_error = None
        self.rollback_error = None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error


class FakeDatabase:
    """Mimics db.connection.Database with a single shared connection."""

    def __init__(self):
        self.conn = FakeConnection()
        self.borrowed = 0
        self.released = 0
        self.connect_error = None
        self.closed = False

    def open(self):
        return self

    def close(self):
        self.closed = True

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def get_connection(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.borrowed += 1
        return self.conn

    def release_connection(self, conn):
        assert conn is self.conn
        self.released += 1


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def sample_item():
    return {
        "timestamp": "2024-05-14T08:30:00Z",
        "organization": "Academy",
        "division": "Robotics",
        "plant": "P1",
        "line": "L2",
        "workstation": "WS3",
        "type": "arm",
        "tag": "robot-7",
        "positionx": "10.5",
        "positiony": "-2",
        "positionz": "0.25",
        "initialized": "true",
        "running": "false",
        "wsviolation": "TRUE",
        "paused": True,
        "speedpercentage": "42",
        "finishedpartnum": "17",
        "m1_torque": "1.1",
        "m2_torque": "2.2",
        "m3_torque": "3.3",
        "m4_torque": "4.4",
    }
