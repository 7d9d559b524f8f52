"""SQLite storage: connections, a small pool and the schema."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager

DEFAULT_DATABASE = "inheritx_db.sqlite3"

# UTC timestamp in ISO 8601 form, used for column defaults and updates.
CURRENT_TIMESTAMP_SQL = "strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS notifications (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title VARCHAR(255) NOT NULL,
    body TEXT NOT NULL,
    is_read BOOLEAN NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT ({now}),
    updated_at TEXT NOT NULL DEFAULT ({now})
);

CREATE TABLE IF NOT EXISTS user_activities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id VARCHAR(255) NOT NULL,
    date TEXT NOT NULL DEFAULT ({now}),
    activity_type VARCHAR(50) NOT NULL,
    details TEXT NOT NULL,
    action_type VARCHAR(50) NOT NULL,
    action_link TEXT,
    created_at TEXT NOT NULL DEFAULT ({now})
);

CREATE TABLE IF NOT EXISTS claims (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    amount REAL NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'approved', 'rejected')),
    description TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({now}),
    updated_at TEXT NOT NULL DEFAULT ({now})
);

CREATE TABLE IF NOT EXISTS kyc_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    full_name VARCHAR(255) NOT NULL,
    date_of_birth VARCHAR(50) NOT NULL,
    id_type VARCHAR(50) NOT NULL,
    id_number VARCHAR(100) NOT NULL,
    address TEXT NOT NULL,
    verification_status VARCHAR(50) NOT NULL DEFAULT 'pending',
    created_at TEXT NOT NULL DEFAULT ({now}),
    updated_at TEXT
);
""".format(now=CURRENT_TIMESTAMP_SQL)


class NotFoundError(LookupError):
    """Raised when a query that must return one row returns none."""


def connect(database: str = DEFAULT_DATABASE) -> sqlite3.Connection:
    """Open a connection whose rows can be read by column name."""
    conn = sqlite3.connect(database, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def run_migrations(conn: sqlite3.Connection) -> None:
    """Create every table the application needs, if missing."""
    conn.executescript(_SCHEMA)
    conn.commit()


class Pool:
    """Hands out connections to one database.

    An in-memory database lives only as long as its connection, so the pool
    keeps a single shared connection for it and serialises its use.
    """

    def __init__(self, database: str = DEFAULT_DATABASE) -> None:
        self.database = database
        self._lock = threading.Lock()
        self._shared = connect(database) if database == ":memory:" else None

    @contextmanager
    def get(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for the duration of the block."""
        if self._shared is not None:
            with self._lock:
                yield self._shared
            return
        conn = connect(self.database)
        try:
            yield conn
        finally:
            conn.close()