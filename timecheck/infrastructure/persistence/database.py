"""
SQLite Database - Connection Handling and Schema
=================================================

One connection per operation so concurrent request handlers and the
scheduler thread never share a connection object. Every write the
repositories issue is a single statement, so SQLite's own locking is
the only coordination needed.
"""

import sqlite3
import logging
from contextlib import contextmanager
from pathlib import Path

from ...domain.errors import StoreError

logger = logging.getLogger(__name__)

DATABASE_FILE = "timecheck.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    phone_number TEXT UNIQUE NOT NULL,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS activities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id),
    date TEXT NOT NULL,
    time_slot TEXT NOT NULL,
    activity_text TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE(user_id, date, time_slot)
);
"""


class Database:
    """
    SQLite database for TimeCheck.

    Usage:
        db = Database("timecheck.db")
        db.init()

        registry = SubscriberRegistry(db)
        ledger = ActivityLedger(db)
    """

    def __init__(self, db_path: str | Path = DATABASE_FILE, timeout: float = 10.0):
        self.db_path = str(db_path)
        self.timeout = timeout

    @contextmanager
    def connection(self):
        """Get database connection with context manager. Commits on success."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            logger.error(f"Cannot open database {self.db_path}: {e}")
            raise StoreError(f"Cannot open database: {e}") from e

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init(self):
        """Initialize database tables."""
        try:
            with self.connection() as conn:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            logger.error(f"Database initialization failed: {e}")
            raise StoreError(f"Database initialization failed: {e}") from e

        logger.info(f"Database initialized: {self.db_path}")
