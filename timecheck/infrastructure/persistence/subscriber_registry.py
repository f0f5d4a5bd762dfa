"""
Subscriber Registry - Users Who Receive Check-In Prompts
=========================================================

Users are keyed by phone number and never deleted; deactivation is a flag.
"""

import sqlite3
import logging
from datetime import datetime
from typing import Callable, List, Optional

from ...domain.errors import StoreError
from ...domain.models import User
from .database import Database

logger = logging.getLogger(__name__)


class SubscriberRegistry:
    """
    Durable set of subscribers.

    Usage:
        registry = SubscriberRegistry(db)
        user = registry.register("+15550100")
        for user in registry.list_active():
            ...
    """

    def __init__(self, db: Database, clock: Callable[[], datetime] = datetime.now):
        self._db = db
        self._clock = clock

    def register(self, phone: str) -> User:
        """Insert the user, or re-activate an existing one. Idempotent."""
        try:
            with self._db.connection() as conn:
                rows = conn.execute(
                    """INSERT INTO users (phone_number, is_active, created_at)
                       VALUES (?, 1, ?)
                       ON CONFLICT(phone_number) DO UPDATE SET is_active = 1
                       RETURNING *""",
                    (phone, self._clock().isoformat()),
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to register {phone}: {e}")
            raise StoreError(f"Failed to register user: {e}") from e

        user = self._row_to_user(rows[0])
        logger.info(f"Registered user {user.id} ({user.phone_number})")
        return user

    def find_by_phone(self, phone: str) -> Optional[User]:
        """Get user by phone number."""
        try:
            with self._db.connection() as conn:
                row = conn.execute(
                    "SELECT * FROM users WHERE phone_number = ?", (phone,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Failed to look up {phone}: {e}")
            raise StoreError(f"Failed to look up user: {e}") from e
        return self._row_to_user(row) if row else None

    def list_active(self) -> List[User]:
        """All users who should receive prompts."""
        try:
            with self._db.connection() as conn:
                rows = conn.execute(
                    "SELECT * FROM users WHERE is_active = 1 ORDER BY id"
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to list active users: {e}")
            raise StoreError(f"Failed to list active users: {e}") from e
        return [self._row_to_user(row) for row in rows]

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        """Convert database row to User object."""
        return User(
            id=row["id"],
            phone_number=row["phone_number"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
