"""
Activity Ledger - One Entry per (User, Date, Slot)
===================================================

ARCHITECTURAL DECISION:
- Writes are a single INSERT ... ON CONFLICT DO UPDATE statement, never a
  read followed by a write, so two requests racing on the same key leave
  exactly one row holding the last text written
- updated_at comes from the application clock with microsecond precision,
  so a rewrite within the same second still moves it forward
"""

import sqlite3
import logging
from datetime import date, datetime
from typing import Callable, List

from ...domain.errors import StoreError, ValidationError
from ...domain.models import ActivityEntry
from ...domain.slot_clock import Slot
from .database import Database

logger = logging.getLogger(__name__)


class ActivityLedger:
    """
    Persistent store of activity text per user, date and slot.

    Usage:
        ledger = ActivityLedger(db)
        ledger.upsert(user.id, date.today(), Slot(9, 0), "wrote code")
        entries = ledger.list_for_user_and_date(user.id, date.today())
    """

    def __init__(self, db: Database, clock: Callable[[], datetime] = datetime.now):
        self._db = db
        self._clock = clock

    def upsert(self, user_id: int, day: date, slot: Slot, text: str) -> ActivityEntry:
        """
        Create the entry, or replace its text if the key already exists.

        Raises:
            ValidationError: text is empty after trimming.
            StoreError: database failure, including an unknown user_id.
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Activity text must not be empty")

        try:
            with self._db.connection() as conn:
                rows = conn.execute(
                    """INSERT INTO activities (user_id, date, time_slot, activity_text, updated_at)
                       VALUES (?, ?, ?, ?, ?)
                       ON CONFLICT(user_id, date, time_slot)
                       DO UPDATE SET activity_text = excluded.activity_text,
                                     updated_at = excluded.updated_at
                       RETURNING *""",
                    (user_id, day.isoformat(), str(slot), text, self._clock().isoformat()),
                ).fetchall()
        except sqlite3.IntegrityError as e:
            logger.error(f"Rejected activity for user {user_id} at {day} {slot}: {e}")
            raise StoreError(f"Activity rejected by database: {e}") from e
        except sqlite3.Error as e:
            logger.error(f"Failed to store activity for user {user_id}: {e}")
            raise StoreError(f"Failed to store activity: {e}") from e

        entry = self._row_to_entry(rows[0])
        logger.info(f"Logged activity for user {user_id} at {day} {slot}")
        return entry

    def list_for_user_and_date(self, user_id: int, day: date) -> List[ActivityEntry]:
        """Entries for one day, earliest slot first."""
        try:
            with self._db.connection() as conn:
                rows = conn.execute(
                    """SELECT * FROM activities
                       WHERE user_id = ? AND date = ?
                       ORDER BY time_slot""",
                    (user_id, day.isoformat()),
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to list activities for user {user_id}: {e}")
            raise StoreError(f"Failed to list activities: {e}") from e
        return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> ActivityEntry:
        """Convert database row to ActivityEntry object."""
        return ActivityEntry(
            id=row["id"],
            user_id=row["user_id"],
            date=date.fromisoformat(row["date"]),
            slot=Slot.parse(row["time_slot"]),
            text=row["activity_text"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
