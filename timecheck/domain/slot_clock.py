"""
Slot Clock - 15-Minute Wall-Clock Buckets
==========================================

ARCHITECTURAL DECISION:
- A slot is derived from the hour and the minute floored to a quarter hour
- No timezone handling: timestamps are naive local time of this process
- The broadcaster and the reply correlator agree on slot boundaries by
  calling the same functions, not by sharing state

USAGE:
    now = datetime(2026, 10, 19, 9, 16)
    slot_at(now)                  # Slot(hour=9, minute=15)
    previous_slot(now)            # Slot(hour=9, minute=0)
    previous_slot_date(now)       # date(2026, 10, 19)
    format_slot(Slot(13, 30))     # "1:30 PM"
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .errors import ValidationError

SLOT_MINUTES = 15

_SLOT_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True, order=True)
class Slot:
    """A quarter-hour bucket, independent of the calendar date."""

    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @classmethod
    def parse(cls, value: str) -> "Slot":
        """
        Parse "HH:MM" (or "HH:MM:SS" as stored by SQL TIME columns).

        Raises:
            ValidationError: malformed string or minute not on a quarter hour.
        """
        match = _SLOT_PATTERN.match((value or "").strip())
        if not match:
            raise ValidationError(f"Invalid time slot: {value!r} (expected HH:MM)")

        hour, minute = int(match.group(1)), int(match.group(2))
        seconds = int(match.group(3) or 0)

        if hour > 23 or minute > 59 or seconds != 0:
            raise ValidationError(f"Invalid time slot: {value!r}")
        if minute % SLOT_MINUTES:
            raise ValidationError(
                f"Invalid time slot: {value!r} (minute must be one of 00, 15, 30, 45)"
            )
        return cls(hour=hour, minute=minute)


def slot_at(timestamp: datetime) -> Slot:
    """Slot containing the given timestamp."""
    return Slot(
        hour=timestamp.hour,
        minute=(timestamp.minute // SLOT_MINUTES) * SLOT_MINUTES,
    )


def previous_slot(timestamp: datetime) -> Slot:
    """Slot that closed most recently relative to the timestamp."""
    return slot_at(timestamp - timedelta(minutes=SLOT_MINUTES))


def format_slot(slot: Slot) -> str:
    """Render a slot on the 12-hour clock, e.g. "12:45 AM" or "9:00 PM"."""
    hour12 = slot.hour % 12 or 12
    suffix = "AM" if slot.hour < 12 else "PM"
    return f"{hour12}:{slot.minute:02d} {suffix}"


def previous_slot_date(timestamp: datetime) -> date:
    """Calendar date of previous_slot(timestamp); the day before just after midnight."""
    return (timestamp - timedelta(minutes=SLOT_MINUTES)).date()
