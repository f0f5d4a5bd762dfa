"""Records returned by the subscriber registry and the activity ledger."""

from dataclasses import dataclass
from datetime import date, datetime

from .slot_clock import Slot


@dataclass
class User:
    """Subscriber, identified by phone number."""
    id: int
    phone_number: str
    is_active: bool = True
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "phone_number": self.phone_number,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class ActivityEntry:
    """What a user did during one slot of one day."""
    id: int
    user_id: int
    date: date
    slot: Slot
    text: str
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "time_slot": str(self.slot),
            "activity_text": self.text,
            "updated_at": self.updated_at.isoformat(),
        }
