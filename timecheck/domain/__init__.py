# Domain Layer
# ============
# Pure logic shared by the broadcaster and the reply correlator.

from .errors import NotFoundError, StoreError, TimeCheckError, TransportError, ValidationError
from .models import ActivityEntry, User
from .slot_clock import SLOT_MINUTES, Slot, format_slot, previous_slot, previous_slot_date, slot_at

__all__ = [
    "ActivityEntry",
    "NotFoundError",
    "SLOT_MINUTES",
    "Slot",
    "StoreError",
    "TimeCheckError",
    "TransportError",
    "User",
    "ValidationError",
    "format_slot",
    "previous_slot",
    "previous_slot_date",
    "slot_at",
]
