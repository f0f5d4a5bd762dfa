"""
Tracker Service - Direct (Non-SMS) Use Cases
=============================================

Explicit registration, direct activity logging, daily listing and single
reminders. Unlike the reply path these raise the domain errors so the HTTP
layer can map them to status codes.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from ..domain.errors import NotFoundError, TransportError, ValidationError
from ..domain.models import ActivityEntry, User
from ..domain.slot_clock import Slot
from ..infrastructure.persistence import ActivityLedger, SubscriberRegistry
from ..infrastructure.sms import MessagingProvider, SendResult
from .broadcaster import build_prompt

logger = logging.getLogger(__name__)


def _require(value, name: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{name} is required")
    return value


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from e


class TrackerService:
    """Use cases behind the HTTP API."""

    def __init__(
        self,
        registry: SubscriberRegistry,
        ledger: ActivityLedger,
        provider: MessagingProvider,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._registry = registry
        self._ledger = ledger
        self._provider = provider
        self._clock = clock

    def register(self, phone: str) -> User:
        return self._registry.register(_require(phone, "Phone number").strip())

    def log_activity(self, phone: str, day, time_slot, text: str) -> ActivityEntry:
        """
        Log an activity for an existing user.

        Args:
            phone: Registered phone number (no auto-registration on this path).
            day: date or "YYYY-MM-DD".
            time_slot: Slot or "HH:MM" on a quarter hour.
            text: Activity description.

        Raises:
            ValidationError, NotFoundError, StoreError
        """
        for value, name in ((phone, "phone_number"), (day, "date"),
                            (time_slot, "time_slot"), (text, "activity_text")):
            _require(value, name)

        parsed_day = _parse_date(day)
        slot = time_slot if isinstance(time_slot, Slot) else Slot.parse(time_slot)

        user = self._registry.find_by_phone(phone.strip())
        if user is None:
            raise NotFoundError(f"User not found: {phone}")

        return self._ledger.upsert(user.id, parsed_day, slot, text)

    def activities_for(self, phone: str, day) -> List[ActivityEntry]:
        """A user's entries for one day, earliest slot first. Empty for unknown phones."""
        parsed_day = _parse_date(day)
        user = self._registry.find_by_phone(phone)
        if user is None:
            return []
        return self._ledger.list_for_user_and_date(user.id, parsed_day)

    def active_users(self) -> List[User]:
        return self._registry.list_active()

    def send_reminder(self, phone: str, now: Optional[datetime] = None) -> SendResult:
        """Send one check-in prompt now. Raises TransportError on failure."""
        phone = _require(phone, "Phone number").strip()
        result = self._provider.send_message(phone, build_prompt(now or self._clock()))
        if not result.success:
            raise TransportError(f"Failed to send SMS to {phone}: {result.error}")
        logger.info(f"Sent on-demand reminder to {phone} ({result.message_sid})")
        return result
