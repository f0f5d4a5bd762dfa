"""
Reply Correlator - Inbound SMS to Activity Entry
=================================================

A reply always answers the most recently closed slot relative to its arrival
time. If several prompts went unanswered, a single reply is attributed to the
latest one only; earlier slots stay empty. The entry is dated by the slot,
so a reply at 00:05 lands on 23:45 of the previous day.

Unknown senders are registered on their first reply (there is no invite gate).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..domain.errors import StoreError, ValidationError
from ..domain.models import ActivityEntry, User
from ..domain.slot_clock import Slot, format_slot, previous_slot, previous_slot_date
from ..infrastructure.persistence import ActivityLedger, SubscriberRegistry
from ..infrastructure.sms import MessagingProvider

logger = logging.getLogger(__name__)

CONFIRMATION = 'Logged: "{text}" for {slot}'


@dataclass
class ReplyOutcome:
    """Result of handling one inbound message."""

    success: bool
    slot: Slot
    user: Optional[User] = None
    entry: Optional[ActivityEntry] = None
    registered: bool = False
    confirmation_sid: Optional[str] = None
    error: Optional[str] = None


class ReplyCorrelator:
    """
    Files inbound replies under the slot they answer.

    Usage:
        correlator = ReplyCorrelator(registry, ledger, provider)
        outcome = correlator.handle_reply("+15550100", "wrote code")
        if not outcome.success:
            print(outcome.error)
    """

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

    def handle_reply(
        self,
        phone: str,
        text: str,
        received_at: Optional[datetime] = None,
    ) -> ReplyOutcome:
        """Store the reply and confirm it to the sender. Never raises."""
        received_at = received_at or self._clock()
        slot = previous_slot(received_at)
        outcome = ReplyOutcome(success=False, slot=slot)

        logger.info(f"Received SMS from {phone}: {text}")

        try:
            user = self._registry.find_by_phone(phone)
            if user is None:
                user = self._registry.register(phone)
                outcome.registered = True
                logger.info(f"Auto-registered new sender {phone}")
            outcome.user = user

            day = previous_slot_date(received_at)
            outcome.entry = self._ledger.upsert(user.id, day, slot, text)
        except (ValidationError, StoreError) as e:
            logger.error(f"Could not log reply from {phone}: {e}")
            outcome.error = str(e)
            return outcome

        confirmation = CONFIRMATION.format(text=outcome.entry.text, slot=format_slot(slot))
        try:
            result = self._provider.send_message(phone, confirmation)
        except Exception as e:
            logger.exception(f"Error sending confirmation to {phone}: {e}")
            outcome.error = f"Activity stored but confirmation failed: {e}"
            return outcome

        if not result.success:
            logger.error(f"Confirmation to {phone} failed: {result.error}")
            outcome.error = f"Activity stored but confirmation failed: {result.error}"
            return outcome

        outcome.confirmation_sid = result.message_sid
        outcome.success = True
        return outcome
