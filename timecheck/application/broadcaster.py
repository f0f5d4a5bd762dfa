"""
Reminder Broadcaster - Quarter-Hour Check-In Prompts
=====================================================

Asks every active subscriber what they did during the slot that just closed.

One failed recipient never aborts the pass: failures are logged, counted
in the BroadcastReport, and the loop moves on. Sends are sequential with a
fixed pacing delay between them.
"""

import time
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ..domain.errors import StoreError
from ..domain.slot_clock import format_slot, previous_slot, slot_at
from ..infrastructure.persistence import SubscriberRegistry
from ..infrastructure.sms import MessagingProvider

logger = logging.getLogger(__name__)

# ── Message Templates ──────────────────────────────────────────
CHECK_IN_PROMPT = "Time Check! What did you do from {start} to {end}? Reply with your activity."


def build_prompt(now: datetime) -> str:
    """Prompt covering the window that ends at the slot containing `now`."""
    return CHECK_IN_PROMPT.format(
        start=format_slot(previous_slot(now)),
        end=format_slot(slot_at(now)),
    )


@dataclass
class BroadcastReport:
    """Completion report of one broadcast pass."""

    started_at: datetime
    sent: int = 0
    failed: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def total(self) -> int:
        return self.sent + self.failed


class ReminderBroadcaster:
    """
    Sends the check-in prompt to every active subscriber.

    Usage:
        broadcaster = ReminderBroadcaster(registry, provider, pacing_delay=0.1)
        report = broadcaster.broadcast()
        print(report.sent, report.failed)
    """

    def __init__(
        self,
        registry: SubscriberRegistry,
        provider: MessagingProvider,
        pacing_delay: float = 0.1,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._registry = registry
        self._provider = provider
        self._pacing_delay = pacing_delay
        self._clock = clock
        self._sleep = sleep

    def broadcast(self, now: Optional[datetime] = None) -> BroadcastReport:
        """Run one pass. Never raises; problems are reported."""
        now = now or self._clock()
        report = BroadcastReport(started_at=now)
        logger.info("Running scheduled reminder check...")

        try:
            users = self._registry.list_active()
        except StoreError as e:
            logger.error(f"Reminder pass aborted, cannot list subscribers: {e}")
            report.error = str(e)
            return report

        for index, user in enumerate(users):
            if index:
                self._sleep(self._pacing_delay)

            text = build_prompt(now)
            try:
                result = self._provider.send_message(user.phone_number, text)
            except Exception as e:
                logger.exception(f"Error sending reminder to {user.phone_number}: {e}")
                report.failed += 1
                report.failures.append((user.phone_number, str(e)))
                continue

            if result.success:
                report.sent += 1
                logger.info(f"Sent reminder to {user.phone_number}")
            else:
                report.failed += 1
                report.failures.append((user.phone_number, result.error or "unknown error"))
                logger.error(f"Error sending reminder to {user.phone_number}: {result.error}")

        logger.info(f"Reminder pass complete: {report.sent} sent, {report.failed} failed")
        return report
