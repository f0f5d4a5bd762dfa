"""
Application Layer - Use Cases and Wiring
=========================================

build_services() assembles the store, the SMS provider and the use cases
from Settings. Every component receives its collaborators explicitly, so
tests can swap in a temporary database and a fake provider.
"""

import logging
from dataclasses import dataclass

from ..infrastructure.config import Settings
from ..infrastructure.persistence import ActivityLedger, Database, SubscriberRegistry
from ..infrastructure.sms import ConsoleProvider, MessagingProvider, TwilioProvider
from .broadcaster import BroadcastReport, ReminderBroadcaster, build_prompt
from .correlator import ReplyCorrelator, ReplyOutcome
from .scheduler import ReminderScheduler
from .tracker_service import TrackerService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the web app and the CLI runner need."""

    database: Database
    registry: SubscriberRegistry
    ledger: ActivityLedger
    provider: MessagingProvider
    broadcaster: ReminderBroadcaster
    correlator: ReplyCorrelator
    tracker: TrackerService

    def close(self) -> None:
        self.provider.close()


def build_provider(settings: Settings) -> MessagingProvider:
    """Twilio when configured, console logging otherwise."""
    twilio = settings.twilio
    if twilio.is_configured:
        return TwilioProvider(
            twilio.account_sid,
            twilio.auth_token,
            from_number=twilio.phone_number,
            timeout_seconds=twilio.timeout_seconds,
        )
    logger.warning("Twilio not configured, using console provider")
    return ConsoleProvider()


def build_services(settings: Settings, provider: MessagingProvider | None = None) -> Services:
    """Create and initialize all services from settings."""
    database = Database(settings.database.path, timeout=settings.database.busy_timeout_seconds)
    database.init()

    registry = SubscriberRegistry(database)
    ledger = ActivityLedger(database)
    provider = provider or build_provider(settings)

    return Services(
        database=database,
        registry=registry,
        ledger=ledger,
        provider=provider,
        broadcaster=ReminderBroadcaster(
            registry,
            provider,
            pacing_delay=settings.schedule.pacing_delay_seconds,
        ),
        correlator=ReplyCorrelator(registry, ledger, provider),
        tracker=TrackerService(registry, ledger, provider),
    )


__all__ = [
    "BroadcastReport",
    "ReminderBroadcaster",
    "ReminderScheduler",
    "ReplyCorrelator",
    "ReplyOutcome",
    "Services",
    "TrackerService",
    "build_prompt",
    "build_provider",
    "build_services",
]
