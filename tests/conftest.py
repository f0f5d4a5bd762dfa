from datetime import datetime, timedelta
from typing import List, Optional, Set, Tuple

import pytest

from timecheck.application import (
    ReminderBroadcaster,
    ReplyCorrelator,
    Services,
    TrackerService,
)
from timecheck.infrastructure.persistence import ActivityLedger, Database, SubscriberRegistry
from timecheck.infrastructure.sms import MessagingProvider, SendResult


class FakeProvider(MessagingProvider):
    """Records outbound messages; fails for selected phone numbers."""

    def __init__(self, fail_for: Optional[Set[str]] = None):
        self.sent: List[Tuple[str, str]] = []
        self.attempts: List[str] = []
        self.fail_for = set(fail_for or ())
        self.closed = False

    def send_message(self, phone: str, text: str) -> SendResult:
        self.attempts.append(phone)
        if phone in self.fail_for:
            return SendResult(success=False, error="carrier rejected")
        self.sent.append((phone, text))
        return SendResult(success=True, message_sid=f"SM{len(self.sent):04d}")

    def close(self) -> None:
        self.closed = True

    def messages_to(self, phone: str) -> List[str]:
        return [text for to, text in self.sent if to == phone]


class TickingClock:
    """Returns `start`, then advances by `step` on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 10, 19, 9, 16))


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "timecheck-test.db")
    db.init()
    return db


@pytest.fixture
def registry(database, clock):
    return SubscriberRegistry(database, clock=clock)


@pytest.fixture
def ledger(database, clock):
    return ActivityLedger(database, clock=clock)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def broadcaster(registry, provider, sleeps):
    return ReminderBroadcaster(registry, provider, pacing_delay=0.1, sleep=sleeps.append)


@pytest.fixture
def correlator(registry, ledger, provider):
    return ReplyCorrelator(registry, ledger, provider)


@pytest.fixture
def tracker(registry, ledger, provider):
    return TrackerService(registry, ledger, provider)


@pytest.fixture
def services(database, registry, ledger, provider, broadcaster, correlator, tracker):
    return Services(
        database=database,
        registry=registry,
        ledger=ledger,
        provider=provider,
        broadcaster=broadcaster,
        correlator=correlator,
        tracker=tracker,
    )


@pytest.fixture
def provider_factory():
    return FakeProvider
