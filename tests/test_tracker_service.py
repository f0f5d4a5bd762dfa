from datetime import date, datetime

import pytest

from timecheck.application import TrackerService
from timecheck.domain import NotFoundError, Slot, TransportError, ValidationError


def test_register_strips_phone(tracker):
    user = tracker.register(" +15550100 ")
    assert user.phone_number == "+15550100"


@pytest.mark.parametrize("phone", ["", "   ", None])
def test_register_requires_phone(tracker, phone):
    with pytest.raises(ValidationError):
        tracker.register(phone)


def test_log_activity_for_registered_user(tracker, ledger):
    user = tracker.register("+15550100")
    entry = tracker.log_activity("+15550100", "2026-10-19", "09:00", "wrote code")

    assert entry.slot == Slot(9, 0)
    assert entry.date == date(2026, 10, 19)
    assert ledger.list_for_user_and_date(user.id, date(2026, 10, 19)) == [entry]


def test_direct_logging_and_reply_share_one_entry(tracker, correlator, ledger):
    user = tracker.register("+15550100")
    tracker.log_activity("+15550100", "2026-10-19", "09:00", "wrote code")
    correlator.handle_reply("+15550100", "code review", received_at=datetime(2026, 10, 19, 9, 20))

    entries = ledger.list_for_user_and_date(user.id, date(2026, 10, 19))
    assert [e.text for e in entries] == ["code review"]


def test_log_activity_for_unknown_user_does_not_register(tracker, registry):
    with pytest.raises(NotFoundError):
        tracker.log_activity("+15550199", "2026-10-19", "09:00", "wrote code")
    assert registry.find_by_phone("+15550199") is None


@pytest.mark.parametrize(
    "day, slot, text",
    [
        ("", "09:00", "wrote code"),
        ("2026-10-19", "", "wrote code"),
        ("2026-10-19", "09:00", ""),
        ("19/10/2026", "09:00", "wrote code"),
        ("2026-10-19", "09:07", "wrote code"),
    ],
)
def test_log_activity_validates_fields(tracker, day, slot, text):
    tracker.register("+15550100")
    with pytest.raises(ValidationError):
        tracker.log_activity("+15550100", day, slot, text)


def test_activities_for_unknown_phone_is_empty(tracker):
    assert tracker.activities_for("+15550199", "2026-10-19") == []


def test_activities_for_rejects_bad_date(tracker):
    with pytest.raises(ValidationError):
        tracker.activities_for("+15550100", "yesterday")


def test_send_reminder_returns_message_sid(tracker, provider):
    result = tracker.send_reminder("+15550100", now=datetime(2026, 10, 19, 9, 15))
    assert result.message_sid == "SM0001"
    assert "from 9:00 AM to 9:15 AM?" in provider.messages_to("+15550100")[0]


def test_send_reminder_failure_raises_transport_error(registry, ledger, provider_factory):
    tracker = TrackerService(registry, ledger, provider_factory(fail_for={"+15550100"}))
    with pytest.raises(TransportError):
        tracker.send_reminder("+15550100")
