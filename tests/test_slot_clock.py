from datetime import date, datetime, timedelta

import pytest

from timecheck.domain import (
    Slot,
    ValidationError,
    format_slot,
    previous_slot,
    previous_slot_date,
    slot_at,
)


@pytest.mark.parametrize("minute", range(60))
def test_slot_minute_is_floored_to_quarter_hour(minute):
    slot = slot_at(datetime(2026, 10, 19, 14, minute, 59))
    assert slot.hour == 14
    assert slot.minute in (0, 15, 30, 45)
    assert slot.minute == (minute // 15) * 15


@pytest.mark.parametrize(
    "timestamp",
    [
        datetime(2026, 10, 19, 9, 16),
        datetime(2026, 10, 19, 9, 15),
        datetime(2026, 10, 19, 9, 14, 59),
        datetime(2026, 10, 19, 0, 5),
        datetime(2026, 10, 19, 23, 59),
        datetime(2026, 1, 1, 0, 0),
    ],
)
def test_previous_slot_is_slot_fifteen_minutes_earlier(timestamp):
    assert previous_slot(timestamp) == slot_at(timestamp - timedelta(minutes=15))


def test_previous_slot_examples():
    assert previous_slot(datetime(2026, 10, 19, 9, 16)) == Slot(9, 0)
    assert previous_slot(datetime(2026, 10, 19, 9, 15)) == Slot(9, 0)
    assert previous_slot(datetime(2026, 10, 19, 9, 14)) == Slot(8, 45)


def test_previous_slot_wraps_past_midnight():
    assert previous_slot(datetime(2026, 10, 19, 0, 5)) == Slot(23, 45)


@pytest.mark.parametrize(
    "slot, expected",
    [
        (Slot(0, 0), "12:00 AM"),
        (Slot(0, 45), "12:45 AM"),
        (Slot(1, 15), "1:15 AM"),
        (Slot(9, 0), "9:00 AM"),
        (Slot(11, 45), "11:45 AM"),
        (Slot(12, 0), "12:00 PM"),
        (Slot(13, 30), "1:30 PM"),
        (Slot(23, 15), "11:15 PM"),
    ],
)
def test_format_slot(slot, expected):
    assert format_slot(slot) == expected


def test_slot_string_form_sorts_chronologically():
    slots = [Slot(13, 0), Slot(9, 45), Slot(9, 0), Slot(0, 15)]
    assert sorted(str(s) for s in slots) == [str(s) for s in sorted(slots)]
    assert str(Slot(9, 0)) == "09:00"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:00", Slot(9, 0)),
        ("9:15", Slot(9, 15)),
        ("23:45", Slot(23, 45)),
        ("00:30:00", Slot(0, 30)),
        (" 12:00 ", Slot(12, 0)),
    ],
)
def test_parse_valid_slots(value, expected):
    assert Slot.parse(value) == expected


@pytest.mark.parametrize("value", ["", "9", "09:10", "24:00", "12:60", "ab:cd", "10:15:30", None])
def test_parse_rejects_invalid_slots(value):
    with pytest.raises(ValidationError):
        Slot.parse(value)


def test_previous_slot_date_follows_the_closed_slot():
    assert previous_slot_date(datetime(2026, 10, 19, 9, 16)) == date(2026, 10, 19)
    assert previous_slot_date(datetime(2026, 10, 20, 0, 14)) == date(2026, 10, 19)
    assert previous_slot_date(datetime(2026, 10, 20, 0, 15)) == date(2026, 10, 20)
