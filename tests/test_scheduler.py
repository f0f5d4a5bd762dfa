from unittest.mock import MagicMock

from timecheck.application import BroadcastReport, ReminderScheduler
from timecheck.application.scheduler import JOB_ID
from timecheck.infrastructure.config import ScheduleSettings


def _settings(**overrides):
    values = dict(
        enabled=True,
        cron_minute="0,15,30,45",
        active_hours="5-23",
        pacing_delay_seconds=0.0,
        timezone="UTC",
    )
    values.update(overrides)
    return ScheduleSettings(**values)


def test_registers_single_cron_job_from_settings():
    scheduler = ReminderScheduler(MagicMock(), _settings())
    job = scheduler.get_job()

    assert job is not None
    assert job.id == JOB_ID
    assert job.max_instances == 1
    assert job.coalesce is True
    fields = {field.name: str(field) for field in job.trigger.fields}
    assert fields["minute"] == "0,15,30,45"
    assert fields["hour"] == "5-23"


def test_custom_window():
    scheduler = ReminderScheduler(MagicMock(), _settings(cron_minute="*/30", active_hours="8-18"))
    fields = {field.name: str(field) for field in scheduler.get_job().trigger.fields}
    assert fields["minute"] == "*/30"
    assert fields["hour"] == "8-18"


def test_start_and_shutdown():
    scheduler = ReminderScheduler(MagicMock(), _settings())
    scheduler.start()
    try:
        assert scheduler.running
        assert scheduler.get_job().next_run_time is not None
    finally:
        scheduler.shutdown()
    assert not scheduler.running


def test_run_pass_returns_report():
    broadcaster = MagicMock()
    report = BroadcastReport(started_at=MagicMock(), sent=2, failed=1)
    broadcaster.broadcast.return_value = report

    assert ReminderScheduler(broadcaster, _settings()).run_pass() is report


def test_run_pass_swallows_unexpected_errors():
    broadcaster = MagicMock()
    broadcaster.broadcast.side_effect = RuntimeError("boom")

    assert ReminderScheduler(broadcaster, _settings()).run_pass() is None
