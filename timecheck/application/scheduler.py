"""
Reminder Scheduler - Background Timer for Broadcast Passes
===========================================================

Owns an APScheduler BackgroundScheduler with a single cron job. The cadence
and active-hours window come from ScheduleSettings as cron fields, e.g.
minute="0,15,30,45", hour="5-23".

Jobs run in the scheduler's worker pool, so a slow pass never blocks the
timer itself; max_instances=1 keeps passes from overlapping.
"""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..infrastructure.config import ScheduleSettings
from .broadcaster import BroadcastReport, ReminderBroadcaster

logger = logging.getLogger(__name__)

JOB_ID = "checkin_broadcast"


class ReminderScheduler:
    """
    Periodically invokes the broadcaster.

    Usage:
        scheduler = ReminderScheduler(broadcaster, settings.schedule)
        scheduler.start()
        ...
        scheduler.shutdown()
    """

    def __init__(self, broadcaster: ReminderBroadcaster, settings: ScheduleSettings):
        self._broadcaster = broadcaster
        self._settings = settings

        scheduler_kwargs = {}
        if settings.timezone:
            scheduler_kwargs["timezone"] = settings.timezone
        self._scheduler = BackgroundScheduler(**scheduler_kwargs)

        self._scheduler.add_job(
            self.run_pass,
            trigger=self.build_trigger(),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60,
        )

    def build_trigger(self) -> CronTrigger:
        kwargs = {"minute": self._settings.cron_minute, "hour": self._settings.active_hours}
        if self._settings.timezone:
            kwargs["timezone"] = self._settings.timezone
        return CronTrigger(**kwargs)

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def get_job(self):
        return self._scheduler.get_job(JOB_ID)

    def start(self) -> None:
        self._scheduler.start()
        logger.info(
            f"Reminders scheduled at minute {self._settings.cron_minute} "
            f"of hours {self._settings.active_hours}"
        )

    def shutdown(self, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Reminder scheduler stopped")

    def run_pass(self) -> Optional[BroadcastReport]:
        """One broadcast pass. Exceptions are logged, never raised into the scheduler."""
        try:
            report = self._broadcaster.broadcast()
        except Exception as e:
            logger.exception(f"Error in scheduled reminder: {e}")
            return None

        if report.error:
            logger.error(f"Scheduled reminder pass failed: {report.error}")
        return report
