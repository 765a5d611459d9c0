import logging
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from game_scheduler.config import ConfigurationError, settings


logger = logging.getLogger(__name__)

JOB_ID = 'game_schedule'


class GameTaskScheduler:
    """Runs the scheduling job on a cron schedule in the foreground"""

    def __init__(
        self,
        job: Callable[[], object],
        cron: str | None = None,
        timezone: str | None = None,
        misfire_grace_sec: int | None = None,
    ):
        self.job = job
        self.cron = cron or settings.schedule_cron
        self.timezone = timezone or settings.schedule_timezone
        self.misfire_grace_sec = (
            settings.schedule_misfire_grace_sec if misfire_grace_sec is None else misfire_grace_sec
        )
        self.scheduler: BlockingScheduler | None = None

    def _run_job(self) -> None:
        """Scheduled job wrapper; a failed run must not stop the scheduler"""
        logger.info("Scheduled game scheduling run triggered")
        try:
            self.job()
        except Exception as e:
            logger.error(f"Exception in scheduled run: {e}", exc_info=True)
        next_time = self.get_next_run_time()
        if next_time:
            logger.info("Next scheduled run: %s", next_time.isoformat())

    def build(self) -> BlockingScheduler:
        """Create the scheduler and register the job without starting it"""
        try:
            trigger = CronTrigger.from_crontab(self.cron, timezone=self.timezone)
        except (ValueError, KeyError) as exc:
            raise ConfigurationError(f"Invalid cron expression '{self.cron}': {exc}") from exc

        self.scheduler = BlockingScheduler(timezone=self.timezone)
        self.scheduler.add_job(
            self._run_job,
            trigger=trigger,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=self.misfire_grace_sec
        )
        return self.scheduler

    def start(self) -> None:
        """Block running the job on schedule until interrupted"""
        if self.scheduler and self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        scheduler = self.build()
        logger.info("Scheduler starting with cron '%s' (%s)", self.cron, self.timezone)
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler interrupted")
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")
        self.scheduler = None

    def get_next_run_time(self) -> datetime | None:
        """Get next scheduled run time"""
        if not self.scheduler:
            return None
        job = self.scheduler.get_job(JOB_ID)
        return getattr(job, 'next_run_time', None) if job else None
