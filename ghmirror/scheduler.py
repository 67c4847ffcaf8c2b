"""Scheduler for periodic re-sync of one repository"""

import logging
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

JOB_ID = "sync_repository"


class SyncScheduler:
    """Runs a sync immediately and then every `interval_minutes`"""

    def __init__(self, sync_job: Callable[[], object], interval_minutes: int):
        self.scheduler = BlockingScheduler()
        self.sync_job = sync_job
        self.interval_minutes = interval_minutes

    def schedule(self):
        """Register the sync job; the first run starts as soon as the scheduler does"""
        self.scheduler.add_job(
            func=self._run_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=JOB_ID,
            next_run_time=datetime.now(),
            # Never overlap two syncs against the same database.
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info(f"Scheduled sync every {self.interval_minutes} minutes")

    def start(self):
        """Schedule the job and block until interrupted"""
        self.schedule()
        logger.info("Sync scheduler started")
        try:
            self.scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            self.stop()

    def stop(self):
        """Stop the scheduler"""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Sync scheduler stopped")

    def _run_job(self):
        try:
            result = self.sync_job()
            logger.info(f"Scheduled sync finished: {result}")
        except Exception as e:
            logger.error(f"Scheduled sync failed: {e}")
