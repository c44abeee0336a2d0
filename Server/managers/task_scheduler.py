"""
Folio Server - Task Scheduler

In-process scheduler for recurring background tasks (library scans,
database backups, log cleanup and anonymous statistics).
Jobs are kept in memory and run from a single daemon thread.
"""

import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from models.enums import ServerSettingKey
from models.infrastructure import RecurringJob
from managers.unit_of_work import UnitOfWork
import task_frequencies

logger = logging.getLogger(__name__)

SCAN_JOB_ID = "scan-libraries"
BACKUP_JOB_ID = "backup"
CLEANUP_JOB_ID = "cleanup"
STATS_JOB_ID = "report-stats"


class TaskScheduler:
    """
    Registry of recurring jobs plus the thread that runs them
    """

    def __init__(self, db_manager, handlers: Dict[str, Callable[[], None]], poll_interval_seconds: int = 30):
        """
        Initialize the scheduler

        Args:
            db_manager: DatabaseManager used to read the frequency settings
            handlers: Callable for each job id (SCAN_JOB_ID, BACKUP_JOB_ID, ...)
            poll_interval_seconds: How often the thread checks for due jobs
        """
        self.db_manager = db_manager
        self.handlers = handlers
        self.poll_interval_seconds = poll_interval_seconds
        self._jobs: Dict[str, RecurringJob] = {}
        self._lock = threading.Lock()
        self.running = False
        self.thread: Optional[threading.Thread] = None

    # ==================== Scheduling ====================

    def ScheduleTasks(self) -> None:
        """
        (Re)register every recurring job from the current settings
        Safe to call repeatedly; unchanged jobs keep their next run time.
        """
        with UnitOfWork(self.db_manager) as uow:
            scan_frequency = uow.settings.GetValue(ServerSettingKey.TaskScan, task_frequencies.DAILY)
            backup_frequency = uow.settings.GetValue(ServerSettingKey.TaskBackup, task_frequencies.DAILY)
            allow_stats = uow.settings.GetValue(ServerSettingKey.AllowStatCollection, "True").lower() == "true"

        logger.info("Scheduling recurring tasks")
        self._Register(SCAN_JOB_ID, scan_frequency)
        self._Register(BACKUP_JOB_ID, backup_frequency)
        self._Register(CLEANUP_JOB_ID, task_frequencies.DAILY)

        if allow_stats:
            self.ScheduleStatsTasks()
        else:
            self.CancelStatsTasks()

    def ScheduleStatsTasks(self) -> None:
        """Register the daily anonymous statistics job"""
        logger.info("Scheduling stats collection")
        self._Register(STATS_JOB_ID, task_frequencies.DAILY)

    def CancelStatsTasks(self) -> None:
        """Remove the statistics job if it is registered"""
        with self._lock:
            removed = self._jobs.pop(STATS_JOB_ID, None)
        if removed:
            logger.info("Cancelled stats collection")

    def _Register(self, job_id: str, frequency: str) -> None:
        try:
            interval = task_frequencies.ConvertToInterval(frequency)
        except ValueError:
            logger.warning(f"Unknown frequency '{frequency}' for {job_id}, falling back to daily")
            frequency = task_frequencies.DAILY
            interval = task_frequencies.ConvertToInterval(frequency)

        with self._lock:
            if interval is None:
                if self._jobs.pop(job_id, None):
                    logger.info(f"Disabled recurring job {job_id}")
                return

            handler = self.handlers.get(job_id)
            if handler is None:
                logger.warning(f"No handler registered for job {job_id}, not scheduling")
                return

            existing = self._jobs.get(job_id)
            if existing and existing.frequency == frequency:
                return

            self._jobs[job_id] = RecurringJob(
                job_id=job_id,
                frequency=frequency,
                interval=interval,
                handler=handler,
                next_run_utc=datetime.now(timezone.utc) + interval
            )
        logger.info(f"Scheduled {job_id} to run {frequency}")

    def GetRecurringJobs(self) -> List[RecurringJob]:
        with self._lock:
            return list(self._jobs.values())

    def GetJob(self, job_id: str) -> Optional[RecurringJob]:
        with self._lock:
            return self._jobs.get(job_id)

    # ==================== Execution ====================

    def RunPending(self, now: Optional[datetime] = None) -> List[str]:
        """
        Run every job whose next run time has passed

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            List of job ids that ran
        """
        now = now or datetime.now(timezone.utc)
        with self._lock:
            due = [job for job in self._jobs.values() if job.IsDue(now)]

        ran = []
        for job in due:
            logger.info(f"Running recurring job {job.job_id}")
            try:
                job.handler()
                job.MarkRun(now)
            except Exception as e:
                logger.exception(f"Recurring job {job.job_id} failed")
                job.MarkRun(now, error=str(e))
            ran.append(job.job_id)
        return ran

    def Start(self) -> bool:
        """Start the background thread"""
        if self.running:
            logger.warning("Task scheduler is already running")
            return False

        self.running = True
        self.thread = threading.Thread(target=self._Loop, name="folio-task-scheduler", daemon=True)
        self.thread.start()
        logger.info(f"Task scheduler started (poll interval: {self.poll_interval_seconds}s)")
        return True

    def Stop(self) -> bool:
        """Stop the background thread"""
        if not self.running:
            return False

        self.running = False
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=5)
        logger.info("Task scheduler stopped")
        return True

    def _Loop(self) -> None:
        while self.running:
            self.RunPending()
            slept = 0
            # Check every second if we should stop
            while slept < self.poll_interval_seconds and self.running:
                time.sleep(1)
                slept += 1
