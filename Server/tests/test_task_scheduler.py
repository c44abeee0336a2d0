"""
Tests for the recurring task scheduler
"""

from datetime import datetime, timedelta, timezone

import pytest

from managers import TaskScheduler, UnitOfWork
from managers.task_scheduler import SCAN_JOB_ID, BACKUP_JOB_ID, CLEANUP_JOB_ID, STATS_JOB_ID
from models.enums import ServerSettingKey
import task_frequencies


def _SetValue(db_manager, key, value):
    with UnitOfWork(db_manager) as uow:
        setting = uow.settings.GetSetting(key)
        setting.value = value
        uow.Commit()


@pytest.fixture
def ran():
    return []


@pytest.fixture
def scheduler(db_manager, ran):
    handlers = {
        job_id: (lambda job_id=job_id: ran.append(job_id))
        for job_id in (SCAN_JOB_ID, BACKUP_JOB_ID, CLEANUP_JOB_ID, STATS_JOB_ID)
    }
    return TaskScheduler(db_manager, handlers)


def test_task_frequency_intervals():
    assert task_frequencies.ConvertToInterval("disabled") is None
    assert task_frequencies.ConvertToInterval("daily") == timedelta(days=1)
    assert task_frequencies.ConvertToInterval("weekly") == timedelta(days=7)
    with pytest.raises(ValueError):
        task_frequencies.ConvertToInterval("hourly")


def test_schedule_from_defaults(scheduler):
    scheduler.ScheduleTasks()

    job_ids = {job.job_id for job in scheduler.GetRecurringJobs()}
    assert job_ids == {SCAN_JOB_ID, BACKUP_JOB_ID, CLEANUP_JOB_ID, STATS_JOB_ID}
    assert scheduler.GetJob(SCAN_JOB_ID).frequency == "daily"


def test_disabled_frequency_removes_job(scheduler, db_manager):
    scheduler.ScheduleTasks()
    _SetValue(db_manager, ServerSettingKey.TaskScan, "disabled")

    scheduler.ScheduleTasks()

    assert scheduler.GetJob(SCAN_JOB_ID) is None


def test_changed_frequency_replaces_job(scheduler, db_manager):
    scheduler.ScheduleTasks()
    _SetValue(db_manager, ServerSettingKey.TaskBackup, "weekly")

    scheduler.ScheduleTasks()

    assert scheduler.GetJob(BACKUP_JOB_ID).interval == timedelta(days=7)


def test_unchanged_frequency_keeps_next_run(scheduler):
    scheduler.ScheduleTasks()
    next_run = scheduler.GetJob(SCAN_JOB_ID).next_run_utc

    scheduler.ScheduleTasks()

    assert scheduler.GetJob(SCAN_JOB_ID).next_run_utc == next_run


def test_stats_job_follows_setting(scheduler, db_manager):
    _SetValue(db_manager, ServerSettingKey.AllowStatCollection, "False")
    scheduler.ScheduleTasks()
    assert scheduler.GetJob(STATS_JOB_ID) is None

    scheduler.ScheduleStatsTasks()
    assert scheduler.GetJob(STATS_JOB_ID) is not None

    scheduler.CancelStatsTasks()
    assert scheduler.GetJob(STATS_JOB_ID) is None


def test_run_pending_runs_due_jobs(scheduler, ran):
    scheduler.ScheduleTasks()
    later = datetime.now(timezone.utc) + timedelta(days=2)

    ran_ids = scheduler.RunPending(later)

    assert set(ran_ids) == set(ran)
    assert SCAN_JOB_ID in ran
    # Nothing is due right after running
    assert scheduler.RunPending(later) == []


def test_failing_job_is_recorded(db_manager):
    def Boom():
        raise RuntimeError("scan failed")

    scheduler = TaskScheduler(db_manager, {SCAN_JOB_ID: Boom})
    scheduler.ScheduleTasks()

    later = datetime.now(timezone.utc) + timedelta(days=2)
    assert scheduler.RunPending(later) == [SCAN_JOB_ID]
    assert scheduler.GetJob(SCAN_JOB_ID).last_error == "scan failed"


def test_start_and_stop(scheduler):
    assert scheduler.Start()
    assert not scheduler.Start()
    assert scheduler.Stop()
    assert not scheduler.Stop()
