"""
Folio Server - Recurring Job Model

Dataclass for a background job registered with the task scheduler.
"""

from datetime import datetime, timedelta, timezone
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class RecurringJob:
    """Represents a job that runs every interval until it is removed"""
    job_id: str
    frequency: str  # One of task_frequencies.OPTIONS, never 'disabled'
    interval: timedelta
    handler: Callable[[], None]
    next_run_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_run_utc: Optional[datetime] = None
    last_error: Optional[str] = None

    def IsDue(self, now: datetime) -> bool:
        return now >= self.next_run_utc

    def MarkRun(self, now: datetime, error: Optional[str] = None) -> None:
        """Record a run and push next_run_utc one interval past now"""
        self.last_run_utc = now
        self.last_error = error
        self.next_run_utc = now + self.interval
