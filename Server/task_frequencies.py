"""
Folio Server - Task Frequencies

Frequency options offered for recurring background tasks and the
scheduling interval each one maps to.
"""

from datetime import timedelta
from typing import Optional

DISABLED = "disabled"
DAILY = "daily"
WEEKLY = "weekly"

OPTIONS = [DISABLED, DAILY, WEEKLY]

_INTERVALS = {
    DISABLED: None,
    DAILY: timedelta(days=1),
    WEEKLY: timedelta(days=7),
}


def ConvertToInterval(frequency: str) -> Optional[timedelta]:
    """
    Convert a frequency option to the interval between runs

    Args:
        frequency: One of OPTIONS (case insensitive)

    Returns:
        timedelta between runs, or None when the task is disabled

    Raises:
        ValueError: If the frequency is not a known option
    """
    key = (frequency or "").strip().lower()
    if key not in _INTERVALS:
        raise ValueError(f"Unknown task frequency: {frequency}")
    return _INTERVALS[key]
