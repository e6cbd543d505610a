"""Due date parsing and classification."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Literal

# Year, month and day as signed integers, each optionally preceded by
# whitespace; anything after the day is ignored
DATE_PATTERN = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)-\s*([+-]?\d+)")

DATE_FORMAT = "%Y-%m-%d"

DueStatus = Literal["overdue", "due_soon", "later"]


def parse_due_date(value: str) -> datetime | None:
    """Parse a ``YYYY-M-D`` string into local midnight of that day.

    Returns None when the string does not look like a date or names a day
    that does not exist on the calendar (for example 2024-02-30).
    """
    match = DATE_PATTERN.match(value)
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day)
    except (ValueError, OverflowError):
        return None


def format_date(value: datetime) -> str:
    """Format a due date for display."""
    return value.strftime(DATE_FORMAT)


def due_status(due: datetime, now: datetime, soon_days: int = 2) -> DueStatus:
    """Classify a due date relative to ``now``.

    Overdue means the due instant has passed. Due soon means it falls within
    ``soon_days`` days of now.
    """
    if due < now:
        return "overdue"
    if due < now + timedelta(days=soon_days):
        return "due_soon"
    return "later"


def to_epoch(value: datetime | None) -> int:
    """Convert a due date to epoch seconds, 0 meaning no due date.

    Dates the platform cannot convert are also stored as 0, and so is the
    instant 0 itself; both read back as no due date.
    """
    if value is None:
        return 0
    try:
        return int(value.timestamp())
    except (OverflowError, OSError, ValueError):
        return 0


def from_epoch(seconds: int) -> datetime | None:
    """Convert epoch seconds back to a local due date.

    Zero and timestamps the platform cannot represent both mean no due date.
    """
    if seconds == 0:
        return None
    try:
        return datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return None
