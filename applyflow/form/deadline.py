"""
One-shot deadline check run when a session loads a job.
"""
from datetime import datetime
from typing import Optional

from .models import JobDescriptor


def _comparable(closes_at: datetime, now: datetime) -> datetime:
    if now.tzinfo is not None and closes_at.tzinfo is None:
        return closes_at.replace(tzinfo=now.tzinfo)
    return closes_at


def is_closed(job: JobDescriptor, now: datetime) -> bool:
    """Check whether applications for a job have closed.

    The close date and time are combined into one instant. A naive close
    instant is read in the same frame as ``now``. Jobs missing either the
    close date or the close time never close.

    Args:
        job: Job descriptor with optional close date and time
        now: Current instant at evaluation time

    Returns:
        True if now is strictly after the close instant
    """
    closes_at = job.closes_at
    if closes_at is None:
        return False
    closes_at = _comparable(closes_at, now)
    if closes_at.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone()
    return now > closes_at


def format_deadline(closes_at: Optional[datetime]) -> str:
    if closes_at is None:
        return ""
    return f"{closes_at:%B} {closes_at.day}, {closes_at:%Y} at {closes_at:%H:%M}"
