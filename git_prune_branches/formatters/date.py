"""Date and time formatting utilities."""

from datetime import datetime
from typing import Optional

MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7


def format_time_ago(timestamp: int, now: Optional[datetime] = None) -> str:
    """
    Format a unix timestamp as a short relative age.

    Seconds to days use fixed intervals; months and years are counted on the
    calendar, falling back to weeks when less than a full month has passed.

    Args:
        timestamp: Seconds since the epoch
        now: Reference time (local, naive); defaults to the current time

    Returns:
        Age string such as "just now", "5m ago", "3h ago", "2d ago",
        "3w ago", "4mo ago" or "1y ago"
    """
    now = now or datetime.now()
    past = datetime.fromtimestamp(timestamp)
    diff_seconds = int(now.timestamp() - timestamp)

    if diff_seconds < MINUTE:
        return "just now"
    if diff_seconds < HOUR:
        return f"{diff_seconds // MINUTE}m ago"
    if diff_seconds < DAY:
        return f"{diff_seconds // HOUR}h ago"
    if diff_seconds < WEEK:
        return f"{diff_seconds // DAY}d ago"

    years = now.year - past.year
    if (now.month, now.day) < (past.month, past.day):
        years -= 1
    if years >= 1:
        return f"{years}y ago"

    months = (now.year - past.year) * 12 + (now.month - past.month)
    if now.day < past.day:
        months -= 1
    if months >= 1:
        return f"{months}mo ago"

    return f"{diff_seconds // WEEK}w ago"
