"""Reason and count formatting utilities."""

from datetime import datetime
from typing import Optional

from git_prune_branches.formatters.date import format_time_ago

CAUSE_REMOTE_DELETED = "remote deleted"
CAUSE_LOCAL_ONLY = "local only"


def format_count(count: int, noun: str = "branch", plural: Optional[str] = None) -> str:
    """
    Format a count with a correctly pluralized noun.

    Examples:
        format_count(1) -> "1 branch"; format_count(3) -> "3 branches"
    """
    if count == 1:
        return f"{count} {noun}"
    return f"{count} {plural or noun + 'es'}"


def format_last_commit(timestamp: Optional[int], now: Optional[datetime] = None) -> str:
    """Format the "last commit" clause, or "" when the timestamp is unknown."""
    if not timestamp:
        return ""
    return f"last commit {format_time_ago(timestamp, now)}"


def format_branch_reason(
    merged: bool,
    cause: Optional[str] = None,
    timestamp: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Format the one-line reason shown next to a deletable branch.

    Args:
        merged: Whether the branch is merged into the current branch
        cause: CAUSE_REMOTE_DELETED, CAUSE_LOCAL_ONLY or None
        timestamp: Last commit time; the age clause is omitted when unknown
        now: Reference time for the age

    Returns:
        e.g. "merged, remote deleted; last commit 3h ago" or "unmerged"
    """
    reason = "merged" if merged else "unmerged"
    if cause:
        reason += f", {cause}"
    last_commit = format_last_commit(timestamp, now)
    if last_commit:
        reason += f"; {last_commit}"
    return reason


def format_info_reason(
    remote: str,
    remote_branch: str,
    timestamp: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """Format the reason for a branch renamed locally whose remote branch is live."""
    reason = f"tracks {remote}/{remote_branch}"
    last_commit = format_last_commit(timestamp, now)
    if last_commit:
        reason += f"; {last_commit}"
    return reason
