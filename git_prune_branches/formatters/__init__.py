"""Formatting utilities for git-prune-branches.

This package provides various formatting functions for displaying branch information,
organized into logical modules:
- date: Relative age formatting
- branch: Branch name quoting and delete commands
- status: Classification reasons and counts
"""

# Date formatters
from .date import format_time_ago

# Branch formatters
from .branch import (
    display_branch_name,
    format_delete_command,
    format_delete_commands,
)

# Status formatters
from .status import (
    CAUSE_LOCAL_ONLY,
    CAUSE_REMOTE_DELETED,
    format_branch_reason,
    format_count,
    format_info_reason,
    format_last_commit,
)

__all__ = [
    # Date
    "format_time_ago",
    # Branch
    "display_branch_name",
    "format_delete_command",
    "format_delete_commands",
    # Status
    "CAUSE_LOCAL_ONLY",
    "CAUSE_REMOTE_DELETED",
    "format_branch_reason",
    "format_count",
    "format_info_reason",
    "format_last_commit",
]
